"""
包过滤

遍历阶段和输出阶段使用同一个判断，保证遍历到的内容和画出来的内容一致。
"""

from .config import FilterConfig
from .resolver import Package


def has_prefixes(s: str, prefixes: list[str]) -> bool:
    """字面前缀匹配，不按路径段对齐（"foo" 也匹配 "foobar"）"""
    return any(s.startswith(p) for p in prefixes)


class PackageFilter:
    """包可见性判断"""

    def __init__(self, config: FilterConfig):
        self.config = config

    def is_ignored(self, identifier: str) -> bool:
        """解析之前按原始标识符精确排除"""
        return identifier in self.config.ignored

    def is_visible(self, pkg: Package) -> bool:
        """
        判断包是否可见

        依次检查：白名单前缀、精确排除、标准库排除、排除前缀，
        任意一条命中即隐藏。
        """
        name = pkg.name
        cfg = self.config

        if cfg.only_prefixes and not has_prefixes(name, cfg.only_prefixes):
            return False
        if name in cfg.ignored:
            return False
        if pkg.goroot and cfg.ignore_stdlib:
            return False
        if has_prefixes(name, cfg.ignored_prefixes):
            return False
        return True
