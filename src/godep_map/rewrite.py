"""
名称和颜色重写

按最长前缀匹配替换节点显示名和填充颜色。
"""

from .config import RewriteConfig
from .resolver import Package

# 节点默认颜色
GOROOT_COLOR = "palegreen"
CGO_COLOR = "darkgoldenrod1"
DEFAULT_COLOR = "paleturquoise"


def default_color(pkg: Package) -> str:
    """按包类型选择默认颜色"""
    if pkg.goroot:
        return GOROOT_COLOR
    if pkg.has_native_sources:
        return CGO_COLOR
    return DEFAULT_COLOR


def longest_prefix(path: str, rules: dict[str, str]) -> str | None:
    """返回规则中匹配 path 的最长前缀，没有匹配时返回 None（空前缀永不匹配）"""
    found = None
    found_len = 0
    for prefix in rules:
        if path.startswith(prefix) and len(prefix) > found_len:
            found = prefix
            found_len = len(prefix)
    return found


class Rewriter:
    """节点名称和颜色重写器"""

    def __init__(self, config: RewriteConfig):
        self.config = config

    def rewrite_name(self, path: str) -> str:
        prefix = longest_prefix(path, self.config.names)
        if prefix is None:
            return path
        return self.config.names[prefix] + path[len(prefix) :]

    def rewrite_color(self, path: str, color: str) -> str:
        prefix = longest_prefix(path, self.config.colors)
        if prefix is None:
            return color
        return self.config.colors[prefix]
