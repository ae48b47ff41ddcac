"""
依赖图会话

一次运行只构建一个 DependencyGraph，它持有已解析包的注册表和节点编号表，
遍历和输出阶段都通过它读写状态。
"""

from collections.abc import Iterator

from .config import GraphOptions
from .resolver import Package


class IdentifierRegistry:
    """按首次出现顺序为包分配从 0 开始的连续编号"""

    def __init__(self):
        self._ids: dict[str, int] = {}
        self._next_id = 0

    def id_for(self, name: str) -> int:
        """返回已有编号，否则分配下一个编号"""
        node_id = self._ids.get(name)
        if node_id is None:
            node_id = self._next_id
            self._next_id += 1
            self._ids[name] = node_id
        return node_id

    def __contains__(self, name: str) -> bool:
        return name in self._ids

    def __len__(self) -> int:
        return len(self._ids)


class DependencyGraph:
    """依赖图"""

    def __init__(self, options: GraphOptions | None = None):
        """
        初始化依赖图

        Args:
            options: 是否包含测试导入、是否展开标准库等选项
        """
        self.options = options or GraphOptions()
        self.packages: dict[str, Package] = {}
        self.ids = IdentifierRegistry()

    def add_package(self, pkg: Package) -> bool:
        """
        按规范化路径注册包

        Returns:
            是否是新注册的包；已存在的包不会被覆盖
        """
        if pkg.name in self.packages:
            return False
        self.packages[pkg.name] = pkg
        return True

    def __contains__(self, name: str) -> bool:
        return name in self.packages

    def __len__(self) -> int:
        return len(self.packages)

    def sorted_names(self) -> list[str]:
        """按字典序排序的包路径，输出顺序只由它决定"""
        return sorted(self.packages)

    def descends_into(self, pkg: Package) -> bool:
        """标准库包默认视为叶子"""
        return not pkg.goroot or self.options.delve_goroot

    def imports_of(self, pkg: Package) -> list[str]:
        """
        获取包的导入列表

        包含测试导入时合并 TestImports 和 XTestImports，按首次出现去重，
        并去掉对自身的导入（foo_test 导入 foo 时不画自环）。
        """
        all_imports = list(pkg.imports)
        if self.options.include_tests:
            all_imports.extend(pkg.test_imports)
            all_imports.extend(pkg.xtest_imports)

        imports = []
        found: set[str] = set()
        for imp in all_imports:
            if imp == pkg.name or imp in found:
                continue
            found.add(imp)
            imports.append(imp)
        return imports

    def iter_edges(self, pkg: Package) -> Iterator[tuple[str, Package]]:
        """遍历已注册的导入目标，保持导入列表顺序"""
        for imp in self.imports_of(pkg):
            target = self.packages.get(imp)
            if target is not None:
                yield imp, target
