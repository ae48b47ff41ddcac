"""
依赖遍历器

从根包出发，通过包解析器深度优先地递归解析导入，填充依赖图。
"""

import os
from collections.abc import Callable

from .config import BuildConfig, FilterConfig
from .filters import PackageFilter
from .graph import DependencyGraph
from .resolver import Package, PackageResolver


class GraphWalker:
    """依赖遍历器"""

    def __init__(
        self,
        resolver: PackageResolver,
        graph: DependencyGraph,
        filter_config: FilterConfig,
        build: BuildConfig | None = None,
        progress_callback: Callable[[int, Package], None] | None = None,
    ):
        """
        初始化遍历器

        Args:
            resolver: 包解析器
            graph: 要填充的依赖图
            filter_config: 过滤配置（包含最大深度）
            build: 透传给解析器的构建配置
            progress_callback: 每注册一个新包时回调 (depth, package)
        """
        self.resolver = resolver
        self.graph = graph
        self.filter = PackageFilter(filter_config)
        self.build = build or BuildConfig()
        self.progress_callback = progress_callback

        # 根包总是会被解析
        self.max_level = max(filter_config.max_level, 1)

    def walk(self, roots: list[str], cwd: str | None = None) -> DependencyGraph:
        """
        依次解析所有根包

        任意一个包解析失败都会抛出 ResolutionError，不返回部分结果。
        """
        root_dir = cwd or os.getcwd()
        for identifier in roots:
            self.resolve(root_dir, identifier, 0)
        return self.graph

    def resolve(self, root_dir: str, identifier: str, level: int):
        """递归解析单个包及其导入"""
        level += 1
        if level > self.max_level:
            return
        if self.filter.is_ignored(identifier):
            return

        pkg = self.resolver.resolve(identifier, root_dir, self.build)

        if not self.filter.is_visible(pkg):
            return

        if self.graph.add_package(pkg) and self.progress_callback:
            self.progress_callback(level, pkg)

        if not self.graph.descends_into(pkg):
            return

        for imp in self.graph.imports_of(pkg):
            if imp not in self.graph:
                self.resolve(pkg.dir, imp, level)
