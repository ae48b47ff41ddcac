"""
Go 包依赖关系图谱工具

递归解析 Go 包的导入关系，并输出 Graphviz DOT 格式的依赖图。
"""

from .analyzer import DependencyAnalyzer
from .graph import DependencyGraph, IdentifierRegistry
from .resolver import GoListResolver, MappingResolver, Package, ResolutionError
from .serializer import DotSerializer
from .walker import GraphWalker

__version__ = "0.1.0"
__all__ = [
    "Package",
    "GoListResolver",
    "MappingResolver",
    "ResolutionError",
    "DependencyGraph",
    "IdentifierRegistry",
    "GraphWalker",
    "DotSerializer",
    "DependencyAnalyzer",
]
