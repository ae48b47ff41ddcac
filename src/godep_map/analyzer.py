"""
依赖图分析器

对最终输出的图做统计，结果输出到标准错误，不影响 DOT 输出。
"""

from dataclasses import dataclass

import networkx as nx


@dataclass
class GraphSummary:
    """图统计结果"""

    nodes: int
    edges: int
    is_dag: bool
    components: int
    cycles: list[list[str]]

    # 被导入最多的包
    most_imported: list[tuple[str, int]]


class DependencyAnalyzer:
    """依赖关系分析器"""

    def __init__(self, digraph: nx.DiGraph):
        self.digraph = digraph

    def find_cycles(self) -> list[list[str]]:
        """查找循环导入"""
        return [sorted(c) for c in nx.simple_cycles(self.digraph)]

    def most_imported(self, top_n: int = 10) -> list[tuple[str, int]]:
        counts = sorted(self.digraph.in_degree(), key=lambda x: (-x[1], x[0]))
        return [(name, count) for name, count in counts[:top_n] if count > 0]

    def summarize(self, top_n: int = 10) -> GraphSummary:
        g = self.digraph
        n = g.number_of_nodes()
        return GraphSummary(
            nodes=n,
            edges=g.number_of_edges(),
            is_dag=nx.is_directed_acyclic_graph(g),
            components=nx.number_weakly_connected_components(g) if n > 0 else 0,
            cycles=self.find_cycles(),
            most_imported=self.most_imported(top_n),
        )
