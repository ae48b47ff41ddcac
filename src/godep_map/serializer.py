"""
DOT 输出模块

把依赖图按确定的顺序输出为 Graphviz DOT 文本，交给外部布局工具渲染。
"""

import networkx as nx

from .filters import PackageFilter
from .graph import DependencyGraph
from .rewrite import Rewriter, default_color

GRAPH_NAME = "godep"


class DotSerializer:
    """DOT 序列化器"""

    def __init__(
        self,
        graph: DependencyGraph,
        package_filter: PackageFilter,
        rewriter: Rewriter,
    ):
        """
        初始化序列化器

        Args:
            graph: 已完成遍历的依赖图
            package_filter: 与遍历阶段相同的过滤器
            rewriter: 名称和颜色重写器
        """
        self.graph = graph
        self.filter = package_filter
        self.rewriter = rewriter

    def build_digraph(self) -> nx.DiGraph:
        """
        构建要输出的图

        节点按路径字典序加入，节点编号在可见性判断之前分配，
        所以被隐藏的包同样会占用编号。
        """
        g = nx.DiGraph(name=GRAPH_NAME)

        for name in self.graph.sorted_names():
            pkg = self.graph.packages[name]
            pkg_id = self.graph.ids.id_for(name)

            if not self.filter.is_visible(pkg):
                continue

            g.add_node(
                name,
                id=pkg_id,
                label=self.rewriter.rewrite_name(name),
                color=self.rewriter.rewrite_color(name, default_color(pkg)),
            )

            # 不输出标准库包的导入
            if not self.graph.descends_into(pkg):
                continue

            for imp, imp_pkg in self.graph.iter_edges(pkg):
                if not self.filter.is_visible(imp_pkg):
                    continue
                g.add_edge(name, imp)
                g.nodes[imp]["id"] = self.graph.ids.id_for(imp)

        return g

    def emit(self) -> str:
        """输出 DOT 文本"""
        g = self.build_digraph()

        lines = [f"digraph {GRAPH_NAME} {{"]
        if self.graph.options.horizontal:
            lines.append('rankdir="LR"')

        for name in sorted(g.nodes):
            attrs = g.nodes[name]
            lines.append(
                f'_{attrs["id"]} [label="{attrs["label"]}" style="filled" color="{attrs["color"]}"];'
            )
            for imp in g.successors(name):
                lines.append(f'_{attrs["id"]} -> _{g.nodes[imp]["id"]};')

        lines.append("}")
        return "\n".join(lines) + "\n"
