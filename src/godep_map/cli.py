"""
命令行入口

提供 godep-map 命令行工具。DOT 文本写到标准输出，诊断信息写到标准错误。
"""

import sys

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .analyzer import DependencyAnalyzer, GraphSummary
from .config import (
    DEFAULT_MAX_LEVEL,
    BuildConfig,
    ConfigurationError,
    FilterConfig,
    GraphOptions,
    RewriteConfig,
    split_csv,
)
from .filters import PackageFilter
from .graph import DependencyGraph
from .resolver import GoListResolver, MappingResolver, Package, ResolutionError
from .rewrite import Rewriter
from .serializer import DotSerializer
from .walker import GraphWalker

console = Console(stderr=True)


def print_summary(summary: GraphSummary):
    """输出图统计信息"""
    table = Table(title="Graph Statistics", show_header=True, header_style="bold magenta")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    table.add_row("Packages", str(summary.nodes))
    table.add_row("Imports", str(summary.edges))
    table.add_row("Is DAG", "Yes" if summary.is_dag else "No")
    table.add_row("Connected Components", str(summary.components))

    for name, count in summary.most_imported:
        table.add_row(f"  {name}", str(count))

    console.print(table)

    if summary.cycles:
        console.print(f"[yellow]Found {len(summary.cycles)} import cycles[/yellow]")


@click.command()
@click.version_option(version="0.1.0")
@click.argument("packages", nargs=-1, required=True)
@click.option("-s", "--ignore-stdlib", is_flag=True, help="忽略 Go 标准库中的包")
@click.option("-d", "--delve-goroot", is_flag=True, help="显示标准库包的依赖")
@click.option("-p", "--ignore-prefixes", default="", help="逗号分隔的忽略前缀列表")
@click.option("-i", "--ignore-packages", default="", help="逗号分隔的忽略包列表")
@click.option("-o", "--only-prefixes", default="", help="逗号分隔的包含前缀列表")
@click.option("-t", "--include-tests", is_flag=True, help="包含测试导入")
@click.option(
    "-l",
    "--max-level",
    default=DEFAULT_MAX_LEVEL,
    type=click.IntRange(min=0),
    help="依赖图最大层数",
)
@click.option("-r", "--rewrite", default="", help="逗号分隔的前缀替换规则，例如 github.com=g")
@click.option("-c", "--colors", default="", help="逗号分隔的颜色规则，例如 github.com=red")
@click.option("-tags", "--tags", "tag_list", default="", help="逗号分隔的构建标签")
@click.option("-horizontal", "--horizontal", is_flag=True, help="横向布局依赖图")
@click.option(
    "--metadata",
    type=click.Path(exists=True, dir_okay=False),
    help="从 JSON 快照读取包信息，而不是调用 go list",
)
@click.option("--stats", is_flag=True, help="在标准错误输出图统计信息")
@click.option("-v", "--verbose", is_flag=True, help="输出解析进度")
def main(
    packages: tuple,
    ignore_stdlib: bool,
    delve_goroot: bool,
    ignore_prefixes: str,
    ignore_packages: str,
    only_prefixes: str,
    include_tests: bool,
    max_level: int,
    rewrite: str,
    colors: str,
    tag_list: str,
    horizontal: bool,
    metadata: str | None,
    stats: bool,
    verbose: bool,
):
    """输出 Go 包的依赖关系图（Graphviz DOT 格式）

    \b
    示例：
    godep-map github.com/acme/app | dot -Tsvg -o deps.svg
    godep-map -s -p golang.org/x -r github.com/acme/=acme- ./cmd/server
    """
    try:
        filter_config = FilterConfig.from_options(
            ignore_packages=ignore_packages,
            ignore_prefixes=ignore_prefixes,
            only_prefixes=only_prefixes,
            ignore_stdlib=ignore_stdlib,
            max_level=max_level,
        )
        rewrite_config = RewriteConfig.from_options(rewrite=rewrite, colors=colors)
        resolver = MappingResolver.from_json(metadata) if metadata else GoListResolver()
    except (ConfigurationError, ValueError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)

    build = BuildConfig(tags=split_csv(tag_list))
    options = GraphOptions(
        delve_goroot=delve_goroot, include_tests=include_tests, horizontal=horizontal
    )

    def progress_callback(level: int, pkg: Package):
        console.print(f"[dim]{'  ' * (level - 1)}{pkg.name}[/dim]")

    graph = DependencyGraph(options)
    walker = GraphWalker(
        resolver,
        graph,
        filter_config,
        build=build,
        progress_callback=progress_callback if verbose else None,
    )

    try:
        walker.walk(list(packages))
    except ResolutionError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)
    except RecursionError:
        console.print(
            f"[red]Error:[/red] dependency graph too deep for max level {max_level}, lower -l"
        )
        sys.exit(1)

    serializer = DotSerializer(graph, PackageFilter(filter_config), Rewriter(rewrite_config))
    click.echo(serializer.emit(), nl=False)

    if stats:
        print_summary(DependencyAnalyzer(serializer.build_digraph()).summarize())


if __name__ == "__main__":
    main()
