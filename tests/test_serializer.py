"""
测试 DOT 输出
"""

import json
import os
import subprocess
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from godep_map.analyzer import DependencyAnalyzer
from godep_map.config import FilterConfig, GraphOptions, RewriteConfig
from godep_map.filters import PackageFilter
from godep_map.graph import DependencyGraph
from godep_map.resolver import GoListResolver, MappingResolver, Package
from godep_map.rewrite import Rewriter
from godep_map.serializer import DotSerializer
from godep_map.walker import GraphWalker


def render(resolver, roots, options=None, filter_config=None, rewrite_config=None):
    filter_config = filter_config or FilterConfig()
    graph = DependencyGraph(options)
    GraphWalker(resolver, graph, filter_config).walk(roots, cwd="/work")
    serializer = DotSerializer(
        graph,
        PackageFilter(filter_config),
        Rewriter(rewrite_config or RewriteConfig()),
    )
    return serializer


class TestDotSerializer:
    """测试序列化器"""

    def test_full_output(self, resolver):
        out = render(resolver, ["github.com/acme/app"]).emit()

        assert out == (
            "digraph godep {\n"
            '_0 [label="fmt" style="filled" color="palegreen"];\n'
            '_1 [label="github.com/acme/app" style="filled" color="paleturquoise"];\n'
            "_1 -> _0;\n"
            "_1 -> _2;\n"
            "_1 -> _3;\n"
            '_2 [label="github.com/acme/lib" style="filled" color="paleturquoise"];\n'
            "_2 -> _3;\n"
            "_2 -> _0;\n"
            '_3 [label="github.com/acme/util" style="filled" color="darkgoldenrod1"];\n'
            "_3 -> _4;\n"
            '_4 [label="strings" style="filled" color="palegreen"];\n'
            "}\n"
        )

    def test_idempotent(self, packages):
        first = render(MappingResolver(packages), ["github.com/acme/app"]).emit()
        second = render(MappingResolver(packages), ["github.com/acme/app"]).emit()

        assert first == second

    def test_horizontal(self, resolver):
        out = render(resolver, ["github.com/acme/app"], options=GraphOptions(horizontal=True)).emit()

        assert out.splitlines()[:2] == ["digraph godep {", 'rankdir="LR"']

    def test_ignore_stdlib(self, resolver):
        out = render(resolver, ["github.com/acme/app"], filter_config=FilterConfig(ignore_stdlib=True)).emit()

        assert out == (
            "digraph godep {\n"
            '_0 [label="github.com/acme/app" style="filled" color="paleturquoise"];\n'
            "_0 -> _1;\n"
            "_0 -> _2;\n"
            '_1 [label="github.com/acme/lib" style="filled" color="paleturquoise"];\n'
            "_1 -> _2;\n"
            '_2 [label="github.com/acme/util" style="filled" color="darkgoldenrod1"];\n'
            "}\n"
        )

    def test_depth_zero_no_edges(self, resolver):
        out = render(resolver, ["github.com/acme/app"], filter_config=FilterConfig(max_level=0)).emit()

        assert "->" not in out
        assert out.count("[label=") == 1

    def test_stdlib_edges_with_delve(self, resolver):
        out = render(resolver, ["fmt"], options=GraphOptions(delve_goroot=True)).emit()

        # 编号在输出边时分配: fmt=0, strings=1, io=2
        assert "_0 -> _1;\n_0 -> _2;\n" in out
        assert "_1 -> _2;\n" in out

    def test_no_self_loop_with_tests(self, resolver):
        out = render(resolver, ["github.com/acme/app"], options=GraphOptions(include_tests=True)).emit()

        assert "_1 -> _1;" not in out
        assert 'label="testing"' in out

    def test_duplicate_imports_single_edge(self):
        resolver = MappingResolver(
            {
                "a": Package("a", imports=("b", "b"), test_imports=("b",)),
                "b": Package("b"),
            }
        )
        out = render(resolver, ["a"], options=GraphOptions(include_tests=True)).emit()

        assert out.count("_0 -> _1;") == 1

    def test_hidden_package_consumes_id(self, resolver):
        graph = DependencyGraph()
        GraphWalker(resolver, graph, FilterConfig()).walk(["github.com/acme/app"], cwd="/work")
        serializer = DotSerializer(
            graph, PackageFilter(FilterConfig(ignored={"C", "fmt"})), Rewriter(RewriteConfig())
        )
        out = serializer.emit()

        assert 'label="fmt"' not in out
        assert '_1 [label="github.com/acme/app"' in out
        assert graph.ids.id_for("fmt") == 0

    def test_rewrite(self, resolver):
        out = render(
            resolver,
            ["github.com/acme/app"],
            rewrite_config=RewriteConfig(
                names={"github.com/": "gh/", "github.com/acme/": "acme-"},
                colors={"github.com/acme/util": "red"},
            ),
        ).emit()

        assert '_1 [label="acme-app" style="filled" color="paleturquoise"];' in out
        assert '_3 [label="acme-util" style="filled" color="red"];' in out

    def test_build_digraph(self, resolver):
        g = render(resolver, ["github.com/acme/app"]).build_digraph()

        assert list(g.successors("github.com/acme/app")) == [
            "fmt",
            "github.com/acme/lib",
            "github.com/acme/util",
        ]
        assert g.nodes["strings"]["color"] == "palegreen"


class TestVendoredImports:
    """测试 go list 返回 vendor 路径时的遍历和输出"""

    GO_LIST = {
        "crypto/tls": {
            "ImportPath": "crypto/tls",
            "Goroot": True,
            "Imports": ["crypto/hmac", "vendor/golang.org/x/crypto/hkdf"],
            "ImportMap": {"golang.org/x/crypto/hkdf": "vendor/golang.org/x/crypto/hkdf"},
        },
        "crypto/hmac": {
            "ImportPath": "crypto/hmac",
            "Goroot": True,
            "Imports": ["vendor/golang.org/x/crypto/hkdf"],
        },
        "golang.org/x/crypto/hkdf": {
            "ImportPath": "vendor/golang.org/x/crypto/hkdf",
            "Goroot": True,
        },
    }

    def setup_method(self):
        self.calls = []

    def fake_run(self, cmd, cwd=None, **kwargs):
        self.calls.append(cmd[-1])
        out = json.dumps(self.GO_LIST[cmd[-1]])
        return subprocess.CompletedProcess(cmd, 0, stdout=out, stderr="")

    def test_vendored_edges(self, monkeypatch):
        monkeypatch.setattr(subprocess, "run", self.fake_run)
        out = render(GoListResolver(), ["crypto/tls"], options=GraphOptions(delve_goroot=True)).emit()

        # crypto/hmac=0, golang.org/x/crypto/hkdf=1, crypto/tls=2
        assert out == (
            "digraph godep {\n"
            '_0 [label="crypto/hmac" style="filled" color="palegreen"];\n'
            "_0 -> _1;\n"
            '_2 [label="crypto/tls" style="filled" color="palegreen"];\n'
            "_2 -> _0;\n"
            "_2 -> _1;\n"
            '_1 [label="golang.org/x/crypto/hkdf" style="filled" color="palegreen"];\n'
            "}\n"
        )
        assert self.calls.count("golang.org/x/crypto/hkdf") == 1


class TestDependencyAnalyzer:
    """测试图统计"""

    def test_summary(self, resolver):
        g = render(resolver, ["github.com/acme/app"]).build_digraph()
        summary = DependencyAnalyzer(g).summarize()

        assert summary.nodes == 5
        assert summary.edges == 6
        assert summary.is_dag
        assert summary.components == 1
        assert summary.cycles == []
        assert summary.most_imported[0] == ("fmt", 2)

    def test_cycles(self):
        resolver = MappingResolver(
            {
                "a": Package("a", imports=("b",)),
                "b": Package("b", imports=("a",)),
            }
        )
        g = render(resolver, ["a"]).build_digraph()
        summary = DependencyAnalyzer(g).summarize()

        assert not summary.is_dag
        assert summary.cycles == [["a", "b"]]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
