"""
测试公共数据
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from godep_map.resolver import MappingResolver, Package


class RecordingResolver(MappingResolver):
    """记录每次解析调用的 (identifier, search_root)"""

    def __init__(self, packages):
        super().__init__(packages)
        self.calls = []

    def resolve(self, identifier, search_root, build):
        self.calls.append((identifier, search_root))
        return super().resolve(identifier, search_root, build)


def make_packages() -> dict[str, Package]:
    """
    app -> fmt, lib, util
    lib -> util, fmt
    util -> strings (cgo)
    fmt -> strings, io (标准库)
    """
    pkgs = [
        Package(
            "github.com/acme/app",
            dir="/src/app",
            imports=("fmt", "github.com/acme/lib", "github.com/acme/util"),
            test_imports=("testing", "github.com/acme/app"),
        ),
        Package(
            "github.com/acme/lib",
            dir="/src/lib",
            imports=("github.com/acme/util", "fmt"),
        ),
        Package(
            "github.com/acme/util",
            dir="/src/util",
            imports=("strings",),
            cgo_files=("util_cgo.go",),
        ),
        Package("fmt", dir="/goroot/src/fmt", imports=("strings", "io"), goroot=True),
        Package("strings", dir="/goroot/src/strings", imports=("io",), goroot=True),
        Package("io", dir="/goroot/src/io", goroot=True),
        Package("testing", dir="/goroot/src/testing", imports=("fmt",), goroot=True),
    ]
    return {p.import_path: p for p in pkgs}


@pytest.fixture
def packages():
    return make_packages()


@pytest.fixture
def resolver(packages):
    return RecordingResolver(packages)
