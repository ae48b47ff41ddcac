"""
Go 包元数据解析器

给定包导入路径和搜索根目录，返回包的导入路径、源码目录、直接导入列表
以及是否属于标准库、是否包含 cgo 文件等分类信息。
"""

import json
import subprocess
from dataclasses import dataclass
from typing import Any, Protocol

from .config import BuildConfig, ConfigurationError

VENDOR_SEPARATOR = "vendor/"


def normalize_vendor(path: str) -> str:
    """去掉最后一个 vendor/ 及其之前的路径段"""
    return path.split(VENDOR_SEPARATOR)[-1]


class ResolutionError(Exception):
    """无法在给定搜索根目录下解析某个包"""

    def __init__(self, identifier: str, cause: str):
        self.identifier = identifier
        self.cause = cause
        super().__init__(f"failed to import {identifier}: {cause}")


@dataclass(frozen=True)
class Package:
    """Go 包信息"""

    import_path: str
    dir: str = ""

    # 导入列表，保持 go 工具给出的顺序
    imports: tuple[str, ...] = ()
    test_imports: tuple[str, ...] = ()
    xtest_imports: tuple[str, ...] = ()

    goroot: bool = False  # 位于 GOROOT 中（标准库）
    cgo_files: tuple[str, ...] = ()

    @property
    def name(self) -> str:
        """规范化后的导入路径"""
        return normalize_vendor(self.import_path)

    @property
    def has_native_sources(self) -> bool:
        return len(self.cgo_files) > 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Package":
        """
        从 `go list -json` 风格的字典构建

        go list 给出的导入是 vendor 解析后的路径，这里按 ImportMap 还原为源码中
        书写的路径，不在 ImportMap 中的再去掉 vendor 前缀，使导入与注册表键一致。
        """
        source_paths = {v: k for k, v in (data.get("ImportMap") or {}).items()}

        def source_imports(key: str) -> tuple[str, ...]:
            return tuple(
                source_paths.get(imp) or normalize_vendor(imp) for imp in data.get(key) or ()
            )

        return cls(
            import_path=data["ImportPath"],
            dir=data.get("Dir", ""),
            imports=source_imports("Imports"),
            test_imports=source_imports("TestImports"),
            xtest_imports=source_imports("XTestImports"),
            goroot=bool(data.get("Goroot", False)),
            cgo_files=tuple(data.get("CgoFiles") or ()),
        )


class PackageResolver(Protocol):
    """包解析能力"""

    def resolve(self, identifier: str, search_root: str, build: BuildConfig) -> Package: ...


class GoListResolver:
    """
    通过 `go list -json` 解析包

    每次调用在 search_root 目录下执行一次 go 命令，因此模块内的相对导入
    和 vendor 目录都按该包自身的位置解析。
    """

    def __init__(self, go_binary: str = "go"):
        self.go_binary = go_binary

    def build_command(self, identifier: str, build: BuildConfig) -> list[str]:
        cmd = [self.go_binary, "list", "-json"]
        if build.tags:
            cmd.append("-tags=" + ",".join(build.tags))
        cmd.append(identifier)
        return cmd

    def resolve(self, identifier: str, search_root: str, build: BuildConfig) -> Package:
        cmd = self.build_command(identifier, build)
        try:
            proc = subprocess.run(
                cmd, cwd=search_root or None, capture_output=True, text=True, check=False
            )
        except OSError as e:
            raise ResolutionError(identifier, str(e)) from e

        if proc.returncode != 0:
            raise ResolutionError(identifier, proc.stderr.strip() or f"exit status {proc.returncode}")

        try:
            data = json.loads(proc.stdout)
        except json.JSONDecodeError as e:
            raise ResolutionError(identifier, f"invalid go list output: {e}") from e

        # go list 在部分错误时仍可能返回 0，错误信息在 Error 字段里
        if data.get("Error"):
            raise ResolutionError(identifier, data["Error"].get("Err", "unknown error"))

        return Package.from_dict(data)


class MappingResolver:
    """从内存映射或 JSON 快照解析包，不依赖 go 工具链"""

    def __init__(self, packages: dict[str, Package] | None = None):
        self.packages = packages or {}

    def resolve(self, identifier: str, search_root: str, build: BuildConfig) -> Package:
        pkg = self.packages.get(identifier)
        if pkg is None:
            raise ResolutionError(identifier, f"cannot find package in {search_root or '.'}")
        return pkg

    @classmethod
    def from_json(cls, filepath: str) -> "MappingResolver":
        """
        从 JSON 快照加载

        文件格式: {"packages": {"<import path>": {"Dir": ..., "Imports": [...], ...}}}
        """
        with open(filepath, encoding="utf-8") as f:
            data = json.load(f)

        entries = data.get("packages", {}) if isinstance(data, dict) else None
        if not isinstance(entries, dict):
            raise ConfigurationError(
                f"invalid metadata snapshot {filepath}: \"packages\" must be an object"
            )

        packages = {}
        for path, pkg_dict in entries.items():
            if not isinstance(pkg_dict, dict):
                raise ConfigurationError(
                    f"invalid metadata snapshot {filepath}: entry {path} must be an object"
                )
            packages[path] = Package.from_dict({"ImportPath": path, **pkg_dict})
        return cls(packages)

