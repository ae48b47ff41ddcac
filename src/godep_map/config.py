"""
运行配置

把命令行上的逗号分隔列表和 a=b 规则解析为过滤、重写和构建配置。
所有格式错误在开始解析任何包之前就会抛出。
"""

from dataclasses import dataclass, field

# cgo 伪包，永远不解析
BUILTIN_IGNORED = frozenset({"C"})

DEFAULT_MAX_LEVEL = 256


class ConfigurationError(Exception):
    """配置格式错误"""


def split_csv(value: str | None) -> list[str]:
    """拆分逗号分隔列表，忽略空项"""
    if not value:
        return []
    return [item for item in value.split(",") if item]


def parse_color_spec(value: str | None) -> dict[str, str]:
    """
    解析颜色规则

    Args:
        value: 形如 "github.com=red,golang.org=blue" 的字符串

    Returns:
        前缀 -> 颜色 的有序映射
    """
    colors: dict[str, str] = {}
    for item in split_csv(value):
        spec = item.split("=")
        if len(spec) != 2:
            raise ConfigurationError(f"wrong color spec: {item}")
        colors[spec[0]] = spec[1]
    return colors


def parse_prefix_substitution(value: str | None) -> dict[str, str]:
    """
    解析名称前缀替换规则

    "a=b" 把前缀 a 替换为 b，单独的 "a" 表示直接去掉前缀 a。
    """
    substitutions: dict[str, str] = {}
    for item in split_csv(value):
        spec = item.split("=")
        if len(spec) > 2:
            raise ConfigurationError(f"wrong prefix substitution spec: {item}")
        substitutions[spec[0]] = spec[1] if len(spec) == 2 else ""
    return substitutions


@dataclass
class FilterConfig:
    """包过滤配置"""

    ignored: set[str] = field(default_factory=lambda: set(BUILTIN_IGNORED))
    ignored_prefixes: list[str] = field(default_factory=list)
    only_prefixes: list[str] = field(default_factory=list)
    ignore_stdlib: bool = False
    max_level: int = DEFAULT_MAX_LEVEL

    @classmethod
    def from_options(
        cls,
        ignore_packages: str | None = None,
        ignore_prefixes: str | None = None,
        only_prefixes: str | None = None,
        ignore_stdlib: bool = False,
        max_level: int = DEFAULT_MAX_LEVEL,
    ) -> "FilterConfig":
        if max_level < 0:
            raise ConfigurationError(f"max level must be non-negative: {max_level}")
        return cls(
            ignored=set(BUILTIN_IGNORED) | set(split_csv(ignore_packages)),
            ignored_prefixes=split_csv(ignore_prefixes),
            only_prefixes=split_csv(only_prefixes),
            ignore_stdlib=ignore_stdlib,
            max_level=max_level,
        )


@dataclass
class RewriteConfig:
    """名称和颜色的前缀替换规则"""

    names: dict[str, str] = field(default_factory=dict)
    colors: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_options(cls, rewrite: str | None = None, colors: str | None = None) -> "RewriteConfig":
        return cls(names=parse_prefix_substitution(rewrite), colors=parse_color_spec(colors))


@dataclass
class BuildConfig:
    """传给包解析器的构建配置，核心逻辑不解释其内容"""

    tags: list[str] = field(default_factory=list)


@dataclass
class GraphOptions:
    """遍历与输出选项"""

    delve_goroot: bool = False  # 继续展开标准库包的导入
    include_tests: bool = False
    horizontal: bool = False
