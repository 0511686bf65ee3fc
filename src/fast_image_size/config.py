from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

DEFAULT_INPUT_EXTENSIONS: tuple[str, ...] = (".png", ".gif", ".jpg", ".jpeg", ".webp", ".svg")

# Header segments (EXIF thumbnails, ICC profiles) can push the frame marker far out.
JPEG_MAX_HEADER_SIZE = 786432
SVG_WINDOW_SIZE = 4096


@dataclass(frozen=True, slots=True)
class ProbeConfig:
    jpeg_max_header_size: int = JPEG_MAX_HEADER_SIZE
    svg_window_size: int = SVG_WINDOW_SIZE


@dataclass(frozen=True, slots=True)
class HttpConfig:
    timeout: float = 10.0
    user_agent: str = "fast-image-size/0.1"


@dataclass(frozen=True, slots=True)
class InputConfig:
    dir: Path = Path("data/images")
    recursive: bool = False
    extensions: tuple[str, ...] = DEFAULT_INPUT_EXTENSIONS


@dataclass(frozen=True, slots=True)
class OutputConfig:
    path: Path = Path("data/sizes.json")


@dataclass(frozen=True, slots=True)
class AppConfig:
    probe: ProbeConfig = field(default_factory=ProbeConfig)
    http: HttpConfig = field(default_factory=HttpConfig)
    input: InputConfig = field(default_factory=InputConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


def _as_dict_table(value: Any, name: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise TypeError(f"config: [{name}] must be a TOML table")
    return value


def _require_path(value: Any, name: str) -> Path:
    if not isinstance(value, str) or not value.strip():
        raise TypeError(f"config: {name} must be a non-empty string path")
    return Path(value)


def _get_bool(table: dict[str, Any], key: str, default: bool) -> bool:
    value = table.get(key, default)
    if not isinstance(value, bool):
        raise TypeError(f"config: {key} must be a bool")
    return value


def _get_int(table: dict[str, Any], key: str, default: int) -> int:
    value = table.get(key, default)
    # bool is an int subclass; reject `true` where a size is expected
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"config: {key} must be an int")
    return value


def _get_float(table: dict[str, Any], key: str, default: float) -> float:
    value = table.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"config: {key} must be a number")
    return float(value)


def _get_str(table: dict[str, Any], key: str, default: str) -> str:
    value = table.get(key, default)
    if not isinstance(value, str):
        raise TypeError(f"config: {key} must be a string")
    return value


def _get_str_list(table: dict[str, Any], key: str, default: tuple[str, ...]) -> tuple[str, ...]:
    value = table.get(key)
    if value is None:
        return default
    if not isinstance(value, list) or not all(isinstance(x, str) for x in value):
        raise TypeError(f"config: {key} must be a list of strings")
    return tuple(value)


def _validate(config: AppConfig) -> None:
    if config.probe.jpeg_max_header_size <= 0:
        raise ValueError("config: probe.jpeg_max_header_size must be > 0")
    if config.probe.svg_window_size <= 0:
        raise ValueError("config: probe.svg_window_size must be > 0")
    if config.http.timeout <= 0:
        raise ValueError("config: http.timeout must be > 0")
    if not config.input.extensions:
        raise ValueError("config: input.extensions must not be empty")


def load_config(path: Path) -> AppConfig:
    if not path.exists():
        raise FileNotFoundError(f"config not found: {path}")

    import tomllib

    data = tomllib.loads(path.read_text(encoding="utf-8"))

    probe_table = _as_dict_table(data.get("probe"), "probe")
    http_table = _as_dict_table(data.get("http"), "http")
    input_table = _as_dict_table(data.get("input"), "input")
    output_table = _as_dict_table(data.get("output"), "output")

    config = AppConfig(
        probe=ProbeConfig(
            jpeg_max_header_size=_get_int(probe_table, "jpeg_max_header_size", JPEG_MAX_HEADER_SIZE),
            svg_window_size=_get_int(probe_table, "svg_window_size", SVG_WINDOW_SIZE),
        ),
        http=HttpConfig(
            timeout=_get_float(http_table, "timeout", 10.0),
            user_agent=_get_str(http_table, "user_agent", "fast-image-size/0.1"),
        ),
        input=InputConfig(
            dir=_require_path(input_table.get("dir", "data/images"), "input.dir"),
            recursive=_get_bool(input_table, "recursive", False),
            extensions=_get_str_list(input_table, "extensions", DEFAULT_INPUT_EXTENSIONS),
        ),
        output=OutputConfig(
            path=_require_path(output_table.get("path", "data/sizes.json"), "output.path"),
        ),
    )

    _validate(config)
    return config
