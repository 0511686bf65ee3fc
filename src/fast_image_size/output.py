from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from fast_image_size.model import ImageSize

REPORT_FORMAT_VERSION = "1.0"


def size_entry(*, relative_path: str, size: ImageSize | None) -> dict[str, Any]:
    entry: dict[str, Any] = {"relative_path": relative_path}
    if size is None:
        entry.update({"width": None, "height": None, "type": None})
    else:
        entry.update(size.as_dict())
    return entry


def write_size_report(
    *,
    output_path: Path,
    input_dir: str,
    entries: list[dict[str, Any]],
) -> None:
    payload: dict[str, Any] = {
        "format_version": REPORT_FORMAT_VERSION,
        "input_dir": input_dir,
        "images": entries,
    }

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
