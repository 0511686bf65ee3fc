from __future__ import annotations

from pathlib import Path


def iter_image_files(*, input_dir: Path, recursive: bool, extensions: tuple[str, ...]) -> list[Path]:
    exts = tuple(x.lower() if x.startswith(".") else f".{x.lower()}" for x in extensions)
    if recursive:
        candidates = input_dir.rglob("*")
    else:
        candidates = input_dir.glob("*")

    images: list[Path] = []
    for p in candidates:
        if not p.is_file():
            continue
        if p.suffix.lower() in exts:
            images.append(p)

    images.sort()
    return images
