from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from tqdm import tqdm

from fast_image_size.cache import SizeCache
from fast_image_size.config import AppConfig
from fast_image_size.dispatcher import FormatDispatcher
from fast_image_size.locator import PathLocator
from fast_image_size.output import size_entry, write_size_report
from fast_image_size.paths import iter_image_files
from fast_image_size.project import find_project_root, resolve_from
from fast_image_size.sources import DefaultByteSource

LOGGER = logging.getLogger(__name__)


def build_size_cache(*, config: AppConfig, base_dir: Path) -> tuple[SizeCache, DefaultByteSource]:
    source = DefaultByteSource(http_config=config.http)
    dispatcher = FormatDispatcher(source=source, config=config.probe)
    return SizeCache(dispatcher=dispatcher, locator=PathLocator(base_dir)), source


def run_probe(*, config: AppConfig, config_path: Path, progress: bool = True) -> Path:
    project_root = find_project_root(config_path)

    input_dir = resolve_from(project_root, config.input.dir)
    output_path = resolve_from(project_root, config.output.path)

    if not input_dir.exists():
        raise FileNotFoundError(f"input.dir not found: {input_dir}")

    images = iter_image_files(
        input_dir=input_dir,
        recursive=config.input.recursive,
        extensions=config.input.extensions,
    )
    LOGGER.info("Found %d images under %s", len(images), input_dir)

    cache, source = build_size_cache(config=config, base_dir=input_dir)
    entries: list[dict[str, Any]] = []
    unresolved = 0
    try:
        for image_path in tqdm(images, desc="probe", disable=not progress):
            rel = str(image_path.relative_to(input_dir)).replace("\\", "/")
            size = cache.get_size(str(image_path))
            if size is None:
                unresolved += 1
                LOGGER.warning("Could not determine size of %s", rel)
            entries.append(size_entry(relative_path=rel, size=size))
    finally:
        source.close()

    write_size_report(output_path=output_path, input_dir=str(input_dir), entries=entries)
    LOGGER.info("Wrote %d entries (%d unresolved) to %s", len(entries), unresolved, output_path)
    return output_path
