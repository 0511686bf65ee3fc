from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path


def main() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(repo_root / "src"))

    parser = argparse.ArgumentParser(
        description="Read image dimensions from file headers (PNG, GIF, JPEG, WEBP, SVG)."
    )
    parser.add_argument(
        "--config",
        default=str(repo_root / "config" / "config.toml"),
        help="Path to config TOML (default: config/config.toml).",
    )
    parser.add_argument(
        "images",
        nargs="*",
        help="Image paths or URLs to probe. Without any, probe every image under input.dir.",
    )
    parser.add_argument("--verbose", action="store_true", help="Log why probes fail.")
    args = parser.parse_args()

    config_path = Path(args.config).expanduser().resolve()

    from fast_image_size.config import AppConfig, load_config
    from fast_image_size.pipeline import build_size_cache, run_probe

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not args.images:
        config = load_config(config_path)
        run_probe(config=config, config_path=config_path)
        return

    config = load_config(config_path) if config_path.exists() else AppConfig()
    cache, source = build_size_cache(config=config, base_dir=Path.cwd())
    try:
        for image in args.images:
            size = cache.get_size(image)
            payload = size.as_dict() if size is not None else None
            print(json.dumps({"image": image, "size": payload}, ensure_ascii=False))
    finally:
        source.close()


if __name__ == "__main__":
    main()
