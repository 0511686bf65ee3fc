from __future__ import annotations

import argparse
import json
from collections import Counter
from pathlib import Path


def main() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    parser = argparse.ArgumentParser(description="Summarize a size report written by probe_sizes.py.")
    parser.add_argument(
        "--config",
        default=str(repo_root / "config" / "config.toml"),
        help="Path to config TOML (default: config/config.toml).",
    )
    args = parser.parse_args()
    config_path = Path(args.config).expanduser().resolve()

    # Best-effort: avoid hard dependency on the package for this stats script.
    try:
        import tomllib

        cfg = tomllib.loads(config_path.read_text(encoding="utf-8"))
        report_path = Path(cfg.get("output", {}).get("path", "data/sizes.json"))
    except (OSError, ValueError):
        report_path = Path("data/sizes.json")

    report_path = (repo_root / report_path).resolve()
    if not report_path.exists():
        print(f"No size report found at: {report_path}")
        return

    payload = json.loads(report_path.read_text(encoding="utf-8"))
    entries = payload.get("images", [])
    if not entries:
        print(f"Report is empty: {report_path}")
        return

    types = Counter(str(e.get("type")) for e in entries if e.get("type"))
    unresolved = sum(1 for e in entries if not e.get("type"))
    print(f"Images: {len(entries)}")
    print(f"Unresolved: {unresolved}")
    print("By type: " + ", ".join(f"{k}:{v}" for k, v in types.most_common()))

    areas = sorted(int(e["width"]) * int(e["height"]) for e in entries if e.get("type"))
    if areas:
        n = len(areas)
        print(f"Pixels: min={areas[0]} median={areas[n // 2]} max={areas[-1]}")


if __name__ == "__main__":
    main()
