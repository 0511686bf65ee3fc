from __future__ import annotations

from pathlib import Path

from fast_image_size.locator import PathLocator
from fast_image_size.paths import iter_image_files
from fast_image_size.project import find_project_root


def test_iter_image_files(tmp_path: Path) -> None:
    (tmp_path / "a.png").write_bytes(b"\x89PNG\r\n\x1a\n")
    (tmp_path / "b.JPG").write_bytes(b"\xff\xd8\xff")
    (tmp_path / "c.txt").write_text("x", encoding="utf-8")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "d.svg").write_text("<svg/>", encoding="utf-8")

    images = iter_image_files(input_dir=tmp_path, recursive=False, extensions=(".png", "jpg", ".svg"))
    assert [p.name for p in images] == ["a.png", "b.JPG"]

    images = iter_image_files(input_dir=tmp_path, recursive=True, extensions=(".png", "jpg", ".svg"))
    assert [p.name for p in images] == ["a.png", "b.JPG", "d.svg"]


def test_find_project_root(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text("", encoding="utf-8")
    config_path = tmp_path / "config" / "config.toml"
    config_path.parent.mkdir()
    config_path.write_text("", encoding="utf-8")

    assert find_project_root(config_path) == tmp_path.resolve()


def test_path_locator(tmp_path: Path) -> None:
    locator = PathLocator(tmp_path)

    assert locator.to_path("img/a.png") == str((tmp_path / "img" / "a.png").resolve())
    assert locator.to_path("/abs/a.png") == "/abs/a.png"
    assert locator.to_path("https://example.com/a.png") == "https://example.com/a.png"
    assert locator.to_path("") == ""
    assert locator.to_path("  ") == ""
