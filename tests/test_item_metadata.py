from __future__ import annotations

import os
from pathlib import Path

import pytest

from mediaorganizer import Catalog, CatalogIOError
from mediaorganizer.io.metadata import file_type, item_from_file


def test_item_from_file(tmp_path: Path) -> None:
    asset = tmp_path / "CLIP_0001.MP4"
    asset.write_bytes(b"\x00" * 128)
    os.utime(asset, (1_700_000_000, 1_700_000_000))

    item = item_from_file(asset, name="Clip")

    assert item.path == asset.as_posix()
    assert item.type == "mp4"
    assert item.size == 128
    assert item.modified == 1_700_000_000
    assert item.name == "Clip"
    assert item.description is None


def test_item_from_missing_file(tmp_path: Path) -> None:
    with pytest.raises(CatalogIOError):
        item_from_file(tmp_path / "missing.jpg")


def test_item_from_directory(tmp_path: Path) -> None:
    with pytest.raises(CatalogIOError):
        item_from_file(tmp_path)


def test_file_type_without_suffix() -> None:
    assert file_type(Path("README")) == ""
    assert file_type(Path("archive.tar.GZ")) == "gz"


def test_scanned_item_round_trips(catalog: Catalog, tmp_path: Path) -> None:
    asset = tmp_path / "photo.jpg"
    asset.write_bytes(b"jpeg")
    item = item_from_file(asset)

    catalog.add_item(item)

    assert catalog.list_items() == [item]
