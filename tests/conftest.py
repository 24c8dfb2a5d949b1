import sys
from pathlib import Path
from typing import Iterator

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

# Ensure the project sources are importable without an installed package.
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from mediaorganizer import Catalog, Item  # noqa: E402


@pytest.fixture
def catalog(tmp_path: Path, request: pytest.FixtureRequest) -> Iterator[Catalog]:
    store = Catalog.create(request.node.name, temp_dir=tmp_path)
    yield store
    store.discard()


def make_item(path: str = "Bababooey", **overrides) -> Item:
    values = {
        "path": path,
        "type": "mp4",
        "size": 289,
        "modified": 1,
        "name": "NameUwau",
    }
    values.update(overrides)
    return Item(**values)


@pytest.fixture
def item_factory():
    return make_item
