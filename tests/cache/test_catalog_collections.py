from __future__ import annotations

import pytest

from mediaorganizer import Catalog, Collection, ConstraintError, NotFoundError


@pytest.fixture
def seeded(catalog: Catalog, item_factory) -> Catalog:
    catalog.add_item(item_factory("a.mp4"))
    catalog.add_item(item_factory("b.mp4"))
    catalog.add_tag("holiday")
    catalog.add_collection(Collection(name="Trips", icon="plane", description="Away", last_updated=10))
    return catalog


def test_list_collections(seeded: Catalog) -> None:
    seeded.add_collection(Collection(name="Archive"))

    names = [collection.name for collection in seeded.list_collections()]

    assert names == ["Archive", "Trips"]
    assert seeded.list_collections()[1] == Collection(
        name="Trips", icon="plane", description="Away", last_updated=10
    )


def test_duplicate_collection_rejected(seeded: Catalog) -> None:
    with pytest.raises(ConstraintError):
        seeded.add_collection(Collection(name="Trips"))


def test_collection_tags(seeded: Catalog) -> None:
    seeded.add_tag_to_collection("Trips", "holiday")
    seeded.add_tag_to_collection("Trips", "holiday")

    assert seeded.list_collection_tags("Trips") == ["holiday"]

    seeded.remove_tag_from_collection("Trips", "holiday")
    seeded.remove_tag_from_collection("Trips", "missing")

    assert seeded.list_collection_tags("Trips") == []


def test_collection_items(seeded: Catalog) -> None:
    seeded.add_item_to_collection("Trips", "b.mp4")
    seeded.add_item_to_collection("Trips", "a.mp4")

    assert seeded.list_collection_items("Trips") == ["b.mp4", "a.mp4"]

    seeded.remove_item_from_collection("Trips", "b.mp4")

    assert seeded.list_collection_items("Trips") == ["a.mp4"]


def test_collection_associations_require_targets(seeded: Catalog) -> None:
    with pytest.raises(NotFoundError):
        seeded.add_tag_to_collection("Missing", "holiday")
    with pytest.raises(NotFoundError):
        seeded.add_tag_to_collection("Trips", "missing")
    with pytest.raises(NotFoundError):
        seeded.add_item_to_collection("Missing", "a.mp4")
    with pytest.raises(NotFoundError):
        seeded.add_item_to_collection("Trips", "missing.mp4")


def test_removing_item_detaches_from_collections(seeded: Catalog) -> None:
    seeded.add_item_to_collection("Trips", "a.mp4")

    seeded.remove_item("a.mp4")

    assert seeded.list_collection_items("Trips") == []


def test_removing_tag_detaches_from_collections(seeded: Catalog) -> None:
    seeded.add_tag_to_collection("Trips", "holiday")

    seeded.remove_tag("holiday")

    assert seeded.list_collection_tags("Trips") == []


def test_remove_collection_cascades(seeded: Catalog) -> None:
    seeded.add_item_to_collection("Trips", "a.mp4")
    seeded.add_tag_to_collection("Trips", "holiday")

    seeded.remove_collection("Trips")
    seeded.remove_collection("Trips")

    assert seeded.list_collections() == []
    assert seeded.list_collection_items("Trips") == []
    assert seeded.list_collection_tags("Trips") == []
    # Items and tags themselves are untouched.
    assert len(seeded.list_items()) == 2
    assert seeded.list_all_tags() == ["holiday"]
