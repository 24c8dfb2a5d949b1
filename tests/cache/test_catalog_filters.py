from __future__ import annotations

from mediaorganizer import Catalog, Filter, SortMode


def _seed(catalog: Catalog, item_factory) -> None:
    catalog.add_item(item_factory("videos/beach.mp4", modified=3))
    catalog.add_item(item_factory("videos/city.mov", modified=2))
    catalog.add_item(item_factory("photos/beach.jpg", modified=1))
    for tag in ("cool-item", "holiday", "o'brien"):
        catalog.add_tag(tag)
    catalog.add_tag_to_item("videos/beach.mp4", "cool-item")
    catalog.add_tag_to_item("videos/beach.mp4", "holiday")
    catalog.add_tag_to_item("photos/beach.jpg", "holiday")
    catalog.add_tag_to_item("videos/city.mov", "o'brien")


def _paths(items) -> list:
    return [item.path for item in items]


def test_tag_filter(catalog: Catalog, item_factory) -> None:
    catalog.add_item(item_factory("Bababooey1"))
    catalog.add_item(item_factory("Bababooey2"))
    catalog.add_tag("cool-item")
    catalog.add_tag_to_item("Bababooey2", "cool-item")

    items = catalog.list_items(Filter(tags=["cool-item"]))

    assert _paths(items) == ["Bababooey2"]


def test_tags_are_and_combined(catalog: Catalog, item_factory) -> None:
    _seed(catalog, item_factory)

    items = catalog.list_items(Filter(tags=["holiday", "cool-item"]))

    assert _paths(items) == ["videos/beach.mp4"]


def test_filenames_are_or_combined(catalog: Catalog, item_factory) -> None:
    _seed(catalog, item_factory)

    items = catalog.list_items(Filter(filenames=["%.mov", "photos/%"]))

    assert _paths(items) == ["videos/city.mov", "photos/beach.jpg"]


def test_tags_and_filenames_combined(catalog: Catalog, item_factory) -> None:
    _seed(catalog, item_factory)

    items = catalog.list_items(Filter(tags=["holiday"], filenames=["%.jpg", "%.mov"]))

    assert _paths(items) == ["photos/beach.jpg"]


def test_filter_respects_sort(catalog: Catalog, item_factory) -> None:
    _seed(catalog, item_factory)

    items = catalog.list_items(
        Filter(filenames=["%beach%"]), sort=SortMode.FILENAME, descending=False
    )

    assert _paths(items) == ["photos/beach.jpg", "videos/beach.mp4"]


def test_empty_filter_matches_everything(catalog: Catalog, item_factory) -> None:
    _seed(catalog, item_factory)

    assert len(catalog.list_items(Filter())) == 3
    assert len(catalog.list_items(Filter(tags=[], filenames=[]))) == 3


def test_quote_in_values_is_bound(catalog: Catalog, item_factory) -> None:
    _seed(catalog, item_factory)

    assert _paths(catalog.list_items(Filter(tags=["o'brien"]))) == ["videos/city.mov"]
    assert catalog.list_items(Filter(tags=["x' OR '1'='1"])) == []
    assert catalog.list_items(Filter(filenames=["%' OR 1=1 --"])) == []


def test_unknown_tag_matches_nothing(catalog: Catalog, item_factory) -> None:
    _seed(catalog, item_factory)

    assert catalog.list_items(Filter(tags=["missing"])) == []


def test_parsed_filter_drives_listing(catalog: Catalog, item_factory) -> None:
    _seed(catalog, item_factory)

    parsed = catalog.filter_from_string("#holiday beach")

    assert _paths(catalog.list_items(parsed)) == ["videos/beach.mp4", "photos/beach.jpg"]


def test_parsed_glob_drives_listing(catalog: Catalog, item_factory) -> None:
    _seed(catalog, item_factory)

    parsed = catalog.filter_from_string("videos/*")

    assert _paths(catalog.list_items(parsed)) == ["videos/beach.mp4", "videos/city.mov"]


def test_backslash_paths_match_raw_patterns(catalog: Catalog, item_factory) -> None:
    catalog.add_item(item_factory("C:\\Media\\a.mp4"))
    catalog.add_item(item_factory("D:\\Other\\b.mp4"))

    items = catalog.list_items(Filter(filenames=["C:\\Media\\%"]))

    assert _paths(items) == ["C:\\Media\\a.mp4"]


def test_parsed_backslash_is_literal(catalog: Catalog, item_factory) -> None:
    catalog.add_item(item_factory("C:\\Media\\a.mp4"))
    catalog.add_item(item_factory("C:/Media/b.mp4"))

    parsed = catalog.filter_from_string("C:\\Media\\*")

    assert _paths(catalog.list_items(parsed)) == ["C:\\Media\\a.mp4"]


def test_escaped_filter_keeps_wildcards_literal(catalog: Catalog, item_factory) -> None:
    catalog.add_item(item_factory("report_1.pdf", modified=2))
    catalog.add_item(item_factory("reportX1.pdf", modified=1))

    assert _paths(catalog.list_items(Filter(filenames=["report_1%"]))) == [
        "report_1.pdf",
        "reportX1.pdf",
    ]
    assert _paths(catalog.list_items(Filter(filenames=["report\\_1%"], escaped=True))) == [
        "report_1.pdf"
    ]
