"""Tests for simple_sitemap.merge — explicit record merging."""

from simple_sitemap.merge import merge_entries, merge_on_key


class TestMergeEntries:
    def test_overlay_scalars_win(self) -> None:
        assert merge_entries({"priority": 0.5}, {"priority": 0.8}) == {"priority": 0.8}

    def test_none_never_replaces(self) -> None:
        assert merge_entries({"changefreq": "daily"}, {"changefreq": None}) == {"changefreq": "daily"}

    def test_nested_mappings_merge(self) -> None:
        merged = merge_entries({"news": {"title": "a", "lang": "en"}}, {"news": {"title": "b"}})
        assert merged == {"news": {"title": "b", "lang": "en"}}

    def test_lists_concatenate_overlay_first(self) -> None:
        assert merge_entries({"tags": ["a"]}, {"tags": ["b"]}) == {"tags": ["b", "a"]}

    def test_images_merged_by_loc(self) -> None:
        merged = merge_entries(
            {"images": [{"loc": "/a.png", "title": "base"}, {"loc": "/b.png"}]},
            {"images": [{"loc": "/a.png", "title": "overlay", "caption": "c"}]},
        )
        assert merged["images"] == [
            {"loc": "/a.png", "title": "overlay", "caption": "c"},
            {"loc": "/b.png"},
        ]

    def test_alternatives_merged_by_hreflang(self) -> None:
        merged = merge_entries(
            {"alternatives": [{"hreflang": "fr", "href": "/fr/a"}]},
            {"alternatives": [{"hreflang": "fr", "href": "/fr/custom"}, {"hreflang": "de", "href": "/de/a"}]},
        )
        assert merged["alternatives"] == [
            {"hreflang": "fr", "href": "/fr/custom"},
            {"hreflang": "de", "href": "/de/a"},
        ]

    def test_inputs_not_mutated(self) -> None:
        base = {"images": [{"loc": "/a.png"}]}
        merge_entries(base, {"images": [{"loc": "/b.png"}]})
        assert base == {"images": [{"loc": "/a.png"}]}


class TestMergeOnKey:
    def test_later_records_win(self) -> None:
        merged = merge_on_key(
            [{"loc": "/a", "priority": 0.5}, {"loc": "/b"}, {"loc": "/a", "priority": 0.9, "changefreq": "daily"}],
            "loc",
        )
        assert merged == [{"loc": "/a", "priority": 0.9, "changefreq": "daily"}, {"loc": "/b"}]

    def test_first_seen_order_kept(self) -> None:
        merged = merge_on_key([{"k": 2}, {"k": 1}, {"k": 2}], "k")
        assert [r["k"] for r in merged] == [2, 1]
