"""
Tests for iconscope.core.catalog module.
"""

from collections.abc import Callable
from pathlib import Path

import pytest

from iconscope.core.catalog import (
    IconCatalog,
    collect_icon_names,
    filter_icon_names,
    icon_directories,
    sorted_icon_names,
)
from iconscope.core.models import Theme, ThemeDirectorySection, ThemeIndex


def make_index(*paths: str) -> ThemeIndex:
    return ThemeIndex(name="T", sections=[ThemeDirectorySection(path=p) for p in paths])


class TestSorting:
    """Tests for catalog ordering."""

    def test_case_insensitive_first(self) -> None:
        names = ["beta", "Alpha", "alpha", "Beta"]
        assert sorted_icon_names(names) == ["Alpha", "alpha", "Beta", "beta"]

    def test_duplicates_removed(self) -> None:
        assert sorted_icon_names(["b", "a", "b"]) == ["a", "b"]


class TestFilter:
    """Tests for filter_icon_names()."""

    def test_substring(self) -> None:
        names = ["edit-copy", "edit-paste", "firefox"]
        assert filter_icon_names(names, "edit") == ["edit-copy", "edit-paste"]

    def test_case_sensitive(self) -> None:
        assert filter_icon_names(["Firefox", "firefox"], "fire") == ["firefox"]

    def test_empty_text_keeps_all(self) -> None:
        assert filter_icon_names(["a", "b"], "") == ["a", "b"]

    def test_no_match(self) -> None:
        assert filter_icon_names(["a", "b"], "zzz") == []


class TestCollectIconNames:
    """Tests for icon_directories() and collect_icon_names()."""

    def test_directories_per_root_and_section(self) -> None:
        theme = Theme(
            name="T",
            identifier="t",
            directories=[Path("/one/t"), Path("/two/t")],
            index=make_index("16x16/apps", "scalable/apps"),
        )
        assert list(icon_directories(theme)) == [
            Path("/one/t/16x16/apps"),
            Path("/one/t/scalable/apps"),
            Path("/two/t/16x16/apps"),
            Path("/two/t/scalable/apps"),
        ]

    def test_unthemed_uses_roots(self) -> None:
        theme = Theme(name="None", directories=[Path("/pixmaps")])
        assert list(icon_directories(theme)) == [Path("/pixmaps")]

    def test_collect(self, temp_dir: Path, write_file: Callable[..., Path]) -> None:
        root = temp_dir / "t"
        write_file(root / "16x16/apps/firefox.png")
        write_file(root / "scalable/apps/firefox.svg")
        write_file(root / "scalable/apps/edit-copy.symbolic.png")
        write_file(root / "scalable/apps/README")
        write_file(root / "scalable/apps/.hidden.png")
        write_file(root / "undeclared/apps/ghost.png")
        (root / "16x16/apps/folder.png").mkdir()

        theme = Theme(
            name="T",
            identifier="t",
            directories=[root],
            index=make_index("16x16/apps", "scalable/apps", "missing/apps"),
        )
        names = collect_icon_names(theme)

        assert names == {"firefox", "edit-copy"}
        assert theme.icon_names == names

    def test_unsupported_scales_not_listed(
        self, temp_dir: Path, write_file: Callable[..., Path]
    ) -> None:
        root = temp_dir / "t"
        write_file(root / "a@4/huge.png")
        write_file(root / "a@0/none.png")
        write_file(root / "a/small.png")

        index = make_index("a@4", "a@0", "a")
        index.sections[0].scale = 4
        index.sections[1].scale = 0
        theme = Theme(name="T", identifier="t", directories=[root], index=index)

        assert list(icon_directories(theme)) == [root / "a"]
        assert collect_icon_names(theme) == {"small"}


class TestIconCatalog:
    """Tests for IconCatalog."""

    @pytest.fixture
    def themes(self) -> list[Theme]:
        return [
            Theme(name="None", icon_names={"xterm"}),
            Theme(name="Adwaita", identifier="Adwaita", icon_names={"edit-copy", "Zoom"}),
            Theme(name="Hicolor", identifier="hicolor", icon_names={"edit-copy", "apps"}),
        ]

    def test_names_deduplicated_and_sorted(self, themes: list[Theme]) -> None:
        catalog = IconCatalog.build(themes)
        assert catalog.names == ["apps", "edit-copy", "xterm", "Zoom"]
        assert len(catalog) == 4
        assert catalog.first == "apps"

    def test_contains(self, themes: list[Theme]) -> None:
        catalog = IconCatalog.build(themes)
        assert "edit-copy" in catalog
        assert "Edit-Copy" not in catalog

    def test_owner_is_first_theme(self, themes: list[Theme]) -> None:
        catalog = IconCatalog.build(themes)
        assert catalog.owner("edit-copy").name == "Adwaita"
        assert catalog.owner("xterm").name == "None"
        assert catalog.owner("apps").name == "Hicolor"

    def test_owner_missing(self, themes: list[Theme]) -> None:
        catalog = IconCatalog.build(themes)
        with pytest.raises(KeyError):
            catalog.owner("nothing")

    def test_search(self, themes: list[Theme]) -> None:
        catalog = IconCatalog.build(themes)
        assert catalog.search("o") == ["edit-copy", "Zoom"]

    def test_names_are_a_copy(self, themes: list[Theme]) -> None:
        catalog = IconCatalog.build(themes)
        catalog.names.clear()
        assert len(catalog) == 4

    def test_empty(self) -> None:
        catalog = IconCatalog.build([])
        assert catalog.names == []
        assert catalog.first is None
        assert list(catalog) == []
