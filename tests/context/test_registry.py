"""Tests for context items and the registry."""

import pytest

from tandem.context.models import (
    FileContextItem,
    SelectionContextItem,
    SelectionRange,
    workspace_relative,
)
from tandem.context.registry import ContextItemRegistry

ROOT = "/work"


def selection(start: int, end: int, content: str = "x") -> SelectionContextItem:
    return SelectionContextItem.from_selection(
        "/work/src/a.ts", content, SelectionRange(start, 0, end, 4), ROOT
    )


class TestWorkspaceRelative:
    @pytest.mark.parametrize(
        "path,root,expected",
        [
            ("/work/src/a.ts", "/work", "src/a.ts"),
            ("/elsewhere/a.ts", "/work", "/elsewhere/a.ts"),
            ("/work/src/a.ts", None, "/work/src/a.ts"),
            ("src/a.ts", "/work", "src/a.ts"),
        ],
    )
    def test_relative_paths(self, path: str, root: str | None, expected: str) -> None:
        assert workspace_relative(path, root) == expected


class TestSelectionRange:
    def test_empty(self) -> None:
        assert SelectionRange(3, 2, 3, 2).is_empty
        assert not SelectionRange(3, 2, 3, 5).is_empty

    def test_end_before_start(self) -> None:
        with pytest.raises(ValueError, match="precedes"):
            SelectionRange(5, 0, 4, 9)


class TestContextItems:
    def test_file_item_identity_is_relative_path(self) -> None:
        item = FileContextItem.for_path("/work/src/a.ts", ROOT)

        assert item.id == "src/a.ts"
        assert item.name == "a.ts"
        assert item.to_dict() == {
            "id": "src/a.ts",
            "category": "file",
            "name": "a.ts",
            "path": "src/a.ts",
        }

    def test_selection_item_name_uses_one_based_lines(self) -> None:
        item = selection(9, 14)

        assert item.name == "Selection from a.ts (L10-L15)"
        assert item.path == "src/a.ts"
        assert item.to_dict()["selection_range"]["end_line"] == 14

    def test_selections_get_fresh_ids(self) -> None:
        assert selection(1, 2).id != selection(1, 2).id


class TestContextItemRegistry:
    def test_same_file_twice_is_one_item(self, registry: ContextItemRegistry) -> None:
        first = FileContextItem.for_path("/work/src/a.ts", ROOT)
        second = FileContextItem.for_path("/work/src/a.ts", ROOT)

        assert registry.add(first) is True
        assert registry.add(second) is False
        assert len(registry) == 1

    def test_identical_selections_are_two_items(
        self, registry: ContextItemRegistry
    ) -> None:
        registry.add(selection(1, 2))
        registry.add(selection(1, 2))

        assert len(registry) == 2

    def test_insertion_order_preserved_on_replace(
        self, registry: ContextItemRegistry
    ) -> None:
        a = FileContextItem.for_path("/work/a.ts", ROOT)
        b = FileContextItem.for_path("/work/b.ts", ROOT)
        registry.add(a)
        registry.add(b)
        registry.add(FileContextItem.for_path("/work/a.ts", ROOT))

        assert [item.id for item in registry.list()] == ["a.ts", "b.ts"]
        assert [item.id for item in registry] == ["a.ts", "b.ts"]

    def test_remove_and_get(self, registry: ContextItemRegistry) -> None:
        item = FileContextItem.for_path("/work/a.ts", ROOT)
        registry.add(item)

        assert "a.ts" in registry
        assert registry.get("a.ts") == item
        assert registry.remove("a.ts") is True
        assert registry.remove("a.ts") is False
        assert registry.get("a.ts") is None

    def test_clear(self, registry: ContextItemRegistry) -> None:
        registry.add(FileContextItem.for_path("/work/a.ts", ROOT))
        registry.add(selection(0, 1))
        registry.clear()
        assert len(registry) == 0
