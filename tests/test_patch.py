"""Tests for the JSON-Pointer patch engine and document patching."""

from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from rfctree import (
    BlankLine,
    Document,
    PatchBoundsError,
    PatchError,
    PatchTestError,
    PointerError,
    SerializationError,
    apply_patch,
    parse,
    patch_document,
    render,
)
from rfctree.patch import deep_equal, get_at_pointer, parse_pointer

LINES = [
    "Abstract",
    "",
    "   o  First",
    "   o  Second",
    "",
    "   Closing text.",
]


# =============================================================================
# Pointers
# =============================================================================


class TestPointers:
    """RFC 6901 pointer parsing and resolution."""

    def test_root(self) -> None:
        assert parse_pointer("") == []

    def test_escapes(self) -> None:
        assert parse_pointer("/a~1b/c~0d/~01") == ["a/b", "c~d", "~1"]

    def test_must_start_with_slash(self) -> None:
        with pytest.raises(PointerError):
            parse_pointer("children/0")

    def test_resolve(self) -> None:
        tree = {"a/b": {"c~d": [10, 20]}}
        assert get_at_pointer(tree, "/a~1b/c~0d/1") == 20
        assert get_at_pointer(tree, "") is tree

    def test_missing_member(self) -> None:
        with pytest.raises(PointerError, match="not found"):
            get_at_pointer({"a": 1}, "/b")

    def test_descend_into_scalar(self) -> None:
        with pytest.raises(PointerError):
            get_at_pointer({"a": 1}, "/a/b")

    @pytest.mark.parametrize("token", ["01", "-1", "x", "1.0", "-"])
    def test_invalid_index_tokens(self, token: str) -> None:
        with pytest.raises(PatchBoundsError):
            get_at_pointer({"a": [1, 2]}, f"/a/{token}")


# =============================================================================
# Operations
# =============================================================================


class TestOperations:
    """Each RFC 6902 operation on plain trees."""

    def test_add_member_and_insert(self) -> None:
        tree = {"a": [1, 3]}
        apply_patch(
            tree,
            [{"op": "add", "path": "/a/1", "value": 2}, {"op": "add", "path": "/b", "value": 0}],
        )
        assert tree == {"a": [1, 2, 3], "b": 0}

    def test_add_append(self) -> None:
        assert apply_patch({"a": []}, [{"op": "add", "path": "/a/-", "value": 1}]) == {"a": [1]}

    def test_add_at_end_index(self) -> None:
        assert apply_patch([1], [{"op": "add", "path": "/1", "value": 2}]) == [1, 2]

    def test_add_value_is_copied(self) -> None:
        value = {"x": [1]}
        tree = apply_patch({}, [{"op": "add", "path": "/v", "value": value}])
        value["x"].append(2)
        assert tree == {"v": {"x": [1]}}

    def test_remove(self) -> None:
        operations = [{"op": "remove", "path": "/a/0"}, {"op": "remove", "path": "/b"}]
        assert apply_patch({"a": [1, 2], "b": 0}, operations) == {"a": [2]}

    def test_replace(self) -> None:
        operations = [{"op": "replace", "path": "/a/0", "value": 9}]
        assert apply_patch({"a": [1]}, operations) == {"a": [9]}

    def test_replace_missing_member(self) -> None:
        with pytest.raises(PointerError):
            apply_patch({}, [{"op": "replace", "path": "/a", "value": 1}])

    def test_move(self) -> None:
        tree = {"a": [1, 2, 3]}
        apply_patch(tree, [{"op": "move", "from": "/a/0", "path": "/a/-"}])
        assert tree == {"a": [2, 3, 1]}

    def test_move_into_own_child(self) -> None:
        with pytest.raises(PointerError, match="own child"):
            apply_patch({"a": {"b": {}}}, [{"op": "move", "from": "/a", "path": "/a/b/c"}])

    def test_copy(self) -> None:
        tree = apply_patch({"a": {"x": 1}}, [{"op": "copy", "from": "/a", "path": "/b"}])
        tree["a"]["x"] = 2
        assert tree["b"] == {"x": 1}

    def test_test_passes(self) -> None:
        assert apply_patch({"a": [1]}, [{"op": "test", "path": "/a", "value": [1]}]) == {"a": [1]}

    def test_test_fails(self) -> None:
        with pytest.raises(PatchTestError):
            apply_patch({"a": 1}, [{"op": "test", "path": "/a", "value": 2}])

    def test_test_distinguishes_booleans(self) -> None:
        with pytest.raises(PatchTestError):
            apply_patch({"a": 1}, [{"op": "test", "path": "/a", "value": True}])

    def test_root_replace_and_add(self) -> None:
        assert apply_patch({"a": 1}, [{"op": "replace", "path": "", "value": [1]}]) == [1]
        assert apply_patch({"a": 1}, [{"op": "add", "path": "", "value": "x"}]) == "x"

    def test_root_remove(self) -> None:
        with pytest.raises(PointerError, match="root"):
            apply_patch({"a": 1}, [{"op": "remove", "path": ""}])

    @pytest.mark.parametrize(
        "operation",
        [
            {"op": "frobnicate", "path": "/a"},
            {"op": "add", "path": "/a"},
            {"op": "move", "path": "/a"},
            "not an operation",
        ],
    )
    def test_malformed_operations(self, operation: object) -> None:
        with pytest.raises(PatchError):
            apply_patch({"a": 1}, [operation])  # type: ignore[list-item]

    def test_missing_path(self) -> None:
        with pytest.raises(PointerError, match="missing 'path'"):
            apply_patch({}, [{"op": "remove"}])

    def test_non_string_path(self) -> None:
        with pytest.raises(PointerError):
            apply_patch({}, [{"op": "remove", "path": 3}])


class TestBatches:
    """Batches apply in order and report the failing operation."""

    def test_error_carries_index_and_path(self) -> None:
        with pytest.raises(PatchBoundsError) as exc_info:
            apply_patch(
                {"a": []},
                [{"op": "add", "path": "/b", "value": 1}, {"op": "remove", "path": "/a/0"}],
            )
        assert exc_info.value.index == 1
        assert exc_info.value.path == "/a/0"
        assert str(exc_info.value).startswith("operation 1 at '/a/0': ")

    def test_earlier_operations_stay_applied(self) -> None:
        tree: dict = {"a": []}
        with pytest.raises(PatchError):
            apply_patch(
                tree, [{"op": "add", "path": "/b", "value": 1}, {"op": "remove", "path": "/c"}]
            )
        assert tree == {"a": [], "b": 1}

    @given(
        length=st.integers(min_value=0, max_value=5),
        index=st.integers(min_value=0, max_value=10),
    )
    @settings(max_examples=100)
    def test_bounds(self, length: int, index: int) -> None:
        """Insert accepts 0..length, replace and remove only 0..length-1."""
        items = list(range(length))
        path = f"/{index}"
        add = [{"op": "add", "path": path, "value": -1}]
        replace = [{"op": "replace", "path": path, "value": -1}]
        remove = [{"op": "remove", "path": path}]

        if index <= length:
            assert len(apply_patch(list(items), add)) == length + 1
        else:
            with pytest.raises(PatchBoundsError):
                apply_patch(list(items), add)

        if index < length:
            assert apply_patch(list(items), replace)[index] == -1
            assert len(apply_patch(list(items), remove)) == length - 1
        else:
            with pytest.raises(PatchBoundsError):
                apply_patch(list(items), replace)
            with pytest.raises(PatchBoundsError):
                apply_patch(list(items), remove)


class TestDeepEqual:
    """JSON value equality."""

    def test_nested(self) -> None:
        assert deep_equal({"a": [1, {"b": None}]}, {"a": [1, {"b": None}]})
        assert not deep_equal({"a": [1]}, {"a": [1, 2]})

    def test_bool_vs_int(self) -> None:
        assert not deep_equal(True, 1)
        assert not deep_equal(0, False)
        assert deep_equal(False, False)

    def test_container_vs_scalar(self) -> None:
        assert not deep_equal([], None)
        assert not deep_equal({}, [])


# =============================================================================
# Documents
# =============================================================================


class TestPatchDocument:
    """Typed documents are edited through their generic form."""

    def test_replace_paragraph_line(self) -> None:
        doc = parse(LINES)
        patched = patch_document(
            doc, [{"op": "replace", "path": "/children/4/lines/0", "value": "Edited text."}]
        )
        assert render(patched)[-1] == "   Edited text."

    def test_append_blank_line(self) -> None:
        patched = patch_document(
            parse(LINES), [{"op": "add", "path": "/children/-", "value": {"_type": "BlankLine"}}]
        )
        assert patched.children[-1] == BlankLine()
        assert render(patched) == [*LINES, ""]

    def test_move_list_item(self) -> None:
        patched = patch_document(
            parse(LINES),
            [{"op": "move", "from": "/children/2/items/0", "path": "/children/2/items/-"}],
        )
        assert render(patched)[2:4] == ["   o  Second", "   o  First"]

    def test_remove_item(self) -> None:
        patched = patch_document(parse(LINES), [{"op": "remove", "path": "/children/2/items/1"}])
        assert render(patched) == ["Abstract", "", "   o  First", "", "   Closing text."]

    def test_change_marker_realigns(self) -> None:
        patched = patch_document(
            parse(LINES), [{"op": "replace", "path": "/children/2/items/0/marker", "value": "(A1)"}]
        )
        assert render(patched)[2] == "   (A1) First"

    def test_input_is_unchanged(self) -> None:
        doc = parse(LINES)
        patch_document(doc, [{"op": "remove", "path": "/children/0"}])
        assert doc == parse(LINES)

    def test_invalid_result_is_rejected(self) -> None:
        with pytest.raises(SerializationError):
            patch_document(
                parse(LINES),
                [{"op": "add", "path": "/children/0", "value": {"_type": "ListItem"}}],
            )

    def test_result_must_stay_a_document(self) -> None:
        with pytest.raises(SerializationError):
            patch_document(
                parse(LINES), [{"op": "replace", "path": "", "value": {"_type": "BlankLine"}}]
            )

    def test_failed_patch_raises(self) -> None:
        with pytest.raises(PatchBoundsError):
            patch_document(parse(LINES), [{"op": "remove", "path": "/children/99"}])

    def test_returns_document(self) -> None:
        assert isinstance(patch_document(parse(LINES), []), Document)
