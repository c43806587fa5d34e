"""JSON-Pointer patch engine over the generic tree form.

Operations follow RFC 6902 (``add``, ``remove``, ``replace``, ``move``,
``copy``, ``test``) addressed by RFC 6901 pointers. The engine edits plain
dicts, lists and scalars and assumes nothing about node shapes; pair it with
``to_dict``/``from_dict`` to edit a typed Document.

Operations run in order and mutate the target in place. The first failing
operation raises a PatchError subclass and aborts the batch; operations
before it stay applied, so callers needing atomicity patch a copy (as
patch_document does).

Example:
    >>> tree = {"children": [{"_type": "BlankLine"}]}
    >>> apply_patch(tree, [{"op": "add", "path": "/children/-", "value": {"_type": "PageBreak"}}])
    {'children': [{'_type': 'BlankLine'}, {'_type': 'PageBreak'}]}

Thread Safety:
    apply_patch mutates its target. Do not share a target across threads.

"""

from __future__ import annotations

import copy
import re
from typing import Any

from rfctree.errors import (
    PatchBoundsError,
    PatchError,
    PatchTestError,
    PointerError,
    SerializationError,
)
from rfctree.nodes import Document
from rfctree.serialization import from_dict, to_dict

_INDEX_RE = re.compile(r"^(0|[1-9][0-9]*)$")
_APPEND_TOKEN = "-"

_OPERATIONS = frozenset({"add", "remove", "replace", "move", "copy", "test"})


def parse_pointer(path: str) -> list[str]:
    """Split a pointer into unescaped reference tokens.

    Raises:
        PointerError: If a non-empty pointer does not start with "/".
    """
    if path == "":
        return []
    if not isinstance(path, str) or not path.startswith("/"):
        raise PointerError(f"Invalid pointer {path!r}")
    return [token.replace("~1", "/").replace("~0", "~") for token in path.split("/")[1:]]


def _array_index(token: str, length: int, *, allow_end: bool) -> int:
    if _INDEX_RE.match(token) is None:
        raise PatchBoundsError(f"Invalid array index {token!r}")
    index = int(token)
    limit = length if allow_end else length - 1
    if index > limit:
        raise PatchBoundsError(f"Array index {index} out of range (length {length})")
    return index


def _child(container: Any, token: str) -> Any:
    if isinstance(container, list):
        return container[_array_index(token, len(container), allow_end=False)]
    if isinstance(container, dict):
        if token not in container:
            raise PointerError(f"Member {token!r} not found")
        return container[token]
    raise PointerError(f"Cannot descend into {type(container).__name__} with {token!r}")


def _resolve_parent(root: Any, tokens: list[str]) -> Any:
    target = root
    for token in tokens[:-1]:
        target = _child(target, token)
    if not isinstance(target, (dict, list)):
        raise PointerError(f"Parent of {tokens[-1]!r} is not a container")
    return target


def get_at_pointer(root: Any, path: str) -> Any:
    """Value at ``path``; "" is the root itself."""
    target = root
    for token in parse_pointer(path):
        target = _child(target, token)
    return target


def _add(root: Any, path: str, value: Any) -> Any:
    tokens = parse_pointer(path)
    if not tokens:
        return value
    parent, token = _resolve_parent(root, tokens), tokens[-1]
    if isinstance(parent, list):
        if token == _APPEND_TOKEN:
            parent.append(value)
        else:
            parent.insert(_array_index(token, len(parent), allow_end=True), value)
    else:
        parent[token] = value
    return root


def _remove(root: Any, path: str) -> Any:
    tokens = parse_pointer(path)
    if not tokens:
        raise PointerError("Cannot remove the root")
    parent, token = _resolve_parent(root, tokens), tokens[-1]
    if isinstance(parent, list):
        return parent.pop(_array_index(token, len(parent), allow_end=False))
    if token not in parent:
        raise PointerError(f"Member {token!r} not found")
    return parent.pop(token)


def _replace(root: Any, path: str, value: Any) -> Any:
    tokens = parse_pointer(path)
    if not tokens:
        return value
    parent, token = _resolve_parent(root, tokens), tokens[-1]
    if isinstance(parent, list):
        parent[_array_index(token, len(parent), allow_end=False)] = value
    else:
        if token not in parent:
            raise PointerError(f"Member {token!r} not found")
        parent[token] = value
    return root


def deep_equal(a: Any, b: Any) -> bool:
    """JSON equality: like ==, but booleans never equal numbers."""
    if isinstance(a, bool) or isinstance(b, bool):
        return type(a) is type(b) and a == b
    if isinstance(a, dict) and isinstance(b, dict):
        return a.keys() == b.keys() and all(deep_equal(a[k], b[k]) for k in a)
    if isinstance(a, list) and isinstance(b, list):
        return len(a) == len(b) and all(deep_equal(x, y) for x, y in zip(a, b))
    if isinstance(a, (dict, list)) or isinstance(b, (dict, list)):
        return False
    return a == b


def _apply_one(root: Any, operation: dict[str, Any]) -> Any:
    if not isinstance(operation, dict):
        raise PatchError(f"Operation must be an object, got {type(operation).__name__}")
    op = operation.get("op")
    if op not in _OPERATIONS:
        raise PatchError(f"Unsupported operation {op!r}")
    if "path" not in operation:
        raise PointerError(f"Operation {op!r} is missing 'path'")
    path = operation["path"]
    if not isinstance(path, str):
        raise PointerError(f"Invalid pointer {path!r}")

    match op:
        case "add":
            return _add(root, path, copy.deepcopy(_required(operation, "value")))
        case "remove":
            _remove(root, path)
            return root
        case "replace":
            return _replace(root, path, copy.deepcopy(_required(operation, "value")))
        case "move":
            source = _required(operation, "from")
            if path != source and path.startswith(f"{source}/"):
                raise PointerError(f"Cannot move {source!r} into its own child")
            value = get_at_pointer(root, source)
            if path == source:
                return root
            _remove(root, source)
            return _add(root, path, value)
        case "copy":
            value = copy.deepcopy(get_at_pointer(root, _required(operation, "from")))
            return _add(root, path, value)
        case _:
            expected = _required(operation, "value")
            if not deep_equal(get_at_pointer(root, path), expected):
                raise PatchTestError("Value differs from expected")
            return root


def _required(operation: dict[str, Any], key: str) -> Any:
    if key not in operation:
        raise PatchError(f"Operation {operation.get('op')!r} is missing {key!r}")
    return operation[key]


def apply_patch(target: Any, operations: list[dict[str, Any]]) -> Any:
    """Apply operations to ``target`` in order.

    Args:
        target: Generic tree (dicts, lists, scalars); mutated in place
        operations: RFC 6902 operation objects

    Returns:
        The patched tree. Same object as ``target`` unless an operation
        replaced or added at the root pointer "".

    Raises:
        PointerError: Malformed pointer, or a missing member or path
        PatchBoundsError: Array index out of range or not an index
        PatchTestError: A ``test`` operation failed

    """
    root = target
    for index, operation in enumerate(operations):
        try:
            root = _apply_one(root, operation)
        except PatchError as e:
            if e.index is not None:
                raise
            path = operation.get("path") if isinstance(operation, dict) else None
            raise type(e)(str(e), index=index, path=path) from e
    return root


def patch_document(doc: Document, operations: list[dict[str, Any]]) -> Document:
    """Patch a typed Document through its generic form.

    The input document is never modified.

    Raises:
        PatchError: If an operation fails
        SerializationError: If the patched form is not a valid Document

    """
    patched = from_dict(apply_patch(to_dict(doc), operations))
    if not isinstance(patched, Document):
        raise SerializationError(f"Expected Document, got {type(patched).__name__}")
    return patched
