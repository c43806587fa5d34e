"""Tree serialization: the generic map/array/scalar form and JSON.

``to_dict`` turns a typed tree into plain dicts, lists and scalars with a
``_type`` discriminator on every node. That form is what the patch engine
edits. ``from_dict`` re-validates it into the strict tree: unknown kinds,
misplaced children and wrongly typed fields are rejected.

All JSON output is deterministic (sorted keys).

Example:
    from rfctree import parse
    from rfctree.serialization import from_json, to_json

    doc = parse(["Abstract", "", "   Text."])
    assert from_json(to_json(doc)) == doc

Thread Safety:
    All functions are pure; safe to call from any thread.

"""

import json
from dataclasses import MISSING, fields
from typing import Any

from rfctree.errors import SerializationError
from rfctree.location import SourceLocation
from rfctree.nodes import (
    BLOCK_TYPES,
    LIST_ENTRY_TYPES,
    LIST_ITEM_CHILD_TYPES,
    Abnf,
    BitLayoutDiagram,
    BlankLine,
    Document,
    Figure,
    HttpRequest,
    HttpResponse,
    IndentedBlock,
    List,
    ListItem,
    Metadata,
    Node,
    PageBreak,
    PageFooter,
    PageHeader,
    Paragraph,
    SectionTitle,
    Table,
    TableOfContents,
    Title,
    TocEntry,
)

# Registry of node type names to classes for deserialization
_NODE_TYPES: dict[str, type] = {
    cls.__name__: cls
    for cls in (
        Document,
        Metadata,
        Title,
        SectionTitle,
        BlankLine,
        PageBreak,
        PageHeader,
        PageFooter,
        Paragraph,
        IndentedBlock,
        TableOfContents,
        TocEntry,
        Figure,
        Table,
        BitLayoutDiagram,
        Abnf,
        HttpRequest,
        HttpResponse,
        List,
        ListItem,
        SourceLocation,
    )
}

# Allowed node kinds per child-bearing field, keyed by (owner, field)
_CHILD_KINDS: dict[tuple[type, str], tuple[type, ...]] = {
    (Document, "children"): BLOCK_TYPES,
    (List, "items"): LIST_ENTRY_TYPES,
    (ListItem, "children"): LIST_ITEM_CHILD_TYPES,
    (TableOfContents, "entries"): (TocEntry,),
}

_INT_FIELDS = frozenset({"indent", "marker_indent", "content_indent", "lineno", "end_lineno"})
_BOOL_FIELDS = frozenset({"marker_only", "inline"})
_STR_FIELDS = frozenset({"text", "marker", "status_line", "raw"})
_LINES_FIELDS = frozenset({"lines", "request_lines", "header_lines"})


def to_dict(node: Node | TocEntry | SourceLocation) -> dict[str, Any]:
    """Convert a node to a JSON-compatible dict.

    Includes a ``_type`` discriminator field for deserialization. A node
    without a source location omits the ``location`` key.

    Args:
        node: Any rfctree node (or a TocEntry or SourceLocation).

    Returns:
        Dict with ``_type`` and all node fields.

    """
    result: dict[str, Any] = {"_type": type(node).__name__}
    for f in fields(node):
        value = getattr(node, f.name)
        if f.name == "location" and value is None:
            continue
        result[f.name] = _serialize_value(value)
    return result


def _serialize_value(value: Any) -> Any:
    if isinstance(value, (Node, TocEntry, SourceLocation)):
        return to_dict(value)
    if isinstance(value, tuple):
        return [_serialize_value(item) for item in value]
    # Primitives: str, int, bool, None
    return value


def from_dict(data: dict[str, Any]) -> Node | TocEntry | SourceLocation:
    """Reconstruct a typed node from a dict.

    Args:
        data: Dict with ``_type`` and node fields (as produced by to_dict).

    Returns:
        Typed node (frozen dataclass).

    Raises:
        SerializationError: If ``_type`` is missing or unknown, a required
            field is missing, or a field has the wrong shape.

    """
    if not isinstance(data, dict):
        msg = f"Expected a node dict, got {type(data).__name__}"
        raise SerializationError(msg)

    type_name = data.get("_type")
    if type_name is None:
        msg = "Missing '_type' field in serialized node"
        raise SerializationError(msg)

    node_cls = _NODE_TYPES.get(type_name)
    if node_cls is None:
        msg = f"Unknown node type: {type_name!r}"
        raise SerializationError(msg)

    kwargs: dict[str, Any] = {}
    for f in fields(node_cls):
        if f.name not in data:
            if f.default is MISSING and f.default_factory is MISSING:
                msg = f"{type_name} is missing field {f.name!r}"
                raise SerializationError(msg)
            continue
        kwargs[f.name] = _deserialize_field(node_cls, f.name, data[f.name])

    return node_cls(**kwargs)


def _deserialize_field(owner: type, name: str, value: Any) -> Any:
    where = f"{owner.__name__}.{name}"

    allowed = _CHILD_KINDS.get((owner, name))
    if allowed is not None:
        if not isinstance(value, list):
            raise SerializationError(f"{where} must be a list")
        children = tuple(from_dict(item) for item in value)
        for child in children:
            if not isinstance(child, allowed):
                msg = f"{where} cannot contain {type(child).__name__}"
                raise SerializationError(msg)
        return children

    if name == "location":
        if value is None:
            return None
        location = from_dict(value)
        if not isinstance(location, SourceLocation):
            raise SerializationError(f"{where} must be a SourceLocation")
        return location
    if name in _INT_FIELDS or name == "page":
        if value is None and name == "page":
            return None
        if not isinstance(value, int) or isinstance(value, bool) or value < 0:
            raise SerializationError(f"{where} must be a non-negative integer")
        return value
    if name in _BOOL_FIELDS:
        if not isinstance(value, bool):
            raise SerializationError(f"{where} must be a boolean")
        return value
    if name in _STR_FIELDS or name in ("title", "source_file"):
        if value is None and name in ("title", "source_file"):
            return None
        if not isinstance(value, str):
            raise SerializationError(f"{where} must be a string")
        return value
    if name in _LINES_FIELDS or name == "body_lines":
        if value is None and name == "body_lines":
            return None
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise SerializationError(f"{where} must be a list of strings")
        return tuple(value)

    raise SerializationError(f"Unexpected field {where}")


def to_json(doc: Document, *, indent: int | None = None) -> str:
    """Serialize a Document to a JSON string.

    Output is deterministic (sorted keys).

    Args:
        doc: Document to serialize.
        indent: JSON indentation level (None for compact).

    """
    return json.dumps(to_dict(doc), sort_keys=True, indent=indent)


def from_json(data: str) -> Document:
    """Deserialize a Document from a JSON string.

    Raises:
        SerializationError: If the JSON doesn't represent a valid Document.

    """
    try:
        raw = json.loads(data)
    except json.JSONDecodeError as e:
        raise SerializationError(f"Invalid JSON: {e.msg}") from e
    node = from_dict(raw)
    if not isinstance(node, Document):
        msg = f"Expected Document, got {type(node).__name__}"
        raise SerializationError(msg)
    return node
