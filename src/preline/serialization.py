"""Tree serialization: JSON round-trip for preline output trees.

Converts nodes to/from JSON-compatible dicts. Useful for caching a
processed tree, or for handing source maps to tools that report
diagnostics against the original files.

All output is deterministic (sorted keys).

Example:
    from preline import parse_string
    from preline.serialization import to_json, from_json

    root = parse_string("main", "hello\\n")
    restored = from_json(to_json(root))
    assert root == restored

Thread Safety:
    All functions are pure and safe to call from any thread.

"""

import json
from dataclasses import fields
from typing import Any

from preline.commenters import Commenter
from preline.location import PosInfo
from preline.nodes import Comment, File, Node, Text

# Registry of node type names to classes for deserialization
_NODE_TYPES: dict[str, type[Node]] = {
    "File": File,
    "Text": Text,
    "Comment": Comment,
}


def to_dict(node: Node) -> dict[str, Any]:
    """Convert a node to a JSON-compatible dict.

    Includes a ``_type`` discriminator field for deserialization.

    Args:
        node: Any preline node.

    Returns:
        Dict with ``_type`` and all node fields.

    """
    result: dict[str, Any] = {"_type": type(node).__name__}
    for f in fields(node):
        result[f.name] = _serialize_value(getattr(node, f.name))
    return result


def _serialize_value(value: Any) -> Any:
    if isinstance(value, Node):
        return to_dict(value)
    if isinstance(value, PosInfo):
        return {
            "_type": "PosInfo",
            "source_name": value.source_name,
            "line": value.line,
            "column": value.column,
        }
    if isinstance(value, Commenter):
        return {
            "_type": "Commenter",
            "begin": value.begin,
            "end": value.end,
            "strip": value.strip,
        }
    if isinstance(value, tuple):
        return [_serialize_value(item) for item in value]
    return value


def from_dict(data: dict[str, Any]) -> Node:
    """Reconstruct a typed node from a dict.

    Args:
        data: Dict with ``_type`` and node fields (as produced by to_dict).

    Returns:
        Typed node (frozen dataclass).

    Raises:
        ValueError: If ``_type`` is missing or unknown.

    """
    type_name = data.get("_type")
    if type_name is None:
        msg = "Missing '_type' field in serialized node"
        raise ValueError(msg)

    node_cls = _NODE_TYPES.get(type_name)
    if node_cls is None:
        msg = f"Unknown node type: {type_name!r}"
        raise ValueError(msg)

    kwargs: dict[str, Any] = {}
    for f in fields(node_cls):
        if f.name in data:
            kwargs[f.name] = _deserialize_value(data[f.name])
    return node_cls(**kwargs)


def _deserialize_value(value: Any) -> Any:
    if isinstance(value, dict):
        type_name = value.get("_type")
        if type_name == "PosInfo":
            return PosInfo(value["source_name"], value["line"], value["column"])
        if type_name == "Commenter":
            return Commenter.from_dict(value)
        if type_name is not None:
            return from_dict(value)
        return value
    if isinstance(value, list):
        return tuple(_deserialize_value(item) for item in value)
    return value


def to_json(root: File, *, indent: int | None = None) -> str:
    """Serialize a File tree to a JSON string.

    Args:
        root: File node to serialize.
        indent: JSON indentation level (None for compact).

    Returns:
        JSON string.

    """
    return json.dumps(to_dict(root), sort_keys=True, indent=indent)


def from_json(data: str) -> File:
    """Deserialize a File tree from a JSON string.

    Raises:
        ValueError: If the JSON doesn't represent a File.

    """
    node = from_dict(json.loads(data))
    if not isinstance(node, File):
        msg = f"Expected File, got {type(node).__name__}"
        raise ValueError(msg)
    return node
