"""Plain-text extraction from Atlassian Document Format (ADF).

Jira Cloud REST API v3 returns rich-text fields such as the issue
description as an ADF tree: a "doc" node with a list of content nodes,
each having a "type", an optional literal "text" and optional nested
"content". Only leaf nodes of type "text" carry text.

Join rules:
- "text" nodes return their literal text
- paragraph, heading and listItem concatenate their children on one line
- bulletList and orderedList put each item on its own line
- unknown container types concatenate their children
- the document root puts each top-level node on its own line

Malformed or missing parts of the tree extract to an empty string.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

# Separator used to join the extracted children of a node, by node type
NODE_SEPARATORS: MappingProxyType[str, str] = MappingProxyType(
    {
        "paragraph": "",
        "heading": "",
        "listItem": "",
        "bulletList": "\n",
        "orderedList": "\n",
    }
)

DOCUMENT_SEPARATOR = "\n"


def _children(node: Mapping[str, Any]) -> list[Mapping[str, Any]]:
    content = node.get("content")
    if not isinstance(content, list):
        return []
    return [child for child in content if isinstance(child, Mapping)]


def _join_children(node: Mapping[str, Any], separator: str) -> str:
    parts = [extract_node_text(child) for child in _children(node)]
    return separator.join(part for part in parts if part)


def extract_node_text(node: Mapping[str, Any] | None) -> str:
    """Recursively extract text from a single ADF content node.

    Args:
        node: ADF content node, or None

    Returns:
        Plain text of the node and its descendants
    """
    if not isinstance(node, Mapping):
        return ""

    node_type = node.get("type")
    if node_type == "text":
        text = node.get("text")
        return text if isinstance(text, str) else ""

    separator = NODE_SEPARATORS.get(node_type, "") if isinstance(node_type, str) else ""
    return _join_children(node, separator)


def extract_adf_text(document: Any) -> str:
    """Flatten an ADF document into plain text.

    A plain string is returned unchanged, since older API versions and
    some custom text fields are not ADF encoded.

    Args:
        document: ADF document mapping, plain string, or None

    Returns:
        Plain text with top-level blocks separated by newlines
    """
    if isinstance(document, str):
        return document
    if not isinstance(document, Mapping):
        return ""
    return _join_children(document, DOCUMENT_SEPARATOR)


__all__ = [
    "DOCUMENT_SEPARATOR",
    "NODE_SEPARATORS",
    "extract_adf_text",
    "extract_node_text",
]
