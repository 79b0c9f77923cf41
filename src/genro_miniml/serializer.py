# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Canonical text rendering of MiniML trees."""

from __future__ import annotations

from .config import MiniMLConfig
from .node import MiniMLNode
from .parser import ID_QUOTE, NODE_END, VALUE_PREFIX


def render_node(
    node: MiniMLNode,
    depth: int = 0,
    config: MiniMLConfig | None = None,
) -> list[str]:
    """Render a subtree as a list of lines (without terminators).

    Pre-order: name, id, values, children, end marker. The node's own
    lines are indented by `depth` levels, its content by one more.
    """
    config = config or MiniMLConfig()
    outer = config.indent * depth
    inner = outer + config.indent

    lines = [outer + node.name]
    if node.id is not None or config.write_empty_ids:
        lines.append(f"{inner}{ID_QUOTE}{node.id or ''}{ID_QUOTE}")
    lines.extend(inner + VALUE_PREFIX + value for value in node._values)
    for child in node._children:
        lines.extend(render_node(child, depth + 1, config))
    lines.append(outer + NODE_END)
    return lines


def render(root: MiniMLNode | None, config: MiniMLConfig | None = None) -> str:
    """Render a whole tree; an absent root renders as an empty string."""
    if root is None:
        return ''
    config = config or MiniMLConfig()
    return ''.join(line + config.newline for line in render_node(root, 0, config))
