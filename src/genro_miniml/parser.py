# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Parser for MiniML sources.

MiniML is line oriented; leading and trailing whitespace is ignored on
every line:

    // comment                 ignored, as are blank lines
    name                       opens a node (the root if none is open)
    'identifier'               sets the id of the open node
    =value                     appends a value to the open node
    __end__                    closes the open node

Example:
    >>> root = MiniMLParser().parse([
    ...     'server',
    ...     "'main'",
    ...     '=localhost',
    ...     '__end__',
    ... ])
    >>> root.name, root.id, root.values
    ('server', 'main', ['localhost'])
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, TYPE_CHECKING

from .exceptions import (
    InvalidNameError,
    InvalidValueError,
    MalformedIdError,
    MiniMLParseError,
    RepeatingIdError,
    SecondRootError,
    UnclosedNodeError,
    UnmatchedEndError,
)
from .node import MiniMLNode

if TYPE_CHECKING:
    from .document import MiniMLDocument

logger = logging.getLogger(__name__)

EXTENSION = 'mnml'
NODE_END = '__end__'
VALUE_PREFIX = '='
COMMENT_PREFIX = '//'
ID_QUOTE = "'"


def _is_single_line(text: str) -> bool:
    return text.splitlines() == ([text] if text else [])


def check_name(name: str) -> None:
    """Raise InvalidNameError unless name reads back as a node line."""
    if not name or not _is_single_line(name):
        reason = "must be a single non-empty line"
    elif name != name.strip():
        reason = "cannot start or end with whitespace"
    elif name == NODE_END:
        reason = f"cannot be the end marker {NODE_END}"
    elif name.startswith((VALUE_PREFIX, ID_QUOTE, COMMENT_PREFIX)):
        reason = (
            f"cannot start with {VALUE_PREFIX!r}, {ID_QUOTE!r} or {COMMENT_PREFIX!r}"
        )
    else:
        return
    raise InvalidNameError(f"Invalid node name {name!r}: {reason}.", name)


def check_value(value: str) -> None:
    """Raise InvalidValueError unless value reads back unchanged."""
    if not _is_single_line(value):
        reason = "must be a single line"
    elif value != value.rstrip():
        reason = "cannot end with whitespace"
    else:
        return
    raise InvalidValueError(f"Invalid value {value!r}: {reason}.", value)


def check_id(node_id: str) -> None:
    """Raise MalformedIdError unless node_id reads back as an id line."""
    if not node_id or not _is_single_line(node_id):
        raise MalformedIdError(f"Invalid id {node_id!r}: must be a single non-empty line.")


class MiniMLParser:
    """Single pass parser building a MiniMLNode tree.

    Nodes are created without updating the document: the file is only
    written by later mutations.

    Args:
        document: The document the parsed nodes will belong to. None
            builds a detached tree, useful for inspection.
    """

    def __init__(self, document: MiniMLDocument | None = None):
        self.document = document

    def parse_file(self, filepath: str | Path, encoding: str = 'utf-8') -> MiniMLNode | None:
        """Parse a MiniML file."""
        with open(filepath, encoding=encoding) as f:
            return self.parse(f)

    def parse(self, lines: Iterable[str]) -> MiniMLNode | None:
        """Parse MiniML lines and return the root node.

        Returns:
            The root node, or None when the source holds no node.

        Raises:
            MiniMLParseError: On any grammar or identifier violation. No
                partial tree is returned.
        """
        root: MiniMLNode | None = None
        stack: list[MiniMLNode] = []
        ids: set[str] = set()
        line_number = 0

        for raw_line in lines:
            line_number += 1
            line = raw_line.strip()

            if not line or line.startswith(COMMENT_PREFIX):
                continue

            if line.startswith(VALUE_PREFIX) and not stack:
                logger.debug("Discarding value outside any node on line %d", line_number)
                continue

            if not stack and root is not None and line != NODE_END:
                raise SecondRootError(
                    f"A second root was found on line {line_number}.", line_number
                )

            if line == NODE_END:
                if not stack:
                    raise UnmatchedEndError(
                        f'A "{NODE_END}" without a matching node was found '
                        f'on line {line_number}.',
                        line_number,
                    )
                stack.pop()
            elif line.startswith(VALUE_PREFIX):
                stack[-1]._values.append(line[len(VALUE_PREFIX):])
            elif line.startswith(ID_QUOTE):
                self._assign_id(line, stack, ids, line_number)
            elif not stack:
                root = MiniMLNode(line, self.document)
                stack.append(root)
            else:
                node = MiniMLNode(line, self.document)
                stack[-1]._append_child(node)
                stack.append(node)

        if stack:
            name = stack[-1].name
            raise UnclosedNodeError(
                f'The node "{name}" is not closed.', name, line_number
            )

        return root

    def _assign_id(
        self,
        line: str,
        stack: list[MiniMLNode],
        ids: set[str],
        line_number: int,
    ) -> None:
        """Handle an identifier line for the node on top of the stack."""
        closing = line.rfind(ID_QUOTE)
        if closing == 0:
            raise MalformedIdError(
                f"Unterminated id found on line {line_number}.", line_number
            )
        if not stack:
            raise MiniMLParseError(
                f"An id outside of any node was found on line {line_number}.",
                line_number,
            )

        node_id = line[len(ID_QUOTE):closing]
        if not node_id:
            # '' is how a node without id may be written out
            return

        if node_id in ids:
            raise RepeatingIdError(
                f"Repeating ID found on line {line_number}.", line_number
            )
        current = stack[-1]
        if current._id is not None:
            raise RepeatingIdError(
                f'The node "{current.name}" has more than one ID. '
                f'Second ID found on line {line_number}.',
                line_number,
            )
        current._id = node_id
        ids.add(node_id)
