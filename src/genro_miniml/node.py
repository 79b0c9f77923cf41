# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""MiniML node class."""

from __future__ import annotations

from typing import Iterator, TYPE_CHECKING

from .exceptions import (
    ChildNotFoundError,
    DetachedNodeError,
    RepeatingIdError,
    ValueNotFoundError,
)

if TYPE_CHECKING:
    from .document import MiniMLDocument


class MiniMLNode:
    """A node in a MiniML document.

    Each node has:
    - name: The text of the node's opening line
    - id: Optional identifier, unique across the whole document
    - values: Ordered list of string values
    - children: Ordered list of child nodes, owned by this node
    - parent: The enclosing node, or None for the root

    Every mutation rewrites the owning document's file. Read accessors
    return copies, so the only way to change a node is through its
    mutation methods.

    Example:
        >>> node = doc.root.create_child('server')
        >>> node.add_value('localhost')
        >>> node.values
        ['localhost']
    """

    __slots__ = ('_name', '_id', '_values', '_children', '_parent', '_document')

    def __init__(
        self,
        name: str,
        document: MiniMLDocument | None = None,
    ) -> None:
        """Initialize an unlinked MiniMLNode.

        Nodes enter a tree only through MiniMLDocument.create_node (or
        the parser), which link them and update the file.

        Args:
            name: The node's name.
            document: The document this node belongs to.
        """
        self._name = name
        self._id: str | None = None
        self._values: list[str] = []
        self._children: list[MiniMLNode] = []
        self._parent: MiniMLNode | None = None
        self._document = document

    def __repr__(self) -> str:
        id_repr = f", id={self._id!r}" if self._id is not None else ""
        return (
            f"MiniMLNode({self._name!r}{id_repr}, "
            f"values={len(self._values)}, children={len(self._children)})"
        )

    # ==================== Read Access ====================

    @property
    def name(self) -> str:
        return self._name

    @property
    def id(self) -> str | None:
        return self._id

    @property
    def parent(self) -> MiniMLNode | None:
        return self._parent

    @property
    def document(self) -> MiniMLDocument | None:
        """The owning document, or None once the node has been removed."""
        return self._document

    @property
    def values(self) -> list[str]:
        """A copy of this node's values in insertion order."""
        return list(self._values)

    @property
    def children(self) -> list[MiniMLNode]:
        """A copy of this node's children in insertion order."""
        return list(self._children)

    @property
    def depth(self) -> int:
        """Nesting level of this node (root=0)."""
        depth = 0
        node = self._parent
        while node is not None:
            depth += 1
            node = node._parent
        return depth

    def get_children_by_name(self, name: str) -> list[MiniMLNode]:
        """Return the children whose name equals the given one."""
        return [child for child in self._children if child._name == name]

    def depth_first(self) -> Iterator[MiniMLNode]:
        """Traverse the subtree depth-first, yielding self then children."""
        yield self
        for child in self._children:
            yield from child.depth_first()

    def find_by_id(self, node_id: str) -> MiniMLNode | None:
        """Return the first node in this subtree carrying the given id."""
        for node in self.depth_first():
            if node._id == node_id:
                return node
        return None

    # ==================== Mutation ====================

    def add_value(self, value: str) -> None:
        """Append a value and update the document.

        Raises:
            InvalidValueError: If the value spans lines or ends with
                whitespace, which the file could not preserve.
        """
        from .parser import check_value
        owner = self._owner()
        check_value(value)
        self._values.append(value)
        owner.save()

    def remove_value(self, value: str) -> None:
        """Remove the first value equal to the given one.

        Raises:
            ValueNotFoundError: If the node does not hold the value.
        """
        owner = self._owner()
        try:
            self._values.remove(value)
        except ValueError:
            raise ValueNotFoundError(
                f'The value "{value}" was not found.', value
            ) from None
        owner.save()

    def remove_child(self, child: MiniMLNode) -> None:
        """Remove the given node (by identity) from this node's children.

        Raises:
            ChildNotFoundError: If the node is not a child of this node.
        """
        owner = self._owner()
        for idx, current in enumerate(self._children):
            if current is child:
                break
        else:
            raise ChildNotFoundError(
                f'The node with name "{child.name}" was not found.', child
            )
        del self._children[idx]
        child._detach()
        owner.save()

    def remove_children_by_name(self, name: str) -> None:
        """Remove every child with the given name, keeping the others in order."""
        owner = self._owner()
        kept: list[MiniMLNode] = []
        for child in self._children:
            if child._name == name:
                child._detach()
            else:
                kept.append(child)
        self._children[:] = kept
        owner.save()

    def set_id(self, node_id: str | None) -> None:
        """Assign, replace or (with None or '') clear this node's identifier.

        Raises:
            MalformedIdError: If the id spans lines.
            RepeatingIdError: If uniqueness checking is enabled and another
                node of the document already carries the id.
        """
        from .parser import check_id
        owner = self._owner()
        if node_id == '':
            node_id = None
        if node_id is not None:
            check_id(node_id)
            holder = owner.find_by_id(node_id)
            if (
                owner.config.check_unique_ids
                and holder is not None
                and holder is not self
            ):
                raise RepeatingIdError(
                    f'The id "{node_id}" is already used by node "{holder.name}".'
                )
        self._id = node_id
        owner.save()

    def create_child(self, name: str) -> MiniMLNode:
        """Append a new child node and update the document."""
        return self._owner().create_node(name, self)

    # ==================== Internals ====================

    def _owner(self) -> MiniMLDocument:
        if self._document is None:
            raise DetachedNodeError(
                f'The node "{self._name}" does not belong to a document.'
            )
        return self._document

    def _append_child(self, child: MiniMLNode) -> None:
        child._parent = self
        self._children.append(child)

    def _detach(self) -> None:
        """Unlink this subtree from its parent and document."""
        self._parent = None
        for node in self.depth_first():
            node._document = None
