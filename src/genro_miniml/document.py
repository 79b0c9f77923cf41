# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""MiniMLDocument - A MiniML file kept in sync with its node tree.

The document parses its source file once at construction time. From then
on the in-memory tree is the authority: every mutation made through a
MiniMLNode (or through create_node) re-renders the whole tree and
overwrites the file, so tree and file are equal after each call returns.

Example:
    Basic usage::

        doc = MiniMLDocument('settings.mnml')
        server = doc.find_by_id('main')
        server.add_value('8080')          # file rewritten here

        if doc.root is None:              # empty file
            doc.create_node('settings')   # becomes the root
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Iterator

from .config import MiniMLConfig, get_config
from .exceptions import (
    DetachedNodeError,
    InvalidSourceError,
    MiniMLError,
    SecondRootError,
    UpdateError,
)
from .node import MiniMLNode
from .parser import EXTENSION, MiniMLParser, check_name
from .serializer import render

logger = logging.getLogger(__name__)


class MiniMLDocument:
    """A MiniML document bound to a .mnml file.

    Attributes:
        path: Absolute path of the source file, also the write target.
        config: Rendering and persistence settings.
    """

    __slots__ = ('path', 'config', '_root')

    def __init__(
        self,
        source: str | Path,
        config: MiniMLConfig | None = None,
    ) -> None:
        """Open and parse a MiniML file.

        Args:
            source: Path to an existing file with the .mnml extension.
            config: Settings for this document. Defaults to get_config().

        Raises:
            InvalidSourceError: If the file is missing, is not a regular
                file, or has the wrong extension.
            MiniMLParseError: If the file content is not valid MiniML.
        """
        path = Path(source)
        if not path.exists():
            raise InvalidSourceError(f"The file {path} does not exist.")
        if not path.is_file():
            raise InvalidSourceError(f"{path} has to be a file, not a directory.")
        if path.suffix != f'.{EXTENSION}':
            raise InvalidSourceError(f"{path} has to be a .{EXTENSION} file.")

        self.path = path.absolute()
        self.config = config or get_config()
        self._root: MiniMLNode | None = None
        self._load()

    def _load(self) -> None:
        parser = MiniMLParser(self)
        self._root = parser.parse_file(self.path, encoding=self.config.encoding)
        logger.debug("Loaded %s (%d nodes)", self.path, len(self))

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        root_name = self._root.name if self._root is not None else None
        return f"MiniMLDocument({str(self.path)!r}, root={root_name!r})"

    def __len__(self) -> int:
        """Return the number of nodes in the document."""
        return sum(1 for _ in self.walk())

    def __iter__(self) -> Iterator[MiniMLNode]:
        return self.walk()

    # ==================== Access ====================

    @property
    def root(self) -> MiniMLNode | None:
        """The root node, or None for an empty document."""
        return self._root

    def walk(self) -> Iterator[MiniMLNode]:
        """Iterate over all nodes depth-first, pre-order."""
        if self._root is None:
            return iter(())
        return self._root.depth_first()

    def find_by_id(self, node_id: str) -> MiniMLNode | None:
        """Return the node with the given id, or None if there is none."""
        if self._root is None:
            return None
        return self._root.find_by_id(node_id)

    # ==================== Mutation ====================

    def create_node(self, name: str, parent: MiniMLNode | None = None) -> MiniMLNode:
        """Create a node and update the document.

        Args:
            name: The name of the new node.
            parent: The node to append the new one to. None creates the
                root of an empty document.

        Returns:
            The newly created node.

        Raises:
            InvalidNameError: If the name cannot be written as a node line.
            SecondRootError: If parent is None and the document has a root.
            DetachedNodeError: If parent was removed from its document.
            MiniMLError: If parent belongs to another document.
        """
        check_name(name)
        if parent is None:
            if self._root is not None:
                raise SecondRootError(
                    f'The document already has the root "{self._root.name}".'
                )
            self._root = MiniMLNode(name, self)
            node = self._root
        else:
            if parent.document is None:
                raise DetachedNodeError(
                    f'The node "{parent.name}" does not belong to a document.'
                )
            if parent.document is not self:
                raise MiniMLError(
                    f'The node "{parent.name}" belongs to another document.'
                )
            node = MiniMLNode(name, self)
            parent._append_child(node)
        self.save()
        return node

    # ==================== Persistence ====================

    def render(self) -> str:
        """Return the canonical text of the current tree."""
        return render(self._root, self.config)

    def save(self) -> None:
        """Rewrite the whole file from the in-memory tree.

        Called by every mutation. The tree is not rolled back when the
        write fails.

        Raises:
            UpdateError: If the file could not be written.
        """
        text = self.render()
        try:
            if self.config.atomic_write:
                self._write_atomic(text)
            else:
                with open(self.path, 'w', encoding=self.config.encoding, newline='') as f:
                    f.write(text)
        except OSError as exc:
            logger.error("Could not update %s: %s", self.path, exc)
            raise UpdateError(
                f"Something went wrong while updating {self.path}."
            ) from exc
        logger.debug("Updated %s (%d chars)", self.path, len(text))

    def _write_atomic(self, text: str) -> None:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f'.{self.path.name}.', suffix='.tmp', dir=self.path.parent
        )
        try:
            with os.fdopen(fd, 'w', encoding=self.config.encoding, newline='') as f:
                f.write(text)
            if self.path.exists():
                shutil.copymode(self.path, tmp_name)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def reload(self) -> None:
        """Discard the in-memory tree and parse the file again.

        The current tree is kept if the file no longer parses.
        """
        new_root = MiniMLParser(self).parse_file(self.path, encoding=self.config.encoding)
        if self._root is not None:
            self._root._detach()
        self._root = new_root
        logger.debug("Reloaded %s (%d nodes)", self.path, len(self))
