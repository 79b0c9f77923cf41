# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""MiniML exceptions."""

from __future__ import annotations

from typing import Any


class MiniMLError(Exception):
    """Base exception for MiniML errors."""

    pass


class InvalidSourceError(MiniMLError):
    """Raised when a document source is not an existing .mnml file."""

    pass


class MiniMLParseError(MiniMLError):
    """Raised when a MiniML source violates the line grammar.

    Attributes:
        line_number: 1-based line of the offending directive, or None
            when the error was not produced while reading a source.
    """

    def __init__(self, message: str, line_number: int | None = None) -> None:
        super().__init__(message)
        self.line_number = line_number


class SecondRootError(MiniMLParseError):
    """Raised when a second top-level node is declared or created."""

    pass


class UnmatchedEndError(MiniMLParseError):
    """Raised when an end marker has no open node to close."""

    pass


class UnclosedNodeError(MiniMLParseError):
    """Raised when a node is still open at the end of the input."""

    def __init__(self, message: str, node_name: str, line_number: int | None = None) -> None:
        super().__init__(message, line_number)
        self.node_name = node_name


class MalformedIdError(MiniMLParseError):
    """Raised when an identifier line has no closing quote."""

    pass


class RepeatingIdError(MiniMLParseError):
    """Raised when an identifier is reused or a node gets a second one."""

    pass


class InvalidNameError(MiniMLError):
    """Raised when a node name cannot be written as a MiniML line."""

    def __init__(self, message: str, name: str) -> None:
        super().__init__(message)
        self.name = name


class InvalidValueError(MiniMLError):
    """Raised when a value cannot be written as a MiniML line."""

    def __init__(self, message: str, value: str) -> None:
        super().__init__(message)
        self.value = value


class ValueNotFoundError(MiniMLError):
    """Raised when removing a value the node does not hold."""

    def __init__(self, message: str, value: str) -> None:
        super().__init__(message)
        self.value = value


class ChildNotFoundError(MiniMLError):
    """Raised when removing a node that is not a child."""

    def __init__(self, message: str, child: Any) -> None:
        super().__init__(message)
        self.child = child


class DetachedNodeError(MiniMLError):
    """Raised when mutating a node that no longer belongs to a document."""

    pass


class UpdateError(MiniMLError):
    """Raised when the document could not be written back to its file."""

    pass
