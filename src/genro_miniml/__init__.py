# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Genro-MiniML - In-memory document model for MiniML files.

MiniML is a small line-oriented hierarchical text format: nodes with an
optional unique identifier, ordered values and ordered children, closed
by explicit end markers. A MiniMLDocument keeps its file in sync with
the node tree after every mutation.
"""

__version__ = "0.1.0"

from .config import MiniMLConfig, get_config
from .document import MiniMLDocument
from .exceptions import (
    ChildNotFoundError,
    DetachedNodeError,
    InvalidNameError,
    InvalidSourceError,
    InvalidValueError,
    MalformedIdError,
    MiniMLError,
    MiniMLParseError,
    RepeatingIdError,
    SecondRootError,
    UnclosedNodeError,
    UnmatchedEndError,
    UpdateError,
    ValueNotFoundError,
)
from .node import MiniMLNode
from .parser import MiniMLParser
from .serializer import render, render_node

__all__ = [
    # Core classes
    "MiniMLDocument",
    "MiniMLNode",
    # Parsing and rendering
    "MiniMLParser",
    "render",
    "render_node",
    # Configuration
    "MiniMLConfig",
    "get_config",
    # Exceptions
    "MiniMLError",
    "InvalidSourceError",
    "MiniMLParseError",
    "SecondRootError",
    "UnmatchedEndError",
    "UnclosedNodeError",
    "MalformedIdError",
    "RepeatingIdError",
    "InvalidNameError",
    "InvalidValueError",
    "ValueNotFoundError",
    "ChildNotFoundError",
    "DetachedNodeError",
    "UpdateError",
]
