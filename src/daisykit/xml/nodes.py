# ABOUTME: Node model for parsed DAISY XML documents.
# ABOUTME: Text and comments are first-class children so sibling runs can be split uniformly.

from dataclasses import dataclass, field
from typing import ClassVar, Union


@dataclass
class Text:
    """A run of character data."""

    type: ClassVar[str] = "text"

    value: str


@dataclass
class Comment:
    """An XML comment. ``value`` excludes the ``<!--``/``-->`` delimiters."""

    type: ClassVar[str] = "comment"

    value: str


@dataclass
class Instruction:
    """A processing instruction, including the ``<?xml ...?>`` declaration."""

    type: ClassVar[str] = "instruction"

    name: str
    value: str = ""


@dataclass
class Doctype:
    """A document type declaration, kept verbatim (``<!DOCTYPE ...>``)."""

    type: ClassVar[str] = "doctype"

    value: str


@dataclass
class EntityRef:
    """An entity reference left unexpanded (``&name;``). It contributes no text."""

    type: ClassVar[str] = "entity"

    name: str


@dataclass
class Element:
    """An XML element.

    ``name`` is the qualified name as written in the source (``dc:Title``,
    ``meta``). Namespace declarations live in ``attributes`` as ``xmlns`` or
    ``xmlns:prefix`` entries, in the order they were found.
    """

    type: ClassVar[str] = "element"

    name: str
    attributes: dict[str, str] = field(default_factory=dict)
    children: list["Node"] = field(default_factory=list)


@dataclass
class Root:
    """Document node holding the top-level children of a parsed file."""

    type: ClassVar[str] = "root"

    children: list["Node"] = field(default_factory=list)


Node = Union[Root, Element, Text, Comment, Instruction, Doctype, EntityRef]
Parent = Union[Root, Element]


def is_parent(node: object) -> bool:
    """Whether a node can hold children."""
    return isinstance(node, (Root, Element))
