"""Data model shared by the parsers, the tree builder and the formatter."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar


class EntityType(Enum):
    """Kind of a code entity found in a source file."""

    FUNCTION = "func"
    CLASS = "class"
    METHOD = "method"
    CONSTANT = "const"
    VARIABLE = "var"
    INTERFACE = "interface"
    STRUCT = "struct"
    ENUM = "enum"

    def __str__(self) -> str:
        return self.value


@dataclass
class CodeEntity:
    """A function, class, method or other declaration found in a file."""

    name: str
    type: EntityType
    signature: str = ""
    docstring: str = ""
    line_start: int = 0
    line_end: int = 0
    children: list[CodeEntity] = field(default_factory=list)


@dataclass
class FileResult:
    """The entities parsed out of one file."""

    path: str
    entities: list[CodeEntity] = field(default_factory=list)


@dataclass
class DirNode:
    """A directory or a parsed file in the repository tree."""

    name: str
    path: str = ""
    is_dir: bool = False
    children: list[DirNode] = field(default_factory=list)
    entities: list[CodeEntity] = field(default_factory=list)


class Parser(ABC):
    """Extracts code entities from the source of one language."""

    language: ClassVar[str]
    extensions: ClassVar[tuple[str, ...]]
    lib_dirs: ClassVar[tuple[str, ...]]

    @abstractmethod
    def parse(self, content: bytes | str) -> list[CodeEntity]:
        """Return the entities declared in ``content``."""

    @staticmethod
    def _split_lines(content: bytes | str) -> list[str]:
        if isinstance(content, (bytes, bytearray)):
            content = bytes(content).decode("utf-8", errors="replace")
        return content.split("\n")