"""Rendering of a repository tree with its code entities as text."""

from __future__ import annotations

import io
from dataclasses import dataclass
from typing import TextIO

from codetree.model import CodeEntity, DirNode

_BRANCH = "├── "
_LAST = "└── "
_PIPE = "│   "
_BLANK = "    "


def _truncate(text: str, max_len: int) -> str:
    if max_len <= 0 or len(text) <= max_len:
        return text
    return text[:max_len] + "..."


@dataclass
class Formatter:
    """Writes a DirNode tree in the style of the ``tree`` command."""

    show_docstrings: bool = True
    show_signatures: bool = True
    max_signature_len: int = 0
    max_docstring_len: int = 0

    def format(self, root: DirNode, out: TextIO) -> None:
        """Write the tree below ``root`` to ``out``."""
        out.write(root.name + "/\n")
        self._format_node(root, out, "")

    def _format_node(self, node: DirNode, out: TextIO, prefix: str) -> None:
        last_index = len(node.children) - 1
        for index, child in enumerate(node.children):
            is_last = index == last_index
            connector = _LAST if is_last else _BRANCH
            child_prefix = prefix + (_BLANK if is_last else _PIPE)
            if child.is_dir:
                out.write(f"{prefix}{connector}{child.name}/\n")
                self._format_node(child, out, child_prefix)
            else:
                out.write(f"{prefix}{connector}{child.name}\n")
                if child.entities:
                    self._format_entities(child.entities, out, child_prefix)

    def _format_entities(
        self, entities: list[CodeEntity], out: TextIO, prefix: str
    ) -> None:
        last_index = len(entities) - 1
        for index, entity in enumerate(entities):
            is_last = index == last_index and not entity.children
            connector = _LAST if is_last else _BRANCH

            if self.show_signatures and entity.signature:
                signature = _truncate(entity.signature, self.max_signature_len)
                out.write(f"{prefix}{connector}{signature}\n")
            else:
                out.write(f"{prefix}{connector}{entity.type} {entity.name}\n")

            entity_prefix = prefix + (_BLANK if is_last else _PIPE)

            if self.show_docstrings and entity.docstring:
                docstring = _truncate(entity.docstring, self.max_docstring_len)
                for doc_line in docstring.split("\n"):
                    out.write(f"{entity_prefix}{_PIPE}{doc_line}\n")

            if entity.children:
                self._format_entities(entity.children, out, entity_prefix)


def format_tree(
    root: DirNode,
    show_docstrings: bool = True,
    show_signatures: bool = True,
    max_signature_len: int = 0,
    max_docstring_len: int = 0,
) -> str:
    """Render the tree below ``root`` and return it as a string."""
    buffer = io.StringIO()
    Formatter(
        show_docstrings, show_signatures, max_signature_len, max_docstring_len
    ).format(root, buffer)
    return buffer.getvalue()