"""Walking a directory and collecting the code entities of its files."""

from __future__ import annotations

import os
import re
from collections.abc import Iterable
from fnmatch import fnmatchcase

from codetree import registry
from codetree.model import CodeEntity, DirNode, EntityType


def _extension(name: str) -> str:
    dot = name.rfind(".")
    return name[dot:] if dot >= 0 else ""


class Builder:
    """Builds a DirNode tree of a directory, parsing the source files in it."""

    def __init__(
        self,
        languages: Iterable[str] | None = None,
        entity_types: Iterable[EntityType] | None = None,
        max_depth: int = -1,
        show_docstrings: bool = True,
        extensions: Iterable[str] | None = None,
        include_libs: bool = False,
        exclude_pattern: str = "",
        exclude_ignore_case: bool = False,
    ) -> None:
        self.languages = set(languages or ())
        self.entity_types = set(entity_types or ())
        self.max_depth = max_depth
        self.show_docstrings = show_docstrings
        self.extensions = set(extensions or ())
        self.include_libs = include_libs
        self.exclude_ignore_case = exclude_ignore_case
        self.exclude_pattern: re.Pattern[str] | None = None

        if exclude_pattern:
            flags = re.IGNORECASE if exclude_ignore_case else 0
            try:
                self.exclude_pattern = re.compile(exclude_pattern, flags)
            except re.error:
                self.exclude_pattern = None

        if self.languages and not self.extensions:
            for language in self.languages:
                parser = registry.get(language)
                if parser is not None:
                    self.extensions.update(parser.extensions)

        if not self.extensions:
            self.extensions.update(registry.all_extensions())

    def build(self, root_path: str | os.PathLike[str]) -> DirNode:
        """Return the tree rooted at ``root_path``; raise OSError if it cannot be read."""
        abs_path = os.path.abspath(os.fspath(root_path))
        root = DirNode(name=os.path.basename(abs_path), path=abs_path, is_dir=True)
        self._walk(abs_path, root, 0)
        return root

    def _should_skip_dir(self, name: str) -> bool:
        if name in registry.GLOBAL_SKIP_DIRS:
            return True
        if self.exclude_pattern is not None and self.exclude_pattern.search(name):
            return True
        if not self.include_libs:
            for lib_dir in registry.all_lib_dirs():
                if "*" in lib_dir:
                    if fnmatchcase(name, lib_dir):
                        return True
                elif name == lib_dir:
                    return True
        return False

    def _walk(self, path: str, parent: DirNode, depth: int) -> None:
        if self.max_depth >= 0 and depth > self.max_depth:
            return

        with os.scandir(path) as scanner:
            entries = sorted(scanner, key=lambda entry: entry.name)

        for entry in entries:
            name = entry.name
            full_path = os.path.join(path, name)

            if entry.is_dir(follow_symlinks=False):
                if self._should_skip_dir(name):
                    continue
                dir_node = DirNode(name=name, path=full_path, is_dir=True)
                parent.children.append(dir_node)
                try:
                    self._walk(full_path, dir_node, depth + 1)
                except OSError:
                    pass
                continue

            ext = _extension(name)
            if ext not in self.extensions:
                continue
            parser = registry.get_by_extension(ext)
            if parser is None:
                continue
            try:
                with open(full_path, "rb") as handle:
                    content = handle.read()
            except OSError:
                continue

            parent.children.append(
                DirNode(
                    name=name,
                    path=full_path,
                    is_dir=False,
                    entities=self._filter_entities(parser.parse(content)),
                )
            )

    def _filter_entities(self, entities: list[CodeEntity]) -> list[CodeEntity]:
        if not self.entity_types:
            return entities
        return [
            CodeEntity(
                name=entity.name,
                type=entity.type,
                signature=entity.signature,
                docstring=entity.docstring,
                line_start=entity.line_start,
                line_end=entity.line_end,
                children=self._filter_entities(entity.children),
            )
            for entity in entities
            if entity.type in self.entity_types
        ]