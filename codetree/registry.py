"""Registry of the available language parsers."""

from __future__ import annotations

import os
import threading

from codetree.go_parser import GoParser
from codetree.javascript_parser import JavaScriptParser
from codetree.model import Parser
from codetree.python_parser import PythonParser
from codetree.typescript_parser import TypeScriptParser

GLOBAL_SKIP_DIRS = (
    ".git", ".svn", ".hg", ".idea", ".vscode", ".vs",
    ".DS_Store", "Thumbs.db",
)

_registry: dict[str, Parser] = {}
_ext_map: dict[str, str] = {}
_lock = threading.RLock()


def _extension(path: str) -> str:
    base = path
    for sep in {os.sep, os.altsep or os.sep, "/"}:
        base = base.rsplit(sep, 1)[-1]
    dot = base.rfind(".")
    return base[dot:] if dot >= 0 else ""


def register(parser: Parser) -> None:
    """Make ``parser`` available for its language and extensions."""
    with _lock:
        _registry[parser.language] = parser
        for ext in parser.extensions:
            _ext_map[ext] = parser.language


def get(language: str) -> Parser | None:
    """Return the parser for ``language``, or None."""
    with _lock:
        return _registry.get(language)


def get_by_extension(ext: str) -> Parser | None:
    """Return the parser handling files with extension ``ext``, or None."""
    with _lock:
        language = _ext_map.get(ext)
        return _registry.get(language) if language is not None else None


def get_parser_for_file(path: str) -> Parser | None:
    """Return the parser for the file at ``path``, chosen by its extension."""
    return get_by_extension(_extension(path))


def available_languages() -> list[str]:
    """Return the names of all registered languages."""
    with _lock:
        return list(_registry)


def all_extensions() -> list[str]:
    """Return every file extension some parser handles."""
    with _lock:
        return list(_ext_map)


def all_lib_dirs() -> list[str]:
    """Return the dependency directory names of all parsers, without repeats."""
    with _lock:
        seen: dict[str, None] = {}
        for parser in _registry.values():
            for directory in parser.lib_dirs:
                seen.setdefault(directory, None)
        return list(seen)


for _parser in (GoParser(), JavaScriptParser(), PythonParser(), TypeScriptParser()):
    register(_parser)