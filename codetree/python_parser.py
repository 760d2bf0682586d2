"""Extraction of classes, methods and functions from Python source."""

from __future__ import annotations

import re

from codetree.model import CodeEntity, EntityType, Parser

_FUNC_RE = re.compile(
    r"^(\s*)(async\s+)?def\s+(\w+)\s*\(([^)]*)\)(?:\s*->\s*([^:]+))?\s*:",
    re.ASCII,
)
_CLASS_RE = re.compile(r"^(\s*)class\s+(\w+)(?:\s*\(([^)]*)\))?\s*:", re.ASCII)


def _indent_width(line: str) -> int:
    width = 0
    for ch in line:
        if ch == " ":
            width += 1
        elif ch == "\t":
            width += 4
        else:
            break
    return width


def _function_signature(match: re.Match[str]) -> str:
    async_mod = (match.group(2) or "").strip()
    name = match.group(3)
    params = match.group(4) or ""
    return_type = (match.group(5) or "").strip()
    signature = f"{async_mod} " if async_mod else ""
    signature += f"def {name}({params})"
    if return_type:
        signature += f" -> {return_type}"
    return signature


def _extract_docstring(lines: list[str], start: int) -> tuple[str, int]:
    """Read a docstring starting at ``start``; return it and its last line index."""
    if start >= len(lines):
        return "", start - 1

    trimmed = lines[start].strip()
    if not trimmed.startswith('"""') and not trimmed.startswith("'''"):
        return "", start - 1

    quote = "'''" if trimmed.startswith("'''") else '"""'

    if trimmed.count(quote) >= 2:
        return trimmed.strip(quote).strip(), start

    doc_lines: list[str] = []
    first = trimmed[len(quote):]
    if first:
        doc_lines.append(first)

    index = start + 1
    while index < len(lines):
        line = lines[index]
        if quote in line:
            last = line.split(quote)[0]
            if last:
                doc_lines.append(last)
            return "\n".join(doc_lines).strip(), index
        doc_lines.append(line.strip())
        index += 1

    return "\n".join(doc_lines).strip(), index - 1


class PythonParser(Parser):
    """Finds top-level functions and classes with their direct methods."""

    language = "python"
    extensions = (".py", ".pyw", ".pyi")
    lib_dirs = (
        "venv", ".venv", "env", ".env",
        "__pycache__",
        ".tox", ".nox",
        ".eggs", "*.egg-info",
        ".mypy_cache", ".pytest_cache", ".ruff_cache",
        "site-packages",
        "dist", "build", ".pytype",
        ".pants.d", ".pvenv",
    )

    def parse(self, content: bytes | str) -> list[CodeEntity]:
        """Return the top-level entities declared in ``content``."""
        lines = self._split_lines(content)
        entities: list[CodeEntity] = []
        count = len(lines)
        i = 0

        while i < count:
            line = lines[i]

            if class_match := _CLASS_RE.match(line):
                indent = len(class_match.group(1))
                name = class_match.group(2)
                bases = class_match.group(3) or ""
                signature = f"class {name}"
                if bases:
                    signature += f"({bases})"

                docstring = ""
                if i + 1 < count:
                    docstring, i = _extract_docstring(lines, i + 1)

                start_line = i + 1
                methods: list[CodeEntity] = []
                while i < count - 1:
                    i += 1
                    next_line = lines[i]
                    if not next_line.strip():
                        continue
                    if _indent_width(next_line) <= indent:
                        i -= 1
                        break
                    method_match = _FUNC_RE.match(next_line)
                    if method_match and len(method_match.group(1)) == indent + 4:
                        method_signature = _function_signature(method_match)
                        method_doc = ""
                        if i + 1 < count:
                            method_doc, i = _extract_docstring(lines, i + 1)
                        methods.append(
                            CodeEntity(
                                name=method_match.group(3),
                                type=EntityType.METHOD,
                                signature=method_signature,
                                docstring=method_doc,
                                line_start=i + 1,
                            )
                        )

                entities.append(
                    CodeEntity(
                        name=name,
                        type=EntityType.CLASS,
                        signature=signature,
                        docstring=docstring,
                        line_start=start_line,
                        children=methods,
                    )
                )
            elif func_match := _FUNC_RE.match(line):
                if func_match.group(1):
                    i += 1
                    continue

                signature = _function_signature(func_match)
                docstring = ""
                if i + 1 < count:
                    docstring, i = _extract_docstring(lines, i + 1)

                entities.append(
                    CodeEntity(
                        name=func_match.group(3),
                        type=EntityType.FUNCTION,
                        signature=signature,
                        docstring=docstring,
                        line_start=i + 1,
                    )
                )

            i += 1

        return entities