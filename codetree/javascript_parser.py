"""Extraction of classes, methods and functions from JavaScript source."""

from __future__ import annotations

import re

from codetree.model import CodeEntity, EntityType, Parser

_FUNC_RE = re.compile(
    r"(?:export\s+)?(?:async\s+)?function\s+(\w+)\s*\(([^)]*)\)", re.ASCII
)
_CLASS_RE = re.compile(
    r"(?:export\s+)?class\s+(\w+)(?:\s+extends\s+(\w+))?", re.ASCII
)
_METHOD_RE = re.compile(r"^\s*(?:async\s+)?(\w+)\s*\(([^)]*)\)\s*\{", re.ASCII)

_KEYWORDS = frozenset(
    {
        "if", "else", "for", "while",
        "return", "const", "let", "var",
        "function", "class", "export", "import",
    }
)


def _indent_width(line: str) -> int:
    width = 0
    for ch in line:
        if ch == " ":
            width += 1
        elif ch == "\t":
            width += 2
        else:
            break
    return width


def _extract_doc(lines: list[str], index: int) -> str:
    """Collect the JSDoc comment ending at or above ``index``."""
    if index < 0:
        return ""

    doc_lines: list[str] = []
    found_end = False
    for line in reversed(lines[: index + 1]):
        trimmed = line.strip()
        if not trimmed:
            continue

        if trimmed.startswith("/**"):
            doc = trimmed.removeprefix("/**")
            if trimmed.endswith("*/"):
                doc = doc.removesuffix("*/")
            doc = doc.strip()
            if doc:
                doc_lines.insert(0, doc)
            break

        if trimmed.endswith("*/"):
            found_end = True
            doc = trimmed.removesuffix("*/").removeprefix("*").strip()
        elif found_end or trimmed.startswith("*"):
            doc = trimmed.removeprefix("*").strip()
        elif trimmed.startswith("//"):
            continue
        else:
            break

        if doc:
            doc_lines.insert(0, doc)

    return "\n".join(doc_lines)


def _class_methods(lines: list[str], index: int, class_indent: int) -> list[CodeEntity]:
    methods: list[CodeEntity] = []
    for j, line in enumerate(lines[index + 1:], index + 1):
        stripped = line.strip()
        if not stripped:
            continue
        if _indent_width(line) <= class_indent and not stripped.startswith("//"):
            break

        match = _METHOD_RE.match(line)
        if not match or match.group(1) in _KEYWORDS:
            continue

        name = match.group(1)
        methods.append(
            CodeEntity(
                name=name,
                type=EntityType.METHOD,
                signature=f"{name}({match.group(2)})",
                docstring=_extract_doc(lines, j - 1),
                line_start=j + 1,
            )
        )
    return methods


class JavaScriptParser(Parser):
    """Finds classes with their methods and functions in JavaScript files."""

    language = "javascript"
    extensions = (".js", ".mjs", ".cjs")
    lib_dirs = (
        "node_modules",
        ".npm", ".yarn", ".pnpm-store",
        "bower_components", "jspm_packages",
        ".cache", ".parcel-cache",
        ".nuxt", ".next",
    )

    def parse(self, content: bytes | str) -> list[CodeEntity]:
        """Return the declarations found in ``content``."""
        lines = self._split_lines(content)
        entities: list[CodeEntity] = []

        for i, line in enumerate(lines):
            trimmed = line.strip()

            if match := _CLASS_RE.search(trimmed):
                name = match.group(1)
                signature = f"class {name}"
                if match.group(2):
                    signature += f" extends {match.group(2)}"
                entities.append(
                    CodeEntity(
                        name=name,
                        type=EntityType.CLASS,
                        signature=signature,
                        docstring=_extract_doc(lines, i - 1) if i > 0 else "",
                        line_start=i + 1,
                        children=_class_methods(lines, i, _indent_width(line)),
                    )
                )
            elif match := _FUNC_RE.search(trimmed):
                name = match.group(1)
                entities.append(
                    CodeEntity(
                        name=name,
                        type=EntityType.FUNCTION,
                        signature=f"function {name}({match.group(2)})",
                        docstring=_extract_doc(lines, i - 1) if i > 0 else "",
                        line_start=i + 1,
                    )
                )

        return entities