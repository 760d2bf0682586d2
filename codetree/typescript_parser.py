"""Extraction of classes, interfaces, types, enums and functions from TypeScript."""

from __future__ import annotations

import re

from codetree.model import CodeEntity, EntityType, Parser

_FUNC_RE = re.compile(
    r"^(?:export\s+)?(?:async\s+)?function\s+(\w+)\s*(?:<[^>]*>)?\s*"
    r"\(([^)]*)\)(?:\s*:\s*([^{]+))?\s*\{",
    re.ASCII,
)
_ARROW_FUNC_RE = re.compile(
    r"^(?:export\s+)?(?:const|let|var)\s+(\w+)\s*(?::\s*[^=]+)?\s*=\s*"
    r"(?:async\s+)?(?:\([^)]*\)|\w+)\s*(?::\s*[^=]+)?\s*=>",
    re.ASCII,
)
_CLASS_RE = re.compile(
    r"^(?:export\s+)?(?:abstract\s+)?class\s+(\w+)(?:\s*<[^>]*>)?"
    r"(?:\s+(?:extends|implements)\s+([^{]+))?",
    re.ASCII,
)
_INTERFACE_RE = re.compile(
    r"^(?:export\s+)?interface\s+(\w+)(?:\s*<[^>]*>)?(?:\s+extends\s+([^{]+))?",
    re.ASCII,
)
_TYPE_RE = re.compile(r"^(?:export\s+)?type\s+(\w+)(?:\s*<[^>]*>)?\s*=", re.ASCII)
_ENUM_RE = re.compile(r"^(?:export\s+)?(?:const\s+)?enum\s+(\w+)", re.ASCII)
_METHOD_RE = re.compile(
    r"^\s*(?:abstract\s+)?(?:private\s+|public\s+|protected\s+)?(?:readonly\s+)?"
    r"(?:async\s+)?(\w+)\s*(?:<[^>]*>)?\s*\(([^)]*)\)(?:\s*:\s*([^{;\n]+))?",
    re.ASCII,
)
_PROPERTY_RE = re.compile(r"^(\w+)(\?)?\s*:\s*([^;]+);?$", re.ASCII)

_KEYWORDS = frozenset(
    {
        "if", "else", "for", "while",
        "return", "const", "let", "var",
        "function", "class", "export", "import",
        "interface", "type", "enum", "namespace",
        "module", "declare", "abstract",
        "public", "private", "protected", "readonly",
        "static", "new",
        "super", "this",
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


def _brace_delta(text: str) -> int:
    return text.count("{") - text.count("}")


def _is_code_line(trimmed: str) -> bool:
    return bool(trimmed) and not trimmed.startswith(("//", "*"))


def _extract_doc(lines: list[str], index: int) -> str:
    """Collect the doc comment ending at or above ``index``."""
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


def _class_methods(lines: list[str], start: int) -> list[CodeEntity]:
    if start >= len(lines):
        return []

    class_indent = _indent_width(lines[start - 1])
    methods: list[CodeEntity] = []
    for index, line in enumerate(lines[start:], start):
        trimmed = line.strip()
        if trimmed in ("", "{", "}"):
            continue

        indent = _indent_width(line)
        if indent <= class_indent and _is_code_line(trimmed):
            break

        match = _METHOD_RE.match(line)
        if not match or match.group(1) in _KEYWORDS or indent <= class_indent:
            continue

        name = match.group(1)
        signature = f"{name}({match.group(2)})"
        return_type = (match.group(3) or "").strip()
        if return_type:
            signature += f": {return_type}"
        methods.append(
            CodeEntity(
                name=name,
                type=EntityType.METHOD,
                signature=signature,
                docstring=_extract_doc(lines, index - 1),
                line_start=index + 1,
            )
        )
    return methods


def _interface_properties(lines: list[str], start: int) -> str:
    if start >= len(lines):
        return ""

    depth = 0
    started = False
    if start > 0:
        previous = lines[start - 1].strip()
        if "{" in previous:
            started = True
            depth = _brace_delta(previous)
            if depth == 0:
                return ""

    props: list[str] = []
    for line in lines[start:]:
        trimmed = line.strip()
        if not trimmed:
            continue

        if not started:
            if "{" in trimmed:
                started = True
                depth += _brace_delta(trimmed)
                if depth == 0:
                    break
            continue

        depth += _brace_delta(trimmed)
        if depth == 0:
            break

        if trimmed.startswith(("//", "/*", "*")):
            continue

        match = _PROPERTY_RE.match(trimmed)
        if match:
            prop_type = match.group(3).removesuffix(";").strip()
            separator = "?: " if match.group(2) == "?" else ": "
            props.append(f"{match.group(1)}{separator}{prop_type}")

    return ", ".join(props)


def _block_content(lines: list[str], start: int, first_line: str) -> str:
    depth = _brace_delta(first_line)
    if depth == 0:
        return first_line.removesuffix(";")

    parts = [first_line]
    for line in lines[start + 1:]:
        trimmed = line.strip()
        if not trimmed:
            continue
        parts.append(trimmed)
        depth += _brace_delta(trimmed)
        if depth == 0:
            break

    return " ".join(parts).replace("{ ", "{").replace(" }", "}")


def _type_body(lines: list[str], index: int) -> str:
    if index >= len(lines):
        return ""

    trimmed = lines[index].strip()
    eq_index = trimmed.find("=")
    if eq_index == -1:
        return ""

    after_eq = trimmed[eq_index + 1:].strip()
    if not after_eq:
        return ""
    if after_eq.startswith("{"):
        return _block_content(lines, index, after_eq)
    return after_eq.removesuffix(";")


def _block_end(lines: list[str], start: int) -> int:
    if start >= len(lines):
        return start + 1

    start_indent = _indent_width(lines[start])
    for index, line in enumerate(lines[start + 1:], start + 1):
        trimmed = line.strip()
        if not trimmed:
            continue
        if _indent_width(line) <= start_indent and _is_code_line(trimmed):
            return index
    return len(lines)


def _class_end(lines: list[str], start: int, class_indent: int) -> int:
    end = start + 1
    for index in range(start + 1, len(lines)):
        line = lines[index]
        if _indent_width(line) <= class_indent and _is_code_line(line.strip()):
            break
        end = index + 1
    return end


class TypeScriptParser(Parser):
    """Finds classes, interfaces, type aliases, enums and functions in TypeScript."""

    language = "typescript"
    extensions = (".ts", ".tsx", ".mts", ".cts")
    lib_dirs = (
        "node_modules",
        ".npm", ".yarn", ".pnpm-store",
        ".cache", ".parcel-cache",
        ".nuxt", ".next",
        "dist", "build",
    )

    def parse(self, content: bytes | str) -> list[CodeEntity]:
        """Return the declarations found in ``content``."""
        lines = self._split_lines(content)
        entities: list[CodeEntity] = []

        for i, line in enumerate(lines):
            trimmed = line.strip()

            if match := _CLASS_RE.match(trimmed):
                name = match.group(1)
                signature = f"class {name}"
                heritage = (match.group(2) or "").strip()
                if heritage:
                    signature += f" {heritage}"
                entities.append(
                    CodeEntity(
                        name=name,
                        type=EntityType.CLASS,
                        signature=signature,
                        docstring=_extract_doc(lines, i - 1),
                        line_start=i + 1,
                        line_end=_class_end(lines, i, _indent_width(line)),
                        children=_class_methods(lines, i + 1),
                    )
                )
            elif match := _INTERFACE_RE.match(trimmed):
                name = match.group(1)
                signature = f"interface {name}"
                if match.group(2):
                    signature += f" extends {match.group(2).strip()}"
                properties = _interface_properties(lines, i + 1)
                if properties:
                    signature += f" {{ {properties} }}"
                entities.append(
                    CodeEntity(
                        name=name,
                        type=EntityType.INTERFACE,
                        signature=signature,
                        docstring=_extract_doc(lines, i - 1),
                        line_start=i + 1,
                        line_end=_block_end(lines, i),
                    )
                )
            elif match := _TYPE_RE.match(trimmed):
                name = match.group(1)
                entities.append(
                    CodeEntity(
                        name=name,
                        type=EntityType.STRUCT,
                        signature=f"type {name} = {_type_body(lines, i)}",
                        docstring=_extract_doc(lines, i - 1),
                        line_start=i + 1,
                        line_end=_block_end(lines, i),
                    )
                )
            elif match := _ENUM_RE.match(trimmed):
                name = match.group(1)
                entities.append(
                    CodeEntity(
                        name=name,
                        type=EntityType.ENUM,
                        signature=f"enum {name}",
                        docstring=_extract_doc(lines, i - 1),
                        line_start=i + 1,
                    )
                )
            elif match := _FUNC_RE.match(trimmed):
                name = match.group(1)
                signature = f"function {name}({match.group(2)})"
                return_type = (match.group(3) or "").strip()
                if return_type:
                    signature += f": {return_type}"
                entities.append(
                    CodeEntity(
                        name=name,
                        type=EntityType.FUNCTION,
                        signature=signature,
                        docstring=_extract_doc(lines, i - 1),
                        line_start=i + 1,
                    )
                )
            elif match := _ARROW_FUNC_RE.match(trimmed):
                name = match.group(1)
                entities.append(
                    CodeEntity(
                        name=name,
                        type=EntityType.FUNCTION,
                        signature=f"const {name} = (...) =>",
                        docstring=_extract_doc(lines, i - 1),
                        line_start=i + 1,
                    )
                )

        return entities