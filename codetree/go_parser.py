"""Extraction of functions, methods, types and constants from Go source."""

from __future__ import annotations

import re

from codetree.model import CodeEntity, EntityType, Parser

_FUNC_RE = re.compile(
    r"^func\s+([A-Za-z]\w*)\s*\(([^)]*)\)(?:\s*([^{]+))?", re.ASCII
)
_METHOD_RE = re.compile(
    r"^func\s+\(([^)]+)\)\s*([A-Za-z]\w*)\s*\(([^)]*)\)(?:\s*([^{]+))?", re.ASCII
)
_STRUCT_RE = re.compile(r"^type\s+([A-Za-z]\w*)\s+struct\b", re.ASCII)
_INTERFACE_RE = re.compile(r"^type\s+([A-Za-z]\w*)\s+interface\b", re.ASCII)
_TYPE_RE = re.compile(r"^type\s+([A-Za-z]\w*)\s+(.+)", re.ASCII)
_CONST_RE = re.compile(r"^\s*const\s+(\w+)\s*(?:=\s*(.+))?", re.ASCII)
_CONST_BLOCK_RE = re.compile(r"^\s*(\w+)\s*(?:=\s*(.+))?", re.ASCII)
_FIELD_RE = re.compile(r"^(\w+)\s+(.+)", re.ASCII)
_IFACE_METHOD_RE = re.compile(r"^(\w+)\s*\(([^)]*)\)\s*(.*)$", re.ASCII)


def _brace_delta(text: str) -> int:
    return text.count("{") - text.count("}")


def _extract_doc(lines: list[str], index: int) -> str:
    """Collect the comment lines directly above ``index`` (inclusive)."""
    doc_lines: list[str] = []
    while index >= 0:
        trimmed = lines[index].strip()
        index -= 1

        if not trimmed:
            if doc_lines:
                break
            continue

        if trimmed.startswith("/*"):
            doc = trimmed.removeprefix("/*")
            if trimmed.endswith("*/"):
                doc = doc.removesuffix("*/")
            doc = doc.strip()
            if doc:
                doc_lines.insert(0, doc)
            break

        if trimmed.startswith("//"):
            doc = trimmed.removeprefix("//").strip()
            if doc:
                doc_lines.insert(0, doc)
            continue

        break

    return "\n".join(doc_lines)


def _block_body(lines: list[str], start: int):
    """Yield the trimmed lines of a brace block that opens at or after ``start``."""
    depth = 0
    started = False
    for line in lines[start:]:
        trimmed = line.strip()
        if not trimmed:
            continue

        if "{" in trimmed:
            started = True
            depth += _brace_delta(trimmed)
            if depth == 0:
                return
            trimmed = trimmed.removeprefix("{").strip()

        if not started:
            return

        depth += _brace_delta(trimmed)
        if depth <= 0:
            return

        if trimmed.startswith("//") or trimmed.startswith("/*"):
            continue

        if trimmed.startswith("}"):
            return

        yield trimmed


def _struct_fields(lines: list[str], start: int) -> list[str]:
    fields: list[str] = []
    for trimmed in _block_body(lines, start):
        match = _FIELD_RE.match(trimmed)
        if match:
            field_type = match.group(2).removesuffix("}").strip()
            fields.append(f"{match.group(1)} {field_type}")
    return fields


def _interface_methods(lines: list[str], start: int) -> list[str]:
    methods: list[str] = []
    for trimmed in _block_body(lines, start):
        match = _IFACE_METHOD_RE.match(trimmed)
        if match:
            return_type = match.group(3).strip().removesuffix("}").strip()
            signature = f"{match.group(1)}({match.group(2)})"
            if return_type:
                signature += f" {return_type}"
            methods.append(signature)
        elif "embed" not in trimmed:
            methods.append(trimmed.removesuffix("}"))
    return methods


def _block_end(lines: list[str], start: int) -> int:
    depth = 0
    started = False
    for index in range(start, len(lines)):
        line = lines[index]
        if "{" in line:
            started = True
        if started:
            depth += _brace_delta(line)
            if depth == 0:
                return index + 1
    return len(lines)


def _const_signature(name: str, value: str | None) -> str:
    value = (value or "").strip()
    return f"const {name} = {value}" if value else f"const {name}"


def _const_block(lines: list[str], start: int, docstring: str) -> list[CodeEntity]:
    consts: list[CodeEntity] = []
    for index in range(start, len(lines)):
        trimmed = lines[index].strip()
        if not trimmed or trimmed.startswith("//"):
            continue
        if trimmed == ")":
            break
        match = _CONST_BLOCK_RE.match(trimmed)
        if match:
            consts.append(
                CodeEntity(
                    name=match.group(1),
                    type=EntityType.CONSTANT,
                    signature=_const_signature(match.group(1), match.group(2)),
                    docstring=docstring,
                    line_start=index + 1,
                )
            )
    return consts


def _with_return(signature: str, return_type: str | None) -> str:
    return_type = (return_type or "").strip().removesuffix("{")
    return f"{signature} {return_type}" if return_type else signature


class GoParser(Parser):
    """Finds top-level functions, methods, types and constants in Go files."""

    language = "go"
    extensions = (".go",)
    lib_dirs = ("vendor", "Godeps", ".godeps")

    def parse(self, content: bytes | str) -> list[CodeEntity]:
        """Return the declarations found in ``content``."""
        lines = self._split_lines(content)
        entities: list[CodeEntity] = []

        for i, line in enumerate(lines):
            trimmed = line.strip()
            if not trimmed or trimmed.startswith("//"):
                continue

            if match := _STRUCT_RE.match(line):
                name = match.group(1)
                signature = f"type {name} struct"
                fields = _struct_fields(lines, i + 1)
                if fields:
                    signature += " { " + ", ".join(fields) + " }"
                entities.append(
                    CodeEntity(
                        name=name,
                        type=EntityType.STRUCT,
                        signature=signature,
                        docstring=_extract_doc(lines, i - 1),
                        line_start=i + 1,
                        line_end=_block_end(lines, i),
                    )
                )
            elif match := _INTERFACE_RE.match(line):
                name = match.group(1)
                signature = f"type {name} interface"
                methods = _interface_methods(lines, i + 1)
                if methods:
                    signature += " { " + ", ".join(methods) + " }"
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
            elif match := _TYPE_RE.match(line):
                name = match.group(1)
                type_def = match.group(2).strip().removesuffix(";")
                entities.append(
                    CodeEntity(
                        name=name,
                        type=EntityType.STRUCT,
                        signature=f"type {name} {type_def}",
                        docstring=_extract_doc(lines, i - 1),
                        line_start=i + 1,
                    )
                )
            elif match := _METHOD_RE.match(line):
                receiver = match.group(1).strip()
                name = match.group(2)
                signature = _with_return(
                    f"func ({receiver}) {name}({match.group(3)})", match.group(4)
                )
                entities.append(
                    CodeEntity(
                        name=name,
                        type=EntityType.METHOD,
                        signature=signature,
                        docstring=_extract_doc(lines, i - 1),
                        line_start=i + 1,
                    )
                )
            elif match := _FUNC_RE.match(line):
                name = match.group(1)
                signature = _with_return(
                    f"func {name}({match.group(2)})", match.group(3)
                )
                entities.append(
                    CodeEntity(
                        name=name,
                        type=EntityType.FUNCTION,
                        signature=signature,
                        docstring=_extract_doc(lines, i - 1),
                        line_start=i + 1,
                    )
                )
            elif trimmed.startswith("const ("):
                docstring = _extract_doc(lines, i - 1)
                entities.extend(_const_block(lines, i + 1, docstring))
            elif match := _CONST_RE.match(line):
                name = match.group(1)
                entities.append(
                    CodeEntity(
                        name=name,
                        type=EntityType.CONSTANT,
                        signature=_const_signature(name, match.group(2)),
                        docstring=_extract_doc(lines, i - 1),
                        line_start=i + 1,
                    )
                )

        return entities