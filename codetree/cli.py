"""Command line entry point: print a repository tree with code signatures."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Iterable, Sequence

from codetree import registry
from codetree.builder import Builder
from codetree.formatter import Formatter
from codetree.model import EntityType

_ENTITY_ALIASES: dict[str, EntityType] = {
    "func": EntityType.FUNCTION,
    "function": EntityType.FUNCTION,
    "class": EntityType.CLASS,
    "method": EntityType.METHOD,
    "const": EntityType.CONSTANT,
    "constant": EntityType.CONSTANT,
    "var": EntityType.VARIABLE,
    "variable": EntityType.VARIABLE,
    "interface": EntityType.INTERFACE,
    "struct": EntityType.STRUCT,
    "type": EntityType.STRUCT,
    "enum": EntityType.ENUM,
}


def parse_entity_types(types: Iterable[str]) -> set[EntityType]:
    """Map entity type names and aliases to entity types; unknown names are ignored."""
    return {
        _ENTITY_ALIASES[name.lower()]
        for name in types
        if name.lower() in _ENTITY_ALIASES
    }


def validate_languages(langs: Iterable[str]) -> list[str]:
    """Warn on stderr about each unsupported language and return those languages."""
    available = registry.available_languages()
    listing = "[" + " ".join(available) + "]"
    unsupported = [lang for lang in langs if lang not in available]
    for lang in unsupported:
        print(
            f"Warning: language '{lang}' is not supported. Available: {listing}",
            file=sys.stderr,
        )
    return unsupported


def _comma_list(value: str) -> list[str]:
    return value.split(",") if value else []


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="codetree",
        description="Build repository tree with code signatures",
    )
    parser.add_argument("directory", nargs="?", default=".")
    parser.add_argument(
        "-d", "--depth", type=int, default=-1,
        help="max search depth (-1 = unlimited)",
    )
    parser.add_argument(
        "-l", "--lang", dest="languages", type=_comma_list, action="extend",
        default=[], help="languages to parse (comma-separated)",
    )
    parser.add_argument(
        "-t", "--type", dest="entity_types", type=_comma_list, action="extend",
        default=[],
        help="entity types: func,class,method,interface,enum,type,const,var",
    )
    parser.add_argument(
        "--no-docstrings", action="store_true", help="hide docstrings",
    )
    parser.add_argument(
        "--no-signatures", action="store_true",
        help="hide function/class signatures (show only type + name)",
    )
    parser.add_argument(
        "-o", "--output", default="", help="output file (default: stdout)",
    )
    parser.add_argument(
        "--ext", dest="extensions", type=_comma_list, action="extend",
        default=[], help="file extensions (default: auto by language)",
    )
    parser.add_argument(
        "--include-libs", action="store_true",
        help="include dependency directories (venv, node_modules, etc.)",
    )
    parser.add_argument(
        "--exclude-dirs", default="",
        help="regex pattern for directories to skip "
        "(use | as separator for multiple patterns)",
    )
    parser.add_argument(
        "--exclude-dirs-ignore-case", action="store_true",
        help="case-insensitive matching for --exclude-dirs",
    )
    parser.add_argument(
        "--max-signature", type=int, default=0,
        help="max signature length (0 = unlimited)",
    )
    parser.add_argument(
        "--max-docstring", type=int, default=0,
        help="max docstring length (0 = unlimited)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command and return its exit status."""
    try:
        args = _build_parser().parse_args(argv)
    except SystemExit as exc:
        return 0 if exc.code in (0, None) else 1

    entity_types = parse_entity_types(args.entity_types)
    if args.languages:
        validate_languages(args.languages)

    builder = Builder(
        languages=args.languages or None,
        entity_types=entity_types or None,
        max_depth=args.depth,
        show_docstrings=not args.no_docstrings,
        extensions=args.extensions or None,
        include_libs=args.include_libs,
        exclude_pattern=args.exclude_dirs,
        exclude_ignore_case=args.exclude_dirs_ignore_case,
    )
    try:
        root = builder.build(args.directory)
    except OSError as exc:
        print(f"Error: failed to build tree: {exc}", file=sys.stderr)
        return 1

    formatter = Formatter(
        show_docstrings=not args.no_docstrings,
        show_signatures=not args.no_signatures,
        max_signature_len=args.max_signature,
        max_docstring_len=args.max_docstring,
    )

    if args.output:
        try:
            out = open(args.output, "w", encoding="utf-8")
        except OSError as exc:
            print(f"Error: failed to create output file: {exc}", file=sys.stderr)
            return 1
        with out:
            formatter.format(root, out)
    else:
        formatter.format(root, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())