# codetree

`codetree` walks a directory and prints it as a tree. Under each source
file it lists the functions, classes, methods, interfaces, types, enums and
constants it finds, with their signatures and docstrings.

It understands Python, Go, JavaScript and TypeScript. Declarations are found
line by line with regular expressions, so the output is an outline, not the
result of a full parse.

## Installation

```
pip install .
```

## Usage

```
codetree [directory]
```

When no directory is given, the current directory is used. Entries in each
directory are listed in name order; only files whose extension belongs to
one of the parsers (or to `--ext`) are shown.

Example output:

```
project/
├── app.py
│   ├── class Server(Base)
│   │   │   Serves requests.
│   │   ├── def start(self, port: int) -> None
│   │   └── def stop(self)
│   └── def main()
└── util/
    └── helpers.go
        └── func Join(a, b string) string
```

### Options

| Option | Meaning |
| --- | --- |
| `-d`, `--depth N` | maximum search depth (`-1` means unlimited, the default; `0` lists only the given directory) |
| `-l`, `--lang LANGS` | languages to parse, comma separated (`python`, `go`, `javascript`, `typescript`); unknown names produce a warning on standard error |
| `-t`, `--type TYPES` | entity types to show: `func`/`function`, `class`, `method`, `interface`, `struct`/`type`, `enum`, `const`/`constant`, `var`/`variable` |
| `--no-docstrings` | hide docstrings |
| `--no-signatures` | show only entity type and name instead of full signatures |
| `-o`, `--output FILE` | write to a file instead of standard output |
| `--ext EXTS` | file extensions to include, with the dot, e.g. `.py,.go` (default: chosen by language) |
| `--include-libs` | also descend into dependency directories such as `venv`, `node_modules`, `vendor`, `dist` or `build` |
| `--exclude-dirs REGEX` | skip directories whose name contains a match of the pattern (use `\|` to combine patterns); an invalid pattern is ignored |
| `--exclude-dirs-ignore-case` | match `--exclude-dirs` case-insensitively |
| `--max-signature N` | truncate signatures longer than N characters and append `...` (`0` means unlimited) |
| `--max-docstring N` | truncate docstrings longer than N characters and append `...` (`0` means unlimited) |

Version-control and editor directories (`.git`, `.svn`, `.hg`, `.idea`,
`.vscode`, `.vs`) are always skipped.

The `-t` filter applies at every level: a method is shown only if both
`class` and `method` are selected, since methods are listed under their
class.

The command exits with status 1 if the directory cannot be read or the
output file cannot be created.

Examples:

```
codetree src -l python -t class,method
codetree . --no-docstrings --max-signature 60 -o tree.txt
codetree --exclude-dirs "tests|examples" --exclude-dirs-ignore-case
```

## Library use

```python
from codetree.builder import Builder
from codetree.formatter import format_tree

root = Builder(languages=["python"]).build("src")
print(format_tree(root))
```

`Builder.build` returns a `DirNode` tree (`codetree.model`); each file node
holds a list of `CodeEntity` objects with `name`, `type` (an `EntityType`),
`signature`, `docstring`, `line_start`, `line_end` and `children`.
`Formatter` writes the same text to any text stream.

Each parser (`PythonParser`, `GoParser`, `JavaScriptParser`,
`TypeScriptParser`) can also be used on its own: its `parse(content)`
method takes bytes or a string and returns a list of `CodeEntity` objects.
The `codetree.registry` module looks parsers up by language (`get`), by
extension (`get_by_extension`, `get_parser_for_file`) and lists what is
registered (`available_languages`, `all_extensions`, `all_lib_dirs`);
`register` adds a parser of your own.

## Limitations

- No parser reports variables, so `-t var` selects nothing.
- Only top-level declarations are found, plus the methods directly inside
  a class; nested functions and classes are not listed.