"""Repository trees annotated with code signatures and docstrings for Python, Go, JavaScript and TypeScript."""

__version__ = "0.1.0"