"""Structural parsing of source files with tree-sitter."""

from pathlib import PurePosixPath
from typing import Any, Protocol

from tree_sitter_language_pack import SupportedLanguage, get_parser

from src.core.exceptions import ParseError
from src.core.logging import get_logger

logger = get_logger("reviewer.parser")

EXTENSION_LANGUAGES: dict[str, SupportedLanguage] = {
    ".py": "python",
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".ts": "typescript",
    ".tsx": "tsx",
    ".java": "java",
    ".go": "go",
    ".rb": "ruby",
    ".rs": "rust",
    ".c": "c",
    ".h": "c",
    ".cpp": "cpp",
    ".cc": "cpp",
    ".hpp": "cpp",
    ".php": "php",
    ".kt": "kotlin",
    ".scala": "scala",
    ".swift": "swift",
    ".sh": "bash",
    ".json": "json",
    ".yml": "yaml",
    ".yaml": "yaml",
    ".toml": "toml",
    ".html": "html",
    ".css": "css",
}


class StructuralParser(Protocol):
    """Turns source text into a tree whose root node renders as text."""

    def parse_to_tree(self, source: str, filename: str) -> Any: ...


def detect_language(filename: str) -> SupportedLanguage | None:
    """Detect language based on file extension."""
    return EXTENSION_LANGUAGES.get(PurePosixPath(filename).suffix.lower())


def render_tree(tree: Any) -> str:
    """Render a parsed tree as an S-expression dump."""
    return str(tree.root_node)


class TreeSitterParser:
    """StructuralParser backed by tree-sitter grammars."""

    def parse_to_tree(self, source: str, filename: str) -> Any:
        language = detect_language(filename)
        if language is None:
            raise ParseError(filename, "unsupported file type")

        try:
            # Parsers are not thread-safe, so each call gets its own
            parser = get_parser(language)
            tree = parser.parse(source.encode("utf-8"))
        except Exception as e:
            raise ParseError(filename, str(e)) from e

        if tree.root_node.has_error:
            logger.debug(f"{filename} parsed with syntax errors")
        return tree
