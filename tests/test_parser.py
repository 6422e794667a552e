"""Tests for the tree-sitter structural parser adapter."""

import types
from unittest.mock import MagicMock, patch

import pytest

from src.core.exceptions import ParseError
from src.services.reviewer.parser import TreeSitterParser, detect_language, render_tree


class TestDetectLanguage:
    @pytest.mark.parametrize(
        "filename,language",
        [
            ("src/app.py", "python"),
            ("web/index.TS", "typescript"),
            ("web/App.tsx", "tsx"),
            ("cmd/main.go", "go"),
            ("lib/util.mjs", "javascript"),
        ],
    )
    def test_known_extensions(self, filename, language):
        assert detect_language(filename) == language

    @pytest.mark.parametrize("filename", ["README.md", "Makefile", "assets/logo.png"])
    def test_unknown_extensions(self, filename):
        assert detect_language(filename) is None


class TestRenderTree:
    def test_uses_root_node_text(self):
        tree = types.SimpleNamespace(root_node="(module (expression_statement))")
        assert render_tree(tree) == "(module (expression_statement))"


class TestTreeSitterParser:
    def test_unsupported_file_raises_parse_error(self):
        with pytest.raises(ParseError) as exc:
            TreeSitterParser().parse_to_tree("# Title", "README.md")
        assert exc.value.filename == "README.md"

    @patch("src.services.reviewer.parser.get_parser")
    def test_parses_utf8_bytes_with_language_grammar(self, mock_get_parser):
        tree = MagicMock()
        tree.root_node.has_error = False
        mock_get_parser.return_value.parse.return_value = tree

        result = TreeSitterParser().parse_to_tree("x = 'é'\n", "a.py")

        mock_get_parser.assert_called_once_with("python")
        mock_get_parser.return_value.parse.assert_called_once_with("x = 'é'\n".encode("utf-8"))
        assert result is tree

    @patch("src.services.reviewer.parser.get_parser")
    def test_grammar_failure_raises_parse_error(self, mock_get_parser):
        mock_get_parser.side_effect = LookupError("grammar not installed")

        with pytest.raises(ParseError, match="grammar not installed"):
            TreeSitterParser().parse_to_tree("fn main() {}", "main.rs")

    @patch("src.services.reviewer.parser.get_parser")
    def test_syntax_errors_still_return_tree(self, mock_get_parser):
        tree = MagicMock()
        tree.root_node.has_error = True
        mock_get_parser.return_value.parse.return_value = tree

        assert TreeSitterParser().parse_to_tree("def (", "a.py") is tree


class TestBundledGrammars:
    def test_parses_python_without_mocks(self):
        tree = TreeSitterParser().parse_to_tree("def f():\n    pass\n", "a.py")

        dump = render_tree(tree)

        assert dump.startswith("(module")
        assert "function_definition" in dump
