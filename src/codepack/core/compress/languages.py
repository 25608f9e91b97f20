"""
Languages supported by the compression engine and their Tree-sitter grammars.

Grammars come from the tree-sitter-<language> packages and are loaded lazily,
once per process, the first time a file of that language is compressed.
"""

import logging
import threading
from enum import Enum
from typing import Any, Callable

from codepack.core.errors import CompressionError

logger = logging.getLogger(__name__)


class Language(str, Enum):
    """A grammar the compression engine can parse."""

    PYTHON = "python"
    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"
    TSX = "tsx"
    GO = "go"
    RUST = "rust"
    JAVA = "java"
    C = "c"
    CPP = "cpp"

    @classmethod
    def from_extension(cls, extension: str) -> "Language | None":
        """
        Look up the language for a file extension.

        Args:
            extension: Extension with or without the leading dot, any case

        Returns:
            The matching Language, or None if unsupported
        """
        return EXTENSION_TO_LANGUAGE.get(extension.lstrip(".").lower())


EXTENSION_TO_LANGUAGE: dict[str, Language] = {
    "py": Language.PYTHON,
    "pyi": Language.PYTHON,
    "js": Language.JAVASCRIPT,
    "jsx": Language.JAVASCRIPT,
    "mjs": Language.JAVASCRIPT,
    "cjs": Language.JAVASCRIPT,
    "ts": Language.TYPESCRIPT,
    "mts": Language.TYPESCRIPT,
    "cts": Language.TYPESCRIPT,
    "tsx": Language.TSX,
    "go": Language.GO,
    "rs": Language.RUST,
    "java": Language.JAVA,
    "c": Language.C,
    "h": Language.C,
    "cc": Language.CPP,
    "cpp": Language.CPP,
    "cxx": Language.CPP,
    "hpp": Language.CPP,
    "hh": Language.CPP,
}

# Grammar module name and the function returning its language pointer
_GRAMMAR_LOADERS: dict[Language, tuple[str, Callable[[Any], Any]]] = {
    Language.PYTHON: ("tree_sitter_python", lambda mod: mod.language()),
    Language.JAVASCRIPT: ("tree_sitter_javascript", lambda mod: mod.language()),
    Language.TYPESCRIPT: ("tree_sitter_typescript", lambda mod: mod.language_typescript()),
    Language.TSX: ("tree_sitter_typescript", lambda mod: mod.language_tsx()),
    Language.GO: ("tree_sitter_go", lambda mod: mod.language()),
    Language.RUST: ("tree_sitter_rust", lambda mod: mod.language()),
    Language.JAVA: ("tree_sitter_java", lambda mod: mod.language()),
    Language.C: ("tree_sitter_c", lambda mod: mod.language()),
    Language.CPP: ("tree_sitter_cpp", lambda mod: mod.language()),
}


class GrammarRegistry:
    """
    Lazily loads Tree-sitter languages, parsers and compiled queries.

    Everything is cached for the lifetime of the registry; a process normally
    uses the module-level instance returned by get_grammar_registry().
    """

    def __init__(self):
        self._languages: dict[Language, Any] = {}
        self._parsers: dict[Language, Any] = {}
        self._queries: dict[Language, Any] = {}
        self._lock = threading.Lock()

    def _load_tree_sitter_language(self, language: Language) -> Any:
        """Import the grammar package and wrap it as a tree_sitter.Language."""
        import importlib

        module_name, loader = _GRAMMAR_LOADERS[language]
        try:
            import tree_sitter

            module = importlib.import_module(module_name)
        except ImportError as e:
            raise CompressionError(
                f"Grammar package '{module_name}' for {language.value} is not installed: {e}"
            ) from e

        lang_obj = loader(module)
        if isinstance(lang_obj, tree_sitter.Language):
            return lang_obj
        return tree_sitter.Language(lang_obj)

    def language(self, language: Language) -> Any:
        with self._lock:
            lang = self._languages.get(language)
            if lang is None:
                lang = self._load_tree_sitter_language(language)
                self._languages[language] = lang
                logger.debug(f"Loaded Tree-sitter grammar for '{language.value}'")
            return lang

    def parser(self, language: Language) -> Any:
        lang = self.language(language)
        import tree_sitter

        with self._lock:
            parser = self._parsers.get(language)
            if parser is None:
                parser = tree_sitter.Parser(lang)
                self._parsers[language] = parser
            return parser

    def query(self, language: Language) -> Any:
        lang = self.language(language)
        import tree_sitter

        from .queries import QUERIES

        with self._lock:
            query = self._queries.get(language)
            if query is None:
                query = tree_sitter.Query(lang, QUERIES[language])
                self._queries[language] = query
            return query


_registry: GrammarRegistry | None = None


def get_grammar_registry() -> GrammarRegistry:
    """Return the process-wide grammar registry."""
    global _registry
    if _registry is None:
        _registry = GrammarRegistry()
    return _registry
