"""
Parser Registry for Tree-sitter

Resolves a language identifier to a tree-sitter parser. Grammars come
prebuilt from tree-sitter-language-pack and are loaded on first use.
"""

from tree_sitter import Parser
from tree_sitter_language_pack import get_language

from code_control.errors import GrammarUnavailableError, UnsupportedLanguageError
from code_control.observability import get_logger

logger = get_logger(__name__)


class ParserRegistry:
    """
    Registry for language parsers.

    Supports:
    - Java
    - JavaScript / TypeScript / TSX
    - Python
    - Go, Rust, C/C++, C#, Kotlin, Ruby, PHP
    """

    def __init__(self):
        self._parsers: dict[str, Parser] = {}
        self._languages: dict[str, object] = {}
        self._aliases: dict[str, str] = {}
        self._setup_languages()

    def _register_language(self, name: str, aliases: list[str] | None = None) -> None:
        """
        Register a language and its aliases.

        Args:
            name: Language name as known to tree-sitter-language-pack (e.g., "javascript")
            aliases: Optional list of aliases (e.g., ["js"] for javascript)
        """
        self._aliases[name] = name
        for alias in aliases or []:
            self._aliases[alias] = name

    def _setup_languages(self):
        """Setup Tree-sitter languages"""
        self._register_language("java")
        self._register_language("javascript", ["js"])
        self._register_language("typescript", ["ts"])
        self._register_language("tsx")
        self._register_language("python", ["py"])
        self._register_language("go")
        self._register_language("rust", ["rs"])
        self._register_language("c")
        self._register_language("cpp")
        self._register_language("csharp", ["cs", "c_sharp"])
        self._register_language("kotlin")
        self._register_language("ruby", ["rb"])
        self._register_language("php")

    def resolve(self, language: str) -> str:
        """
        Canonical language name for an identifier or alias.

        Raises:
            UnsupportedLanguageError: If the identifier is not registered
        """
        name = self._aliases.get(language.strip().lower())
        if name is None:
            raise UnsupportedLanguageError(language)
        return name

    def _load_language(self, name: str) -> object:
        lang = self._languages.get(name)
        if lang is not None:
            return lang

        try:
            lang = get_language(name)
        except Exception as e:
            logger.warning("grammar_load_failed", language=name, error=str(e))
            raise GrammarUnavailableError(name, str(e)) from e

        self._languages[name] = lang
        logger.debug("grammar_loaded", language=name)
        return lang

    def get_parser(self, language: str) -> Parser:
        """
        Get parser for the specified language.

        Args:
            language: Language name or alias (java, js, typescript, ...)

        Returns:
            Parser instance

        Raises:
            UnsupportedLanguageError: Unknown language identifier
            GrammarUnavailableError: Known language whose grammar failed to load
        """
        name = self.resolve(language)

        if name in self._parsers:
            return self._parsers[name]

        parser = Parser(self._load_language(name))
        self._parsers[name] = parser
        return parser

    def check(self, language: str) -> str:
        """Load the grammar now and return the canonical name."""
        name = self.resolve(language)
        self._load_language(name)
        return name

    def supports_language(self, language: str) -> bool:
        """Check if language is supported"""
        return language.strip().lower() in self._aliases

    @property
    def supported_languages(self) -> list[str]:
        return sorted(set(self._aliases.values()))

    @property
    def aliases(self) -> dict[str, list[str]]:
        """Canonical name -> aliases"""
        result: dict[str, list[str]] = {name: [] for name in self.supported_languages}
        for alias, name in self._aliases.items():
            if alias != name:
                result[name].append(alias)
        return {name: sorted(values) for name, values in result.items()}


# Global registry instance
_registry: ParserRegistry | None = None


def get_registry() -> ParserRegistry:
    """Get global parser registry instance"""
    global _registry
    if _registry is None:
        _registry = ParserRegistry()
    return _registry
