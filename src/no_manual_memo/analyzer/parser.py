"""Tree-sitter parser front end for JavaScript / TypeScript / TSX sources."""
from pathlib import Path
from typing import Union
from tree_sitter import Language, Parser, Tree
import tree_sitter_javascript as tsjavascript
import tree_sitter_typescript as tstypescript


class LanguageParser:
    """Parser for the React source dialects using tree-sitter v0.22+ API."""

    SUPPORTED_LANGUAGES = {
        '.js': 'javascript',
        '.jsx': 'javascript',
        '.mjs': 'javascript',
        '.cjs': 'javascript',
        '.ts': 'typescript',
        '.mts': 'typescript',
        '.cts': 'typescript',
        '.tsx': 'tsx',
    }

    def __init__(self, language: str):
        """Initialize parser for given language (javascript, typescript, tsx).

        Args:
            language: One of 'javascript', 'typescript', 'tsx'

        Raises:
            ValueError: If language is not supported
        """
        self.language = language
        self.parser = self._create_parser()

    def _create_parser(self) -> Parser:
        """Build a Parser bound to the grammar for ``self.language``.

        The grammar packages return PyCapsules that must be wrapped with
        ``Language()`` before handing them to ``Parser``.

        Raises:
            ValueError: If language is not supported
        """
        if self.language == 'javascript':
            lang = Language(tsjavascript.language())
        elif self.language == 'typescript':
            lang = Language(tstypescript.language_typescript())
        elif self.language == 'tsx':
            lang = Language(tstypescript.language_tsx())
        else:
            raise ValueError(f"Unsupported language: {self.language}")

        return Parser(lang)

    def parse_source(self, source_code: Union[str, bytes]) -> Tree:
        """Parse in-memory source and return the tree-sitter Tree."""
        if isinstance(source_code, str):
            source_code = source_code.encode('utf-8')
        return self.parser.parse(source_code)

    @classmethod
    def is_supported(cls, file_path: Union[str, Path]) -> bool:
        return Path(file_path).suffix.lower() in cls.SUPPORTED_LANGUAGES

    @classmethod
    def from_file_extension(cls, file_path: Union[str, Path]) -> 'LanguageParser':
        """Create parser based on file extension.

        Args:
            file_path: Path to determine language from

        Raises:
            ValueError: If the extension is not a JavaScript/TypeScript one
        """
        extension = Path(file_path).suffix.lower()

        language = cls.SUPPORTED_LANGUAGES.get(extension)
        if language is None:
            raise ValueError(f"Unsupported file extension: {extension or str(file_path)}")
        return cls(language)
