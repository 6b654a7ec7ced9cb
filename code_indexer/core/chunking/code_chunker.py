"""
Language-aware code chunking using RecursiveCharacterTextSplitter.

Splits a single file's text along language-specific boundaries (functions,
classes, blocks) and annotates every chunk with its line span and kind.

Dependencies: langchain_text_splitters
System role: First stage of the indexing pipeline
"""

import logging
import re

from langchain_text_splitters import Language, RecursiveCharacterTextSplitter

from code_indexer.core.exceptions import ChunkingError
from code_indexer.models.chunk import Chunk, ChunkKind

logger = logging.getLogger(__name__)

EXTENSION_LANGUAGES: dict[str, Language] = {
    "py": Language.PYTHON,
    "pyi": Language.PYTHON,
    "js": Language.JS,
    "jsx": Language.JS,
    "mjs": Language.JS,
    "cjs": Language.JS,
    "ts": Language.TS,
    "tsx": Language.TS,
    "go": Language.GO,
    "java": Language.JAVA,
    "kt": Language.KOTLIN,
    "kts": Language.KOTLIN,
    "rb": Language.RUBY,
    "rs": Language.RUST,
    "scala": Language.SCALA,
    "swift": Language.SWIFT,
    "php": Language.PHP,
    "proto": Language.PROTO,
    "c": Language.C,
    "h": Language.C,
    "cpp": Language.CPP,
    "cc": Language.CPP,
    "cxx": Language.CPP,
    "hpp": Language.CPP,
    "cs": Language.CSHARP,
    "lua": Language.LUA,
    "hs": Language.HASKELL,
    "sol": Language.SOL,
    "md": Language.MARKDOWN,
    "markdown": Language.MARKDOWN,
    "rst": Language.RST,
    "tex": Language.LATEX,
    "html": Language.HTML,
    "htm": Language.HTML,
}

_MODIFIERS = re.compile(
    r"^(?:(?:export|default|pub(?:\([\w:]+\))?|public|private|protected|internal|static|final|"
    r"abstract|sealed|open|override|data|async|unsafe|extern|inline|virtual|declare)\s+)+"
)
_FUNCTION_START = re.compile(
    r"^(?:def|function\*?|func|fn|fun|sub)\b"
    r"|^(?:const|let|var)\s+\w+\s*=\s*(?:async\s*)?(?:\([^)]*\)|\w+)\s*=>"
)
_CLASS_START = re.compile(
    r"^(?:class|interface|struct|enum|trait|impl|module|object|record)\b"
    r"|^type\s+\w+\s+(?:struct|interface)\b"
)
_SKIP_PREFIXES = ("#", "//", "/*", "*", "@")


class CodeChunker:
    """Split source files into line-annotated chunks."""

    def __init__(self, chunk_size: int = 1500, chunk_overlap: int = 150) -> None:
        """
        Initialize chunker with splitter configuration.

        Args:
            chunk_size: Maximum chunk size in characters
            chunk_overlap: Overlap between consecutive chunks

        Raises:
            ValueError: When overlap is not smaller than chunk size
        """
        if chunk_overlap >= chunk_size:
            raise ValueError("chunk_overlap must be smaller than chunk_size")
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap
        self._splitters: dict[Language | None, RecursiveCharacterTextSplitter] = {}

    def _get_splitter(self, language: Language | None) -> RecursiveCharacterTextSplitter:
        if language not in self._splitters:
            if language is None:
                self._splitters[language] = RecursiveCharacterTextSplitter(
                    chunk_size=self.chunk_size,
                    chunk_overlap=self.chunk_overlap,
                    add_start_index=True,
                )
            else:
                self._splitters[language] = RecursiveCharacterTextSplitter.from_language(
                    language=language,
                    chunk_size=self.chunk_size,
                    chunk_overlap=self.chunk_overlap,
                    add_start_index=True,
                )
        return self._splitters[language]

    def generate_chunks(self, file_content: str, file_extension: str) -> list[Chunk]:
        """
        Split one file into chunks.

        Args:
            file_content: Full text of the file
            file_extension: Extension hint, with or without leading dot

        Returns:
            list[Chunk]: Ordered chunks; empty for blank or binary content

        Raises:
            ChunkingError: When the splitter itself fails
        """
        if not file_content or not file_content.strip():
            return []
        if "\x00" in file_content:
            logger.debug("Skipping binary content", extra={"extension": file_extension})
            return []

        language = EXTENSION_LANGUAGES.get(file_extension.lstrip(".").lower())
        try:
            documents = self._get_splitter(language).create_documents([file_content])
        except Exception as e:
            raise ChunkingError(
                f"Failed to split content: {e}",
                details={"extension": file_extension},
            ) from e

        pieces = [doc for doc in documents if doc.page_content.strip()]
        whole_file = len(pieces) == 1

        chunks = []
        search_from = 0
        for doc in pieces:
            text = doc.page_content
            offset = doc.metadata.get("start_index", -1)
            if offset is None or offset < 0:
                offset = file_content.find(text, search_from)

            if offset >= 0:
                start_line = file_content.count("\n", 0, offset) + 1
                end_line = start_line + text.count("\n")
                search_from = offset + 1
            else:
                start_line = end_line = None

            chunks.append(
                Chunk(
                    content=text,
                    start_line=start_line,
                    end_line=end_line,
                    kind=self._classify(text, whole_file),
                )
            )
        return chunks

    @staticmethod
    def _classify(text: str, whole_file: bool) -> ChunkKind:
        """Kind from the first code line of the chunk."""
        for line in text.splitlines():
            stripped = line.strip()
            if not stripped or stripped.startswith(_SKIP_PREFIXES):
                continue
            head = _MODIFIERS.sub("", stripped)
            if _FUNCTION_START.match(head):
                return ChunkKind.FUNCTION
            if _CLASS_START.match(head):
                return ChunkKind.CLASS
            break
        return ChunkKind.FILE if whole_file else ChunkKind.BLOCK
