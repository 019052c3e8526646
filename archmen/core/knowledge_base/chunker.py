"""
Sliding-window text chunker.

Splits raw text into fixed-size character windows where each window
re-reads the last `overlap` characters of its predecessor. No sentence
or paragraph awareness: windows may split words.

Dependencies: None (pure domain layer)
System role: First stage of the knowledge base ingestion pipeline
"""

from dataclasses import dataclass

from archmen.core.exceptions import ChunkingConfigurationError


@dataclass(frozen=True)
class TextChunk:
    """One window of the source text."""

    index: int
    text: str
    start: int
    end: int
    overlap: int

    @property
    def size(self) -> int:
        return len(self.text)


class SlidingWindowChunker:
    """Split text into overlapping fixed-size windows."""

    def __init__(self, chunk_size: int = 1000, overlap: int = 200) -> None:
        """
        Initialize chunker with window configuration.

        Args:
            chunk_size: Window size in characters
            overlap: Characters shared with the previous window

        Raises:
            ChunkingConfigurationError: When the window could not advance
        """
        if chunk_size <= 0:
            raise ChunkingConfigurationError(
                "Chunk size must be a positive number of characters",
                chunk_size=chunk_size,
                overlap=overlap,
            )
        if overlap < 0 or overlap >= chunk_size:
            raise ChunkingConfigurationError(
                "Chunk overlap must be at least 0 and smaller than the chunk size",
                chunk_size=chunk_size,
                overlap=overlap,
            )
        self.chunk_size = chunk_size
        self.overlap = overlap

    def chunk(self, text: str) -> list[TextChunk]:
        """
        Split text into windows.

        Window i spans [start_i, min(start_i + chunk_size, len)) and the next
        window starts at end_i - overlap. Iteration stops as soon as the next
        start would not move past the current one.

        Args:
            text: Source text

        Returns:
            list[TextChunk]: Windows with contiguous 0-based indices
        """
        chunks: list[TextChunk] = []
        length = len(text)
        start = 0

        while start < length:
            end = min(start + self.chunk_size, length)
            chunks.append(
                TextChunk(
                    index=len(chunks),
                    text=text[start:end],
                    start=start,
                    end=end,
                    overlap=self.overlap if chunks else 0,
                )
            )

            next_start = end - self.overlap
            if next_start <= start:
                break
            start = next_start

        return chunks


def chunk_text(text: str, chunk_size: int = 1000, overlap: int = 200) -> list[TextChunk]:
    """Split text with a one-off SlidingWindowChunker."""
    return SlidingWindowChunker(chunk_size=chunk_size, overlap=overlap).chunk(text)


def reconstruct_text(chunks: list[TextChunk]) -> str:
    """Rebuild the source text by dropping each chunk's overlapping prefix."""
    return "".join(chunk.text[chunk.overlap:] for chunk in chunks)
