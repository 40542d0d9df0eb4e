"""Fixed-size, overlapping text chunker for RAG indexing."""

import math
from collections.abc import Iterator


class TextChunks:
    """Lazy, restartable sequence of overlapping substrings of a text.

    Each call to ``iter()`` starts again from offset 0, so the same object
    can be consumed more than once.
    """

    def __init__(self, text: str, size: int, overlap: int):
        self.text = text
        self.size = size
        self.overlap = overlap
        self.step = size - overlap

    def __iter__(self) -> Iterator[str]:
        for start in range(0, len(self.text), self.step):
            yield self.text[start : start + self.size]

    def __len__(self) -> int:
        return math.ceil(len(self.text) / self.step)

    def __repr__(self) -> str:
        return (
            f"TextChunks(chars={len(self.text)}, size={self.size}, "
            f"overlap={self.overlap}, chunks={len(self)})"
        )


def chunk_text(text: str, size: int = 1000, overlap: int = 150) -> TextChunks:
    """Split text into chunks of ``size`` characters overlapping by ``overlap``.

    Chunks start at offsets ``0, size-overlap, 2*(size-overlap), ...`` until
    the offset reaches the end of the text. The last chunk may be shorter.

    Args:
        text: The text to split.
        size: Maximum chunk length in characters.
        overlap: Characters shared by consecutive chunks.

    Returns:
        A lazy iterable of chunk strings.

    Raises:
        ValueError: If the parameters would not advance through the text.
    """
    if size <= 0:
        raise ValueError(f"chunk size must be positive, got {size}")
    if overlap < 0:
        raise ValueError(f"chunk overlap must not be negative, got {overlap}")
    if overlap >= size:
        raise ValueError(
            f"chunk overlap ({overlap}) must be smaller than chunk size ({size})"
        )
    return TextChunks(text, size, overlap)
