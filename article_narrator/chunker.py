"""Split article text into word-aligned chunks of bounded size."""

from article_narrator.errors import ChunkingError


def split_into_chunks(text: str, max_size: int) -> list[str]:
    """Split text into chunks of at most max_size characters without breaking words.

    Words are whitespace-separated runs. A single word longer than max_size
    is emitted whole as its own chunk, so that chunk exceeds the bound.
    Empty or whitespace-only text yields no chunks.
    """
    if isinstance(max_size, bool) or not isinstance(max_size, int) or max_size <= 0:
        raise ChunkingError(f"max chunk size must be a positive integer, got {max_size!r}")

    chunks = []
    current = ""

    for word in text.split():
        if len((current + " " + word).strip()) > max_size:
            if current:
                chunks.append(current.strip())
                current = word
            else:
                # Oversized single word
                chunks.append(word)
                current = ""
        else:
            current += " " + word

    if current.strip():
        chunks.append(current.strip())

    return chunks
