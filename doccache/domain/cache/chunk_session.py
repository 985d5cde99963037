"""
Chunk Session

Eagerly partitioned, snapshot-isolated chunk iteration.
"""

from typing import Any, Iterator, Sequence, Tuple

from .exceptions import InvalidArgumentError
from .value_objects import SessionChunk


def validate_chunk_size(size: Any) -> int:
    """Check chunk size is a positive integer."""
    if isinstance(size, bool) or not isinstance(size, int):
        raise InvalidArgumentError("size", size, "chunk size must be an integer")
    if size <= 0:
        raise InvalidArgumentError("size", size, "chunk size must be positive")
    return size


class ChunkSession:
    """
    Precomputed partition of a record snapshot into fixed-size chunks.

    All chunks are built at construction time from a copy of the input, so
    later cache mutations never affect a session. Each call to
    get_iterator() returns an independent cursor over the shared chunks.
    """

    def __init__(self, records: Sequence[Any], size: int):
        size = validate_chunk_size(size)
        data = tuple(records)

        chunks = []
        for i in range(0, len(data), size):
            chunk = data[i : i + size]
            chunks.append(
                SessionChunk(chunk=chunk, total=len(data), current=i + len(chunk))
            )

        self._chunks: Tuple[SessionChunk, ...] = tuple(chunks)
        self.size = size
        self.total = len(data)

    @property
    def chunks(self) -> Tuple[SessionChunk, ...]:
        """All chunks of the session in partition order."""
        return self._chunks

    def get_iterator(self) -> Iterator[SessionChunk]:
        """Get a fresh forward-only iterator starting from the first chunk."""
        return iter(self._chunks)

    def __iter__(self) -> Iterator[SessionChunk]:
        return self.get_iterator()

    def __len__(self) -> int:
        return len(self._chunks)
