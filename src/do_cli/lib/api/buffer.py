"""
Growable byte buffer for streamed HTTP response bodies
"""
import logging

from ..errors import ResourceExhaustedError

logger = logging.getLogger("do_cli.lib.api.buffer")

INITIAL_CAPACITY = 1024


class ResponseBuffer:
    """
    Accumulates body chunks as they arrive from the transport.

    Storage grows by doubling, starting at INITIAL_CAPACITY, so n bytes cost
    O(log n) resizes. One byte past the content is always kept as NUL.
    """

    def __init__(self):
        self._data = bytearray()
        self._size = 0

    @property
    def size(self) -> int:
        return self._size

    @property
    def capacity(self) -> int:
        return len(self._data)

    def __len__(self) -> int:
        return self._size

    def append(self, chunk: bytes) -> int:
        """
        Append a chunk to the buffer

        Args:
            chunk: Raw bytes from the transport

        Returns:
            Number of bytes appended

        Raises:
            ResourceExhaustedError: If storage could not be grown
        """
        incoming = len(chunk)
        needed = self._size + incoming + 1
        if needed > self.capacity:
            new_capacity = self.capacity * 2 if self.capacity else INITIAL_CAPACITY
            while new_capacity < needed:
                new_capacity *= 2
            try:
                self._data.extend(bytes(new_capacity - self.capacity))
            except MemoryError as e:
                logger.error(f"Failed to grow response buffer to {new_capacity} bytes")
                self.release()
                raise ResourceExhaustedError(
                    f"Could not allocate {new_capacity} bytes for response body"
                ) from e

        self._data[self._size:self._size + incoming] = chunk
        self._size += incoming
        self._data[self._size] = 0
        return incoming

    def getvalue(self) -> bytes:
        """Assembled content, without the terminator"""
        return bytes(self._data[:self._size])

    @property
    def terminated(self) -> bytes:
        """Assembled content followed by the NUL terminator"""
        return self.getvalue() + b"\0"

    def clear(self) -> None:
        """Reset the content, keeping allocated storage for reuse"""
        self._size = 0
        if self._data:
            self._data[0] = 0

    def release(self) -> None:
        """Drop content and storage"""
        self._data = bytearray()
        self._size = 0
