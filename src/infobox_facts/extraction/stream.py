# ABOUTME: Forward-only character stream over a text source with marker search helpers
# ABOUTME: End of stream is signalled by the empty string, never by an exception

import bz2
import io
from pathlib import Path
from typing import TextIO

END_OF_STREAM = ""


class CharacterStream:
    """Reads a text source one character at a time, buffering in chunks.

    I/O errors of the underlying source propagate to the caller.
    """

    def __init__(self, source: TextIO, chunk_size: int = 1 << 16):
        self._source = source
        self._chunk_size = chunk_size
        self._buffer = ""
        self._position = 0
        self._consumed = 0

    @classmethod
    def from_text(cls, text: str) -> "CharacterStream":
        return cls(io.StringIO(text))

    @classmethod
    def open(cls, path: Path | str) -> "CharacterStream":
        """Open a UTF-8 file; files ending in .bz2 are decompressed on the fly."""
        path = Path(path)
        if path.suffix == ".bz2":
            return cls(bz2.open(path, "rt", encoding="utf-8"))
        return cls(open(path, encoding="utf-8"))

    @property
    def consumed(self) -> int:
        """Number of characters read so far."""
        return self._consumed

    def read(self) -> str:
        """Return the next character, or END_OF_STREAM."""
        if self._position >= len(self._buffer):
            self._buffer = self._source.read(self._chunk_size)
            self._position = 0
            if not self._buffer:
                return END_OF_STREAM
        char = self._buffer[self._position]
        self._position += 1
        self._consumed += 1
        return char

    def read_to(self, *stops: str) -> str:
        """Read up to and including the first stop character; return the text before it."""
        chars: list[str] = []
        while True:
            char = self.read()
            if char == END_OF_STREAM or char in stops:
                return "".join(chars)
            chars.append(char)

    def find_ignore_case(self, *markers: str) -> int:
        """Advance past the next occurrence of any marker, ignoring case.

        Returns:
            Index of the marker that was found, or -1 at end of stream
        """
        lowered = [marker.lower() for marker in markers]
        width = max(len(marker) for marker in lowered)
        window = ""
        while True:
            char = self.read()
            if char == END_OF_STREAM:
                return -1
            window = (window + char.lower())[-width:]
            for index, marker in enumerate(lowered):
                if window.endswith(marker):
                    return index

    def close(self) -> None:
        self._source.close()

    def __enter__(self) -> "CharacterStream":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
