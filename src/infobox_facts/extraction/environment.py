# ABOUTME: Scanner for nested {...} / [...] environments and field separators in wiki markup
# ABOUTME: Nested groups are copied verbatim; a size guard bounds both memory and nesting work

from enum import Enum

from infobox_facts.extraction.stream import END_OF_STREAM, CharacterStream

MAX_ENVIRONMENT_SIZE = 4000

_CLOSERS = {"{": "}", "[": "]"}


class Terminator(str, Enum):
    """Why read_environment stopped."""

    END_OF_STREAM = "end_of_stream"
    CLOSE_BRACE = "}"
    CLOSE_BRACKET = "]"
    PIPE = "|"
    OVERFLOW = "overflow"

    @property
    def ends_template(self) -> bool:
        """True if no further fields of the current template can follow."""
        return self in (Terminator.CLOSE_BRACE, Terminator.END_OF_STREAM, Terminator.OVERFLOW)


_TOP_LEVEL = {
    "}": Terminator.CLOSE_BRACE,
    "]": Terminator.CLOSE_BRACKET,
    "|": Terminator.PIPE,
}


def read_environment(stream: CharacterStream, buffer: list[str], limit: int = MAX_ENVIRONMENT_SIZE) -> Terminator:
    """Read characters into buffer until a top-level '}', ']', '|' or end of stream.

    '{' and '[' open nested environments that are appended verbatim, including
    their closing bracket. Inside a nested environment '|' and mismatched
    closers are plain text. When the stream ends inside nested environments
    their closers are appended before END_OF_STREAM is returned.

    The terminating character itself is consumed but not appended.

    Args:
        stream: Source positioned inside the environment
        buffer: Output list the content is appended to, may already hold text
        limit: Maximum buffer length; exceeding it returns OVERFLOW at once

    Returns:
        The terminator that ended the environment
    """
    # Closers still expected, innermost last; bounded by the buffer size
    pending: list[str] = []
    size = sum(len(part) for part in buffer)
    while True:
        if size > limit:
            return Terminator.OVERFLOW
        char = stream.read()
        if char == END_OF_STREAM:
            buffer.extend(reversed(pending))
            return Terminator.END_OF_STREAM
        if char in _CLOSERS:
            pending.append(_CLOSERS[char])
        elif pending:
            if char == pending[-1]:
                pending.pop()
        elif char in _TOP_LEVEL:
            return _TOP_LEVEL[char]
        buffer.append(char)
        size += 1
