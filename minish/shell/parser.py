"""
Command Line Tokenizer Module

Splits one line of input into an argument vector in place:
- The trailing newline is removed
- Everything from the first comment marker on is discarded
- Every space becomes a token boundary

Consecutive spaces are not merged: N spaces in a row produce N-1
empty tokens between their neighbours.

Version: 1.0.0
"""

from dataclasses import dataclass
from typing import Iterator, List


NUL = 0x00
NEWLINE = 0x0A
SPACE = 0x20


class LineBuffer:
    """
    Fixed-capacity byte buffer holding one line of input.
    
    The buffer is allocated once and overwritten by every fill().
    Content ends at ``length``; a NUL byte is kept after it.
    
    Example:
        >>> buf = LineBuffer(256)
        >>> buf.fill(b"ls -l\\n")
        6
        >>> buf.strip_newline()
        >>> buf.text()
        'ls -l'
    """
    
    def __init__(self, capacity: int = 256):
        if capacity < 1:
            raise ValueError("Line buffer capacity must be positive")
        self._capacity = capacity
        self._data = bytearray(capacity + 1)
        self._length = 0
        self._generation = 0
    
    @property
    def capacity(self) -> int:
        return self._capacity
    
    @property
    def length(self) -> int:
        """Number of content bytes in the current line."""
        return self._length
    
    @property
    def generation(self) -> int:
        """Incremented every time a new line is loaded."""
        return self._generation
    
    @property
    def data(self) -> bytearray:
        return self._data
    
    def fill(self, chunk: bytes) -> int:
        """
        Load a new line, replacing the previous one.
        
        A NUL byte inside the chunk ends the line there.
        
        Args:
            chunk: Raw bytes as read from the source
        
        Returns:
            Number of bytes copied
        
        Raises:
            ValueError: If the chunk does not fit
        """
        count = len(chunk)
        if count > self._capacity:
            raise ValueError(
                f"Line of {count} bytes exceeds buffer capacity {self._capacity}"
            )
        
        self._data[:count] = chunk
        self._data[count] = NUL
        
        end = self._data.find(NUL, 0, count)
        self._length = count if end < 0 else end
        self._generation += 1
        return count
    
    def strip_newline(self) -> None:
        """Remove a trailing newline, if the line ends with one."""
        if self._length and self._data[self._length - 1] == NEWLINE:
            self._length -= 1
            self._data[self._length] = NUL
    
    def find(self, byte: int) -> int:
        """Index of the first occurrence of byte in the line, or -1."""
        return self._data.find(byte, 0, self._length)
    
    def truncate(self, index: int) -> None:
        """End the line at index."""
        if 0 <= index < self._length:
            self._data[index] = NUL
            self._length = index
    
    def text(self) -> str:
        return decode(self._data[:self._length])


def decode(raw: bytes) -> str:
    """Decode bytes from input so that they re-encode to the same bytes."""
    return bytes(raw).decode('utf-8', 'surrogateescape')


@dataclass(frozen=True)
class ArgumentVector:
    """
    View of a tokenized LineBuffer.
    
    Holds the start offset of every token. Tokens end at the NUL
    written in place of the following space, or at the end of the line.
    Only valid until the buffer is filled again.
    """
    buffer: LineBuffer
    offsets: List[int]
    generation: int
    
    @property
    def argc(self) -> int:
        return len(self.offsets)
    
    @property
    def command(self) -> str:
        """The zeroth token (possibly empty)."""
        return self[0]
    
    def _check_current(self) -> None:
        if self.buffer.generation != self.generation:
            raise RuntimeError("Argument vector used after its line was replaced")
    
    def __len__(self) -> int:
        return self.argc
    
    def __getitem__(self, index: int) -> str:
        self._check_current()
        if index < 0:
            index += self.argc
        if not 0 <= index < self.argc:
            raise IndexError("argument index out of range")
        
        start = self.offsets[index]
        if index + 1 < self.argc:
            end = self.offsets[index + 1] - 1
        else:
            end = self.buffer.length
        return decode(self.buffer.data[start:end])
    
    def __iter__(self) -> Iterator[str]:
        for index in range(self.argc):
            yield self[index]
    
    def tokens(self) -> List[str]:
        return list(self)


class LineTokenizer:
    """
    Destructive tokenizer for a LineBuffer.
    
    Example:
        >>> tokenizer = LineTokenizer()
        >>> buf = LineBuffer()
        >>> buf.fill(b"ls -l # list files")
        18
        >>> tokenizer.tokenize(buf).tokens()
        ['ls', '-l', '']
    """
    
    def __init__(self, comment_char: str = '#'):
        self._comment = ord(comment_char)
    
    def tokenize(self, buffer: LineBuffer) -> ArgumentVector:
        """
        Split the buffer's line into tokens in place.
        
        The newline, if any, must already have been stripped.
        
        Args:
            buffer: Buffer holding one line; it is modified
        
        Returns:
            Argument vector over the buffer (argc is always >= 1)
        """
        comment = buffer.find(self._comment)
        if comment >= 0:
            buffer.truncate(comment)
        
        data = buffer.data
        offsets = [0]
        for index in range(buffer.length):
            if data[index] == SPACE:
                data[index] = NUL
                offsets.append(index + 1)
        
        return ArgumentVector(buffer, offsets, buffer.generation)
