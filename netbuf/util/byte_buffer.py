from typing import Optional, Union

BytesLike = Union[bytes, bytearray, memoryview, str]


def _as_bytes(data: BytesLike) -> bytes:
    # bytes(n) would silently produce n zero bytes
    if isinstance(data, int):
        raise TypeError(f"expected bytes-like or str, got {type(data).__name__}")
    # text is taken as its utf-8 bytes, everything else verbatim
    if isinstance(data, str):
        return data.encode('utf-8')
    return bytes(data)


# ByteBuffer is a growable byte sequence with a read cursor. Reads never remove
# data, only consume() drops the already-read prefix.
class ByteBuffer:
    def __init__(self, content: BytesLike = b''):
        self.content = bytearray(_as_bytes(content))
        # bytes already consumed by reads from the front
        self.position = 0

    def __len__(self):
        return len(self.content)

    def __bytes__(self):
        return self.snapshot()

    def __repr__(self):
        return f"ByteBuffer(length={self.length()}, position={self.position})"

    def length(self) -> int:
        """Return the length of the buffer's content"""
        return len(self.content)

    def available(self) -> int:
        """Return the number of bytes between the read position and the end"""
        return self.length() - self.position

    def snapshot(self) -> bytes:
        """Return a copy of the content, detached from the buffer"""
        return bytes(self.content)

    def is_empty(self) -> bool:
        return len(self.content) == 0

    def at_end(self) -> bool:
        """Check if subsequent reads would return nothing"""
        return self.position >= self.length()

    def reset(self) -> None:
        """Move the read position back to the start"""
        self.position = 0

    def clear(self) -> None:
        """Drop all content and reset the read position"""
        self.content = bytearray()
        self.position = 0

    def consume(self, count: Optional[int] = None) -> 'ByteBuffer':
        """
        Discard the first `count` bytes, the current position by default.
        Keeps long-lived buffers from retaining everything they have ever read.
        """
        if count is None:
            count = self.position
        if count >= self.length():
            # common case: everything has been read
            self.clear()
        elif count > 0:
            del self.content[:count]
            self.position -= count
            if self.position < 0:
                self.position = 0
        return self

    def append(self, data: BytesLike) -> 'ByteBuffer':
        """Append data to the tail, the read position is not altered"""
        self.content += _as_bytes(data)
        return self

    def write(self, *data: BytesLike) -> 'ByteBuffer':
        """Append each chunk literally as raw bytes"""
        chunks = [_as_bytes(datum) for datum in data]
        for chunk in chunks:
            self.content += chunk
        return self

    def read(self, count: Optional[int] = None) -> bytes:
        """
        Read up to `count` bytes from the read position and advance it.
        With no count, everything that remains is returned.
        """
        if count is None:
            count = self.length()
        if self.position + count > self.length():
            count = self.length() - self.position
        if count <= 0:
            return b''
        start = self.position
        self.position += count
        return bytes(self.content[start:self.position])
