import os
import socket
from abc import ABC, abstractmethod


class Channel(ABC):
    """Abstract base class defining the non-blocking duplex transport a BufferedStream drives"""

    @abstractmethod
    def receive(self, max_bytes: int) -> bytes:
        """Receive whatever is available without blocking

        Args:
            max_bytes: Maximum number of bytes to receive

        Returns:
            Received bytes, empty if nothing is available right now

        Raises:
            EOFError: The peer closed the channel in an orderly way
        """
        pass

    @abstractmethod
    def send(self, data: bytes) -> int:
        """Send as much of the data as the channel accepts without blocking

        Args:
            data: Data to be sent

        Returns:
            Number of bytes sent, possibly fewer than offered
        """
        pass

    @abstractmethod
    def fileno(self) -> int:
        """Descriptor watched for read readiness"""
        pass

    def writable_fileno(self) -> int:
        """Descriptor watched for write readiness"""
        return self.fileno()

    @abstractmethod
    def close(self) -> None:
        """Release the underlying transport"""
        pass


# SocketChannel adapts a connected stream socket to the Channel interface.
class SocketChannel(Channel):
    def __init__(self, sock: socket.socket):
        self.socket = sock
        self.socket.setblocking(False)

    def receive(self, max_bytes: int) -> bytes:
        if max_bytes <= 0:
            return b''
        try:
            data = self.socket.recv(max_bytes)
        except BlockingIOError:
            return b''
        # recv returns nothing only when the peer has shut down its side
        if not data:
            raise EOFError("connection closed by peer")
        return data

    def send(self, data: bytes) -> int:
        try:
            return self.socket.send(data)
        except BlockingIOError:
            return 0

    def fileno(self) -> int:
        return self.socket.fileno()

    def close(self) -> None:
        self.socket.close()


# PipeChannel pairs the read end of one pipe with the write end of another.
class PipeChannel(Channel):
    def __init__(self, read_fd: int, write_fd: int):
        self.read_fd = read_fd
        self.write_fd = write_fd
        os.set_blocking(self.read_fd, False)
        os.set_blocking(self.write_fd, False)

    def receive(self, max_bytes: int) -> bytes:
        if max_bytes <= 0:
            return b''
        try:
            data = os.read(self.read_fd, max_bytes)
        except BlockingIOError:
            return b''
        if not data:
            raise EOFError("pipe closed by writer")
        return data

    def send(self, data: bytes) -> int:
        try:
            return os.write(self.write_fd, data)
        except BlockingIOError:
            return 0

    def fileno(self) -> int:
        return self.read_fd

    def writable_fileno(self) -> int:
        return self.write_fd

    def close(self) -> None:
        os.close(self.read_fd)
        os.close(self.write_fd)
