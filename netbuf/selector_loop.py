import logging
import selectors
from typing import Dict, List, Optional

from netbuf.buffered_io import BufferedStream

logger = logging.getLogger('netbuf.selector_loop')

# StreamSelector drives many BufferedStreams from one readiness wait: readable
# streams are filled, writable streams with pending output get send_pending().
# It never blocks on a single stream the way wait_for_pending_sends() does.
class StreamSelector:
    def __init__(self, auto_unregister_on_eof: bool = True):
        self.auto_unregister_on_eof = auto_unregister_on_eof
        self._streams: List[BufferedStream] = []

    def register(self, stream: BufferedStream) -> None:
        if stream in self._streams:
            raise ValueError("Stream is already registered")
        self._streams.append(stream)

    def unregister(self, stream: BufferedStream) -> None:
        self._streams.remove(stream)

    def streams(self) -> List[BufferedStream]:
        return list(self._streams)

    def _interest(self) -> Dict[int, list]:
        """Map each descriptor to [event mask, reading stream, writing stream]"""
        interest = {}
        for stream in self._streams:
            read_fd = stream.channel.fileno()
            interest.setdefault(read_fd, [0, None, None])
            interest[read_fd][0] |= selectors.EVENT_READ
            interest[read_fd][1] = stream
            if stream.has_pending_sends():
                write_fd = stream.channel.writable_fileno()
                interest.setdefault(write_fd, [0, None, None])
                interest[write_fd][0] |= selectors.EVENT_WRITE
                interest[write_fd][2] = stream
        return interest

    def process(self, timeout: Optional[float] = None) -> List[BufferedStream]:
        """
        Wait once for readiness and service every ready stream.
        Returns the streams that received data during this call.
        """
        interest = self._interest()
        if not interest:
            return []
        received = []
        with selectors.DefaultSelector() as selector:
            for fd, (mask, reader, writer) in interest.items():
                selector.register(fd, mask, (reader, writer))
            for key, mask in selector.select(timeout):
                reader, writer = key.data
                if mask & selectors.EVENT_READ and reader is not None:
                    if reader.fill() > 0:
                        received.append(reader)
                    elif self.auto_unregister_on_eof and reader.at_eof():
                        logger.info(f"Unregistering stream on fd {key.fd} after end of stream")
                        self.unregister(reader)
                if mask & selectors.EVENT_WRITE and writer is not None:
                    writer.send_pending()
        return received
