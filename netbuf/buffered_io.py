import logging
import selectors
from collections import deque
from typing import Optional

from netbuf.channel import Channel
from netbuf.stream_config import StreamConfig
from netbuf.util.byte_buffer import ByteBuffer, BytesLike

logger = logging.getLogger('netbuf.buffered_io')

# BufferedStream sits between a readiness loop and a non-blocking channel.
#
# Instead of reading from the channel directly, call fill() when the channel is
# readable (it appends pending input to the input buffer) and then
# read_available() to take data out of that buffer. Likewise, enqueue() stages
# data in the output buffer and send_pending() or wait_for_pending_sends()
# actually puts it on the wire. fill() and send_pending() each make at most one
# non-blocking channel call, so they are safe to drive from select/poll.
class BufferedStream:
    def __init__(self, channel: Channel, config: Optional[StreamConfig] = None):
        self.channel = channel
        self.config = config if config is not None else StreamConfig()
        self.input = ByteBuffer()
        self.output = ByteBuffer()
        self.input_errors = deque(maxlen=self.config.max_input_errors)
        self.output_errors = deque(maxlen=self.config.max_input_errors)

    ###########################################
    # Input Interface (Reading Data)          #
    ###########################################

    def fill(self, max_bytes: Optional[int] = None) -> int:
        """
        Try to receive up to `max_bytes` from the channel and append it to the
        input buffer. Returns the number of bytes received; 0 means nothing was
        available or the peer has closed (see input_errors).
        """
        if max_bytes is None:
            max_bytes = self.config.fill_size
        # drop what has already been read before taking more
        self.input.consume()
        try:
            data = self.channel.receive(max_bytes)
        except EOFError as e:
            self.input_errors.append(e)
            logger.info(f"End of stream on fd {self._describe()}: {e}")
            return 0
        self.input.append(data)
        if self.config.debug:
            logger.debug(f"[fill] <- fd {self._describe()}: {len(data)} bytes, {self.input.available()} available")
        return len(data)

    def read_available(self, length: Optional[int] = None) -> bytes:
        """Read up to `length` bytes from the input buffer, everything available by default"""
        return self.input.read(length if length is not None else self.available())

    def available(self) -> int:
        return self.input.available()

    def at_eof(self) -> bool:
        """Check if the peer has closed its side at some point"""
        return len(self.input_errors) > 0

    ###########################################
    # Output Interface (Writing Data)         #
    ###########################################

    # stage data for sending, nothing goes on the wire here
    def enqueue(self, data: BytesLike) -> ByteBuffer:
        return self.output.append(data)

    def has_pending_sends(self) -> bool:
        return self.output.length() > 0

    def send_pending(self) -> bool:
        """
        Send as much pending output as the channel accepts in one call.
        Returns True if any data was sent.
        """
        if self.output.length() == 0:
            return False
        sent = self.channel.send(self.output.snapshot())
        self.output.consume(sent)
        if self.config.debug:
            logger.debug(f"[send_pending] -> fd {self._describe()}: {sent} bytes, {self.output.length()} pending")
        return sent > 0

    def wait_for_pending_sends(self) -> None:
        """Block until the output buffer has been completely sent"""
        self.send_pending()
        if self.output.length() == 0:
            return
        with selectors.DefaultSelector() as selector:
            selector.register(self.channel.writable_fileno(), selectors.EVENT_WRITE)
            while self.output.length() > 0:
                events = selector.select(self.config.select_timeout)
                # timed out, wait again
                if not events:
                    continue
                self.send_pending()

    def _describe(self) -> str:
        return str(self.channel.fileno())
