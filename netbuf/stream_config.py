from dataclasses import dataclass
from typing import Optional

DEFAULT_FILL_SIZE = 8192 # in bytes
DEFAULT_SELECT_TIMEOUT = None # block until the channel is writable

@dataclass
class StreamConfig:
    fill_size: int = DEFAULT_FILL_SIZE
    select_timeout: Optional[float] = DEFAULT_SELECT_TIMEOUT
    max_input_errors: Optional[int] = None # None keeps every captured error
    debug: bool = False

    def __post_init__(self):
        if self.fill_size <= 0:
            raise ValueError("fill_size must be positive")
        if self.select_timeout is not None and self.select_timeout < 0:
            raise ValueError("select_timeout must not be negative")
        if self.max_input_errors is not None and self.max_input_errors < 1:
            raise ValueError("max_input_errors must be positive")
