"""Clock — wall-clock implementation of the core Clock protocol."""

import time


class SystemClock:
    """Unix seconds from the host clock."""

    def now(self) -> int:
        return int(time.time())
