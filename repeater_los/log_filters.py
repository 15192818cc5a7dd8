import logging

import numpy as np


class TruncatingFilter(logging.Filter):
    """
    Shortens long log arguments.

    Numpy arrays are summarised by shape and range instead of being
    rendered element by element.
    """

    def __init__(self, name: str = "", max_length: int = 250):
        super().__init__(name)
        self.max_length = max_length

    def _shorten(self, arg):
        if isinstance(arg, np.ndarray) and arg.size > 0 and arg.dtype.kind in "fiu":
            return (
                f"<ndarray shape={arg.shape} "
                f"min={arg.min():.2f} max={arg.max():.2f}>"
            )
        s_arg = str(arg)
        if len(s_arg) > self.max_length:
            return s_arg[: self.max_length] + "..."
        return arg

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.args, tuple) and record.args:
            record.args = tuple(self._shorten(arg) for arg in record.args)
        elif isinstance(record.msg, str) and len(record.msg) > self.max_length:
            # For f-strings or literals
            record.msg = record.msg[: self.max_length] + "..."
        return True
