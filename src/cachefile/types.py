"""Shared type aliases."""
from __future__ import annotations

import os
from datetime import datetime
from typing import Callable, Union

PathLike = Union[str, "os.PathLike[str]"]

# Receives each chunk produced by a streaming read, in file order.
DataReceiver = Callable[[bytes], None]

# A point in time: aware/naive datetime or POSIX seconds.
TimeLike = Union[datetime, float, int]

__all__ = ["PathLike", "DataReceiver", "TimeLike"]
