"""Reusable sample records and the pool that recycles them."""
from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Iterator, List, Optional, Union

logger = logging.getLogger(__name__)

DEFAULT_LABEL_CAPACITY = 1024

LabelLike = Union[bytes, bytearray, memoryview, str]


class Sample:
    """One measurement plus its classification flags.

    The label lives in an owned, fixed-capacity buffer with a separate used
    length.  Re-initializing overwrites the front of the buffer in place; the
    buffer only grows when a label is longer than its current capacity.
    ``is_partial`` belongs to the caller; nothing in this package touches it.
    """

    def __init__(
        self,
        label: LabelLike = b"",
        value: float = 0.0,
        is_warm: bool = False,
        is_partial: bool = False,
        label_capacity: int = 0,
    ) -> None:
        self._buf = bytearray(label_capacity)
        self._len = 0
        self._set_label(label)
        self.value = value
        self.is_warm = is_warm
        self.is_partial = is_partial

    def init_cold(self, label: LabelLike, value: float) -> None:
        self._set_label(label)
        self.value = value
        self.is_warm = False

    def init_warm(self, label: LabelLike, value: float) -> None:
        self._set_label(label)
        self.value = value
        self.is_warm = True

    @property
    def label(self) -> bytes:
        return bytes(self._buf[: self._len])

    @property
    def label_text(self) -> str:
        # labels are arbitrary bytes; undecodable ones map to lone surrogates
        return self._buf[: self._len].decode("utf-8", errors="surrogateescape")

    @property
    def label_buffer(self) -> bytearray:
        return self._buf

    @property
    def label_capacity(self) -> int:
        return len(self._buf)

    def _set_label(self, label: LabelLike) -> None:
        if isinstance(label, str):
            label = label.encode("utf-8")
        elif isinstance(label, memoryview):
            label = label.cast("B")
        n = len(label)
        if n > len(self._buf):
            self._buf.extend(bytes(n - len(self._buf)))
        self._buf[:n] = label
        self._len = n

    def __repr__(self) -> str:
        return (
            f"Sample(label={self.label!r}, value={self.value!r}, "
            f"is_warm={self.is_warm!r}, is_partial={self.is_partial!r})"
        )


class SamplePool:
    """Thread-safe free list of :class:`Sample` objects.

    ``acquire`` hands out a recycled sample when one is idle, otherwise a new
    one.  ``release`` does not clear the sample; the next ``init_cold`` or
    ``init_warm`` overwrites it.
    """

    def __init__(self, label_capacity: int = DEFAULT_LABEL_CAPACITY, max_size: Optional[int] = None):
        if label_capacity < 0:
            raise ValueError("label_capacity must be non-negative")
        if max_size is not None and max_size < 0:
            raise ValueError("max_size must be non-negative")
        self.label_capacity = label_capacity
        self.max_size = max_size
        self._free: List[Sample] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._free)

    def acquire(self) -> Sample:
        with self._lock:
            if self._free:
                return self._free.pop()
        logger.debug("Sample pool empty, allocating sample with %d byte label", self.label_capacity)
        return Sample(label_capacity=self.label_capacity)

    def release(self, sample: Sample) -> None:
        with self._lock:
            if self.max_size is not None and len(self._free) >= self.max_size:
                return
            self._free.append(sample)

    @contextmanager
    def sample(self) -> Iterator[Sample]:
        item = self.acquire()
        try:
            yield item
        finally:
            self.release(item)
