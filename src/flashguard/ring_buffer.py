# Copyright (c) 2026 flashguard contributors
# SPDX-License-Identifier: MIT

"""Preallocated FIFO ring buffer of fixed-shape numpy items."""

import logging
from typing import Tuple

import numpy as np

logger = logging.getLogger(__name__)


class RingBuffer:
    """
    FIFO of equally shaped arrays stored in one preallocated block.

    Items are copied into the slot at the tail; popping only moves the
    head index. When an append finds the buffer full, storage doubles
    and the live items are unrolled into the new block.
    """

    def __init__(self, capacity: int, item_shape: Tuple[int, ...] = (), dtype=np.float64):
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self._data = np.zeros((capacity,) + tuple(item_shape), dtype=dtype)
        self._head = 0
        self._size = 0

    @property
    def capacity(self) -> int:
        return self._data.shape[0]

    @property
    def item_shape(self) -> Tuple[int, ...]:
        return self._data.shape[1:]

    def __len__(self) -> int:
        return self._size

    def _index(self, i: int) -> int:
        if i < 0:
            i += self._size
        if not 0 <= i < self._size:
            raise IndexError("ring buffer index out of range")
        return (self._head + i) % self.capacity

    def __getitem__(self, i: int):
        """Item ``i`` in FIFO order (0 is the oldest). Returns a view."""
        return self._data[self._index(i)]

    def append(self, item) -> None:
        if self._size == self.capacity:
            self._grow()
        tail = (self._head + self._size) % self.capacity
        self._data[tail] = item
        self._size += 1

    def popleft(self):
        """
        Remove the oldest item.

        Returns a view into the freed slot, valid until the next append.
        """
        if self._size == 0:
            raise IndexError("pop from an empty ring buffer")
        item = self._data[self._head]
        self._head = (self._head + 1) % self.capacity
        self._size -= 1
        return item

    def clear(self) -> None:
        self._head = 0
        self._size = 0

    def to_array(self) -> np.ndarray:
        """Copy of the live items in FIFO order, shape (len, *item_shape)."""
        order = (self._head + np.arange(self._size)) % self.capacity
        return self._data[order]

    def _grow(self) -> None:
        new_capacity = self.capacity * 2
        logger.debug("Ring buffer full at %d items, growing to %d", self.capacity, new_capacity)
        data = np.zeros((new_capacity,) + self.item_shape, dtype=self._data.dtype)
        data[:self._size] = self.to_array()
        self._data = data
        self._head = 0
