import threading
from collections import deque

MAX_HISTORY = 5


class PasswordHistory:
    """Most-recent-first list of generated passwords.

    Values already present are ignored, and the oldest entry is dropped
    once the list grows past capacity. Safe to share between request
    threads.
    """

    def __init__(self, capacity=MAX_HISTORY, items=()):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._items = deque(maxlen=capacity)
        self._lock = threading.Lock()
        # items arrive most-recent-first, as items() returns them
        for password in reversed(list(items)):
            self.push(password)

    def push(self, password):
        with self._lock:
            if password in self._items:
                return False
            # appendleft on a full deque evicts from the right
            self._items.appendleft(password)
            return True

    def clear(self):
        with self._lock:
            self._items.clear()

    def items(self):
        with self._lock:
            return list(self._items)

    def __len__(self):
        with self._lock:
            return len(self._items)

    def __iter__(self):
        return iter(self.items())

    def __contains__(self, password):
        with self._lock:
            return password in self._items
