"""In-flight tracking for long-running AI operations."""

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass


@dataclass
class BusyTracker:
    """Counts in-flight operations so overlapping calls share one busy signal."""

    in_flight: int = 0

    @property
    def active(self) -> bool:
        """Return True while at least one operation is running."""
        return self.in_flight > 0

    @contextmanager
    def track(self) -> Iterator[None]:
        """Mark an operation as running until the block exits."""
        self.in_flight += 1
        try:
            yield
        finally:
            self.in_flight -= 1
