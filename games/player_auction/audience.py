"""
Audience admission gate.

Counts spectators against a fixed capacity. There is no identity tracking: a
spectator who joins twice is counted twice.
"""

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass

from .errors import CapacityExceeded

logger = logging.getLogger(__name__)

STATUS_AVAILABLE = "available"
STATUS_FULL = "full"


@dataclass(frozen=True)
class AudienceLimit:
    status: str
    max_capacity: int
    current_count: int
    message: str

    def to_dict(self) -> dict:
        return {
            "status": self.status,
            "maxCapacity": self.max_capacity,
            "currentCount": self.current_count,
            "message": self.message,
        }


class AudienceGate:
    """Bounded spectator counter. Join and leave are atomic."""

    def __init__(self, max_capacity: int):
        if max_capacity < 0:
            raise ValueError(f"max_capacity must not be negative, got {max_capacity}")
        self.max_capacity = max_capacity
        self._count = 0
        self._lock = threading.Lock()

    @property
    def current_count(self) -> int:
        return self._count

    def join(self) -> bool:
        """Admit one spectator. Returns False when the audience is full."""
        with self._lock:
            if self._count >= self.max_capacity:
                logger.info("Audience full (%d/%d), join refused", self._count, self.max_capacity)
                return False
            self._count += 1
            count = self._count
        logger.debug("Spectator joined (%d/%d)", count, self.max_capacity)
        return True

    def leave(self) -> bool:
        """
        Release one spectator slot.

        Best-effort: returns False when there was nothing to release and never
        raises, since the caller is usually already disconnecting.
        """
        with self._lock:
            if self._count <= 0:
                logger.debug("Leave with empty audience ignored")
                return False
            self._count -= 1
            count = self._count
        logger.debug("Spectator left (%d/%d)", count, self.max_capacity)
        return True

    def check_capacity(self) -> AudienceLimit:
        with self._lock:
            count = self._count
        if count >= self.max_capacity:
            return AudienceLimit(
                status=STATUS_FULL,
                max_capacity=self.max_capacity,
                current_count=count,
                message=f"Audience capacity full ({count}/{self.max_capacity}). Please try again later.",
            )
        return AudienceLimit(
            status=STATUS_AVAILABLE,
            max_capacity=self.max_capacity,
            current_count=count,
            message=f"{self.max_capacity - count} audience seats available",
        )

    @contextmanager
    def admission(self):
        """Hold a seat for the duration of the block. Raises CapacityExceeded if full."""
        if not self.join():
            raise CapacityExceeded(self.max_capacity)
        try:
            yield self
        finally:
            self.leave()
