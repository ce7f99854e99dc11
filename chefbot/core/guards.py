"""Command guards: permission tiers and cooldown tracking."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from enum import IntEnum

from .models import Caller

LOGGER = logging.getLogger("CommandGuard")


class PermissionTier(IntEnum):
    """Role hierarchy (higher value = higher privilege)"""

    EVERYONE = 0
    MODERATOR = 1
    ADMIN = 2

    @property
    def label(self) -> str:
        return self.name.lower()


class PermissionEvaluator:
    """Classify a caller into the highest tier that applies.

    Admin is membership in a static allow-list. Moderator is the moderator
    flag, the broadcaster badge, or being an admin.
    """

    def __init__(self, admins: Iterable[str] = ()) -> None:
        self.admins: frozenset[str] = frozenset(a.strip().lower() for a in admins if a.strip())

    def is_admin(self, caller: Caller) -> bool:
        return caller.username.lower() in self.admins

    def classify(self, caller: Caller) -> PermissionTier:
        if self.is_admin(caller):
            return PermissionTier.ADMIN
        if caller.is_moderator or caller.is_broadcaster:
            return PermissionTier.MODERATOR
        return PermissionTier.EVERYONE

    def allows(self, caller: Caller, required: PermissionTier) -> bool:
        return self.classify(caller) >= required


class CooldownTracker:
    """In-memory cooldown tracker (reset on bot restart).

    Keys are either a fixed sentinel for global cooldowns or a username for
    per-user cooldowns. Times are milliseconds from the runtime clock.
    """

    # Prune expired entries once the map grows past this size
    PRUNE_THRESHOLD = 1024

    def __init__(self, duration_ms: int) -> None:
        self.duration_ms = duration_ms
        self._last_used: dict[str, int] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._last_used)

    def remaining_millis(self, key: str, now: int) -> int:
        last = self._last_used.get(key)
        if last is None:
            return 0
        return max(0, self.duration_ms - (now - last))

    def mark_used(self, key: str, now: int) -> None:
        self._last_used[key] = now
        if len(self._last_used) > self.PRUNE_THRESHOLD:
            self.prune(now)

    def try_acquire(self, key: str, now: int) -> int:
        """Check and mark in one step.

        Returns 0 and records the use when the key is ready, otherwise the
        remaining milliseconds (the key is left untouched).
        """
        with self._lock:
            remaining = self.remaining_millis(key, now)
            if remaining == 0:
                self.mark_used(key, now)
            return remaining

    def prune(self, now: int) -> int:
        """Drop entries whose cooldown has fully elapsed. Returns how many were removed."""
        expired = [k for k, last in self._last_used.items() if now - last >= self.duration_ms]
        for key in expired:
            del self._last_used[key]
        if expired:
            LOGGER.debug(f"Pruned {len(expired)} expired cooldown entries")
        return len(expired)
