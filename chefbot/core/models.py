"""Value types passed between the transport, the dispatcher and handlers."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Caller:
    """Chat participant who sent a message, reduced to what permission checks need."""

    username: str
    is_moderator: bool = False
    is_broadcaster: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "username", self.username.lower())


@dataclass(frozen=True)
class Reply:
    """Plain chat message."""

    text: str


@dataclass(frozen=True)
class Directive:
    """Platform control string (timeout/ban/...), sent like a reply."""

    text: str

    @classmethod
    def timeout(cls, user: str, seconds: int) -> Directive:
        return cls(f"/timeout {user} {seconds}")

    @classmethod
    def ban(cls, user: str, reason: str) -> Directive:
        return cls(f"/ban {user} {reason}")

    @classmethod
    def unban(cls, user: str) -> Directive:
        return cls(f"/unban {user}")

    @classmethod
    def clear(cls) -> Directive:
        return cls("/clear")


# None means "no reply"
Outcome = Reply | Directive | None
