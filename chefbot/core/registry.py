"""Command registry: tiered command tables and the component/decorator API."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar

from .guards import PermissionTier
from .models import Caller, Outcome

if TYPE_CHECKING:
    from .runtime import BotRuntime

LOGGER = logging.getLogger("CommandRegistry")

Handler = Callable[[str, Caller, list[str]], "Outcome | Awaitable[Outcome]"]

# Lookup precedence: the first table containing a token wins
TIER_ORDER: tuple[PermissionTier, ...] = (
    PermissionTier.ADMIN,
    PermissionTier.MODERATOR,
    PermissionTier.EVERYONE,
)


def normalize_token(name: str) -> str:
    name = name.strip().lower()
    return name if name.startswith("!") else f"!{name}"


@dataclass(frozen=True)
class Command:
    token: str
    tier: PermissionTier
    handler: Handler
    aliases: tuple[str, ...] = field(default=())

    @property
    def names(self) -> tuple[str, ...]:
        return (self.token, *self.aliases)


def command(
    name: str,
    *,
    aliases: list[str] | None = None,
    tier: PermissionTier | None = None,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Mark a component method as a chat command.

    The tier defaults to the owning component's tier.
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        func.__chat_command__ = {  # type: ignore[attr-defined]
            "token": normalize_token(name),
            "aliases": tuple(normalize_token(a) for a in aliases or []),
            "tier": tier,
        }
        return func

    return decorator


class Component:
    """Group of related commands sharing a default tier and the runtime."""

    tier: ClassVar[PermissionTier] = PermissionTier.EVERYONE

    def __init__(self, runtime: BotRuntime) -> None:
        self.runtime = runtime

    def get_commands(self) -> list[Command]:
        found: list[Command] = []
        # Class __dict__ keeps definition order
        for name, attr in vars(type(self)).items():
            meta = getattr(attr, "__chat_command__", None)
            if meta is None:
                continue
            found.append(
                Command(
                    token=meta["token"],
                    tier=meta["tier"] if meta["tier"] is not None else self.tier,
                    handler=getattr(self, name),
                    aliases=meta["aliases"],
                )
            )
        return found


class CommandRegistry:
    """Three command tables (admin, moderator, everyone) with explicit precedence."""

    def __init__(self) -> None:
        self._tables: dict[PermissionTier, dict[str, Command]] = {t: {} for t in TIER_ORDER}
        self._ordered: list[Command] = []

    def register(self, cmd: Command) -> None:
        table = self._tables[cmd.tier]
        for name in cmd.names:
            if name in table:
                raise ValueError(f"Command {name} already registered for tier {cmd.tier.label}")
            for other_tier, other in self._tables.items():
                if other_tier != cmd.tier and name in other:
                    LOGGER.warning(
                        f"{name} registered for both {other_tier.label} and {cmd.tier.label}; "
                        f"the higher tier shadows the other"
                    )
        for name in cmd.names:
            table[name] = cmd
        self._ordered.append(cmd)
        LOGGER.debug(f"Registered {cmd.tier.label} command: {cmd.token}")

    def add_component(self, component: Component) -> None:
        commands = component.get_commands()
        for cmd in commands:
            self.register(cmd)
        LOGGER.info(f"Loaded {type(component).__name__} ({len(commands)} commands)")

    def resolve(self, token: str) -> Command | None:
        token = token.lower()
        for tier in TIER_ORDER:
            cmd = self._tables[tier].get(token)
            if cmd is not None:
                return cmd
        return None

    def tokens(self, tier: PermissionTier) -> list[str]:
        """Primary tokens of a tier, in registration order."""
        return [cmd.token for cmd in self._ordered if cmd.tier == tier]

    def __len__(self) -> int:
        return len(self._ordered)
