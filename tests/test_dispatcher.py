"""Tests for command parsing, registry precedence and dispatch."""

import re

import pytest

from chefbot.core.dispatcher import Dispatcher, parse_message
from chefbot.core.guards import PermissionEvaluator, PermissionTier
from chefbot.core.models import Caller, Directive, Reply
from chefbot.core.registry import Command, CommandRegistry, Component, command

from conftest import ADMIN, ALICE, MOD, STREAMER, FakeTransport


class Recorder:
    """Handler that records its calls and returns a fixed outcome."""

    def __init__(self, outcome=None) -> None:
        self.outcome = outcome
        self.calls: list[tuple[str, Caller, list[str]]] = []

    def __call__(self, channel, caller, args):
        self.calls.append((channel, caller, args))
        return self.outcome


def build(*commands: Command) -> tuple[Dispatcher, FakeTransport]:
    registry = CommandRegistry()
    for cmd in commands:
        registry.register(cmd)
    transport = FakeTransport()
    return Dispatcher(registry, PermissionEvaluator(["bob"]), transport.send), transport


# ============================================================
# Parsing
# ============================================================

class TestParseMessage:
    def test_token_is_lowercased(self):
        assert parse_message("!DiCe") == ("!dice", [])

    def test_args_split_on_whitespace(self):
        assert parse_message("!rng   5\t10 ") == ("!rng", ["5", "10"])

    def test_blank_message(self):
        assert parse_message("   ") is None


# ============================================================
# Registry
# ============================================================

class TestCommandRegistry:
    def test_resolve_order_admin_first(self):
        admin = Command("!x", PermissionTier.ADMIN, Recorder())
        everyone = Command("!x", PermissionTier.EVERYONE, Recorder())
        registry = CommandRegistry()
        registry.register(everyone)
        registry.register(admin)
        assert registry.resolve("!X") is admin

    def test_duplicate_within_tier_rejected(self):
        registry = CommandRegistry()
        registry.register(Command("!x", PermissionTier.EVERYONE, Recorder()))
        with pytest.raises(ValueError, match="already registered"):
            registry.register(Command("!x", PermissionTier.EVERYONE, Recorder()))

    def test_aliases_resolve_to_same_command(self):
        cmd = Command("!commands", PermissionTier.EVERYONE, Recorder(), aliases=("!help",))
        registry = CommandRegistry()
        registry.register(cmd)
        assert registry.resolve("!help") is cmd
        assert registry.tokens(PermissionTier.EVERYONE) == ["!commands"]

    def test_unknown_token(self):
        assert CommandRegistry().resolve("!nope") is None

    def test_component_collects_decorated_methods(self):
        class Sample(Component):
            tier = PermissionTier.MODERATOR

            @command("First")
            def first(self, channel, caller, args):
                return Reply("1")

            @command("!second", tier=PermissionTier.ADMIN)
            def second(self, channel, caller, args):
                return Reply("2")

            def helper(self):
                return None

        commands = Sample(runtime=None).get_commands()  # type: ignore[arg-type]
        assert [(c.token, c.tier) for c in commands] == [
            ("!first", PermissionTier.MODERATOR),
            ("!second", PermissionTier.ADMIN),
        ]
        assert commands[0].handler("c", ALICE, []) == Reply("1")


# ============================================================
# Dispatch
# ============================================================

class TestDispatcher:
    async def test_self_messages_ignored_before_parsing(self):
        handler = Recorder(Reply("hi"))
        dispatcher, transport = build(Command("!hi", PermissionTier.EVERYONE, handler))
        await dispatcher.handle("chan", ALICE, "!hi", is_self=True)
        assert handler.calls == []
        assert transport.sent == []

    async def test_unknown_command_sends_nothing(self):
        dispatcher, transport = build(Command("!hi", PermissionTier.EVERYONE, Recorder()))
        await dispatcher.handle("chan", ALICE, "!definitelynotacommand with args")
        await dispatcher.handle("chan", ALICE, "just chatting")
        await dispatcher.handle("chan", ALICE, "")
        assert transport.sent == []

    async def test_everyone_command_gets_args(self):
        handler = Recorder(Reply("ok"))
        dispatcher, transport = build(Command("!echo", PermissionTier.EVERYONE, handler))
        await dispatcher.handle("chan", ALICE, "!ECHO a  b")
        assert handler.calls == [("chan", ALICE, ["a", "b"])]
        assert transport.sent == [("chan", "ok")]

    async def test_no_reply_sends_nothing(self):
        dispatcher, transport = build(Command("!quiet", PermissionTier.EVERYONE, Recorder(None)))
        await dispatcher.handle("chan", ALICE, "!quiet")
        assert transport.sent == []

    async def test_directive_sent_like_reply(self):
        handler = Recorder(Directive.clear())
        dispatcher, transport = build(Command("!clear", PermissionTier.MODERATOR, handler))
        await dispatcher.handle("chan", MOD, "!clear")
        assert transport.texts == ["/clear"]

    @pytest.mark.parametrize("caller", [ALICE, MOD, STREAMER])
    async def test_admin_command_denied_for_non_admin(self, caller):
        handler = Recorder(Reply("done"))
        dispatcher, transport = build(Command("!shutdown", PermissionTier.ADMIN, handler))
        await dispatcher.handle("chan", caller, "!shutdown")
        assert handler.calls == []
        assert transport.texts == [
            f"❌ @{caller.username}, admin privileges required for !shutdown"
        ]

    async def test_moderator_command_denied_for_chatter(self):
        handler = Recorder(Reply("done"))
        dispatcher, transport = build(Command("!ban", PermissionTier.MODERATOR, handler))
        await dispatcher.handle("chan", ALICE, "!ban someone")
        assert handler.calls == []
        assert transport.texts == ["❌ @alice, moderator privileges required for !ban"]

    @pytest.mark.parametrize("caller", [MOD, STREAMER, ADMIN])
    async def test_moderator_command_allowed(self, caller):
        handler = Recorder(Reply("done"))
        dispatcher, transport = build(Command("!ban", PermissionTier.MODERATOR, handler))
        await dispatcher.handle("chan", caller, "!ban someone")
        assert len(handler.calls) == 1
        assert transport.texts == ["done"]

    async def test_shadowed_token_never_reaches_lower_tier(self):
        admin_handler = Recorder(Reply("admin"))
        everyone_handler = Recorder(Reply("everyone"))
        dispatcher, transport = build(
            Command("!x", PermissionTier.EVERYONE, everyone_handler),
            Command("!x", PermissionTier.ADMIN, admin_handler),
        )
        await dispatcher.handle("chan", ALICE, "!x")
        assert everyone_handler.calls == []
        assert admin_handler.calls == []
        assert re.match(r"❌ @alice, admin privileges required for !x", transport.texts[0])

    async def test_async_handlers_are_awaited(self):
        async def handler(channel, caller, args):
            return Reply(f"async {caller.username}")

        dispatcher, transport = build(Command("!a", PermissionTier.EVERYONE, handler))
        await dispatcher.handle("chan", ALICE, "!a")
        assert transport.texts == ["async alice"]

    async def test_handler_error_becomes_generic_reply_and_dispatch_continues(self):
        def broken(channel, caller, args):
            raise RuntimeError("kaboom")

        ok = Recorder(Reply("fine"))
        dispatcher, transport = build(
            Command("!broken", PermissionTier.EVERYONE, broken),
            Command("!ok", PermissionTier.EVERYONE, ok),
        )
        await dispatcher.handle("chan", ALICE, "!broken")
        await dispatcher.handle("chan", ALICE, "!ok")
        assert transport.texts == [
            "❌ Sorry @alice, something went wrong with that command.",
            "fine",
        ]
