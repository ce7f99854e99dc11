"""Tests for settings, runtime wiring and the twitchio boundary mapping."""

from types import SimpleNamespace

import pytest

from chefbot.core.bot import to_caller
from chefbot.core.config import COMPONENT_MODULES, ChefBotSettings
from chefbot.core.guards import PermissionTier
from chefbot.core.models import Caller

from conftest import ALICE, make_settings


class TestSettings:
    def test_admin_list_parsed(self):
        settings = make_settings(authorized_users=" Bob,carol ,, DAVE")
        assert settings.admin_users == frozenset({"bob", "carol", "dave"})

    def test_channel_name_normalized(self):
        assert make_settings(channel_name="#ChefChannel").channel_name == "chefchannel"

    def test_missing_required_is_fatal(self):
        with pytest.raises(ValueError):
            ChefBotSettings(  # type: ignore[call-arg]
                _env_file=None, client_id="x", client_secret="y", bot_id="1"
            )

    def test_blank_required_is_fatal(self):
        with pytest.raises(ValueError):
            make_settings(channel_name="   ")

    @pytest.mark.parametrize("name", ["#", "##", "# "])
    def test_channel_name_of_only_hashes_is_fatal(self, name):
        with pytest.raises(ValueError):
            make_settings(channel_name=name)

    def test_invalid_log_level_falls_back(self):
        assert make_settings(log_level="chatty").log_level == "INFO"

    def test_ai_configured(self):
        assert not make_settings().ai_configured
        assert make_settings(groq_api_key="k").ai_configured


class TestRuntime:
    def test_all_components_loaded(self, runtime):
        assert runtime.registry.resolve("!dice").tier == PermissionTier.EVERYONE
        assert runtime.registry.resolve("!chefbot").tier == PermissionTier.EVERYONE
        assert runtime.registry.resolve("!ban").tier == PermissionTier.MODERATOR
        assert runtime.registry.resolve("!shutdown").tier == PermissionTier.ADMIN
        assert runtime.registry.resolve("!ai-toggle").tier == PermissionTier.ADMIN

    def test_broken_component_module_is_skipped(self, runtime):
        count = len(runtime.registry)
        runtime.load_components(["chefbot.components.does_not_exist"])
        assert len(runtime.registry) == count

    def test_default_module_list(self):
        assert "chefbot.components.general" in COMPONENT_MODULES

    async def test_send_failure_is_logged_not_raised(self, runtime, transport):
        transport.fail = True
        await runtime.dispatcher.handle("chefchannel", ALICE, "!dice")
        assert transport.sent == []

    async def test_default_ai_not_configured(self, transport):
        from chefbot.core.runtime import BotRuntime

        rt = BotRuntime(make_settings(), transport)
        assert not rt.ai.configured
        assert await rt.ai.ask("hi", "alice") == "❌ AI not configured. Missing API key."


class TestCallerMapping:
    def test_to_caller(self):
        chatter = SimpleNamespace(name="Alice", moderator=True, broadcaster=False)
        assert to_caller(chatter) == Caller("alice", is_moderator=True, is_broadcaster=False)

    def test_caller_username_lowercased(self):
        assert Caller("ChefFan").username == "cheffan"
