"""Core modules for ChefBot."""

from .ai import AIDelegate
from .autopost import AutoPoster
from .clock import Clock, SystemClock
from .config import (
    BOT_SCOPES,
    BROADCASTER_SCOPES,
    COMPONENT_MODULES,
    ChefBotSettings,
    get_settings,
    validate_env_vars,
    warn_missing_optional,
)
from .dispatcher import Dispatcher, parse_message
from .guards import CooldownTracker, PermissionEvaluator, PermissionTier
from .logging import setup_logging
from .models import Caller, Directive, Outcome, Reply
from .registry import Command, CommandRegistry, Component, command
from .runtime import BotRuntime

__all__ = [
    # Settings
    "ChefBotSettings",
    "get_settings",
    "validate_env_vars",
    "warn_missing_optional",
    "COMPONENT_MODULES",
    # Scope Constants
    "BOT_SCOPES",
    "BROADCASTER_SCOPES",
    # Setup functions
    "setup_logging",
    # Models
    "Caller",
    "Reply",
    "Directive",
    "Outcome",
    # Guards
    "PermissionTier",
    "PermissionEvaluator",
    "CooldownTracker",
    # Commands
    "Command",
    "CommandRegistry",
    "Component",
    "command",
    "Dispatcher",
    "parse_message",
    # Services
    "AIDelegate",
    "AutoPoster",
    "BotRuntime",
    "Clock",
    "SystemClock",
]
