"""General commands available to everyone."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from chefbot.core.guards import PermissionTier
from chefbot.core.models import Caller, Outcome, Reply
from chefbot.core.registry import Component, command
from chefbot.core.runtime import format_socials

if TYPE_CHECKING:
    from chefbot.core.runtime import BotRuntime

LOGGER = logging.getLogger("GeneralCommands")

DISCORD_COOLDOWN_KEY = "discord"

EIGHT_BALL_RESPONSES = [
    "It is certain", "Reply hazy, try again", "Don't count on it",
    "It is decidedly so", "Ask again later", "My reply is no",
    "Without a doubt", "Better not tell you now", "My sources say no",
    "Yes definitely", "Cannot predict now", "Outlook not so good",
    "You may rely on it", "Concentrate and ask again", "Very doubtful",
    "As I see it, yes", "Most likely", "Outlook good", "Yes", "Signs point to yes",
]  # fmt: skip

QUOTES = [
    "The only way to do great work is to love what you do. - Steve Jobs",
    "Innovation distinguishes between a leader and a follower. - Steve Jobs",
    "Stay hungry, stay foolish. - Steve Jobs",
    "The future belongs to those who believe in the beauty of their dreams. - Eleanor Roosevelt",
    "It is during our darkest moments that we must focus to see the light. - Aristotle",
    "Success is not final, failure is not fatal: it is the courage to continue that counts. "
    "- Winston Churchill",
    "The only impossible journey is the one you never begin. - Tony Robbins",
    "Life is what happens to you while you're busy making other plans. - John Lennon",
]

FACTS = [
    "Honey never spoils! Archaeologists have found edible honey in Egyptian tombs.",
    "A group of flamingos is called a 'flamboyance'.",
    "Octopuses have three hearts and blue blood.",
    "Bananas are berries, but strawberries aren't.",
    "A shrimp's heart is in its head.",
    "Wombat poop is cube-shaped.",
    "The shortest war in history lasted only 38-45 minutes.",
    "Cleopatra lived closer in time to the moon landing than to the construction of the "
    "Great Pyramid.",
]

# (minimum level, emoji, description), checked top-down
ENERGY_BANDS = [
    (90, "⚡🔥⚡", "MAXIMUM OVERDRIVE!"),
    (70, "🚀", "High energy rocket mode!"),
    (50, "✨", "Steady positive energy!"),
    (30, "☕", "Could use some coffee..."),
    (0, "😴", "Low power mode activated"),
]

RULES = (
    "📋 Stream Rules: • Keep language clean • No politics/current events discussion "
    "• Backseating permitted as long as it is reasonable 🎯"
)

RNG_DEFAULT_MIN = 1
RNG_DEFAULT_MAX = 100


def _parse_int(value: str, default: int) -> int:
    try:
        return int(value)
    except ValueError:
        return default


def parse_rng_bounds(args: list[str]) -> tuple[int, int]:
    """Resolve [min, max] for !rng; non-numeric arguments keep that slot's default."""
    lo, hi = RNG_DEFAULT_MIN, RNG_DEFAULT_MAX
    if len(args) == 1:
        hi = _parse_int(args[0], RNG_DEFAULT_MAX)
    elif len(args) == 2:
        lo = _parse_int(args[0], RNG_DEFAULT_MIN)
        hi = _parse_int(args[1], RNG_DEFAULT_MAX)
    return lo, hi


def format_duration(total_seconds: int) -> str:
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours}h {minutes}m {seconds}s"


def _strip_mention(name: str) -> str:
    return name.replace("@", "")


class GeneralCommands(Component):
    """General user commands for the bot."""

    tier = PermissionTier.EVERYONE

    def __init__(self, runtime: BotRuntime) -> None:
        super().__init__(runtime)
        self.random = runtime.random

    def _pick(self, options: list[str]) -> str:
        return self.random.choice(options)

    @command("hello")
    def hello(self, channel: str, caller: Caller, args: list[str]) -> Outcome:
        """Usage: !hello"""
        user = caller.username
        return Reply(
            self._pick(
                [
                    f"Hello @{user}! Welcome to the stream! 👋",
                    f"Hey there @{user}! Glad you're here! 🎉",
                    f"Welcome @{user}! Hope you enjoy the stream! ✨",
                    f"@{user} just entered the chat! What's good? 🔥",
                ]
            )
        )

    @command("dice")
    def dice(self, channel: str, caller: Caller, args: list[str]) -> Outcome:
        """Roll a six-sided die."""
        roll = self.random.randint(1, 6)
        return Reply(f"🎲 @{caller.username} rolled a {roll}!")

    @command("time")
    def time(self, channel: str, caller: Caller, args: list[str]) -> Outcome:
        now = self.runtime.clock.now()
        return Reply(f"⏰ Current time: {now.strftime('%I:%M:%S %p')}")

    @command("socials")
    def socials(self, channel: str, caller: Caller, args: list[str]) -> Outcome:
        return Reply(format_socials(self.runtime.settings))

    @command("commands", aliases=["help"])
    def commands(self, channel: str, caller: Caller, args: list[str]) -> Outcome:
        """List everyone-tier commands."""
        tokens = self.runtime.registry.tokens(PermissionTier.EVERYONE)
        return Reply(f"Available commands: {', '.join(tokens)}")

    @command("discord")
    def discord(self, channel: str, caller: Caller, args: list[str]) -> Outcome:
        """Discord invite, rate limited to once per 30 seconds for the whole channel.

        Stays silent while cooling down or when no invite is configured.
        """
        invite = self.runtime.settings.discord_invite
        if not invite:
            return None

        now = self.runtime.clock.millis()
        remaining = self.runtime.discord_cooldown.try_acquire(DISCORD_COOLDOWN_KEY, now)
        if remaining:
            LOGGER.debug(f"!discord on cooldown for another {remaining}ms")
            return None

        return Reply(
            f"🎮 Join our Discord community: {invite} - See you there @{caller.username}! 🧑🏻‍🍳"
        )

    @command("8ball")
    def eight_ball(self, channel: str, caller: Caller, args: list[str]) -> Outcome:
        """Usage: !8ball <question>"""
        if not args:
            return Reply(f"🎱 @{caller.username}, ask me a question! Usage: !8ball <question>")
        return Reply(f'🎱 @{caller.username}: "{self._pick(EIGHT_BALL_RESPONSES)}"')

    @command("flip")
    def flip(self, channel: str, caller: Caller, args: list[str]) -> Outcome:
        result = self._pick(["Heads", "Tails"])
        emoji = "🪙" if result == "Heads" else "🥇"
        return Reply(f"{emoji} @{caller.username} flipped {result}!")

    @command("rng")
    def rng(self, channel: str, caller: Caller, args: list[str]) -> Outcome:
        """Random number.

        Usage:
            !rng              1-100
            !rng <max>        1-max
            !rng <min> <max>  min-max
        """
        lo, hi = parse_rng_bounds(args)
        if lo >= hi:
            return Reply(f"❌ @{caller.username}, minimum must be less than maximum!")
        result = self.random.randint(lo, hi)
        return Reply(f"🎯 @{caller.username}: Random number between {lo}-{hi} is **{result}**")

    @command("lurk")
    def lurk(self, channel: str, caller: Caller, args: list[str]) -> Outcome:
        user = caller.username
        return Reply(
            self._pick(
                [
                    f"Thanks for lurking @{user}! Enjoy the stream! 👻",
                    f"Happy lurking @{user}! 🕵️",
                    f"@{user} is now in lurk mode! 🥷",
                    f"Lurk away @{user}! We appreciate you being here! 💜",
                ]
            )
        )

    @command("unlurk")
    def unlurk(self, channel: str, caller: Caller, args: list[str]) -> Outcome:
        user = caller.username
        return Reply(
            self._pick(
                [
                    f"Welcome back @{user}! 🎉",
                    f"@{user} has emerged from the shadows! 👋",
                    f"Look who's back! Hey @{user}! ✨",
                    f"@{user} decided to join the conversation! 🗣️",
                ]
            )
        )

    @command("hug")
    def hug(self, channel: str, caller: Caller, args: list[str]) -> Outcome:
        """Usage: !hug [user]"""
        if not args:
            return Reply(f"🫂 @{caller.username} gives everyone a big hug!")
        return Reply(f"🫂 @{caller.username} gives @{_strip_mention(args[0])} a warm hug!")

    @command("quote")
    def quote(self, channel: str, caller: Caller, args: list[str]) -> Outcome:
        return Reply(f"💭 {self._pick(QUOTES)}")

    @command("fact")
    def fact(self, channel: str, caller: Caller, args: list[str]) -> Outcome:
        return Reply(f"🧠 Fun Fact: {self._pick(FACTS)}")

    @command("love")
    def love(self, channel: str, caller: Caller, args: list[str]) -> Outcome:
        """Usage: !love [user]"""
        percentage = self.random.randint(0, 100)
        if not args:
            return Reply(f"💕 @{caller.username}, you are {percentage}% loveable today!")
        target = _strip_mention(args[0])
        return Reply(f"💕 Love between @{caller.username} and @{target}: {percentage}%")

    @command("botuptime")
    def botuptime(self, channel: str, caller: Caller, args: list[str]) -> Outcome:
        uptime = format_duration(self.runtime.uptime_ms // 1000)
        return Reply(f"🧑🏻‍🍳 Bot has been awake for: {uptime}")

    @command("vibes")
    def vibes(self, channel: str, caller: Caller, args: list[str]) -> Outcome:
        user = caller.username
        return Reply(
            self._pick(
                [
                    f"✨ @{user} is radiating good vibes today! The energy is immaculate! 🌟",
                    f"🔥 @{user}'s vibe check: ELITE TIER! 💯",
                    f"🌈 @{user} is bringing rainbow energy to the chat! 🦄",
                    f"⚡ @{user}'s vibe frequency: MAXIMUM POWER! 🚀",
                    f"😎 @{user} is too cool for the vibe check! 🧊",
                    f"🎵 @{user} is vibing to life's soundtrack! 🎶",
                ]
            )
        )

    @command("energy")
    def energy(self, channel: str, caller: Caller, args: list[str]) -> Outcome:
        level = self.random.randint(0, 100)
        emoji, description = next((e, d) for floor, e, d in ENERGY_BANDS if level >= floor)
        return Reply(f"{emoji} @{caller.username}'s energy level: {level}% - {description}")

    @command("rules")
    def rules(self, channel: str, caller: Caller, args: list[str]) -> Outcome:
        return Reply(RULES)

    @command("echo")
    def echo(self, channel: str, caller: Caller, args: list[str]) -> Outcome:
        message = " ".join(args)
        return Reply(f"📢 {message}" if message else "Usage: !echo <message>")


def setup(runtime: BotRuntime) -> None:
    """Entry point for the module."""
    runtime.registry.add_component(GeneralCommands(runtime))
