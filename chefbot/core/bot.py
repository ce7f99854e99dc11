"""Twitch Bot class: connection lifecycle and the message transport."""

from __future__ import annotations

import logging
from urllib.parse import quote

import twitchio
from twitchio import eventsub

from .config import BOT_SCOPES, BROADCASTER_SCOPES, ChefBotSettings
from .models import Caller
from .runtime import BotRuntime

LOGGER: logging.Logger = logging.getLogger("Bot")


def to_caller(chatter: twitchio.Chatter) -> Caller:
    """Map twitchio's chatter payload onto the role flags the dispatcher needs."""
    return Caller(
        username=chatter.name or "",
        is_moderator=bool(chatter.moderator),
        is_broadcaster=bool(chatter.broadcaster),
    )


class Bot(twitchio.Client):
    def __init__(self, *, settings: ChefBotSettings) -> None:
        self.settings = settings
        # channel name -> broadcaster, filled in setup_hook
        self._broadcasters: dict[str, twitchio.PartialUser] = {}

        super().__init__(
            client_id=settings.client_id,
            client_secret=settings.client_secret,
            bot_id=settings.bot_id,
        )

        self.runtime = BotRuntime(settings, transport=self, terminate=self.close)

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------

    async def setup_hook(self) -> None:
        self.runtime.load_components()
        LOGGER.info(f"Registered {len(self.runtime.registry)} commands")

        channel_name = self.settings.channel_name
        users = await self.fetch_users(logins=[channel_name])
        if not users:
            LOGGER.error(f"Channel '{channel_name}' not found on Twitch")
            return

        broadcaster = users[0]
        self._broadcasters[channel_name] = broadcaster

        try:
            subscription = eventsub.ChatMessageSubscription(
                broadcaster_user_id=broadcaster.id, user_id=self.settings.bot_id
            )
            await self.subscribe_websocket(payload=subscription)
            LOGGER.info(f"Bot joined channel: #{channel_name}")
        except Exception as e:
            LOGGER.exception(f"Failed to subscribe to chat for #{channel_name}: {e}")
            LOGGER.warning(
                "Authorize the bot at http://localhost:4343/oauth?scopes="
                + quote(" ".join(BOT_SCOPES))
                + " and the channel at http://localhost:4343/oauth?scopes="
                + quote(" ".join(BROADCASTER_SCOPES))
            )

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    async def event_ready(self) -> None:
        settings = self.settings
        LOGGER.info("=" * 50)
        LOGGER.info("Twitch Bot Connected Successfully!")
        LOGGER.info(f"Bot ID: {self.bot_id}")
        LOGGER.info(f"Channel: https://twitch.tv/{settings.channel_name}")
        LOGGER.info(f"Authorized Admins: {', '.join(sorted(settings.admin_users)) or 'none'}")
        LOGGER.info(f"Discord: {settings.discord_invite or 'Not set'}")
        LOGGER.info(
            f"AI Chat: {'Configured' if settings.ai_configured else 'Not configured'} "
            f"({'Enabled' if self.runtime.ai_enabled else 'Disabled'})"
        )
        LOGGER.info("Auto-posting socials is DISABLED by default. Use !autopost on to enable.")
        LOGGER.info("=" * 50)

    async def event_oauth_authorized(
        self, payload: twitchio.authentication.UserTokenPayload
    ) -> None:
        await self.add_token(payload.access_token, payload.refresh_token)
        LOGGER.info(f"Token authorized for user_id {payload.user_id}")

    async def event_error(self, payload: twitchio.EventErrorPayload) -> None:
        LOGGER.error(f"Bot Error in {payload.listener}: {payload.error}")

    async def event_message(self, payload: twitchio.ChatMessage) -> None:
        channel = payload.broadcaster.name or self.settings.channel_name
        is_self = payload.chatter.id == self.bot_id
        if not is_self:
            LOGGER.debug(f"[#{channel}] {payload.chatter.name}: {payload.text}")

        await self.runtime.dispatcher.handle(
            channel, to_caller(payload.chatter), payload.text or "", is_self=is_self
        )

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    async def send(self, channel: str, text: str) -> None:
        broadcaster = self._broadcasters.get(channel)
        if broadcaster is None:
            raise LookupError(f"channel '{channel}' not in bot cache")

        await broadcaster.send_message(
            message=text,
            sender=self.settings.bot_id,
            token_for=self.settings.bot_id,
        )

    async def close(self, **options) -> None:
        self.runtime.autoposter.stop()
        await super().close(**options)
