"""AI delegate: asks Groq's OpenAI-compatible API for a short chat answer."""

from __future__ import annotations

import logging
from typing import Any

from openai import (
    APITimeoutError,
    AsyncOpenAI,
    AuthenticationError,
    RateLimitError,
)
from openai.types.chat import ChatCompletionMessageParam

LOGGER: logging.Logger = logging.getLogger("AIDelegate")

# Twitch message limit is 500 characters; leave room for the mention prefix
MAX_RESPONSE_CHARS = 450
TRUNCATION_MARKER = "..."

NOT_CONFIGURED_MESSAGE = "❌ AI not configured. Missing API key."


def truncate_response(text: str, limit: int = MAX_RESPONSE_CHARS) -> str:
    if len(text) > limit:
        return text[: limit - len(TRUNCATION_MARKER)] + TRUNCATION_MARKER
    return text


class AIDelegate:
    """Wraps the chat-completions call. ask() never raises."""

    def __init__(
        self,
        api_key: str,
        model: str,
        channel_name: str,
        *,
        base_url: str = "https://api.groq.com/openai/v1",
        timeout: float = 30.0,
        client: Any | None = None,
    ) -> None:
        self.model = model
        self.channel_name = channel_name
        self.configured = bool(api_key and api_key.strip())

        if client is not None:
            self.client = client
        elif self.configured:
            self.client = AsyncOpenAI(base_url=base_url, api_key=api_key, timeout=timeout)
        else:
            self.client = None

        if self.configured:
            LOGGER.info(f"AIDelegate initialized: model={model}")

    def _system_prompt(self) -> str:
        return (
            "You are a helpful Twitch chat assistant named Lil Chef. "
            "Keep responses under 200 characters and friendly. "
            f"You're helping {self.channel_name}'s community. "
            "Be concise, helpful, intelligent, and engaging. "
            "You are speaking with mostly adults, so no need for any type of odd slang. "
            "You do not need to introduce yourself."
        )

    async def ask(self, question: str, username: str) -> str:
        if not self.configured or self.client is None:
            return NOT_CONFIGURED_MESSAGE

        messages: list[ChatCompletionMessageParam] = [
            {"role": "system", "content": self._system_prompt()},
            {"role": "user", "content": question},
        ]

        try:
            LOGGER.debug(f"AI request: user={username}, question={question[:100]}")
            completion = await self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                max_tokens=150,
                temperature=0.7,
            )
        except RateLimitError as e:
            LOGGER.warning(f"AI rate limit: {e}")
            return f"❌ @{username}, LilChef failed to cook. Try again later!"
        except (AuthenticationError, APITimeoutError) as e:
            LOGGER.error(f"AI request error: {type(e).__name__}: {e}")
            return f"❌ @{username}, LilChef failed to cook. Try again later!"
        except Exception as e:
            LOGGER.exception(f"AI request failed: {e}")
            return f"❌ @{username}, LilChef failed to cook. Try again later!"

        content = _first_message_content(completion)
        if not content:
            LOGGER.warning(f"AI response had no usable content for {username}")
            return f"❌ @{username}, LilChef is having trouble right now. Try cooking again later!"

        return f"👨🏻‍🍳 @{username}: {truncate_response(content)}"


def _first_message_content(completion: Any) -> str:
    """Pull choices[0].message.content, or '' when the payload is malformed."""
    choices = getattr(completion, "choices", None)
    if not choices:
        return ""
    message = getattr(choices[0], "message", None)
    content = getattr(message, "content", None)
    if not isinstance(content, str):
        return ""
    return content.strip()
