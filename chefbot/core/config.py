"""ChefBot configuration"""

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# === Path Configuration ===
PACKAGE_DIR = Path(__file__).parent.parent
PROJECT_DIR = PACKAGE_DIR.parent

BOT_SCOPES = [
    "user:bot",  # Bot identifier
    "user:read:chat",  # Read chat messages
    "user:write:chat",  # Send chat messages
]

BROADCASTER_SCOPES = [
    "channel:bot",  # Allow bot to join channel
]

# Component modules loaded at startup, in registration order
COMPONENT_MODULES = [
    "chefbot.components.admin",
    "chefbot.components.moderation",
    "chefbot.components.general",
    "chefbot.components.ai",
]


class ChefBotSettings(BaseSettings):
    """ChefBot settings"""

    model_config = SettingsConfigDict(
        env_file=PROJECT_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Twitch OAuth
    client_id: str = Field(..., description="Twitch OAuth Client ID")
    client_secret: str = Field(..., description="Twitch OAuth Client Secret")

    # Bot identity and the single channel it serves
    bot_id: str = Field(..., description="Bot User ID")
    channel_name: str = Field(..., description="Channel to join")

    # Comma-separated admin usernames
    authorized_users: str = Field(default="", description="Admin allow-list")

    # Social links
    discord_invite: str = Field(default="", description="Discord invite link")
    twitter_handle: str = Field(default="", description="Twitter handle")
    youtube_channel: str = Field(default="", description="YouTube channel")

    # Groq AI (OpenAI-compatible)
    groq_api_key: str = Field(default="", description="Groq API key")
    groq_model: str = Field(default="llama-3.1-8b-instant", description="Groq model")
    groq_base_url: str = Field(
        default="https://api.groq.com/openai/v1", description="Groq API base URL"
    )
    ai_timeout: float = Field(default=30.0, gt=0, description="AI request timeout (seconds)")

    # Scheduling
    autopost_interval: float = Field(default=600.0, gt=0, description="Auto-post interval")
    shutdown_grace_seconds: float = Field(default=1.0, ge=0, description="Delay before exit")

    # Environment
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("client_id", "client_secret", "bot_id", "channel_name")
    @classmethod
    def validate_required(cls, v: str) -> str:
        """Reject blank required values"""
        if not v or v.strip() == "":
            raise ValueError("must not be empty")
        return v.strip()

    @field_validator("channel_name")
    @classmethod
    def normalize_channel_name(cls, v: str) -> str:
        """Strip a leading '#' and lowercase"""
        name = v.lstrip("#").strip().lower()
        if not name:
            raise ValueError("must name a channel")
        return name

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid"""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            logger.warning(f"Invalid log level '{v}', defaulting to INFO")
            return "INFO"
        return v_upper

    @property
    def admin_users(self) -> frozenset[str]:
        return frozenset(
            user.strip().lower() for user in self.authorized_users.split(",") if user.strip()
        )

    @property
    def ai_configured(self) -> bool:
        return bool(self.groq_api_key.strip())


@lru_cache
def get_settings() -> ChefBotSettings:
    """Get cached settings instance"""
    return ChefBotSettings()  # type: ignore[call-arg]


def validate_env_vars() -> ChefBotSettings:
    """Load settings, turning validation failures into a logged ValueError."""
    try:
        settings = get_settings()
    except ValidationError as e:
        missing = ", ".join(str(err["loc"][0]).upper() for err in e.errors() if err["loc"])
        bot_logger = logging.getLogger("Bot")
        bot_logger.error(f"Missing or invalid required environment variables: {missing}")
        bot_logger.error("Please check your .env file")
        raise ValueError(str(e)) from e

    logger.info("All required environment variables validated successfully")
    return settings


def warn_missing_optional(settings: ChefBotSettings) -> None:
    """Warn about optional settings whose absence disables a feature."""
    if not settings.admin_users:
        logger.warning("No authorized admin users set. Admin commands will be disabled.")
    if not settings.ai_configured:
        logger.warning("GROQ_API_KEY not set. AI features will be disabled.")
    if not settings.discord_invite:
        logger.warning("DISCORD_INVITE not set. !discord will stay silent.")
    if not (settings.twitter_handle or settings.youtube_channel):
        logger.warning("No Twitter/YouTube links set. Socials message will be partial.")
