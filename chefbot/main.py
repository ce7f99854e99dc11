import asyncio
import contextlib
import logging
import signal
import sys

from chefbot.core.config import validate_env_vars, warn_missing_optional
from chefbot.core.logging import setup_logging

LOGGER: logging.Logger = logging.getLogger("Bot")


def main() -> None:
    setup_logging()
    LOGGER.info("Checking environment variables...")

    try:
        settings = validate_env_vars()
    except ValueError:
        sys.exit(1)

    setup_logging(settings.log_level)
    warn_missing_optional(settings)

    # Imported late so a bad environment fails before twitchio loads
    from chefbot.core.bot import Bot

    async def runner() -> int | None:
        LOGGER.info("Connecting to Twitch...")
        async with Bot(settings=settings) as bot:
            loop = asyncio.get_running_loop()
            with contextlib.suppress(NotImplementedError):
                loop.add_signal_handler(signal.SIGTERM, lambda: asyncio.create_task(bot.close()))
            await bot.start()
            return bot.runtime.exit_code

    exit_code: int | None = 0
    try:
        exit_code = asyncio.run(runner())
    except KeyboardInterrupt:
        LOGGER.warning("Received SIGINT, shutting down gracefully...")
    except Exception as e:
        LOGGER.exception(f"Failed to connect to Twitch: {e}")
        exit_code = 1

    sys.exit(exit_code or 0)


if __name__ == "__main__":
    main()
