"""Application entry point.

Builds the configuration and service container, registers the bot handlers
and runs the bot in webhook mode (when a public domain is configured) or in
long-polling mode.
"""

import logging

from telegram.ext import Application, CommandHandler, MessageHandler, filters

from .bot.handlers import (
    clear_command,
    error_handler,
    handle_link,
    help_command,
    room_command,
    start,
)
from .bot.utils import ROOMS_KEY, SETTINGS_KEY
from .config import Config
from .core.container import Container

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Set up root logging at the given level."""
    logging.basicConfig(
        format="%(asctime)s - %(levelname)s - %(message)s",
        level=getattr(logging, level.upper(), logging.INFO),
    )
    # httpx logs request URLs, which contain the bot token
    logging.getLogger("httpx").setLevel(logging.WARNING)


def build_application(config: Config) -> Application:
    """Create the Telegram application with all handlers registered.

    Args:
        config: Validated application configuration.

    Returns:
        Application ready to run.
    """
    container = Container()
    container.config.from_dict(config.as_dict())

    app = Application.builder().token(config.bot.bot_token).concurrent_updates(True).build()
    app.bot_data[ROOMS_KEY] = container.room_manager()
    app.bot_data[SETTINGS_KEY] = config.bot

    app.add_handler(CommandHandler("start", start))
    app.add_handler(CommandHandler("help", help_command))
    app.add_handler(CommandHandler("room", room_command))
    app.add_handler(CommandHandler("clear", clear_command))
    app.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, handle_link))
    app.add_error_handler(error_handler)

    return app


def main() -> None:
    """Main application entry point.

    Raises:
        ConfigError: If required environment variables are missing.
    """
    config = Config()
    configure_logging(config.bot.log_level)

    app = build_application(config)

    if config.bot.use_webhook:
        path = f"/{config.bot.bot_token}"
        webhook_url = f"https://{config.bot.webhook_domain}{path}"
        logger.info(f"Starting webhook on {config.bot.listen_host}:{config.bot.port}")

        app.run_webhook(
            listen=config.bot.listen_host,
            port=config.bot.port,
            url_path=path,
            webhook_url=webhook_url,
        )
    else:
        logger.info("Bot started with long polling")
        app.run_polling()


if __name__ == "__main__":
    main()
