import logging
import os
from pathlib import Path

from songlink.config import BotConfig
from songlink.bot import SonglinkBot
from songlink.logging_config import setup_logging


def main():
    config_path = None
    if env_path := os.getenv("SONGLINK_CONFIG"):
        config_path = Path(env_path)

    # Load configuration
    try:
        config = BotConfig.load(config_path)
    except Exception as e:
        setup_logging()
        logging.getLogger("songlink").critical(f"Failed to load configuration: {e}")
        return

    logger = setup_logging(config.logging.level)

    errors = config.validate()
    if errors:
        for error in errors:
            logger.critical(error)
        return

    # Initialize and run bot
    bot = SonglinkBot(config, config_path=config_path)

    try:
        bot.run(config.discord.token, log_handler=None)
    except KeyboardInterrupt:
        logger.info("Bot stopped by user.")
    except Exception as e:
        logger.critical(f"Bot crashed: {e}")


if __name__ == "__main__":
    main()
