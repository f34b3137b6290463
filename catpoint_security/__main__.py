#!/usr/bin/env python3
"""Entry point for the catpoint security system."""

import argparse
import logging
import sys

from .config_manager import ConfigManager
from .exceptions import SecurityError
from .logging_config import setup_logging, get_logger


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Catpoint home security service")
    parser.add_argument("--config", default=None, help="Path to the JSON configuration file")
    parser.add_argument("--host", default=None, help="Override the web API host")
    parser.add_argument("--port", type=int, default=None, help="Override the web API port")
    parser.add_argument("--log-level", default=None, help="Override the log level")
    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point for the security service."""
    args = parse_args(argv)

    try:
        config_manager = ConfigManager(args.config)
    except SecurityError as e:
        logging.getLogger("catpoint").error(f"Failed to load configuration: {e}")
        return 1

    config = config_manager.get_config()
    setup_logging(args.log_level or config.log_level, config.log_dir)
    logger = get_logger("main")
    logger.info("Starting Catpoint security service")

    try:
        from .web.app import CatpointWebApp, build_service

        service = build_service(config_manager)
        web_app = CatpointWebApp(service, config_manager, config.event_history_size)
        web_app.run(host=args.host or config.web_host, port=args.port or config.web_port)
    except SecurityError as e:
        logger.error(f"Security service failed to start: {e}")
        return 1
    except KeyboardInterrupt:
        logger.info("Received shutdown signal")

    return 0


if __name__ == "__main__":
    sys.exit(main())
