"""Standalone launcher for the static file server."""

import logging
import signal
import sys
import time
from pathlib import Path
from typing import Optional

if __package__ is None or __package__ == "":
    sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from app_config import AppConfigurationError, load_app_config
from server import ServerConfigurationError, StaticServer, StaticServerConfig


def main(argv: Optional[list[str]] = None) -> int:
    """Run the static server process until interrupted."""
    args = sys.argv[1:] if argv is None else argv
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logger = logging.getLogger("static_server")

    try:
        app_config = load_app_config(args[0] if args else None)
        config = StaticServerConfig.from_settings(app_config.server, app_config.static)
    except (AppConfigurationError, ServerConfigurationError) as error:
        logger.error("Static server configuration error: %s", error)
        return 1

    logging.getLogger().setLevel(app_config.server.log_level)
    server = StaticServer(config=config, logger=logger)

    try:
        server.start()
        logger.info("Press Ctrl+C to stop.")

        shutdown = False

        def handle_signal(signum, frame) -> None:
            del frame
            nonlocal shutdown
            logger.info("Signal %s received, stopping.", signal.Signals(signum).name)
            shutdown = True

        signal.signal(signal.SIGINT, handle_signal)
        signal.signal(signal.SIGTERM, handle_signal)

        while not shutdown:
            time.sleep(0.2)

    except KeyboardInterrupt:
        logger.info("Stopping by user request.")
    finally:
        server.stop()

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
