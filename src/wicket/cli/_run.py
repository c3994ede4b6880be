"""``wicket run`` — start the API server and serve until interrupted."""

import argparse
import asyncio
import contextlib
import logging
import signal
import sys

from wicket.app import App
from wicket.cli._app import build_app
from wicket.errors import ConfigurationError
from wicket.logs import configure_logging

logger = logging.getLogger("wicket")


async def serve(app: App) -> None:
    """Start *app*, wait for SIGINT/SIGTERM, then stop it."""
    stop_requested = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        with contextlib.suppress(NotImplementedError):
            loop.add_signal_handler(sig, stop_requested.set)

    logger.info("Launching API...")
    await app.start()
    logger.info("API running on %s:%d", app.config.host, app.bound_port)

    waiters = {
        asyncio.create_task(stop_requested.wait()),
        asyncio.create_task(app.wait()),
    }
    try:
        _, pending = await asyncio.wait(waiters, return_when=asyncio.FIRST_COMPLETED)
        for task in pending:
            task.cancel()
    finally:
        logger.info("Shutting down")
        await app.stop()


def run_server(args: argparse.Namespace) -> None:
    """Configure logging, build the app, and serve it."""
    try:
        app = build_app(
            host=args.host,
            port=args.port,
            log_level=args.log_level,
            log_format=args.log_format,
        )
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    configure_logging(app.config.log_level, app.config.log_format)
    logger.info("Initializing")

    try:
        asyncio.run(serve(app))
    except ConfigurationError as exc:
        logger.error("Refusing to start: %s", exc)
        raise SystemExit(1) from exc
    except OSError as exc:
        logger.error("Could not bind %s:%s: %s", app.config.host, app.config.port, exc)
        raise SystemExit(1) from exc
