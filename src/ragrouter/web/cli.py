#!/usr/bin/env python3
"""
CLI launcher for the RagRouter web interface.

This module provides a command-line interface to launch the RagRouter web
server using uvicorn with FastAPI and Gradio.
"""

import argparse
import logging
import os
import sys

import uvicorn

from ..utils.config import RagRouterConfig
from ..utils.logging import setup_logging

logger = logging.getLogger(__name__)


def main(argv=None):
    """Main entry point for the web interface CLI."""
    parser = argparse.ArgumentParser(
        description="Launch the RagRouter web interface with FastAPI and Gradio"
    )
    parser.add_argument(
        "--host",
        default=None,
        help="Host to bind to (default: from config or 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to bind to (default: from config or 7860)",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development",
    )
    parser.add_argument(
        "--config",
        help="Path to configuration file (.env)",
    )

    args = parser.parse_args(argv)

    config = RagRouterConfig(args.config)
    setup_logging(config.log_level)

    # Use command-line args or fall back to config
    host = args.host or config.web_host
    port = args.port or config.web_port
    reload = args.reload or config.web_debug

    logger.info("=" * 60)
    logger.info("Starting RagRouter Web Interface")
    logger.info("=" * 60)
    logger.info(f"Host: {host}")
    logger.info(f"Port: {port}")
    logger.info(f"Reload: {reload}")
    logger.info(f"Mode: {config.mode}")
    logger.info("=" * 60)

    # The Gradio page talks to the API of this same server, reload workers
    # read the address from the environment
    os.environ["RAGROUTER_WEB_HOST"] = host
    os.environ["RAGROUTER_WEB_PORT"] = str(port)

    try:
        uvicorn.run(
            "ragrouter.web.app:app",
            host=host,
            port=port,
            reload=reload,
            log_level="info",
        )

    except Exception as e:
        logger.error(f"Failed to start web server: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
