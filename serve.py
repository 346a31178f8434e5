#!/usr/bin/env python3
"""LexiLens Analysis Relay - HTTP server entry point."""

import argparse
import sys

import uvicorn

import config
from lexilens.context import RelayContext
from lexilens.errors import ConfigError
from lexilens.logger import setup_relay_logger
from lexilens.providers import build_providers
from lexilens.relay import create_app


def main():
    parser = argparse.ArgumentParser(description="LexiLens Analysis Relay")
    parser.add_argument("--host", default=config.RELAY_HOST, help="Interface to bind")
    parser.add_argument("--port", type=int, default=config.RELAY_PORT, help="Port to listen on")
    args = parser.parse_args()

    logger = setup_relay_logger()

    try:
        providers = build_providers()
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)

    app = create_app(RelayContext(providers=providers))

    logger.info(f"Server running on port {args.port} ({args.host})")
    uvicorn.run(app, host=args.host, port=args.port, log_config=None)


if __name__ == "__main__":
    main()
