#!/usr/bin/env python3
"""
Main entry point for the TinyURL service.

All mappings live in process memory, so the service runs as a single uvicorn
process; async I/O handles concurrent connections and the store is safe
under concurrent access.

Usage:
    python app.py

Environment variables:
    BASE_URL - Fallback base URL for short links
    HOST / PORT - Address to listen on
    SHORT_CODE_LENGTH - Length of generated codes (default 8)
    MAX_GENERATION_ATTEMPTS - Retry ceiling for generated codes (default 20)
    ENABLE_CUSTOM_CODES - Allow custom short codes
    CORS_ORIGINS - JSON list of allowed browser origins
    LOG_LEVEL / LOG_FILE / LOG_JSON - Logging
"""

import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import load_config
from tinyurl.store import InMemoryMappingStore
from tinyurl.service import URLShortenerService
from tinyurl.shortcode import ShortCodeGenerator
from tinyurl.common.logging_config import setup_logging
from web_app import create_app


def build_service(config, logger) -> URLShortenerService:
    """Wire store, generator and service from configuration."""
    store = InMemoryMappingStore(logger=logger.getChild("store"))
    generator = ShortCodeGenerator(default_length=config.short_code_length)
    return URLShortenerService(
        store=store,
        short_code_generator=generator,
        logger=logger.getChild("service"),
        enable_custom_codes=config.enable_custom_codes,
        max_generation_attempts=config.max_generation_attempts,
        base_url=config.base_url,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info("Starting TinyURL service...")

    service = build_service(config, logger)
    app.state.store = service.store
    app.state.service = service

    logger.info(
        f"Service started (code length {config.short_code_length}, "
        f"{service.generator.keyspace_size} possible codes, "
        f"custom codes {'enabled' if config.enable_custom_codes else 'disabled'})"
    )

    yield

    logger.info("Shutting down TinyURL service...")
    await service.close()
    logger.info("Service stopped")


def main():
    """Main entry point."""
    config = load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("TinyURL Service")
    logger.info(f"Configuration: {config.model_dump()}")

    app = create_app(
        store_instance=None,  # Will be set in lifespan
        service_instance=None,
        config=config,
    )

    app.state.logger = logger
    app.router.lifespan_context = lifespan

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
        access_log=True,
    )

    server = uvicorn.Server(uvicorn_config)

    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        logger.info(f"Starting server on {config.host}:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
