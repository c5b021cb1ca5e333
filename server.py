#!/usr/bin/env python3
"""
Nameserver — FastAPI service that places worker nodes in a 6-ary tree.

Run:
  python server.py                      # env config, port 8080
  python server.py --port 9000 --connect sqlite:///artifacts/nameserver.db
"""

import argparse
import logging
from contextlib import asynccontextmanager
from dataclasses import replace
from typing import Optional

from fastapi import FastAPI

from api.register_routes import nameserver_error_handler, router as register_router
from core.config import NameserverConfig
from core.errors import NameserverError, StartupError, StoreError
from core.registration import RegistrationService
from core.registry_db import create_store, redact

log = logging.getLogger("nameserver")


def open_store(config: NameserverConfig):
    """Connect to the configured store and make sure the schema exists."""
    target = redact(config.connect_string)
    log.info(f"Connecting to {target}")
    try:
        store = create_store(config.connect_string)
        store.init_schema()
    except StoreError as e:
        raise StartupError(f"could not prepare store {target}: {e}") from e
    log.info(f"Connected to {target}, server table ready")
    return store


def create_app(config: Optional[NameserverConfig] = None) -> FastAPI:
    config = config or NameserverConfig.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        store = open_store(config)
        app.state.store = store
        app.state.registration = RegistrationService(store)
        yield

    app = FastAPI(title="Nameserver", docs_url=None, redoc_url=None, lifespan=lifespan)
    app.state.config = config
    app.include_router(register_router)
    app.add_exception_handler(NameserverError, nameserver_error_handler)
    return app


def main(argv=None):
    parser = argparse.ArgumentParser(description="Hierarchical nameserver")
    parser.add_argument("--host", help="Bind address (default: $NAMESERVER_HOST or 0.0.0.0)")
    parser.add_argument("--port", type=int, help="Listen port (default: $PORT or 8080)")
    parser.add_argument("--connect", help="Store URL (default: $NAMESERVER_CONNECT_STRING)")
    parser.add_argument("--log-level", help="Logging level (default: $NAMESERVER_LOG_LEVEL or INFO)")
    args = parser.parse_args(argv)

    config = NameserverConfig.from_env()
    overrides = {
        "host": args.host,
        "port": args.port,
        "connect_string": args.connect,
        "log_level": args.log_level,
    }
    config = replace(config, **{k: v for k, v in overrides.items() if v is not None})

    logging.basicConfig(
        level=getattr(logging, config.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    import uvicorn
    log.info(f"Nameserver: http://{config.host}:{config.port}")
    uvicorn.run(create_app(config), host=config.host, port=config.port,
                log_level=config.log_level.lower())


app = create_app()


if __name__ == "__main__":
    main()
