# govledger/__main__.py
"""
Entry point for running the governance node API as a module:
    python -m govledger [--host 127.0.0.1] [--port 8000] [--config .]
Env toggles:
  GOVLEDGER_HOST=...       -> bind address
  GOVLEDGER_PORT=...       -> bind port
  GOVLEDGER_LOG_LEVEL=...  -> logging level (DEBUG shows rejected votes)
"""

from __future__ import annotations

import argparse
import os

import uvicorn

from .app import create_app
from .config import get_bind_host, get_bind_port, load_config


def parse_args(argv=None):
    p = argparse.ArgumentParser(
        prog="govledger",
        description="Run the governance ledger node API",
    )
    p.add_argument(
        "--config",
        default=os.getcwd(),
        help="Directory holding govledger_config.yaml (default: cwd)",
    )
    p.add_argument(
        "--host",
        default=None,
        help="Bind address (default: server.host from config)",
    )
    p.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port (default: server.port from config)",
    )
    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    cfg = load_config(args.config)
    host = args.host if args.host is not None else get_bind_host(cfg)
    port = args.port if args.port is not None else get_bind_port(cfg)

    uvicorn.run(create_app(cfg), host=host, port=port)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
