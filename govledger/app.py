"""
govledger/app.py
----------------
Application factory for the governance node API.

    uvicorn govledger.app:app

The module-level `app` is built on first access, so importing create_app
alone does not load config or touch logging.

Each app owns exactly one SharedGovernance (app.state.governance); the
ledger lives as long as the app does.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import governance as governance_api
from .config import configure_logging, get_cors_origins, load_config
from .gov_runtime.shared import SharedGovernance

log = logging.getLogger(__name__)


def create_app(cfg: Optional[Dict[str, Any]] = None) -> FastAPI:
    if cfg is None:
        cfg = load_config(os.getcwd())
    configure_logging(cfg)

    app = FastAPI(title="govledger node API")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_cors_origins(cfg),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.config = cfg
    app.state.governance = SharedGovernance()

    app.include_router(governance_api.router)

    @app.get("/health")
    def health():
        return {"ok": True, "proposals": len(app.state.governance)}

    log.info("governance API ready")
    return app


def __getattr__(name: str) -> Any:
    # Module-level `app` for `uvicorn govledger.app:app`, built on first access.
    if name == "app":
        app = create_app()
        globals()["app"] = app
        return app
    raise AttributeError(name)
