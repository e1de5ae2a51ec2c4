import pathlib
import sys

import pytest
from fastapi.testclient import TestClient

# Ensure repo root (containing the govledger package) is on sys.path
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from govledger.app import create_app
from govledger.config import load_config
from govledger.gov_runtime.governance import GovernanceLedger


@pytest.fixture
def ledger():
    """Fresh ledger per test, keyed by integer account ids like a chain runtime."""
    return GovernanceLedger()


@pytest.fixture
def client(tmp_path):
    """TestClient over an app with its own empty ledger, config from an empty dir."""
    cfg = load_config(str(tmp_path))
    with TestClient(create_app(cfg)) as c:
        yield c
