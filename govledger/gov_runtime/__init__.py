# govledger/gov_runtime/__init__.py
from __future__ import annotations

"""
Governance runtime package (lazy import)

Keeps import-time side effects out of the package so the HTTP layer and
tests only pull in the modules they touch.

Lazily exposed modules (PEP 562):
- errors      -> GovernanceError / GovernanceResult / GovernanceFailure
- governance  -> GovernanceLedger / Proposal / ProposalStatus
- shared      -> SharedGovernance
"""

from importlib import import_module
from typing import Any

__all__ = [
    "errors",
    "governance",
    "shared",
]

_LAZY_MAP = {
    "errors": "govledger.gov_runtime.errors",
    "governance": "govledger.gov_runtime.governance",
    "shared": "govledger.gov_runtime.shared",
}


def __getattr__(name: str) -> Any:
    mod_path = _LAZY_MAP.get(name)
    if not mod_path:
        raise AttributeError(name)
    return import_module(mod_path)


def __dir__() -> list[str]:
    return sorted(set(globals().keys()) | set(_LAZY_MAP.keys()))
