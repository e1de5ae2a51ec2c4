from __future__ import annotations

"""
Governance error taxonomy + result values.

Every ledger operation that can be rejected returns a GovernanceResult
instead of raising. The four rejection kinds are a closed enumeration so
callers can match on them exhaustively:

    proposal_not_found   -> referenced id has no record
    proposal_not_active  -> vote attempted on a finalized proposal
    duplicate_vote       -> voter already has a record for this proposal
    already_finalized    -> finalize attempted on a finalized proposal

None of these are fatal to the ledger; state is untouched on every error
path.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Generic, Optional, TypeVar

T = TypeVar("T")


class GovernanceError(str, Enum):
    PROPOSAL_NOT_FOUND = "proposal_not_found"
    PROPOSAL_NOT_ACTIVE = "proposal_not_active"
    DUPLICATE_VOTE = "duplicate_vote"
    ALREADY_FINALIZED = "already_finalized"

    @property
    def message(self) -> str:
        return _MESSAGES[self]


_MESSAGES: Dict[GovernanceError, str] = {
    GovernanceError.PROPOSAL_NOT_FOUND: "No proposal found with the given ID",
    GovernanceError.PROPOSAL_NOT_ACTIVE: "Cannot vote on inactive proposal",
    GovernanceError.DUPLICATE_VOTE: "Voter has already cast a vote for this proposal",
    GovernanceError.ALREADY_FINALIZED: "Cannot finalize an already finalized proposal",
}


class GovernanceFailure(RuntimeError):
    """Raised by GovernanceResult.unwrap() when the result carries an error."""

    def __init__(self, error: GovernanceError):
        super().__init__(error.message)
        self.error = error


@dataclass(frozen=True)
class GovernanceResult(Generic[T]):
    ok: bool
    value: Optional[T] = None
    error: Optional[GovernanceError] = None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "GovernanceResult[T]":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: GovernanceError) -> "GovernanceResult[T]":
        return cls(ok=False, error=error)

    def __bool__(self) -> bool:
        return self.ok

    def unwrap(self) -> T:
        if not self.ok:
            assert self.error is not None
            raise GovernanceFailure(self.error)
        return self.value  # type: ignore[return-value]

    def to_dict(self) -> Dict[str, Any]:
        if self.ok:
            return {"ok": True, "value": self.value}
        assert self.error is not None
        return {"ok": False, "error": self.error.value, "message": self.error.message}
