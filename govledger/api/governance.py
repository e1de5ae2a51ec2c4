from __future__ import annotations

"""
Governance HTTP API.

Routes
------
- POST /governance/proposals
- GET  /governance/proposals
- GET  /governance/proposals/{proposal_id}
- GET  /governance/proposals/{proposal_id}/details
- POST /governance/proposals/{proposal_id}/votes
- GET  /governance/proposals/{proposal_id}/votes/{voter}
- POST /governance/proposals/{proposal_id}/finalize

Account identities are plain strings here. Ledger rejections surface as
HTTPException: proposal_not_found -> 404, everything else -> 400.
"""

from typing import Any, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel, Field

from ..gov_runtime.errors import GovernanceError, GovernanceResult
from ..gov_runtime.governance import Proposal
from ..gov_runtime.shared import SharedGovernance

router = APIRouter(prefix="/governance", tags=["governance"])


__all__ = [
    "router",
    "ProposalCreate",
    "ProposalVoteRequest",
    "ProposalOut",
    "get_governance",
]


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


class ProposalCreate(BaseModel):
    creator: str = Field(..., min_length=1)
    description: str = ""


class ProposalVoteRequest(BaseModel):
    voter: str = Field(..., min_length=1)
    support: bool


class ProposalOut(BaseModel):
    id: int
    description: str
    creator: str
    yes_votes: int = 0
    no_votes: int = 0
    status: str = "active"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def get_governance(request: Request) -> SharedGovernance[str]:
    return request.app.state.governance


def _http_error(error: GovernanceError) -> HTTPException:
    status_code = 404 if error is GovernanceError.PROPOSAL_NOT_FOUND else 400
    return HTTPException(
        status_code=status_code,
        detail={"error": error.value, "message": error.message},
    )


def _unwrap(result: GovernanceResult[Any]) -> Any:
    if not result.ok:
        assert result.error is not None
        raise _http_error(result.error)
    return result.value


def _out(p: Proposal[str]) -> ProposalOut:
    return ProposalOut(**p.to_dict())


def _require_proposal(gov: SharedGovernance[str], proposal_id: int) -> Proposal[str]:
    prop = gov.get_proposal(proposal_id)
    if prop is None:
        raise _http_error(GovernanceError.PROPOSAL_NOT_FOUND)
    return prop


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@router.post("/proposals")
def create_proposal(
    payload: ProposalCreate, gov: SharedGovernance[str] = Depends(get_governance)
):
    pid = gov.create_proposal(payload.creator, payload.description)
    return {"ok": True, "proposal_id": pid, "proposal": _out(_require_proposal(gov, pid))}


@router.get("/proposals")
def list_proposals(gov: SharedGovernance[str] = Depends(get_governance)):
    out: List[ProposalOut] = [_out(p) for p in gov.list_proposals()]
    return {"ok": True, "proposals": out}


@router.get("/proposals/{proposal_id}")
def get_proposal(
    proposal_id: int, gov: SharedGovernance[str] = Depends(get_governance)
):
    return {"ok": True, "proposal": _out(_require_proposal(gov, proposal_id))}


@router.get("/proposals/{proposal_id}/details")
def get_proposal_details(
    proposal_id: int, gov: SharedGovernance[str] = Depends(get_governance)
):
    description, creator = _unwrap(gov.get_proposal_details(proposal_id))
    return {"ok": True, "description": description, "creator": creator}


@router.post("/proposals/{proposal_id}/votes")
def vote_proposal(
    proposal_id: int,
    payload: ProposalVoteRequest,
    gov: SharedGovernance[str] = Depends(get_governance),
):
    _unwrap(gov.vote(payload.voter, proposal_id, payload.support))
    return {"ok": True, "proposal": _out(_require_proposal(gov, proposal_id))}


@router.get("/proposals/{proposal_id}/votes/{voter}")
def get_vote(
    proposal_id: int, voter: str, gov: SharedGovernance[str] = Depends(get_governance)
):
    _require_proposal(gov, proposal_id)
    support: Optional[bool] = gov.get_vote(voter, proposal_id)
    return {"ok": True, "voter": voter, "voted": support is not None, "support": support}


@router.post("/proposals/{proposal_id}/finalize")
def finalize_proposal(
    proposal_id: int, gov: SharedGovernance[str] = Depends(get_governance)
):
    status = _unwrap(gov.finalize_proposal(proposal_id))
    return {
        "ok": True,
        "status": status.value,
        "proposal": _out(_require_proposal(gov, proposal_id)),
    }
