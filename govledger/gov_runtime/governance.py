"""
govledger/gov_runtime/governance.py
-----------------------------------

Proposal / vote / finalize state machine.

State lives in three places owned by the ledger:

    proposals[proposal_id]         = Proposal(...)
    votes[(voter, proposal_id)]    = True | False   (True = yes)
    next_proposal_id               = int, starts at 0

Lifecycle of a proposal:

    active --finalize--> approved   (yes_votes >  no_votes)
    active --finalize--> rejected   (yes_votes <= no_votes, ties included)

Both terminal states are final. Votes only bump counters, they never move
the status.

Invariants:

- yes_votes + no_votes equals the number of vote records keyed to the
  proposal id.
- At most one vote record per (voter, proposal_id), before and after
  finalization.
- Every operation validates before it mutates, so an error result never
  leaves partial state behind.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Generic, Hashable, Iterator, List, Optional, Tuple, TypeVar

from .errors import GovernanceError, GovernanceResult

log = logging.getLogger(__name__)

AccountId = TypeVar("AccountId", bound=Hashable)


class ProposalStatus(str, Enum):
    ACTIVE = "active"
    APPROVED = "approved"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        return self is not ProposalStatus.ACTIVE


@dataclass(frozen=True)
class Proposal(Generic[AccountId]):
    """
    Immutable snapshot of one proposal.

    The ledger replaces the stored snapshot on every vote / finalize, so a
    Proposal handed out by get_proposal() can never be used to change
    ledger state.
    """

    id: int
    description: str
    creator: AccountId
    yes_votes: int = 0
    no_votes: int = 0
    status: ProposalStatus = ProposalStatus.ACTIVE

    @property
    def total_votes(self) -> int:
        return self.yes_votes + self.no_votes

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "creator": self.creator,
            "yes_votes": self.yes_votes,
            "no_votes": self.no_votes,
            "status": self.status.value,
        }


def decide(yes_votes: int, no_votes: int) -> ProposalStatus:
    # Ties reject.
    if yes_votes > no_votes:
        return ProposalStatus.APPROVED
    return ProposalStatus.REJECTED


class GovernanceLedger(Generic[AccountId]):
    """
    Governance ledger over an arbitrary hashable account identity type.

    Public entrypoints:

        create_proposal(creator, description)      -> int
        vote(voter, proposal_id, vote_type)        -> GovernanceResult[None]
        get_proposal(proposal_id)                  -> Optional[Proposal]
        finalize_proposal(proposal_id)             -> GovernanceResult[ProposalStatus]
        get_proposal_details(proposal_id)          -> GovernanceResult[(description, creator)]

    Not thread-safe on its own; see gov_runtime.shared.SharedGovernance.
    """

    def __init__(self) -> None:
        self._proposals: Dict[int, Proposal[AccountId]] = {}
        self._votes: Dict[Tuple[AccountId, int], bool] = {}
        self._next_proposal_id: int = 0

    # ------------------------------------------------------------------
    # Proposal lifecycle
    # ------------------------------------------------------------------

    def create_proposal(self, creator: AccountId, description: str) -> int:
        pid = self._next_proposal_id
        self._proposals[pid] = Proposal(id=pid, description=str(description), creator=creator)
        self._next_proposal_id += 1
        log.info("proposal %d created by %r", pid, creator)
        return pid

    def vote(self, voter: AccountId, proposal_id: int, vote_type: bool) -> GovernanceResult[None]:
        prop = self._lookup(proposal_id)
        if prop is None:
            return self._reject(GovernanceError.PROPOSAL_NOT_FOUND, proposal_id)
        if prop.status.is_terminal:
            return self._reject(GovernanceError.PROPOSAL_NOT_ACTIVE, proposal_id)

        key = (voter, proposal_id)
        if key in self._votes:
            return self._reject(GovernanceError.DUPLICATE_VOTE, proposal_id)

        support = bool(vote_type)
        if support:
            updated = replace(prop, yes_votes=prop.yes_votes + 1)
        else:
            updated = replace(prop, no_votes=prop.no_votes + 1)

        self._votes[key] = support
        self._proposals[proposal_id] = updated
        return GovernanceResult.success()

    def finalize_proposal(self, proposal_id: int) -> GovernanceResult[ProposalStatus]:
        prop = self._lookup(proposal_id)
        if prop is None:
            return self._reject(GovernanceError.PROPOSAL_NOT_FOUND, proposal_id)
        if prop.status.is_terminal:
            return self._reject(GovernanceError.ALREADY_FINALIZED, proposal_id)

        status = decide(prop.yes_votes, prop.no_votes)
        self._proposals[proposal_id] = replace(prop, status=status)
        log.info(
            "proposal %d finalized as %s (yes=%d no=%d)",
            proposal_id,
            status.value,
            prop.yes_votes,
            prop.no_votes,
        )
        return GovernanceResult.success(status)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_proposal(self, proposal_id: int) -> Optional[Proposal[AccountId]]:
        return self._lookup(proposal_id)

    def get_proposal_details(self, proposal_id: int) -> GovernanceResult[Tuple[str, AccountId]]:
        prop = self._lookup(proposal_id)
        if prop is None:
            return self._reject(GovernanceError.PROPOSAL_NOT_FOUND, proposal_id)
        return GovernanceResult.success((prop.description, prop.creator))

    def list_proposals(self) -> List[Proposal[AccountId]]:
        return [self._proposals[pid] for pid in sorted(self._proposals)]

    def get_vote(self, voter: AccountId, proposal_id: int) -> Optional[bool]:
        if self._lookup(proposal_id) is None:
            return None
        return self._votes.get((voter, proposal_id))

    def votes_for(self, proposal_id: int) -> Dict[AccountId, bool]:
        if self._lookup(proposal_id) is None:
            return {}
        return {voter: v for (voter, pid), v in self._votes.items() if pid == proposal_id}

    @property
    def next_proposal_id(self) -> int:
        return self._next_proposal_id

    def __len__(self) -> int:
        return len(self._proposals)

    def __contains__(self, proposal_id: object) -> bool:
        return self._lookup(proposal_id) is not None  # type: ignore[arg-type]

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._proposals))

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _lookup(self, proposal_id: int) -> Optional[Proposal[AccountId]]:
        # bool is an int subclass; True must not resolve to proposal 1.
        if isinstance(proposal_id, bool):
            return None
        return self._proposals.get(proposal_id)

    @staticmethod
    def _reject(error: GovernanceError, proposal_id: int) -> GovernanceResult[Any]:
        log.debug("proposal %s: rejected with %s", proposal_id, error.value)
        return GovernanceResult.failure(error)
