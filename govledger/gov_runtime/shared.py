"""
Shared governance handle: one ledger behind one lock.

The ledger itself assumes exclusive access per call. Hosts that serve it
from several threads (uvicorn worker threads, a block loop, ...) go through
SharedGovernance so every operation runs as a serialized transaction.
"""

from __future__ import annotations

import threading
from typing import Dict, Generic, List, Optional, Tuple

from .errors import GovernanceResult
from .governance import AccountId, GovernanceLedger, Proposal, ProposalStatus


class SharedGovernance(Generic[AccountId]):
    def __init__(self, ledger: Optional[GovernanceLedger[AccountId]] = None) -> None:
        self._ledger: GovernanceLedger[AccountId] = ledger if ledger is not None else GovernanceLedger()
        self._lock = threading.RLock()

    def create_proposal(self, creator: AccountId, description: str) -> int:
        with self._lock:
            return self._ledger.create_proposal(creator, description)

    def vote(self, voter: AccountId, proposal_id: int, vote_type: bool) -> GovernanceResult[None]:
        with self._lock:
            return self._ledger.vote(voter, proposal_id, vote_type)

    def get_proposal(self, proposal_id: int) -> Optional[Proposal[AccountId]]:
        with self._lock:
            return self._ledger.get_proposal(proposal_id)

    def finalize_proposal(self, proposal_id: int) -> GovernanceResult[ProposalStatus]:
        with self._lock:
            return self._ledger.finalize_proposal(proposal_id)

    def get_proposal_details(self, proposal_id: int) -> GovernanceResult[Tuple[str, AccountId]]:
        with self._lock:
            return self._ledger.get_proposal_details(proposal_id)

    def list_proposals(self) -> List[Proposal[AccountId]]:
        with self._lock:
            return self._ledger.list_proposals()

    def get_vote(self, voter: AccountId, proposal_id: int) -> Optional[bool]:
        with self._lock:
            return self._ledger.get_vote(voter, proposal_id)

    def votes_for(self, proposal_id: int) -> Dict[AccountId, bool]:
        with self._lock:
            return self._ledger.votes_for(proposal_id)

    def snapshot(self) -> Tuple[List[Proposal[AccountId]], int]:
        """Proposals + next id, read under the lock so both agree."""
        with self._lock:
            return self._ledger.list_proposals(), self._ledger.next_proposal_id

    def __len__(self) -> int:
        with self._lock:
            return len(self._ledger)
