"""In-process ledger with the same semantics as the deployed Voting contract.

Used for local development (LEDGER_BACKEND=memory), the demo runner and
tests. Each accepted vote is chained to the previous one by hash, so the
returned transaction hashes form an append-only journal.
"""

import hashlib
import json
import logging
import threading
import time
from typing import Any, Dict, Iterable, List, Optional

from .errors import InvalidCandidate, InvalidInput, VoteRejected

logger = logging.getLogger(__name__)

LOCAL_ACCOUNT = "0x" + "0" * 39 + "1"


def _receipt_hash(payload: Dict[str, Any]) -> str:
    canonical = json.dumps(payload, sort_keys=True, separators=(",", ":"))
    return "0x" + hashlib.sha256(canonical.encode("utf-8")).hexdigest()


class MemoryLedger:
    def __init__(self, candidates: Iterable[str], default_account: Optional[str] = None):
        names = list(candidates)
        if len(set(names)) != len(names):
            raise ValueError("candidate names must be unique")
        self._candidates: List[str] = names
        self._votes: Dict[str, int] = {name: 0 for name in names}
        self._voters: Dict[str, bool] = {}
        self._journal: List[Dict[str, Any]] = []
        self._lock = threading.Lock()
        self._default_account = self.normalize_voter(default_account or LOCAL_ACCOUNT)

    ## --- contract views ----------------------------------------------------

    def candidate_at(self, index: int) -> str:
        if index < 0:
            raise IndexError(index)
        return self._candidates[index]

    def is_valid_candidate(self, candidate: str) -> bool:
        return candidate in self._votes

    def total_votes_for(self, candidate: str) -> int:
        if candidate not in self._votes:
            raise InvalidCandidate(candidate)
        return self._votes[candidate]

    def has_voted(self, voter: str) -> bool:
        return self._voters.get(voter, False)

    ## --- state change ------------------------------------------------------

    def vote_for_candidate(self, candidate: str, voter: str) -> str:
        """Check not voted, mark voted and increment the tally, atomically."""
        with self._lock:
            if candidate not in self._votes:
                raise VoteRejected(f"revert: invalid candidate {candidate}")
            if self._voters.get(voter, False):
                raise VoteRejected(f"revert: {voter} has already voted")
            self._voters[voter] = True
            self._votes[candidate] += 1
            previous = self._journal[-1]["hash"] if self._journal else None
            entry = {
                "index": len(self._journal),
                "timestamp": time.time(),
                "voter": voter,
                "candidate": candidate,
                "previous_hash": previous,
            }
            entry["hash"] = _receipt_hash(entry)
            self._journal.append(entry)
        logger.debug("memory ledger accepted vote #%d", entry["index"])
        return entry["hash"]

    ## --- accounts and housekeeping ----------------------------------------

    def default_voter(self) -> str:
        return self._default_account

    def normalize_voter(self, voter: str) -> str:
        if not isinstance(voter, str) or not voter.strip():
            raise InvalidInput("Voter address is required")
        voter = voter.strip()
        if voter.lower().startswith("0x"):
            voter = voter.lower()
        return voter

    def journal(self) -> List[Dict[str, Any]]:
        with self._lock:
            return [dict(e) for e in self._journal]

    def describe(self) -> Dict[str, Any]:
        return {"backend": "memory", "accounts": [self._default_account]}

    def close(self) -> None:
        pass
