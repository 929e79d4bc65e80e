"""Ledger gateway: a stateless adapter over one ledger backend.

A backend is any object exposing the Voting contract operations:
``candidate_at``, ``is_valid_candidate``, ``total_votes_for``, ``has_voted``,
``vote_for_candidate``, plus ``default_voter``, ``normalize_voter``,
``describe`` and ``close``. ``candidate_at`` raises IndexError past the
last registered candidate.
"""

import logging
from typing import Any, Dict, List

from .config import Settings
from .errors import InvalidCandidate, LedgerUnavailable

logger = logging.getLogger(__name__)


class LedgerGateway:
    def __init__(self, backend: Any, max_candidates: int = 256):
        self.backend = backend
        self.max_candidates = max_candidates

    def list_candidates(self) -> List[str]:
        """Read candidates by index until the first lookup failure.

        The failing index is the length of the list. Reaching
        ``max_candidates`` without a failure means the ledger is misbehaving.
        """
        candidates: List[str] = []
        for index in range(self.max_candidates):
            try:
                candidates.append(self.backend.candidate_at(index))
            except IndexError:
                return candidates
        raise LedgerUnavailable(
            f"ledger returned more than {self.max_candidates} candidates"
        )

    def is_valid_candidate(self, candidate: str) -> bool:
        return self.backend.is_valid_candidate(candidate)

    def get_tally(self, candidate: str) -> int:
        if not self.backend.is_valid_candidate(candidate):
            raise InvalidCandidate(candidate)
        votes = self.backend.total_votes_for(candidate)
        logger.debug("Total votes for %s: %d", candidate, votes)
        return votes

    def has_voted(self, voter: str) -> bool:
        return self.backend.has_voted(voter)

    def submit_vote(self, candidate: str, voter: str) -> str:
        # atomicity of check-then-set is the ledger's, not ours
        return self.backend.vote_for_candidate(candidate, voter)

    def default_voter(self) -> str:
        return self.backend.default_voter()

    def normalize_voter(self, voter: str) -> str:
        return self.backend.normalize_voter(voter)

    def ping(self) -> Dict[str, Any]:
        """Connection test: backend description plus the candidate list."""
        info = dict(self.backend.describe())
        info["candidates"] = self.list_candidates()
        return info

    def close(self) -> None:
        self.backend.close()


def build_gateway(settings: Settings) -> LedgerGateway:
    """Construct the gateway selected by ``settings.ledger_backend``."""
    if settings.ledger_backend == "memory":
        from .memory_ledger import MemoryLedger

        backend = MemoryLedger(settings.candidates, default_account=settings.default_account)
    else:
        from .web3_ledger import Web3Ledger

        backend = Web3Ledger.from_settings(settings)
    logger.info("Ledger backend: %s", settings.ledger_backend)
    return LedgerGateway(backend, max_candidates=settings.max_candidates)
