"""Voting service: the one-vote-per-voter and candidate-gating policy.

The service keeps no state of its own. The has-voted query before a vote is
only a fast pre-check; the ledger's atomic check-then-set is what actually
guarantees one ballot per voter, even across several service instances.
"""

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, List, Optional

from .errors import (
    AlreadyVoted,
    InvalidCandidate,
    InvalidInput,
    LedgerUnavailable,
    VoteRejected,
)
from .gateway import LedgerGateway

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VoteReceipt:
    candidate: str
    voter: str
    tx_hash: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _require_name(candidate: Any) -> str:
    if not isinstance(candidate, str) or not candidate.strip():
        raise InvalidInput("Candidate name is required")
    # names are matched against the ledger exactly as given
    return candidate


class VotingService:
    def __init__(self, gateway: LedgerGateway):
        self.gateway = gateway

    def cast_vote(self, candidate: Any, voter: Optional[str] = None) -> VoteReceipt:
        """Cast one ballot for ``candidate`` from ``voter``.

        Raises InvalidInput, InvalidCandidate, AlreadyVoted or
        LedgerUnavailable. Nothing is retried.
        """
        candidate = _require_name(candidate)
        if voter is not None:
            voter = self.gateway.normalize_voter(voter)

        if not self.gateway.is_valid_candidate(candidate):
            logger.warning("Rejected vote for unknown candidate %r", candidate)
            raise InvalidCandidate(candidate)

        if voter is None:
            voter = self.gateway.default_voter()

        if self.gateway.has_voted(voter):
            logger.warning("Rejected repeat vote from %s", voter)
            raise AlreadyVoted(voter)

        try:
            tx_hash = self.gateway.submit_vote(candidate, voter)
        except VoteRejected as e:
            # lost a race, or the pre-check was stale
            logger.warning("Ledger rejected vote from %s: %s", voter, e)
            raise AlreadyVoted(voter) from e

        logger.info("Vote for %s from %s accepted (tx %s)", candidate, voter, tx_hash)
        return VoteReceipt(candidate=candidate, voter=voter, tx_hash=tx_hash)

    def get_results(self, candidates: Optional[Iterable[str]] = None) -> Dict[str, int]:
        """Tally per candidate, in the order given.

        Defaults to every registered candidate. Any failing tally read fails
        the whole call with LedgerUnavailable.
        """
        if candidates is None:
            names: List[str] = self.gateway.list_candidates()
        else:
            names = [_require_name(c) for c in candidates]

        results: Dict[str, int] = {}
        for name in names:
            try:
                results[name] = self.gateway.get_tally(name)
            except Exception as e:
                logger.error("Tally read for %s failed: %s", name, e)
                raise LedgerUnavailable(f"could not read tally for {name}: {e}") from e
        return results

    def list_candidates(self) -> List[str]:
        return self.gateway.list_candidates()

    def get_tally(self, candidate: Any) -> int:
        return self.gateway.get_tally(_require_name(candidate))

    def has_voted(self, voter: Any) -> bool:
        if not isinstance(voter, str):
            raise InvalidInput("Voter address is required")
        return self.gateway.has_voted(self.gateway.normalize_voter(voter))
