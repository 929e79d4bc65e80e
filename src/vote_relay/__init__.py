"""vote_relay package - relay votes and tally queries to a voting ledger.

The package wires three layers together:
- gateway: stateless adapter over a ledger backend (web3 contract or memory)
- service: one-vote-per-voter and candidate-validity policy
- server: Flask HTTP API consumed by the browser client and admin page
"""

from .errors import (
    AlreadyVoted,
    InvalidCandidate,
    InvalidInput,
    LedgerUnavailable,
    VoteRejected,
    VotingError,
)
from .gateway import LedgerGateway
from .service import VoteReceipt, VotingService

__all__ = [
    "AlreadyVoted",
    "InvalidCandidate",
    "InvalidInput",
    "LedgerGateway",
    "LedgerUnavailable",
    "VoteReceipt",
    "VoteRejected",
    "VotingError",
    "VotingService",
]
