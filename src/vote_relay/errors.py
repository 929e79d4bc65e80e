"""Error kinds shared by the gateway, the service and the HTTP layer."""

from typing import Any, Dict


class VotingError(Exception):
    """Base class. ``kind`` is the tag reported to clients."""

    kind = "VotingError"

    def to_dict(self) -> Dict[str, Any]:
        return {"success": False, "error": str(self), "kind": self.kind}


class InvalidInput(VotingError):
    kind = "InvalidInput"


class InvalidCandidate(VotingError):
    kind = "InvalidCandidate"

    def __init__(self, candidate: str):
        super().__init__(f"Invalid candidate: {candidate}")
        self.candidate = candidate


class AlreadyVoted(VotingError):
    kind = "AlreadyVoted"

    def __init__(self, voter: str):
        super().__init__(f"Voter {voter} has already voted")
        self.voter = voter


class LedgerUnavailable(VotingError):
    kind = "LedgerUnavailable"


class VoteRejected(VotingError):
    """The ledger refused a vote at its atomic check-then-set step.

    Raised by backends only; the voting service reports it as AlreadyVoted.
    """

    kind = "VoteRejected"
