"""Binding to the deployed Voting contract over JSON-RPC (web3.py).

Contract calls are translated into the vote_relay error kinds:
- a revert while reading ``candidateList(i)`` means "no candidate at i"
- a revert or a failed receipt on ``voteForCandidate`` is a VoteRejected
- transport errors, RPC errors and timeouts are LedgerUnavailable
"""

import logging
from typing import Any, Callable, Dict, Optional

import requests
from web3 import Web3
from web3.exceptions import (
    BadFunctionCallOutput,
    ContractLogicError,
    TimeExhausted,
    Web3Exception,
)

from .abi import VOTING_ABI, load_artifact
from .config import Settings
from .errors import InvalidInput, LedgerUnavailable, VoteRejected

logger = logging.getLogger(__name__)

_TRANSPORT_ERRORS = (Web3Exception, requests.RequestException, ValueError, OSError)


def _is_revert(exc: Exception) -> bool:
    if isinstance(exc, (ContractLogicError, BadFunctionCallOutput)):
        return True
    return "revert" in str(exc).lower()


class Web3Ledger:
    def __init__(
        self,
        w3: Web3,
        contract: Any,
        timeout: float = 10.0,
        default_account: Optional[str] = None,
    ):
        self.w3 = w3
        self.contract = contract
        self.timeout = timeout
        self._default_account = default_account

    @classmethod
    def from_settings(cls, settings: Settings) -> "Web3Ledger":
        abi = VOTING_ABI
        address = settings.contract_address
        if settings.contract_artifact:
            abi, artifact_address = load_artifact(settings.contract_artifact)
            address = address or artifact_address
        if not address:
            raise ValueError("CONTRACT_ADDRESS (or CONTRACT_ARTIFACT) is required for the web3 backend")
        if not Web3.is_address(address):
            raise ValueError(f"CONTRACT_ADDRESS is not an address: {address}")

        provider = Web3.HTTPProvider(
            settings.rpc_url, request_kwargs={"timeout": settings.ledger_timeout}
        )
        w3 = Web3(provider)
        contract = w3.eth.contract(address=Web3.to_checksum_address(address), abi=abi)
        default_account = None
        if settings.default_account:
            if not Web3.is_address(settings.default_account):
                raise ValueError(f"DEFAULT_ACCOUNT is not an address: {settings.default_account}")
            default_account = Web3.to_checksum_address(settings.default_account)
        logger.info("Using contract %s at %s", contract.address, settings.rpc_url)
        return cls(w3, contract, timeout=settings.ledger_timeout, default_account=default_account)

    def _function(self, name: str, *args) -> Any:
        return getattr(self.contract.functions, name)(*args)

    def _view(self, name: str, *args) -> Any:
        try:
            return self._function(name, *args).call()
        except _TRANSPORT_ERRORS as e:
            logger.error("%s%r failed: %s", name, args, e)
            raise LedgerUnavailable(f"{name} call failed: {e}") from e

    ## --- contract views ----------------------------------------------------

    def candidate_at(self, index: int) -> str:
        try:
            return self._function("candidateList", index).call()
        except _TRANSPORT_ERRORS as e:
            if _is_revert(e):
                raise IndexError(index) from e
            raise LedgerUnavailable(f"candidateList({index}) failed: {e}") from e

    def is_valid_candidate(self, candidate: str) -> bool:
        return bool(self._view("isValidCandidate", candidate))

    def total_votes_for(self, candidate: str) -> int:
        return int(self._view("totalVotesFor", candidate))

    def has_voted(self, voter: str) -> bool:
        return bool(self._view("voters", voter))

    ## --- state change ------------------------------------------------------

    def vote_for_candidate(self, candidate: str, voter: str) -> str:
        try:
            tx_hash = self._function("voteForCandidate", candidate).transact({"from": voter})
            receipt = self.w3.eth.wait_for_transaction_receipt(tx_hash, timeout=self.timeout)
        except TimeExhausted as e:
            raise LedgerUnavailable(f"vote not mined within {self.timeout}s") from e
        except _TRANSPORT_ERRORS as e:
            if _is_revert(e):
                raise VoteRejected(str(e)) from e
            raise LedgerUnavailable(f"voteForCandidate failed: {e}") from e
        if receipt["status"] != 1:
            raise VoteRejected(f"transaction {Web3.to_hex(tx_hash)} reverted")
        return Web3.to_hex(tx_hash)

    ## --- accounts and housekeeping ----------------------------------------

    def default_voter(self) -> str:
        if self._default_account is None:
            accounts = self._rpc(lambda: self.w3.eth.accounts)
            if not accounts:
                raise LedgerUnavailable("node exposes no unlocked accounts")
            self._default_account = accounts[0]
        return self._default_account

    def normalize_voter(self, voter: str) -> str:
        if not isinstance(voter, str) or not Web3.is_address(voter.strip()):
            raise InvalidInput(f"Invalid voter address: {voter}")
        return Web3.to_checksum_address(voter.strip())

    def describe(self) -> Dict[str, Any]:
        if not self._rpc(self.w3.is_connected):
            raise LedgerUnavailable("not connected to the ledger node")
        code = self._rpc(lambda: self.w3.eth.get_code(self.contract.address))
        if not code:
            raise LedgerUnavailable(f"no contract deployed at {self.contract.address}")
        accounts = self._rpc(lambda: self.w3.eth.accounts)
        return {
            "backend": "web3",
            "contract": self.contract.address,
            "chain_id": self._rpc(lambda: self.w3.eth.chain_id),
            "accounts": list(accounts),
        }

    def _rpc(self, fn: Callable[[], Any]) -> Any:
        try:
            return fn()
        except _TRANSPORT_ERRORS as e:
            raise LedgerUnavailable(f"RPC request failed: {e}") from e

    def close(self) -> None:
        logger.debug("closing web3 ledger binding")
        self.contract = None
