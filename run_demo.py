"""Demo runner: plays the reference voting scenario against a memory ledger.

Run this script from the repository root:
    python run_demo.py
"""

import logging

from vote_relay.errors import VotingError
from vote_relay.gateway import LedgerGateway
from vote_relay.memory_ledger import MemoryLedger
from vote_relay.service import VotingService


def _print_heading(msg: str):
    print()
    print(msg)


def _print_kv(key: str, value):
    print(f"  {key}: {value}")


def _attempt(service: VotingService, candidate: str, voter: str):
    try:
        receipt = service.cast_vote(candidate, voter)
    except VotingError as e:
        _print_kv(f"{voter} -> {candidate}", f"{e.kind} ({e})")
    else:
        _print_kv(f"{voter} -> {candidate}", "accepted " + receipt.tx_hash[:10] + "..")


def main():
    logging.basicConfig(level=logging.WARNING)
    ledger = MemoryLedger(["Alice", "Bob", "Charlie"])
    service = VotingService(LedgerGateway(ledger))

    _print_heading("[1] Registered candidates")
    for name in service.list_candidates():
        _print_kv("candidate", name)

    _print_heading("[2] Casting votes")
    _attempt(service, "Alice", "0xA")
    _attempt(service, "Alice", "0xA")  # repeat vote
    _attempt(service, "Zed", "0xB")  # unknown candidate
    _attempt(service, "Bob", "0xB")
    _attempt(service, "Alice", "0xC")

    _print_heading("[3] Results")
    for name, count in service.get_results().items():
        _print_kv(name, count)

    _print_heading("[4] Ledger journal")
    for entry in ledger.journal():
        print(" ", entry["index"], entry["hash"][:10], "prev=", (entry["previous_hash"] or "-")[:10])


if __name__ == "__main__":
    main()
