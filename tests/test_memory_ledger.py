import pytest

from vote_relay.errors import InvalidCandidate, InvalidInput, VoteRejected
from vote_relay.memory_ledger import MemoryLedger


def test_candidate_lookup_past_end_raises_index_error(ledger):
    assert ledger.candidate_at(2) == "Charlie"
    with pytest.raises(IndexError):
        ledger.candidate_at(3)
    with pytest.raises(IndexError):
        ledger.candidate_at(-1)


def test_duplicate_candidates_rejected():
    with pytest.raises(ValueError):
        MemoryLedger(["Alice", "Alice"])


def test_vote_is_check_then_set(ledger):
    ledger.vote_for_candidate("Alice", "0xa")
    with pytest.raises(VoteRejected):
        ledger.vote_for_candidate("Bob", "0xa")
    with pytest.raises(VoteRejected):
        ledger.vote_for_candidate("Zed", "0xb")
    assert ledger.total_votes_for("Alice") == 1
    assert ledger.total_votes_for("Bob") == 0
    assert ledger.has_voted("0xb") is False


def test_total_votes_for_unknown_candidate(ledger):
    with pytest.raises(InvalidCandidate):
        ledger.total_votes_for("Zed")


def test_journal_is_hash_linked(ledger):
    first = ledger.vote_for_candidate("Alice", "0x1")
    second = ledger.vote_for_candidate("Bob", "0x2")
    journal = ledger.journal()
    assert [e["hash"] for e in journal] == [first, second]
    assert journal[0]["previous_hash"] is None
    assert journal[1]["previous_hash"] == first
    assert first != second


def test_normalize_voter(ledger):
    assert ledger.normalize_voter(" 0xABC ") == "0xabc"
    assert ledger.normalize_voter("voter-7") == "voter-7"
    with pytest.raises(InvalidInput):
        ledger.normalize_voter("")
