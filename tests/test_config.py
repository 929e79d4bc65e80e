import json

import pytest

from vote_relay.abi import VOTING_ABI, load_artifact
from vote_relay.config import DEFAULT_RPC_URL, Settings


def test_defaults_from_empty_environment():
    s = Settings.from_env({})
    assert s.ledger_backend == "web3"
    assert s.rpc_url == DEFAULT_RPC_URL
    assert s.port == 8080
    assert s.candidates == ("Alice", "Bob", "Charlie")


def test_values_from_environment():
    s = Settings.from_env(
        {
            "LEDGER_BACKEND": "Memory",
            "CANDIDATES": "Karthik, Sadwik,,Anirudh",
            "LEDGER_TIMEOUT": "2.5",
            "MAX_CANDIDATES": "16",
            "PORT": "9000",
            "LOG_LEVEL": "debug",
            "CONTRACT_ADDRESS": "  ",
        }
    )
    assert s.ledger_backend == "memory"
    assert s.candidates == ("Karthik", "Sadwik", "Anirudh")
    assert s.ledger_timeout == 2.5
    assert s.max_candidates == 16
    assert s.port == 9000
    assert s.log_level == "DEBUG"
    assert s.contract_address is None


@pytest.mark.parametrize(
    "env",
    [
        {"LEDGER_BACKEND": "carrier-pigeon"},
        {"LEDGER_TIMEOUT": "0"},
        {"MAX_CANDIDATES": "zero"},
    ],
)
def test_invalid_configuration(env):
    with pytest.raises(ValueError):
        Settings.from_env(env)


def test_load_truffle_artifact(tmp_path):
    path = tmp_path / "Voting.json"
    path.write_text(
        json.dumps({"abi": VOTING_ABI, "networks": {"5777": {"address": "0x" + "cd" * 20}}})
    )
    abi, address = load_artifact(str(path))
    assert abi == VOTING_ABI
    assert address == "0x" + "cd" * 20


def test_load_artifact_without_abi(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text(json.dumps({"networks": {}}))
    with pytest.raises(ValueError):
        load_artifact(str(path))


def test_abi_exposes_contract_functions():
    names = {e.get("name") for e in VOTING_ABI if e["type"] == "function"}
    assert names == {
        "candidateList",
        "voters",
        "votesReceived",
        "voteForCandidate",
        "totalVotesFor",
        "isValidCandidate",
    }
