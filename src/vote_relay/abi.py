"""ABI of the deployed ``Voting`` contract and Truffle artifact loading."""

import json
from typing import Any, Dict, List, Optional, Tuple


def _fn(name: str, inputs: List[Dict[str, str]], outputs: List[Dict[str, str]], mutability: str):
    return {
        "inputs": inputs,
        "name": name,
        "outputs": outputs,
        "stateMutability": mutability,
        "type": "function",
    }


def _arg(abi_type: str, name: str = "") -> Dict[str, str]:
    return {"internalType": abi_type, "name": name, "type": abi_type}


VOTING_ABI: List[Dict[str, Any]] = [
    {
        "inputs": [_arg("string[]", "candidateNames")],
        "stateMutability": "nonpayable",
        "type": "constructor",
    },
    _fn("candidateList", [_arg("uint256")], [_arg("string")], "view"),
    _fn("voters", [_arg("address")], [_arg("bool")], "view"),
    _fn("votesReceived", [_arg("string")], [_arg("uint256")], "view"),
    _fn("voteForCandidate", [_arg("string", "candidate")], [], "nonpayable"),
    _fn("totalVotesFor", [_arg("string", "candidate")], [_arg("uint256")], "view"),
    _fn("isValidCandidate", [_arg("string", "candidate")], [_arg("bool")], "view"),
]


def load_artifact(path: str) -> Tuple[List[Dict[str, Any]], Optional[str]]:
    """Read ``(abi, address)`` from a Truffle build artifact.

    The address comes from the first entry under ``networks``; it is None
    when the artifact was never migrated.
    """
    with open(path, "r", encoding="utf-8") as f:
        artifact = json.load(f)
    abi = artifact if isinstance(artifact, list) else artifact.get("abi")
    if not isinstance(abi, list):
        raise ValueError(f"no ABI found in {path}")
    address = None
    networks = artifact.get("networks") if isinstance(artifact, dict) else None
    if networks:
        first = next(iter(networks.values()))
        address = first.get("address")
    return abi, address
