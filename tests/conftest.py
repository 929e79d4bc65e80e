import os
import sys

import pytest


# Ensure repository src directory (and root scripts) are on sys.path for tests
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
SRC = os.path.join(ROOT, "src")
for path in (SRC, ROOT):
    if path not in sys.path:
        sys.path.insert(0, path)

from vote_relay.gateway import LedgerGateway  # noqa: E402
from vote_relay.memory_ledger import MemoryLedger  # noqa: E402
from vote_relay.service import VotingService  # noqa: E402


@pytest.fixture
def ledger():
    return MemoryLedger(["Alice", "Bob", "Charlie"])


@pytest.fixture
def gateway(ledger):
    return LedgerGateway(ledger)


@pytest.fixture
def service(gateway):
    return VotingService(gateway)
