"""Runtime settings read from the environment (and a local .env file)."""

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple

from dotenv import load_dotenv

DEFAULT_RPC_URL = "http://127.0.0.1:7545"  # Ganache
DEFAULT_CANDIDATES = ("Alice", "Bob", "Charlie")
BACKENDS = ("web3", "memory")


@dataclass(frozen=True)
class Settings:
    ledger_backend: str = "web3"
    rpc_url: str = DEFAULT_RPC_URL
    contract_address: Optional[str] = None
    contract_artifact: Optional[str] = None
    default_account: Optional[str] = None
    ledger_timeout: float = 10.0
    max_candidates: int = 256
    candidates: Tuple[str, ...] = field(default=DEFAULT_CANDIDATES)
    static_dir: Optional[str] = None
    host: str = "127.0.0.1"
    port: int = 8080
    log_level: str = "INFO"

    def __post_init__(self):
        if self.ledger_backend not in BACKENDS:
            raise ValueError(
                f"LEDGER_BACKEND must be one of {', '.join(BACKENDS)}, got {self.ledger_backend!r}"
            )
        if self.ledger_timeout <= 0:
            raise ValueError("LEDGER_TIMEOUT must be positive")
        if self.max_candidates < 1:
            raise ValueError("MAX_CANDIDATES must be at least 1")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from ``environ`` (defaults to os.environ after load_dotenv)."""
        if environ is None:
            load_dotenv()
            environ = os.environ

        def get(name: str) -> Optional[str]:
            value = environ.get(name)
            if value is None or not value.strip():
                return None
            return value.strip()

        candidates = DEFAULT_CANDIDATES
        raw_candidates = get("CANDIDATES")
        if raw_candidates:
            candidates = tuple(c.strip() for c in raw_candidates.split(",") if c.strip())

        try:
            return cls(
                ledger_backend=(get("LEDGER_BACKEND") or "web3").lower(),
                rpc_url=get("RPC_URL") or DEFAULT_RPC_URL,
                contract_address=get("CONTRACT_ADDRESS"),
                contract_artifact=get("CONTRACT_ARTIFACT"),
                default_account=get("DEFAULT_ACCOUNT"),
                ledger_timeout=float(get("LEDGER_TIMEOUT") or 10),
                max_candidates=int(get("MAX_CANDIDATES") or 256),
                candidates=candidates,
                static_dir=get("STATIC_DIR"),
                host=get("HOST") or "127.0.0.1",
                port=int(get("PORT") or 8080),
                log_level=(get("LOG_LEVEL") or "INFO").upper(),
            )
        except ValueError as e:
            raise ValueError(f"invalid configuration: {e}") from e
