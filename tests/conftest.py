"""Shared test fixtures and sample data."""
from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from ppf.auth import OperatorSigner
from ppf.events import EventLog
from ppf.services import PriceFeedOracle

TOKEN_1 = "0x1234"
TOKEN_2 = "0x5678"
TOKEN_3 = "0xabcd"

NOW = 1_700_000_000

OPERATOR_KEY = "0x" + "00" * 31 + "01"
OWNER_KEY = "0x" + "00" * 31 + "02"
STRANGER_KEY = "0x" + "00" * 31 + "03"

# Address of private key 1.
OPERATOR_ADDRESS = "0x7e5f4552091a69125d5dfcb7b8c2659029395bdf"


class FixedClock:
    """Deterministic clock that tests can move forward."""

    def __init__(self, now: int = NOW) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now


class AcceptingRecovery:
    """Recovery stub that attributes every signature to one address."""

    def __init__(self, signer: str) -> None:
        self.signer = signer
        self.calls = 0

    def recover(self, message_hash: bytes, signature: bytes) -> str | None:
        self.calls += 1
        return self.signer


# ---------------------------------------------------------------------------
# Key fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def operator_signer() -> OperatorSigner:
    return OperatorSigner.from_hex(OPERATOR_KEY)


@pytest.fixture(scope="session")
def owner_signer() -> OperatorSigner:
    return OperatorSigner.from_hex(OWNER_KEY)


@pytest.fixture(scope="session")
def stranger_signer() -> OperatorSigner:
    return OperatorSigner.from_hex(STRANGER_KEY)


# ---------------------------------------------------------------------------
# Oracle fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture()
def event_log() -> EventLog:
    return EventLog()


@pytest.fixture()
def oracle(
    operator_signer: OperatorSigner,
    owner_signer: OperatorSigner,
    event_log: EventLog,
    clock: FixedClock,
) -> PriceFeedOracle:
    return PriceFeedOracle(
        operator_signer.address,
        owner_signer.address,
        events=event_log,
        clock=clock,
    )


@pytest.fixture()
def unsigned_oracle(
    operator_signer: OperatorSigner,
    owner_signer: OperatorSigner,
    event_log: EventLog,
    clock: FixedClock,
) -> PriceFeedOracle:
    """Oracle whose signature check always passes, for flow-only tests."""
    return PriceFeedOracle(
        operator_signer.address,
        owner_signer.address,
        recovery=AcceptingRecovery(operator_signer.address),
        events=event_log,
        clock=clock,
    )


# ---------------------------------------------------------------------------
# Config YAML fixture
# ---------------------------------------------------------------------------

SAMPLE_YAML = textwrap.dedent(f"""\
    oracle:
      operator: "{OPERATOR_ADDRESS}"
      operator_owner: "0x2b5ad5c4795c026514f8317c7a215e218dccd6cf"
    signer:
      private_key: "{OPERATOR_KEY}"
    server:
      host: 0.0.0.0
      port: 9200
      url: "http://oracle.example.com"
      timeout: 5
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file
