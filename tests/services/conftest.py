"""Service test fixtures: fresh Ledger per test on a manual clock.

Invariants:
    - Every test gets its own Ledger; nothing is shared between tests
    - Time only moves when a test calls clock.advance()
"""

import pytest

from ecertify.infrastructure.clock import ManualClock
from ecertify.services.ledger import Ledger
from tests.actors import ALICE, BOB, MIT, RECRUITER, STANFORD


@pytest.fixture
def clock():
    return ManualClock(start=1_700_000_000)


@pytest.fixture
def ledger(clock):
    return Ledger(clock=clock)


@pytest.fixture
def campus(ledger):
    """Alice and Bob (students), MIT and Stanford (institutes), a recruiter."""
    ledger.create_profile(ALICE, "Alice", "QmAlice", False)
    ledger.create_profile(BOB, "Bob", "QmBob", False)
    ledger.create_profile(MIT, "MIT", "QmMit", True)
    ledger.create_profile(STANFORD, "Stanford", "QmStanford", True)
    ledger.create_profile(RECRUITER, "Recruiter", "", False)
    return ledger


@pytest.fixture
def linked(campus):
    """campus + Alice linked to MIT."""
    campus.link_to_institute(ALICE, MIT)
    return campus
