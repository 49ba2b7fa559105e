"""API test fixtures: FastAPI app over httpx with a fresh ledger per test.

Invariants:
    - app.state.ledger replaced before every test (lifespan is not run by ASGITransport)
    - Time controlled by ManualClock through the `clock` fixture
"""

import pytest
from httpx import ASGITransport, AsyncClient

from ecertify.infrastructure.clock import ManualClock
from ecertify.main import app
from ecertify.services.ledger import Ledger
from tests.actors import ALICE, BOB, MIT, RECRUITER, STANFORD


@pytest.fixture
def clock():
    return ManualClock(start=1_700_000_000)


@pytest.fixture
def ledger(clock):
    ledger = Ledger(clock=clock)
    app.state.ledger = ledger
    yield ledger
    app.state.ledger = None


@pytest.fixture
async def client(ledger):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def campus(ledger):
    ledger.create_profile(ALICE, "Alice", "QmAlice", False)
    ledger.create_profile(BOB, "Bob", "", False)
    ledger.create_profile(MIT, "MIT", "QmMit", True)
    ledger.create_profile(STANFORD, "Stanford", "", True)
    ledger.create_profile(RECRUITER, "Recruiter", "", False)
    ledger.link_to_institute(ALICE, MIT)
    return ledger
