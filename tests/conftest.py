"""Pytest configuration and fixtures."""

from __future__ import annotations

from datetime import date, timedelta
from typing import AsyncGenerator, Callable, Generator, Sequence

import pytest
import pytest_asyncio
from fastapi import FastAPI
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient

from investrisk.core.exceptions import ReasoningServiceError
from investrisk.domain.risk import HistoricalPoint, IndicatorSet, ProfileBand
from investrisk.risk.scoring import AssistedScore


pytest_plugins = ["pytest_asyncio"]


SEED_BANDS = [
    ("conservador", 1, 8),
    ("moderado", 7, 14),
    ("arrojado", 12, 20),
]

REFERENCE_DATE = date(2026, 10, 16)


class FakeGateway:
    """Reasoning gateway returning a fixed result or raising a fixed error."""

    def __init__(
        self,
        result: AssistedScore | None = None,
        error: ReasoningServiceError | None = None,
    ):
        self.result = result
        self.error = error
        self.calls: list[tuple[IndicatorSet, list[ProfileBand]]] = []

    async def assess_risk(
        self,
        indicators: IndicatorSet,
        profile_ranges: Sequence[ProfileBand],
    ) -> AssistedScore:
        self.calls.append((indicators, list(profile_ranges)))
        if self.error is not None:
            raise self.error
        assert self.result is not None
        return self.result


# ============================================================================
# Domain builders
# ============================================================================


@pytest.fixture
def sample_rates() -> list[float]:
    """Newest-first indicative rates yielding exactly 5 valid returns."""
    return [10.00, 10.05, 10.03, 10.08, 10.02, 10.10]


@pytest.fixture
def make_points() -> Callable[..., list[HistoricalPoint]]:
    """Build reference points newest first, one day apart."""

    def _make(rates: Sequence[float | None]) -> list[HistoricalPoint]:
        return [
            HistoricalPoint(
                reference_date=REFERENCE_DATE - timedelta(days=i),
                indicative_rate=rate,
            )
            for i, rate in enumerate(rates)
        ]

    return _make


@pytest.fixture
def assisted_score() -> AssistedScore:
    return AssistedScore(
        score=12,
        justification="Sharpe moderado e beta abaixo do mercado.",
        risk_category="Moderado",
        compatible_with_conservador=False,
        compatible_with_moderado=True,
        compatible_with_arrojado=True,
    )


@pytest.fixture
def make_gateway() -> Callable[..., FakeGateway]:
    """Factory for fake reasoning gateways."""
    return FakeGateway


# ============================================================================
# Database
# ============================================================================


@pytest_asyncio.fixture
async def db(tmp_path) -> AsyncGenerator[None, None]:
    """File-backed SQLite database with the schema and profile bands."""
    from investrisk.database import connection as db_conn
    from investrisk.database.orm import InvestorProfileRange

    await db_conn.close_sqlalchemy_engine()
    await db_conn.init_sqlalchemy_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await db_conn.create_all_tables()

    async with db_conn.get_session() as session:
        session.add_all([
            InvestorProfileRange(profile_name=name, min_score=lo, max_score=hi)
            for name, lo, hi in SEED_BANDS
        ])
        await session.commit()

    yield

    await db_conn.close_sqlalchemy_engine()


@pytest.fixture
def seed_debenture():
    """Insert a debenture reference series, newest first."""

    async def _seed(code: str, rates: Sequence[float | None]) -> None:
        from investrisk.database.connection import get_session
        from investrisk.database.orm import AnbimaDebenture

        async with get_session() as session:
            session.add_all([
                AnbimaDebenture(
                    codigo_ativo=code,
                    data_referencia=REFERENCE_DATE - timedelta(days=i),
                    taxa_indicativa=rate,
                )
                for i, rate in enumerate(rates)
            ])
            await session.commit()

    return _seed


@pytest.fixture
def seed_profile():
    """Store the declared investor profile of a user."""

    async def _seed(user_id: str, profile: str | None) -> None:
        from investrisk.database.connection import get_session
        from investrisk.database.orm import InvestorProfile

        async with get_session() as session:
            session.add(InvestorProfile(user_id=user_id, investor_profile=profile))
            await session.commit()

    return _seed


# ============================================================================
# API clients
# ============================================================================


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI app."""
    from investrisk.api.app import create_api_app

    app = create_api_app()
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def api_app() -> FastAPI:
    from investrisk.api.app import create_api_app
    return create_api_app()


@pytest_asyncio.fixture
async def async_client(api_app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Async client sharing the test's event loop. Lifespan is not run."""
    transport = ASGITransport(app=api_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def user_id() -> str:
    return "user-123"


@pytest.fixture
def auth_token(user_id: str) -> str:
    """Create a valid JWT token for testing."""
    from investrisk.core.security import create_access_token
    return create_access_token(user_id)


@pytest.fixture
def auth_headers(auth_token: str) -> dict:
    """Authorization headers for the test user."""
    return {"Authorization": f"Bearer {auth_token}"}
