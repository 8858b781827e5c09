import os
import sys
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

sys.path.append(str(Path(__file__).parents[1] / "src"))

# Keep the application engine off the developer's database file.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from ledger.db.session import get_db  # noqa: E402
from ledger.main import app  # noqa: E402

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")

if TEST_DATABASE_URL.startswith("sqlite"):
    # One shared connection so every session sees the same in-memory database.
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
else:
    test_engine = create_async_engine(TEST_DATABASE_URL, echo=False)

TestSessionLocal = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


SAMPLE_HEADER = (
    "Date;Booking text;Curr;Amount details;ZKB reference;Reference number;"
    "Debit CHF;Credit CHF;Value date;Balance CHF;Payment purpose;Details"
)


def make_csv(*rows: str, bom: bool = True) -> bytes:
    """Build a ZKB export from ``;``-joined data rows."""
    text = "\n".join((SAMPLE_HEADER,) + rows) + "\n"
    return (("\ufeff" if bom else "") + text).encode("utf-8")


@pytest.fixture
def csv_factory():
    return make_csv


@pytest.fixture
def sample_csv() -> bytes:
    """Three rows over two days in March 2024 plus a footer line."""
    return make_csv(
        "15.03.2024;MIGROS FILIALE 123;CHF;;Z001;;45,50;;15.03.2024;1'954,50;;",
        "15.03.2024;Salary ACME AG;CHF;;Z002;;;5'000,00;15.03.2024;6'954,50;;",
        "16.03.2024;Account transfer: Jane Doe;CHF;;Z003;;1'000,00;;16.03.2024;5'954,50;Savings;",
        ";Total;;;;;1'045,50;5'000,00;;;;",
    )


@pytest.fixture(scope="function")
async def setup_database():
    """Create tables for tests that need the database, and drop them after.

    Not autouse so pure unit tests (parsers, rules) run without a database.
    """
    from ledger.models.base import Base
    import ledger.models  # noqa: F401

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await test_engine.dispose()


@pytest.fixture
async def db_session(setup_database):
    """Provide test database session with fresh connection per test."""
    async with TestSessionLocal() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def client(db_session: AsyncSession):
    """Provide test client with database override."""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
