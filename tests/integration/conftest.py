import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
import revenue_ledger.domain  # noqa: F401  (registers tables on SQLModel.metadata)
from revenue_ledger.adapter.services.notification_service import LoggingNotificationService
from revenue_ledger.depends import get_notification_service, get_session


async def create_test_engine(db_url: str, **kwargs):
    engine = create_async_engine(db_url, echo=False, future=True, **kwargs)
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    return engine


@pytest_asyncio.fixture(scope="function")
async def engine():
    """In-memory SQLite database shared by every session of one test"""
    engine = await create_test_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def file_engine(tmp_path):
    """File-based SQLite database; each session gets its own connection"""
    engine = await create_test_engine(f"sqlite+aiosqlite:///{tmp_path / 'ledger.db'}")

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    """Create a new database session for each test"""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(db_session):
    """Create test client with database session override"""
    from revenue_ledger.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    # Override the session dependency to use test session
    async def override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_notification_service] = LoggingNotificationService

    # Use ASGITransport for httpx AsyncClient
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
