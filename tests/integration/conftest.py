import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from council_admin.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from council_admin.api.app import create_app
from council_admin.depends import get_bot_verifier, get_email_sender, get_unit_of_work
from tests.fixtures.app_config import TestConfig
from tests.fixtures.factories import PASSWORD, make_approved_user
from tests.fixtures.fakes import FakeOAuthClient, RecordingEmailSender, StaticBotVerifier


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest.fixture
def email_sender():
    return RecordingEmailSender()


@pytest.fixture
def bot_verifier():
    return StaticBotVerifier()


@pytest.fixture
def app(db_session, email_sender, bot_verifier):
    app = create_app(TestConfig)
    app.state.oauth_client = FakeOAuthClient()

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_email_sender] = lambda: email_sender
    app.dependency_overrides[get_bot_verifier] = lambda: bot_verifier
    return app


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def seed_user(db_session):
    """Inserts a user straight into the database"""

    async def seed(**overrides):
        user = make_approved_user(**overrides)
        db_session.add(user)
        await db_session.commit()
        # Later requests roll the shared session back, expiring the instance
        return str(user.id)

    return seed


@pytest.fixture
def login(client):
    async def do_login(email: str, password: str = PASSWORD):
        response = await client.post(
            "/api/auth/login", json={"email": email, "password": password}
        )
        assert response.status_code == 200, response.text
        return response

    return do_login
