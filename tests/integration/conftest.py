import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from tests.fixtures.clock import FakeClock
from tokenvault.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from tokenvault.api.utils.jwt import generate_admin_jwt
from tokenvault.app.services.obfuscation_codec import ObfuscationCodec
from tokenvault.app.services.vault import build_vault


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def uow_factory(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    return lambda: SqlAlchemyUnitOfWork(Session)


@pytest.fixture
def clock():
    return FakeClock()


@pytest_asyncio.fixture
async def vault(uow_factory, clock):
    return await build_vault(ApplicationConfig, uow_factory, clock=clock)


@pytest_asyncio.fixture
async def client(vault):
    from tokenvault.api.app import create_app

    app = create_app(ApplicationConfig)
    # ASGITransport does not run the lifespan, so wire the container directly
    app.state.vault = vault

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {generate_admin_jwt(ApplicationConfig.ADMIN_EMAIL)}"}


@pytest.fixture
def codec():
    return ObfuscationCodec(ApplicationConfig.OBFUSCATION_KEY)
