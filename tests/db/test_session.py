import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from inventory.core.config import Settings
from inventory.db import session


def test_database_uri_is_assembled():
    settings = Settings(
        POSTGRES_SERVER="db",
        POSTGRES_USER="inv",
        POSTGRES_PASSWORD="secret",
        POSTGRES_DB="catalog",
        POSTGRES_PORT="6543",
    )

    uri = str(settings.DATABASE_URI)
    assert uri.startswith("postgresql+asyncpg://inv:secret@db:6543/")
    assert uri.endswith("catalog")


def test_explicit_database_uri_wins():
    settings = Settings(DATABASE_URI="postgresql+asyncpg://u:p@elsewhere:5432/other")
    assert "elsewhere" in str(settings.DATABASE_URI)


@pytest.mark.asyncio
async def test_get_db_yields_session():
    async_gen = session.get_db()
    session_obj = await async_gen.__anext__()

    assert isinstance(session_obj, AsyncSession)
    with pytest.raises(StopAsyncIteration):
        await async_gen.__anext__()
