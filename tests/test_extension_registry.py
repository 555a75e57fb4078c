import uuid

import pytest

from app.helpers.errors import NotFoundError
from app.services.extensions import (
    enabled_extensions,
    list_extensions,
    save_extensions,
    seed_extensions,
    set_enabled,
)


@pytest.fixture
async def seeded(db):
    await seed_extensions(db)
    return {ext.extension: ext for ext in await list_extensions(db)}


async def test_seed_defaults(db, seeded):
    assert sorted(seeded) == ["doc", "docx", "pdf", "ppt", "pptx", "py", "xls", "xlsx"]
    assert await enabled_extensions(db) == ["py"]
    assert seeded["pdf"].mime_type == "application/pdf"


async def test_seed_is_idempotent(db, seeded):
    assert await seed_extensions(db) == 0
    assert len(await list_extensions(db)) == 8


async def test_set_enabled_twice_is_idempotent(db, seeded):
    pdf_id = seeded["pdf"].id

    first = await set_enabled(db, pdf_id, True)
    first_updated = first.updated_at
    second = await set_enabled(db, pdf_id, True)

    assert second.is_enabled is True
    assert second.updated_at >= first_updated
    assert len(await list_extensions(db)) == 8
    assert await enabled_extensions(db) == ["pdf", "py"]


async def test_disable_default(db, seeded):
    await set_enabled(db, seeded["py"].id, False)
    assert await enabled_extensions(db) == []


async def test_unknown_extension(db, seeded):
    with pytest.raises(NotFoundError):
        await set_enabled(db, uuid.uuid4(), True)


async def test_save_extensions_applies_all(db, seeded):
    result = await save_extensions(db, [(seeded["docx"].id, True), (seeded["py"].id, False)])

    enabled = {ext.extension for ext in result if ext.is_enabled}
    assert enabled == {"docx"}


async def test_save_extensions_aborts_on_unknown_id(db, seeded):
    with pytest.raises(NotFoundError):
        await save_extensions(db, [(seeded["docx"].id, True), (uuid.uuid4(), True)])

    assert await enabled_extensions(db) == ["py"]
