import pytest


@pytest.mark.asyncio
async def test_put_get_overwrite(uow_factory):
    async with uow_factory() as uow:
        assert await uow.slots.get("access_tokens") is None
        await uow.slots.put("access_tokens", "first")
        await uow.commit()

    async with uow_factory() as uow:
        assert await uow.slots.get("access_tokens") == "first"
        await uow.slots.put("access_tokens", "second")
        await uow.commit()

    async with uow_factory() as uow:
        assert await uow.slots.get("access_tokens") == "second"
        assert await uow.slots.get("backup_meta") is None


@pytest.mark.asyncio
async def test_uncommitted_writes_are_rolled_back(uow_factory):
    async with uow_factory() as uow:
        await uow.slots.put("access_tokens", "abc")

    async with uow_factory() as uow:
        assert await uow.slots.get("access_tokens") is None
