"""Tests for the service container."""

import pytest

from projectdesk.services.context import ServiceContext, get_service_context


@pytest.mark.asyncio
async def test_services_share_one_client(tmp_config):
    context = get_service_context(tmp_config)

    assert context.config_service is tmp_config
    assert context.project_service.auth_service is context.auth_service
    await context.close()


@pytest.mark.asyncio
async def test_context_manager_closes_client(tmp_config):
    async with get_service_context(tmp_config) as context:
        assert isinstance(context, ServiceContext)
        await context.client._get_client()
        assert context.client._client is not None

    assert context.client._client is None


@pytest.mark.asyncio
async def test_context_manager_closes_client_on_error(tmp_config):
    with pytest.raises(RuntimeError):
        async with get_service_context(tmp_config) as context:
            await context.client._get_client()
            raise RuntimeError("boom")

    assert context.client._client is None
