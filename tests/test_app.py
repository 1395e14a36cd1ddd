"""
Application-level tests: health, root and logging setup.
"""

import json
import logging

import pytest
from httpx import AsyncClient

from app.core.logging import JSONFormatter, setup_logging
from app.main import app


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    """Test health check."""
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["app"] == "RepairDesk"


@pytest.mark.asyncio
async def test_root(client: AsyncClient):
    """Test API information."""
    response = await client.get("/")

    assert response.status_code == 200
    assert response.json()["health"] == "/health"


def test_json_formatter_includes_record_context():
    """Test JSON log lines carry the extra record fields."""
    record = logging.LogRecord("app.core.store", logging.INFO, __file__, 1, "Ajout %s", ("clients",), None)
    record.record_id = "AB12CD3"

    line = json.loads(JSONFormatter().format(record))

    assert line["level"] == "INFO"
    assert line["message"] == "Ajout clients"
    assert line["record_id"] == "AB12CD3"
    assert "collection" not in line


def test_setup_logging_replaces_root_handlers():
    """Test logging is configured once on the root logger."""
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        setup_logging("debug", "json")

        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JSONFormatter)
        assert root.level == logging.DEBUG
    finally:
        root.handlers = saved_handlers
        root.setLevel(saved_level)


def test_app_imports_with_every_route():
    """Test the application module imports and mounts every router."""
    paths = {route.path for route in app.routes}

    assert "/api/v1/clients/{client_id}/devices" in paths
    assert "/api/v1/devices/{device_id}/repairs" in paths
    assert "/api/v1/devices/identify" in paths
    assert "/api/v1/backup/status" in paths
