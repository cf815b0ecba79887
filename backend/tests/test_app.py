"""
ClassHub Backend — Application Wiring Tests
=============================================

What:  Health endpoint, request id propagation and the validation error
       formatter used by the RequestValidationError handler.
"""

import pytest

from classhub import __version__
from classhub.main import format_validation_errors


class TestHealth:

    @pytest.mark.asyncio
    async def test_health_reports_database(self, api_client):
        response = await api_client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert body["version"] == __version__


class TestRequestId:

    @pytest.mark.asyncio
    async def test_generated_when_missing(self, api_client):
        response = await api_client.get("/classrooms")
        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_echoed_in_header_and_error_body(self, api_client):
        response = await api_client.get("/classrooms/bad", headers={"X-Request-ID": "trace-42"})
        assert response.headers["X-Request-ID"] == "trace-42"
        assert response.json()["request_id"] == "trace-42"


class TestFormatValidationErrors:

    def test_drops_location_prefix_and_keeps_first_error(self):
        errors = [
            {"loc": ("body", "name"), "msg": "Field required", "type": "missing"},
            {"loc": ("body", "name"), "msg": "second", "type": "string_type"},
            {"loc": ("body", "students", 1), "msg": "Input should be a valid UUID", "type": "uuid_parsing"},
        ]
        assert format_validation_errors(errors) == {
            "name": {"message": "Field required", "kind": "missing", "path": "name"},
            "students.1": {
                "message": "Input should be a valid UUID",
                "kind": "uuid_parsing",
                "path": "students.1",
            },
        }

    def test_whole_body_error(self):
        errors = [{"loc": ("body",), "msg": "Field required", "type": "missing"}]
        assert format_validation_errors(errors)["body"]["kind"] == "missing"
