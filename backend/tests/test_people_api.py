"""
ClassHub Backend — Teacher & Student API Tests
================================================
"""

import uuid

import pytest


class TestPeople:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("kind", ["teachers", "students"])
    async def test_create_list_get(self, api_client, kind):
        created = await api_client.post(f"/{kind}", json={"name": " Kim ", "email": "Kim@School.test"})
        assert created.status_code == 201
        person = created.json()
        assert person["name"] == "Kim"
        assert person["email"] == "kim@school.test"
        assert person["classrooms"] == []

        listed = await api_client.get(f"/{kind}")
        assert [p["id"] for p in listed.json()] == [person["id"]]

        fetched = (await api_client.get(f"/{kind}/{person['id']}")).json()
        assert (fetched["id"], fetched["name"], fetched["email"]) == (person["id"], "Kim", "kim@school.test")

    @pytest.mark.asyncio
    async def test_duplicate_email_is_400(self, api_client, create_teacher):
        await create_teacher(email="dup@school.test")
        response = await api_client.post("/teachers", json={"name": "Other", "email": "DUP@school.test"})
        assert response.status_code == 400
        assert response.json()["details"]["field"] == "email"

    @pytest.mark.asyncio
    async def test_same_email_allowed_across_kinds(self, api_client, create_teacher):
        await create_teacher(email="both@school.test")
        response = await api_client.post("/students", json={"name": "Both", "email": "both@school.test"})
        assert response.status_code == 201

    @pytest.mark.asyncio
    async def test_invalid_email_is_400(self, api_client):
        response = await api_client.post("/students", json={"name": "X", "email": "not-an-email"})
        assert response.status_code == 400
        assert "email" in response.json()["details"]["errors"]

    @pytest.mark.asyncio
    async def test_malformed_and_unknown_ids(self, api_client):
        assert (await api_client.get("/teachers/abc")).status_code == 400
        response = await api_client.get(f"/students/{uuid.uuid4()}")
        assert response.status_code == 500
        assert response.json()["details"]["resource"] == "student"
