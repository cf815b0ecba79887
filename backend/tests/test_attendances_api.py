"""
ClassHub Backend — Attendance API Tests
=========================================

What:  Attendance sheets built from the roster, open/close, check-in.
"""

import pytest


@pytest.fixture
def roster_setup(create_teacher, create_student, create_classroom, auth_headers):
    async def _setup():
        teacher = await create_teacher()
        amy = await create_student("Amy", "amy@school.test")
        bob = await create_student("Bob", "bob@school.test")
        classroom = await create_classroom(teacher["id"], [amy["id"], bob["id"]])
        return {
            "classroom": classroom,
            "amy": amy,
            "bob": bob,
            "teacher_headers": auth_headers(teacher["id"], "teacher"),
            "amy_headers": auth_headers(amy["id"], "student"),
            "base": f"/classrooms/{classroom['id']}/attendances",
        }
    return _setup


def presence_map(attendance):
    return {entry["student"]: entry["present"] for entry in attendance["presences"]}


class TestCreateAttendance:

    @pytest.mark.asyncio
    async def test_roster_initialises_every_student(self, api_client, roster_setup):
        ctx = await roster_setup()
        response = await api_client.post(
            ctx["base"],
            json={"presences": [{"student": ctx["bob"]["id"], "present": True}]},
            headers=ctx["teacher_headers"],
        )
        assert response.status_code == 201
        attendance = response.json()
        assert presence_map(attendance) == {ctx["amy"]["id"]: False, ctx["bob"]["id"]: True}

        classroom = (await api_client.get(f"/classrooms/{ctx['classroom']['id']}")).json()
        assert classroom["attendance_history"] == [attendance["id"]]

    @pytest.mark.asyncio
    async def test_presence_for_outsider_is_400(self, api_client, roster_setup, create_student):
        ctx = await roster_setup()
        outsider = await create_student("Eve", "eve@school.test")
        response = await api_client.post(
            ctx["base"],
            json={"presences": [{"student": outsider["id"], "present": True}]},
            headers=ctx["teacher_headers"],
        )
        assert response.status_code == 400
        assert response.json()["details"]["unknown_students"] == [outsider["id"]]

        history = await api_client.get(ctx["base"], headers=ctx["teacher_headers"])
        assert history.json() == []

    @pytest.mark.asyncio
    async def test_student_cannot_create(self, api_client, roster_setup):
        ctx = await roster_setup()
        response = await api_client.post(ctx["base"], json={}, headers=ctx["amy_headers"])
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_presences_keep_roster_order_on_every_read(
        self, api_client, auth_headers, create_teacher, create_student, create_classroom
    ):
        teacher = await create_teacher()
        students = [
            await create_student(name, f"{name.lower()}@school.test")
            for name in ("Zed", "Yan", "Xia", "Wes", "Val", "Uma")
        ]
        classroom = await create_classroom(teacher["id"], [s["id"] for s in students])
        headers = auth_headers(teacher["id"], "teacher")
        base = f"/classrooms/{classroom['id']}/attendances"
        by_name = [s["id"] for s in reversed(students)]

        created = (await api_client.post(base, json={"activated": True}, headers=headers)).json()
        assert [p["student"] for p in created["presences"]] == by_name

        fetched = (await api_client.get(f"{base}/{created['id']}", headers=headers)).json()
        listed = (await api_client.get(base, headers=headers)).json()
        stopped = (await api_client.post(f"{base}/{created['id']}/stop", headers=headers)).json()
        for attendance in (fetched, listed[0], stopped):
            assert [p["student"] for p in attendance["presences"]] == by_name


class TestCheckIn:

    @pytest.mark.asyncio
    async def test_check_in_requires_open_attendance(self, api_client, roster_setup):
        ctx = await roster_setup()
        attendance = (await api_client.post(ctx["base"], json={}, headers=ctx["teacher_headers"])).json()
        check_in = f"{ctx['base']}/{attendance['id']}/check-in"

        closed = await api_client.post(check_in, headers=ctx["amy_headers"])
        assert closed.status_code == 400

        opened = await api_client.post(f"{ctx['base']}/{attendance['id']}/start", headers=ctx["teacher_headers"])
        assert opened.json()["activated"] is True

        active = await api_client.get(f"{ctx['base']}/active", headers=ctx["amy_headers"])
        assert [a["id"] for a in active.json()] == [attendance["id"]]

        response = await api_client.post(check_in, headers=ctx["amy_headers"])
        assert response.status_code == 200
        assert presence_map(response.json()) == {ctx["amy"]["id"]: True, ctx["bob"]["id"]: False}

        stored = await api_client.get(f"{ctx['base']}/{attendance['id']}", headers=ctx["teacher_headers"])
        assert presence_map(stored.json())[ctx["amy"]["id"]] is True

    @pytest.mark.asyncio
    async def test_teacher_cannot_check_in(self, api_client, roster_setup):
        ctx = await roster_setup()
        attendance = (await api_client.post(
            ctx["base"], json={"activated": True}, headers=ctx["teacher_headers"]
        )).json()
        response = await api_client.post(
            f"{ctx['base']}/{attendance['id']}/check-in", headers=ctx["teacher_headers"]
        )
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_stop_closes_check_in(self, api_client, roster_setup):
        ctx = await roster_setup()
        attendance = (await api_client.post(
            ctx["base"], json={"activated": True}, headers=ctx["teacher_headers"]
        )).json()
        await api_client.post(f"{ctx['base']}/{attendance['id']}/stop", headers=ctx["teacher_headers"])
        response = await api_client.post(
            f"{ctx['base']}/{attendance['id']}/check-in", headers=ctx["amy_headers"]
        )
        assert response.status_code == 400
