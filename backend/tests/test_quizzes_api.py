"""
ClassHub Backend — Quiz API Tests
===================================

What:  Quiz history routes: teacher-only writes, member reads, start/stop,
       and the classroom's quiz_history staying in step.
"""

import uuid

import pytest


@pytest.fixture
def classroom_setup(create_teacher, create_student, create_classroom, auth_headers):
    async def _setup():
        teacher = await create_teacher()
        student = await create_student("Bob", "bob@school.test")
        classroom = await create_classroom(teacher["id"], [student["id"]])
        return {
            "classroom": classroom,
            "teacher_headers": auth_headers(teacher["id"], "teacher"),
            "student_headers": auth_headers(student["id"], "student"),
            "base": f"/classrooms/{classroom['id']}/quizzes",
        }
    return _setup


QUIZ_BODY = {
    "title": "Fractions",
    "questions": [
        {"prompt": "1/2 + 1/4 = ?", "choices": ["3/4", "2/6"], "answer_index": 0},
    ],
}


class TestCreateQuiz:

    @pytest.mark.asyncio
    async def test_teacher_creates_quiz(self, api_client, classroom_setup):
        ctx = await classroom_setup()
        response = await api_client.post(ctx["base"], json=QUIZ_BODY, headers=ctx["teacher_headers"])
        assert response.status_code == 201
        quiz = response.json()
        assert quiz["classroom"] == ctx["classroom"]["id"]
        assert quiz["activated"] is False
        assert quiz["questions"][0]["choices"] == ["3/4", "2/6"]

        classroom = (await api_client.get(f"/classrooms/{ctx['classroom']['id']}")).json()
        assert classroom["quiz_history"] == [quiz["id"]]

    @pytest.mark.asyncio
    async def test_student_cannot_create(self, api_client, classroom_setup):
        ctx = await classroom_setup()
        response = await api_client.post(ctx["base"], json=QUIZ_BODY, headers=ctx["student_headers"])
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_invalid_body_is_400(self, api_client, classroom_setup):
        ctx = await classroom_setup()
        body = {"title": "Bad", "questions": [{"prompt": "?", "choices": ["a"], "answer_index": 3}]}
        response = await api_client.post(ctx["base"], json=body, headers=ctx["teacher_headers"])
        assert response.status_code == 400
        assert "questions.0" in response.json()["details"]["errors"]

    @pytest.mark.asyncio
    async def test_authorization_runs_before_body_validation(self, api_client, classroom_setup):
        ctx = await classroom_setup()
        response = await api_client.post(ctx["base"], json={})
        assert response.status_code == 403


class TestReadQuizzes:

    @pytest.mark.asyncio
    async def test_history_and_active_filter(self, api_client, classroom_setup):
        ctx = await classroom_setup()
        draft = (await api_client.post(
            ctx["base"], json={"title": "Draft"}, headers=ctx["teacher_headers"]
        )).json()
        live = (await api_client.post(
            ctx["base"], json={"title": "Live", "activated": True}, headers=ctx["teacher_headers"]
        )).json()

        history = await api_client.get(ctx["base"], headers=ctx["student_headers"])
        assert history.status_code == 200
        assert {q["id"] for q in history.json()} == {draft["id"], live["id"]}

        active = await api_client.get(f"{ctx['base']}/active", headers=ctx["student_headers"])
        assert [q["id"] for q in active.json()] == [live["id"]]

    @pytest.mark.asyncio
    async def test_get_single_quiz(self, api_client, classroom_setup):
        ctx = await classroom_setup()
        quiz = (await api_client.post(ctx["base"], json=QUIZ_BODY, headers=ctx["teacher_headers"])).json()
        response = await api_client.get(f"{ctx['base']}/{quiz['id']}", headers=ctx["student_headers"])
        assert response.status_code == 200
        assert response.json()["title"] == "Fractions"

    @pytest.mark.asyncio
    async def test_malformed_quiz_id_is_400(self, api_client, classroom_setup):
        ctx = await classroom_setup()
        response = await api_client.get(f"{ctx['base']}/xyz", headers=ctx["student_headers"])
        assert response.status_code == 400
        assert response.json()["details"]["field"] == "quiz_id"

    @pytest.mark.asyncio
    async def test_quiz_of_another_classroom_is_500(
        self, api_client, classroom_setup, create_classroom
    ):
        ctx = await classroom_setup()
        quiz = (await api_client.post(ctx["base"], json=QUIZ_BODY, headers=ctx["teacher_headers"])).json()
        other = await create_classroom(ctx["classroom"]["teacher"], name="Other")
        response = await api_client.get(
            f"/classrooms/{other['id']}/quizzes/{quiz['id']}", headers=ctx["teacher_headers"]
        )
        assert response.status_code == 500
        assert response.json()["details"]["resource"] == "quiz"

    @pytest.mark.asyncio
    async def test_unknown_classroom_is_500(self, api_client, auth_headers, create_teacher):
        teacher = await create_teacher()
        response = await api_client.get(
            f"/classrooms/{uuid.uuid4()}/quizzes", headers=auth_headers(teacher["id"], "teacher")
        )
        assert response.status_code == 500


class TestStartStopQuiz:

    @pytest.mark.asyncio
    async def test_start_then_stop(self, api_client, classroom_setup):
        ctx = await classroom_setup()
        quiz = (await api_client.post(ctx["base"], json=QUIZ_BODY, headers=ctx["teacher_headers"])).json()

        started = await api_client.post(f"{ctx['base']}/{quiz['id']}/start", headers=ctx["teacher_headers"])
        assert started.status_code == 200
        assert started.json()["activated"] is True

        stopped = await api_client.post(f"{ctx['base']}/{quiz['id']}/stop", headers=ctx["teacher_headers"])
        assert stopped.json()["activated"] is False

        active = await api_client.get(f"{ctx['base']}/active", headers=ctx["teacher_headers"])
        assert active.json() == []

    @pytest.mark.asyncio
    async def test_student_cannot_start(self, api_client, classroom_setup):
        ctx = await classroom_setup()
        quiz = (await api_client.post(ctx["base"], json=QUIZ_BODY, headers=ctx["teacher_headers"])).json()
        response = await api_client.post(f"{ctx['base']}/{quiz['id']}/start", headers=ctx["student_headers"])
        assert response.status_code == 401
