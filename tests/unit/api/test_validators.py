"""Unit tests for request field guards."""

import pytest
from fastapi import Depends, FastAPI
from httpx import ASGITransport, AsyncClient

from api.exception_handlers import setup_exception_handlers
from api.v1.validators import check, education_fields, profile_fields, require_fields


def _create_test_app(*guards) -> FastAPI:
    app = FastAPI()
    setup_exception_handlers(app)

    @app.post("/guarded", dependencies=[Depends(g) for g in guards])
    async def _() -> dict[str, bool]:
        return {"ok": True}

    return app


async def _post(app: FastAPI, **kwargs):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        return await c.post("/guarded", **kwargs)


class TestFieldCheck:
    @pytest.mark.parametrize("value", [None, "", [], {}])
    def test_empty_values_fail(self, value):
        assert not check("status", "Status is required").passes({"status": value})

    @pytest.mark.parametrize("value", ["Developer", ["python"], 0, False])
    def test_present_values_pass(self, value):
        assert check("status", "Status is required").passes({"status": value})

    def test_missing_key_fails(self):
        assert not check("status", "Status is required").passes({})


class TestRequireFields:
    @pytest.mark.asyncio
    async def test_passes_when_all_present(self):
        app = _create_test_app(profile_fields)

        response = await _post(app, json={"status": "Developer", "skills": "python"})

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_reports_every_missing_field(self):
        app = _create_test_app(profile_fields)

        response = await _post(app, json={})

        assert response.status_code == 400
        assert response.json() == {
            "errors": [
                {"msg": "Status is required", "param": "status", "location": "body"},
                {"msg": "Skills are required", "param": "skills", "location": "body"},
            ]
        }

    @pytest.mark.asyncio
    async def test_education_uses_camel_case_param(self):
        app = _create_test_app(education_fields)

        response = await _post(
            app, json={"school": "MIT", "degree": "BSc", "from": "2014-09-01"}
        )

        assert response.status_code == 400
        assert [e["param"] for e in response.json()["errors"]] == ["fieldOfStudy"]

    @pytest.mark.asyncio
    async def test_missing_body_counts_as_empty(self):
        app = _create_test_app(require_fields(check("title", "Title is required")))

        response = await _post(app)

        assert response.status_code == 400
        assert response.json()["errors"][0]["msg"] == "Title is required"

    @pytest.mark.asyncio
    async def test_first_failing_guard_short_circuits(self):
        calls: list[str] = []

        async def deny() -> None:
            calls.append("deny")
            from core.exceptions import AuthenticationError

            raise AuthenticationError()

        async def record() -> None:
            calls.append("fields")

        app = _create_test_app(deny, record)

        response = await _post(app, json={})

        assert response.status_code == 401
        assert calls == ["deny"]
