import pytest

pytest.importorskip("starlette", reason="Optional dep: Starlette not installed")

from starlette.applications import Starlette
from starlette.responses import JSONResponse
from starlette.routing import Route

from policykit.adapters.starlette import require_permission
from policykit.core.engine import use_permission
from policykit.core.errors import UnknownActionError

ARTICLES = {1: {"id": 1, "author_id": 1}, 2: {"id": 2, "author_id": 2}}

POLICY = {
    "before": lambda user, article: user["role"] == "super-admin",
    "update": lambda user, article: user["id"] == article["author_id"],
    "delete": lambda user, article: user["id"] == article["author_id"],
}


def _user(user_id, role="editor"):
    return {"id": user_id, "role": role}


def build_env_for(user):
    def _build_env(request):
        article = ARTICLES[request.path_params["article_id"]]
        return use_permission(POLICY, for_user=user), article

    return _build_env


class _Req:
    def __init__(self, article_id):
        self.path_params = {"article_id": article_id}


@pytest.mark.asyncio
async def test_dependency_returns_none_when_allowed():
    dep = require_permission("update", build_env_for(_user(1)))
    assert await dep(_Req(1)) is None


@pytest.mark.asyncio
async def test_dependency_returns_403_with_headers():
    dep = require_permission(["update", "delete"], build_env_for(_user(1)), add_headers=True)
    resp = await dep(_Req(2))
    assert resp.status_code == 403
    assert resp.headers["X-PolicyKit-Reason"] == "denied"
    assert resp.headers["X-PolicyKit-Action"] == "update"


@pytest.mark.asyncio
async def test_dependency_without_headers():
    dep = require_permission("update", build_env_for(_user(1)))
    resp = await dep(_Req(2))
    assert resp.status_code == 403
    assert "X-PolicyKit-Reason" not in resp.headers


@pytest.mark.asyncio
@pytest.mark.parametrize("mode", ["sync", "async"])
async def test_decorator_allows_and_denies(mode):
    if mode == "async":

        async def handler(request):
            return JSONResponse({"ok": True})

    else:

        def handler(request):
            return JSONResponse({"ok": True})

    endpoint = require_permission("update", build_env_for(_user(1)))(handler)
    assert endpoint.__name__ == "handler"
    ok = await endpoint(_Req(1))
    assert ok.status_code == 200
    denied = await endpoint(_Req(2))
    assert denied.status_code == 403


@pytest.mark.asyncio
async def test_unknown_action_propagates():
    dep = require_permission("publish", build_env_for(_user(1)))
    with pytest.raises(UnknownActionError):
        await dep(_Req(1))


def test_end_to_end_with_test_client():
    pytest.importorskip("httpx")
    from starlette.testclient import TestClient

    async def edit(request):
        return JSONResponse({"edited": request.path_params["article_id"]})

    def app_for(user):
        guarded = require_permission("update", build_env_for(user), add_headers=True)(edit)
        return Starlette(routes=[Route("/articles/{article_id:int}", guarded)])

    with TestClient(app_for(_user(1))) as client:
        assert client.get("/articles/1").json() == {"edited": 1}
        r = client.get("/articles/2")
        assert r.status_code == 403
        assert r.json() == {"detail": "Forbidden"}
        assert r.headers["x-policykit-reason"] == "denied"

    with TestClient(app_for(_user(9, role="super-admin"))) as client:
        assert client.get("/articles/2").status_code == 200
