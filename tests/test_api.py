"""REST 진입점 테스트 — FastAPI/Starlette 어댑터 위의 라우트와 훅.

Route handler and hook tests run against both API adapters through
httpx's ASGI transport.
"""

import httpx
import pytest
from pydantic import BaseModel

from tests.conftest import make_client
from zacatl.api import (
    AbstractRouteHandler,
    DeleteRouteHandler,
    GetRouteHandler,
    HookHandler,
    PostRouteHandler,
    Reply,
    Request,
    RouteSchema,
    make_with_default_response,
    to_path_template,
)
from zacatl.container import register_singleton, register_value, resolve_dependency
from zacatl.platforms.server import FastApiApiAdapter, ProxyConfig, StarletteApiAdapter
from zacatl.utils.exceptions import InternalServerError, NotFoundError


class GreetingIn(BaseModel):
    message: str


class GreetingParams(BaseModel):
    id: int


class GreetingOut(BaseModel):
    id: int
    message: str


GreetingResponse = make_with_default_response(GreetingOut)


class GreetingStore:
    def __init__(self) -> None:
        self.items: dict[int, dict] = {1: {"id": 1, "message": "hello"}}

    def add(self, message: str) -> dict:
        item = {"id": max(self.items, default=0) + 1, "message": message}
        self.items[item["id"]] = item
        return item


class GetGreetingRoute(GetRouteHandler):
    url = "/greetings/:id"
    schema = RouteSchema(params=GreetingParams, response=GreetingResponse)

    def __init__(self, store: GreetingStore) -> None:
        super().__init__()
        self.store = store

    def build_response(self, data):
        return {"ok": True, "message": "Greeting found", "data": data}

    async def handler(self, request: Request):
        greeting = self.store.items.get(request.params.id)
        if greeting is None:
            raise NotFoundError(message="Greeting not found")
        return greeting


class CreateGreetingRoute(PostRouteHandler):
    def __init__(self, store: GreetingStore) -> None:
        super().__init__(url="/greetings", schema=RouteSchema(body=GreetingIn))
        self.store = store

    def handler(self, request: Request):
        return self.store.add(request.body.message)


class DeleteGreetingRoute(DeleteRouteHandler):
    url = "/greetings/{id}"

    def __init__(self, store: GreetingStore) -> None:
        super().__init__()
        self.store = store

    async def execute(self, request: Request, reply: Reply):
        # 응답을 보내지 않음 — nothing sent means 204
        self.store.items.pop(int(request.params["id"]), None)
        return None

    def handler(self, request: Request):
        return None


class CrashingRoute(GetRouteHandler):
    url = "/crash"

    def handler(self, request: Request):
        raise RuntimeError("kaboom")


class TeapotRoute(GetRouteHandler):
    url = "/teapot"

    async def execute(self, request: Request, reply: Reply):
        reply.code(418).header("x-brew", "earl-grey").send("short and stout")
        return None

    def handler(self, request: Request):
        return None


class BrokenResponseRoute(GetRouteHandler):
    url = "/broken-response"
    schema = RouteSchema(response=GreetingOut)

    def handler(self, request: Request):
        return {"id": "not-an-int", "message": "oops"}


class TraceRoute(AbstractRouteHandler):
    url = "/trace"
    method = "TRACE"

    def handler(self, request: Request):
        return "never"


class ApiKeyHook(HookHandler):
    name = "onRequest"

    def execute(self, request: Request, reply: Reply):
        if request.headers.get("x-api-key") != "secret":
            reply.code(401).send({"ok": False, "message": "Unauthorized"})


class PoweredByHook(HookHandler):
    name = "preSerialization"

    async def execute(self, request: Request, reply: Reply):
        reply.header("x-powered-by", "zacatl")


ROUTES = [
    GetGreetingRoute,
    CreateGreetingRoute,
    DeleteGreetingRoute,
    CrashingRoute,
    TeapotRoute,
    BrokenResponseRoute,
]


@pytest.fixture(params=["fastapi", "starlette"])
def adapter(request):
    """두 벤더 어댑터에 라우트를 등록합니다."""
    api = FastApiApiAdapter() if request.param == "fastapi" else StarletteApiAdapter()
    register_value(GreetingStore, GreetingStore())
    for route in ROUTES:
        register_singleton(route)
        api.register_route(resolve_dependency(route))
    return api


@pytest.fixture
async def client(adapter):
    async with make_client(adapter.get_raw_server()) as ac:
        yield ac


class TestRouteHandlers:
    """라우트 실행 파이프라인."""

    async def test_get_with_response_envelope(self, client):
        res = await client.get("/greetings/1")
        assert res.status_code == 200
        assert res.json() == {"ok": True, "message": "Greeting found", "data": {"id": 1, "message": "hello"}}

    async def test_custom_error_maps_to_status(self, client):
        res = await client.get("/greetings/99")
        assert res.status_code == 404
        body = res.json()
        assert body["ok"] is False
        assert body["error"]["name"] == "NotFoundError"
        assert body["error"]["correlation_id"]

    async def test_invalid_params_is_400(self, client):
        res = await client.get("/greetings/abc")
        assert res.status_code == 400
        assert res.json()["error"]["name"] == "ValidationError"

    async def test_invalid_response_is_500(self, client):
        """핸들러 결과가 응답 스키마를 위반하면 서버 오류 (Server-side bug, not a client error)."""
        res = await client.get("/broken-response")
        assert res.status_code == 500
        body = res.json()
        assert body["message"] == "Response validation failed"
        assert body["error"]["name"] == "InternalServerError"

    async def test_post_validates_body(self, client):
        res = await client.post("/greetings", json={"message": "hola"})
        assert res.status_code == 200
        assert res.json() == {"id": 2, "message": "hola"}

        res = await client.post("/greetings", json={})
        assert res.status_code == 400
        assert res.json()["error"]["issues"][0]["loc"] == ["message"]

    async def test_malformed_json_is_400(self, client):
        res = await client.post(
            "/greetings", content=b"{not json", headers={"content-type": "application/json"}
        )
        assert res.status_code == 400
        assert res.json()["error"]["name"] == "BadRequest"

        res = await client.post(
            "/greetings", content=b"\xff\xfe{", headers={"content-type": "application/json"}
        )
        assert res.status_code == 400
        assert res.json()["error"]["name"] == "BadRequest"

    async def test_nothing_sent_is_204(self, client):
        res = await client.delete("/greetings/1")
        assert res.status_code == 204
        assert (await client.get("/greetings/1")).status_code == 404

    async def test_unexpected_error_is_500(self, client):
        res = await client.get("/crash")
        assert res.status_code == 500
        assert res.json() == {"ok": False, "message": "Internal Server Error", "error": {"name": "RuntimeError"}}

    async def test_handler_controls_reply(self, client):
        res = await client.get("/teapot")
        assert res.status_code == 418
        assert res.headers["x-brew"] == "earl-grey"
        assert res.text == "short and stout"

    async def test_unsupported_method_is_skipped(self, adapter, client):
        adapter.register_route(TraceRoute())
        res = await client.get("/trace")
        assert res.status_code in (404, 405)


class TestHooks:
    """훅 실행 순서와 단락."""

    async def test_on_request_hook_short_circuits(self, adapter, client):
        adapter.register_hook(ApiKeyHook())
        res = await client.get("/greetings/1")
        assert res.status_code == 401
        assert res.json()["message"] == "Unauthorized"

        res = await client.get("/greetings/1", headers={"x-api-key": "secret"})
        assert res.status_code == 200

    async def test_pre_serialization_hook_edits_reply(self, adapter, client):
        adapter.register_hook(PoweredByHook())
        res = await client.get("/greetings/1")
        assert res.headers["x-powered-by"] == "zacatl"

    async def test_hooks_run_in_lifecycle_order(self, adapter, client):
        calls: list[str] = []

        def make_hook(hook_name: str) -> HookHandler:
            class RecordingHook(HookHandler):
                name = hook_name

                def execute(self, request: Request, reply: Reply):
                    calls.append(hook_name)

            return RecordingHook()

        for hook_name in ("preSerialization", "preHandler", "onRequest", "preValidation"):
            adapter.register_hook(make_hook(hook_name))

        await client.get("/greetings/1")
        assert calls == ["onRequest", "preValidation", "preHandler", "preSerialization"]

    def test_unknown_hook_name_raises(self, adapter):
        hook = ApiKeyHook(name="onSend")
        with pytest.raises(InternalServerError):
            adapter.register_hook(hook)


class TestProxy:
    """게이트웨이 프록시."""

    async def test_forwards_to_upstream(self, adapter, client, monkeypatch):
        def upstream(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"path": request.url.path, "query": request.url.query.decode()})

        monkeypatch.setattr(
            adapter,
            "_create_proxy_client",
            lambda config: httpx.AsyncClient(base_url=config.upstream, transport=httpx.MockTransport(upstream)),
        )
        adapter.register_proxy(ProxyConfig(upstream="http://users.local", prefix="/users"))

        res = await client.get("/users/42?expand=true")
        assert res.status_code == 200
        assert res.json() == {"path": "/42", "query": "expand=true"}
        await adapter.close()

    async def test_upstream_failure_is_502(self, adapter, client, monkeypatch):
        def upstream(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        monkeypatch.setattr(
            adapter,
            "_create_proxy_client",
            lambda config: httpx.AsyncClient(base_url=config.upstream, transport=httpx.MockTransport(upstream)),
        )
        adapter.register_proxy(ProxyConfig(upstream="http://users.local", prefix="/users"))

        res = await client.get("/users/42")
        assert res.status_code == 502
        await adapter.close()


class TestHelpers:
    def test_to_path_template(self):
        assert to_path_template("/greetings/:id") == "/greetings/{id}"
        assert to_path_template("/a/:first/b/:second_id") == "/a/{first}/b/{second_id}"
        assert to_path_template("/greetings/{id}") == "/greetings/{id}"

    def test_make_with_default_response(self):
        envelope = GreetingResponse(ok=True, message="ok", data={"id": 1, "message": "hi"})
        assert envelope.data.message == "hi"
        assert set(GreetingResponse.model_fields) == {"ok", "message", "data"}

    def test_route_constructor_overrides_class_attributes(self):
        route = GetGreetingRoute(GreetingStore())
        assert route.url == "/greetings/:id"
        assert route.method == "GET"
        assert CreateGreetingRoute(GreetingStore()).url == "/greetings"

    async def test_execute_sends_build_response(self):
        reply = Reply()
        route = GetGreetingRoute(GreetingStore())
        result = await route.execute(Request(params=GreetingParams(id=1)), reply)
        assert result == {"id": 1, "message": "hello"}
        assert reply.sent and reply.status_code == 200
        assert reply.payload.message == "Greeting found"
