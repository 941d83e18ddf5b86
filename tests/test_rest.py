"""
Tests for harmony.rest - routes, builders, responses, errors and the client.
"""

import asyncio
import json
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from harmony.rest import (
    BASE_URL,
    HTTPException,
    JSONBuilder,
    ParamsBuilder,
    Response,
    RESTClient,
    Route,
    TooManyRetries,
)
from harmony.undefined import UNDEFINED


class TestRoute:

    def test_url_and_endpoint(self):
        route = Route("get", "/guilds/{guild_id}/preview", guild_id=123)

        assert route.method == "GET"
        assert route.endpoint == "/guilds/123/preview"
        assert route.url == BASE_URL + "/guilds/123/preview"
        assert str(route) == "GET /guilds/123/preview"

    def test_bucket_uses_major_parameters(self):
        assert Route("GET", "/guilds/{guild_id}", guild_id="1").bucket == "1:/guilds/{guild_id}"
        assert Route("POST", "/guilds").bucket == ":/guilds"

    def test_equality(self):
        assert Route("GET", "/guilds/{guild_id}", guild_id="1") == Route(
            "GET", "/guilds/{guild_id}", guild_id="1"
        )


class TestBuilders:

    def test_json_builder_skips_undefined(self):
        body = JSONBuilder(name="x", region=UNDEFINED, icon=None)

        assert body.build() == {"name": "x", "icon": None}

    def test_json_builder_calls_to_json(self):
        class Flag:
            def to_json(self):
                return "8"

        assert JSONBuilder().add("permissions", Flag()).build() == {"permissions": "8"}

    def test_json_builder_build_is_a_copy(self):
        body = JSONBuilder(roles=[{"id": 1}])
        built = body.build()
        built["roles"].append({"id": 2})

        assert body.build() == {"roles": [{"id": 1}]}

    def test_params_builder(self):
        params = ParamsBuilder(with_counts=False, limit=10, before=UNDEFINED)

        assert params.build() == {"with_counts": "false", "limit": "10"}


class TestResponse:

    def test_json(self):
        response = Response(200, data='{"id": "1"}', content_type="application/json")
        assert response.unwrap() == {"id": "1"}

    def test_no_content(self):
        assert Response(204, data="", content_type=None).unwrap() is None

    def test_wrong_content_type(self):
        with pytest.raises(ValueError):
            Response(200, data="<html>", content_type="text/html").json()


class TestHTTPException:

    def test_flattens_nested_errors(self):
        exc = HTTPException(
            400,
            {
                "code": 50035,
                "message": "Invalid Form Body",
                "errors": {
                    "name": {"_errors": [{"code": "BASE_TYPE_REQUIRED", "message": "required"}]},
                    "roles": [
                        {"permissions": {"_errors": [{"code": "NUMBER_TYPE_COERCE", "message": "bad"}]}}
                    ],
                },
            },
            route="POST /guilds",
        )

        assert exc.message == "Invalid Form Body"
        assert exc.errno == 50035
        assert exc.errors == (
            "name (BASE_TYPE_REQUIRED): required\n"
            "roles.0.permissions (NUMBER_TYPE_COERCE): bad"
        )
        assert repr(exc).startswith("POST /guilds: 400 Invalid Form Body (50035)")

    def test_plain_text_body(self):
        exc = HTTPException(502, "Bad Gateway")

        assert exc.message is None
        assert exc.errors == "Bad Gateway"


def fake_response(status, body="", headers=None):
    response = MagicMock()
    response.status = status
    response.headers = headers if headers is not None else {}
    response.text = AsyncMock(return_value=body)

    context = MagicMock()
    context.__aenter__ = AsyncMock(return_value=response)
    context.__aexit__ = AsyncMock(return_value=False)
    return context


class TestRESTClient:

    @pytest.fixture
    def session(self):
        return MagicMock()

    @pytest.fixture
    def rest(self, session):
        return RESTClient(session=session, token="fake-token")

    @pytest.mark.asyncio
    async def test_get_decodes_json(self, rest, session):
        session.request = MagicMock(
            return_value=fake_response(
                200, json.dumps({"id": "1"}), {"Content-Type": "application/json"}
            )
        )
        route = Route("GET", "/guilds/{guild_id}", guild_id="1")

        assert await rest.get(route) == {"id": "1"}

        method, url = session.request.call_args.args
        headers = session.request.call_args.kwargs["headers"]
        assert (method, url) == ("GET", route.url)
        assert headers["Authorization"] == "Bot fake-token"
        assert not rest.buckets[route.bucket].locked()

    @pytest.mark.asyncio
    async def test_patch_sends_body_and_reason(self, rest, session):
        session.request = MagicMock(
            return_value=fake_response(200, "{}", {"Content-Type": "application/json"})
        )

        await rest.patch(
            Route("PATCH", "/guilds/{guild_id}", guild_id="1"),
            JSONBuilder(name="New"),
            reason="rename",
        )

        kwargs = session.request.call_args.kwargs
        assert kwargs["json"] == {"name": "New"}
        assert kwargs["headers"]["X-Audit-Log-Reason"] == "rename"

    @pytest.mark.asyncio
    async def test_delete_no_content(self, rest, session):
        session.request = MagicMock(return_value=fake_response(204))

        assert await rest.delete(Route("DELETE", "/guilds/{guild_id}", guild_id="1")) is None

    @pytest.mark.asyncio
    async def test_error_status_raises(self, rest, session):
        session.request = MagicMock(
            return_value=fake_response(404, json.dumps({"message": "Unknown Guild", "code": 10004}))
        )
        route = Route("GET", "/guilds/{guild_id}", guild_id="1")

        with pytest.raises(HTTPException) as exc_info:
            await rest.get(route)

        assert exc_info.value.code == 404
        assert exc_info.value.route == "GET /guilds/1"
        assert not rest.buckets[route.bucket].locked()

    @pytest.mark.asyncio
    async def test_ratelimited_then_succeeds(self, rest, session, monkeypatch):
        monkeypatch.setattr("harmony.rest.client.asyncio.sleep", AsyncMock())
        session.request = MagicMock(
            side_effect=[
                fake_response(429, json.dumps({"retry_after": 0.5, "global": False})),
                fake_response(200, "[]", {"Content-Type": "application/json"}),
            ]
        )

        assert await rest.get(Route("GET", "/guilds/{guild_id}", guild_id="1")) == []
        assert session.request.call_count == 2

    @pytest.mark.asyncio
    async def test_too_many_retries(self, rest, session, monkeypatch):
        monkeypatch.setattr("harmony.rest.client.asyncio.sleep", AsyncMock())
        session.request = MagicMock(
            side_effect=lambda *args, **kwargs: fake_response(
                429, json.dumps({"retry_after": 0.1})
            )
        )
        route = Route("GET", "/guilds/{guild_id}", guild_id="1")

        with pytest.raises(TooManyRetries):
            await rest.get(route)

        assert session.request.call_count == 5
        assert not rest.buckets[route.bucket].locked()

    @pytest.mark.asyncio
    async def test_connection_error_releases_bucket(self, rest, session):
        session.request = MagicMock(side_effect=aiohttp.ClientConnectionError("refused"))
        route = Route("GET", "/guilds/{guild_id}", guild_id="1")

        with pytest.raises(aiohttp.ClientConnectionError):
            await rest.get(route)

        assert not rest.buckets[route.bucket].locked()

    @pytest.mark.asyncio
    async def test_cancelled_request_releases_bucket(self, rest, session):
        async def hang(*args):
            await asyncio.Event().wait()

        context = MagicMock()
        context.__aenter__ = AsyncMock(side_effect=hang)
        context.__aexit__ = AsyncMock(return_value=False)
        session.request = MagicMock(return_value=context)
        route = Route("GET", "/guilds/{guild_id}", guild_id="1")

        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(rest.get(route), 0.05)

        assert not rest.buckets[route.bucket].locked()

    @pytest.mark.asyncio
    async def test_ratelimit_without_retry_after_raises(self, rest, session):
        session.request = MagicMock(
            return_value=fake_response(429, json.dumps({"message": "You are being rate limited."}))
        )
        route = Route("GET", "/guilds/{guild_id}", guild_id="1")

        with pytest.raises(HTTPException) as exc_info:
            await rest.get(route)

        assert exc_info.value.code == 429
        assert not rest.buckets[route.bucket].locked()

    @pytest.mark.asyncio
    async def test_bad_reset_after_header_releases_bucket(self, rest, session):
        session.request = MagicMock(
            return_value=fake_response(
                200,
                "{}",
                {
                    "Content-Type": "application/json",
                    "X-Ratelimit-Remaining": "0",
                    "X-Ratelimit-Reset-After": "soon",
                },
            )
        )
        route = Route("GET", "/guilds/{guild_id}", guild_id="1")

        with pytest.raises(ValueError):
            await rest.get(route)

        assert not rest.buckets[route.bucket].locked()

    @pytest.mark.asyncio
    async def test_global_ratelimit_blocks_then_resets(self, rest, session, monkeypatch):
        seen = []

        async def fake_sleep(delay):
            seen.append((delay, rest.global_ratelimit.is_set()))

        monkeypatch.setattr("harmony.rest.client.asyncio.sleep", fake_sleep)
        session.request = MagicMock(
            side_effect=[
                fake_response(429, json.dumps({"retry_after": 1.5, "global": True})),
                fake_response(200, "{}", {"Content-Type": "application/json"}),
            ]
        )
        route = Route("GET", "/guilds/{guild_id}", guild_id="1")

        assert rest.global_ratelimit.is_set()
        assert await rest.get(route) == {}

        assert seen == [(1.5, False)]
        assert rest.global_ratelimit.is_set()
        assert not rest.buckets[route.bucket].locked()

    @pytest.mark.asyncio
    async def test_exhausted_bucket_released_after_reset(self, rest, session):
        session.request = MagicMock(
            return_value=fake_response(
                200,
                "{}",
                {
                    "Content-Type": "application/json",
                    "X-Ratelimit-Remaining": "0",
                    "X-Ratelimit-Reset-After": "0.05",
                },
            )
        )
        route = Route("GET", "/guilds/{guild_id}", guild_id="1")

        assert await rest.get(route) == {}
        assert rest.buckets[route.bucket].locked()

        await asyncio.sleep(0.2)

        assert not rest.buckets[route.bucket].locked()
