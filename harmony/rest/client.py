import asyncio
import json as jsonlib
import logging
from typing import Any, Final, Mapping, MutableMapping, Optional

import aiohttp
import attr

from .. import __version__
from .builders import JSONBuilder, ParamsBuilder
from .errors import HTTPException, TooManyRetries
from .response import Response
from .route import Route

__all__ = ("RESTClient", "USER_AGENT")

_L = logging.getLogger(__name__)

MAX_RETRIES: Final[int] = 5

USER_AGENT: Final[
    str
] = f"DiscordBot (https://github.com/harmonyland/harmony, {__version__})"


@attr.define(kw_only=True)
class RESTClient:
    """Client that handles HTTP request to discord's REST API,
    this does not create a session itself and needs one passed to
    it.
    """

    session: aiohttp.ClientSession = attr.field()
    """ The actual session that the client uses for its HTTP
    requests, try not to use directly as that may mess up the
    ratelimit handling :)
    """

    token: str = attr.field(repr=False)
    """ The token that the client will use for authorization,
    it is important to note that you should not share this with
    anyone!
    """

    user_agent: str = attr.field(default=USER_AGENT)
    """ The user agent that you want to use for your HTTP client
    (recommended to use this format `DiscordBot ($url, $versionNumber)`)
    """

    buckets: MutableMapping[str, asyncio.Lock] = attr.field(init=False)
    global_ratelimit: asyncio.Event = attr.field(init=False)

    def __attrs_post_init__(self):
        self.buckets = {}

        self.global_ratelimit = asyncio.Event()
        self.global_ratelimit.set()

    async def request(
        self,
        *,
        route: Route,
        json: Optional[JSONBuilder] = None,
        params: Optional[ParamsBuilder] = None,
        reason: Optional[str] = None,
        headers: Optional[Mapping[str, Any]] = None,
    ) -> Response:
        """Makes a HTTP request to the provided `Route`.

        Parameters
        ----------
        route : harmony.rest.route.Route
            The route to request to.
        json : typing.Optional[harmony.rest.builders.JSONBuilder]
            JSON body of the request.
        params : typing.Optional[harmony.rest.builders.ParamsBuilder]
            The request parameters.
        reason : typing.Optional[str]
            The reason for the request - if the endpoint supports the
            `X-Audit-Log-Reason` header.
        headers : typing.Optional[typing.Dict[builtins.str, typing.Any]]
            Extra headers for the request, authorization and user agent
            headers are always overwritten.

        Raises
        ------
        harmony.rest.errors.HTTPException
            Discord answered with a non 2xx status, the exception
            carries the status code and the decoded error body.
        harmony.rest.errors.TooManyRetries
            The maximum retry limit (5) has been reached.

        Returns
        -------
        harmony.rest.response.Response
            The corresponding response object denoting what
            discord sent back to us.
        """

        merged: MutableMapping[str, str] = {**headers} if headers is not None else {}

        merged["Authorization"] = "Bot " + self.token
        merged["User-Agent"] = self.user_agent

        if json is not None:
            merged["Content-Type"] = "application/json"

        if reason is not None:
            merged["X-Audit-Log-Reason"] = reason

        if route.bucket not in self.buckets:
            self.buckets[route.bucket] = asyncio.Lock()

        lock = self.buckets[route.bucket]
        await lock.acquire()
        # cleared once the lock is released or its release is scheduled
        holding = True

        try:
            await self.global_ratelimit.wait()

            for attempt in range(MAX_RETRIES):
                kwargs: MutableMapping[str, Any] = {"headers": merged}
                if json is not None:
                    kwargs["json"] = json.build()
                if params is not None:
                    kwargs["params"] = params.build()

                _L.debug("%s (attempt %d) with %s", route, attempt + 1, kwargs.get("json"))

                async with self.session.request(
                    route.method, route.url, **kwargs
                ) as response:
                    text = await response.text(encoding="utf-8")
                    _L.debug("%s has returned %s", route, response.status)

                    if response.status == 429:
                        try:
                            data = jsonlib.loads(text)
                        except jsonlib.JSONDecodeError:
                            raise HTTPException(response.status, text, str(route))

                        if not isinstance(data, dict) or "retry_after" not in data:
                            raise HTTPException(response.status, data, str(route))

                        is_global = data.get("global", False)
                        _L.warning(
                            "%s is ratelimited (global: %s), retrying in %.2fs",
                            route,
                            is_global,
                            data["retry_after"],
                        )

                        if is_global:
                            self.global_ratelimit.clear()
                            try:
                                await asyncio.sleep(data["retry_after"])
                            finally:
                                self.global_ratelimit.set()
                        else:
                            await asyncio.sleep(data["retry_after"])
                        continue

                    ratelimit_remaining = response.headers.get(
                        "X-Ratelimit-Remaining"
                    )
                    if ratelimit_remaining == "0":
                        reset_after = float(response.headers.get("X-Ratelimit-Reset-After", 0))
                        _L.info(
                            "Bucket %s exhausted, releasing in %.2fs",
                            route.bucket,
                            reset_after,
                        )
                        asyncio.get_running_loop().call_later(
                            reset_after, lock.release
                        )
                    else:
                        lock.release()
                    holding = False

                    if 200 <= response.status < 300:
                        return Response(
                            response.status,
                            data=text,
                            content_type=response.headers.get("Content-Type"),
                        )
                    else:
                        try:
                            data = jsonlib.loads(text)
                        except jsonlib.JSONDecodeError:
                            data = text

                        raise HTTPException(response.status, data, str(route))

            raise TooManyRetries(f"maximum retry limit reached for {route}")
        finally:
            if holding:
                lock.release()

    async def get(
        self,
        route: Route,
        *,
        params: Optional[ParamsBuilder] = None,
    ) -> Any:
        """Shortcut for a GET request, returns the decoded body"""

        response = await self.request(route=route, params=params)
        return response.unwrap()

    async def post(
        self,
        route: Route,
        json: Optional[JSONBuilder] = None,
        *,
        reason: Optional[str] = None,
    ) -> Any:
        """Shortcut for a POST request, returns the decoded body"""

        response = await self.request(route=route, json=json, reason=reason)
        return response.unwrap()

    async def patch(
        self,
        route: Route,
        json: Optional[JSONBuilder] = None,
        *,
        reason: Optional[str] = None,
    ) -> Any:
        """Shortcut for a PATCH request, returns the decoded body"""

        response = await self.request(route=route, json=json, reason=reason)
        return response.unwrap()

    async def delete(
        self,
        route: Route,
        *,
        reason: Optional[str] = None,
    ) -> Any:
        """Shortcut for a DELETE request, returns the decoded body
        (usually `None`, discord answers with `204 No Content`).
        """

        response = await self.request(route=route, reason=reason)
        return response.unwrap()
