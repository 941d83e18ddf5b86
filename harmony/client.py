from __future__ import annotations

import os
from typing import Optional

import aiohttp
import attr

from .cache import CacheAdapter, DefaultCacheAdapter
from .managers.guilds import GuildManager
from .rest import USER_AGENT, RESTClient

__all__ = ("Client",)


@attr.define(kw_only=True)
class Client:
    """Entry point that ties the REST transport, the cache and the
    managers together. Like `RESTClient` it does not own the session.
    """

    token: str = attr.field(repr=False)
    """ The bot token """

    session: aiohttp.ClientSession = attr.field(repr=False)
    """ Session used for API calls and asset downloads """

    cache: CacheAdapter = attr.field(factory=DefaultCacheAdapter, repr=False)
    """ Where the managers keep raw payloads """

    user_agent: str = attr.field(default=USER_AGENT)

    rest: RESTClient = attr.field(init=False, repr=False)
    guilds: GuildManager = attr.field(init=False, repr=False)

    def __attrs_post_init__(self):
        self.rest = RESTClient(
            session=self.session, token=self.token, user_agent=self.user_agent
        )
        self.guilds = GuildManager(self)

    @classmethod
    def from_env(
        cls,
        session: aiohttp.ClientSession,
        *,
        cache: Optional[CacheAdapter] = None,
        variable: str = "DISCORD_TOKEN",
    ) -> Client:
        """Builds a client with the token read from the environment

        Raises
        ------
        builtins.KeyError
            The environment variable is not set.
        """

        token = os.environ[variable]
        if cache is None:
            return cls(token=token, session=session)
        return cls(token=token, session=session, cache=cache)
