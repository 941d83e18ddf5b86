from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, Literal, Mapping, Optional, Union, overload

from ..assets import fetch_auto, is_data_uri
from ..models.emoji import Emoji
from ..models.guild import (
    ChannelLike,
    Guild,
    GuildCreateOptions,
    GuildModifyOptions,
    GuildPayload,
    GuildPreview,
    RoleLike,
)
from ..models.role import Role
from ..rest import JSONBuilder, ParamsBuilder, Route
from ..undefined import UNDEFINED, UndefinedOr
from .base import BaseManager
from .members import MembersManager

if TYPE_CHECKING:
    from ..client import Client

__all__ = ("GuildManager",)

_L = logging.getLogger(__name__)

GuildLike = Union[Guild, str, int]


def _guild_id(guild: GuildLike) -> str:
    if isinstance(guild, Guild):
        return guild.id
    return str(guild)


def _role_payload(role: RoleLike) -> Mapping[str, Any]:
    if not isinstance(role, Role):
        return role

    return {
        "id": role.id,
        "name": role.name,
        "color": role.color,
        "hoist": role.hoist,
        "position": role.position,
        "permissions": str(role.permissions.bitfield),
        "managed": role.managed,
        "mentionable": role.mentionable,
    }


def _channel_payload(channel: ChannelLike) -> Mapping[str, Any]:
    if isinstance(channel, Mapping):
        return channel

    payload: Dict[str, Any] = {}
    for key in ("id", "name", "type", "parent_id"):
        value = getattr(channel, key)
        if value is not UNDEFINED:
            payload[key] = value
    return payload


class GuildManager(BaseManager[Guild]):
    """Maps the guild endpoints onto `Guild` objects, fetched guilds are
    kept in the cache under `guilds`.
    """

    def __init__(self, client: Client):
        super().__init__(client, "guilds", Guild)

    async def resolve_asset(self, value: Any) -> Any:
        """Inlines an URL or path, anything else (`UNDEFINED`, `None`,
        data URIs) is returned as is.
        """

        if value is UNDEFINED or value is None:
            return value
        if isinstance(value, str) and is_data_uri(value):
            return value
        return await fetch_auto(self.client.rest.session, value)

    async def fetch(self, id: str, *, with_counts: UndefinedOr[bool] = UNDEFINED) -> Guild:
        """Fetches a guild from the API and caches its payload

        Parameters
        ----------
        id : builtins.str
            The guild's ID.
        with_counts : builtins.bool
            Also return the approximate member and presence counts.

        Raises
        ------
        harmony.rest.errors.HTTPException
            The guild does not exist or the bot cannot see it.
        """

        _L.debug("fetching guild %s", id)

        params = ParamsBuilder(with_counts=with_counts)
        data: GuildPayload = await self.client.rest.get(
            Route("GET", "/guilds/{guild_id}", guild_id=id),
            params=params if params.inner else None,
        )
        await self.set(id, data)

        guild = Guild(self.client, data)

        if data.get("members") is not None:
            members = MembersManager(self.client, guild)
            await members.from_payload(data["members"])
            guild.members = members

        return guild

    async def create(self, options: GuildCreateOptions) -> Guild:
        """Creates a new guild owned by the bot, the result is not cached

        Raises
        ------
        harmony.rest.errors.HTTPException
            The bot is in too many guilds or the options are invalid.
        aiohttp.ClientResponseError
            The icon URL could not be downloaded.
        """

        icon = await self.resolve_asset(options.icon)

        body = JSONBuilder(
            name=options.name,
            region=options.region,
            icon=icon,
            verification_level=options.verification_level,
            roles=(
                [_role_payload(role) for role in options.roles]
                if options.roles is not UNDEFINED
                else UNDEFINED
            ),
            channels=(
                [_channel_payload(channel) for channel in options.channels]
                if options.channels is not UNDEFINED
                else UNDEFINED
            ),
            afk_channel_id=options.afk_channel_id,
            afk_timeout=options.afk_timeout,
            system_channel_id=options.system_channel_id,
        )

        _L.debug("creating guild %r", options.name)
        data: GuildPayload = await self.client.rest.post(Route("POST", "/guilds"), body)
        return Guild(self.client, data)

    async def preview(self, guild_id: str) -> GuildPreview:
        """Fetches the public preview of a guild, never cached"""

        _L.debug("fetching preview of guild %s", guild_id)
        data = await self.client.rest.get(
            Route("GET", "/guilds/{guild_id}/preview", guild_id=guild_id)
        )

        return GuildPreview(
            id=str(data["id"]),
            name=data["name"],
            icon=data.get("icon"),
            splash=data.get("splash"),
            discovery_splash=data.get("discovery_splash"),
            emojis=tuple(Emoji(self.client, emoji) for emoji in data.get("emojis", [])),
            features=tuple(data.get("features", [])),
            approximate_member_count=data["approximate_member_count"],
            approximate_presence_count=data["approximate_presence_count"],
            description=data.get("description"),
        )

    @overload
    async def edit(
        self,
        guild: GuildLike,
        options: GuildModifyOptions,
        as_raw: Literal[False] = ...,
        *,
        reason: Optional[str] = ...,
    ) -> Guild:
        ...

    @overload
    async def edit(
        self,
        guild: GuildLike,
        options: GuildModifyOptions,
        as_raw: Literal[True],
        *,
        reason: Optional[str] = ...,
    ) -> GuildPayload:
        ...

    async def edit(
        self,
        guild: GuildLike,
        options: GuildModifyOptions,
        as_raw: bool = False,
        *,
        reason: Optional[str] = None,
    ) -> Union[Guild, GuildPayload]:
        """Modifies a guild, only the options that were set are sent

        Parameters
        ----------
        guild : typing.Union[harmony.models.guild.Guild, builtins.str]
            The guild or its ID.
        options : harmony.models.guild.GuildModifyOptions
            What to change.
        as_raw : builtins.bool
            Return the payload discord sent back instead of a new
            `Guild`. Neither form is written to the cache.
        reason : typing.Optional[builtins.str]
            Audit log reason.

        Raises
        ------
        harmony.rest.errors.HTTPException
            Editing the guild failed.
        aiohttp.ClientResponseError
            One of the image URLs could not be downloaded.
        """

        icon = await self.resolve_asset(options.icon)
        splash = await self.resolve_asset(options.splash)
        banner = await self.resolve_asset(options.banner)

        guild_id = _guild_id(guild)

        body = JSONBuilder(
            name=options.name,
            region=options.region,
            verification_level=options.verification_level,
            default_message_notifications=options.default_message_notifications,
            explicit_content_filter=options.explicit_content_filter,
            afk_channel_id=options.afk_channel_id,
            afk_timeout=options.afk_timeout,
            owner_id=options.owner_id,
            icon=icon,
            splash=splash,
            banner=banner,
            system_channel_id=options.system_channel_id,
            rules_channel_id=options.rules_channel_id,
            public_updates_channel_id=options.public_updates_channel_id,
            preferred_locale=options.preferred_locale,
        )

        _L.debug("editing guild %s: %s", guild_id, sorted(body.inner))
        data: GuildPayload = await self.client.rest.patch(
            Route("PATCH", "/guilds/{guild_id}", guild_id=guild_id),
            body,
            reason=reason,
        )

        if as_raw:
            return data
        return Guild(self.client, data)

    async def delete(self, guild: GuildLike) -> Optional[Guild]:
        """Deletes a guild the bot owns. Returns the guild as it was
        cached before deleting (`None` if it was not cached); removing it
        from the cache is left to the gateway's GUILD_DELETE handling.
        """

        guild_id = _guild_id(guild)
        old = await self.get(guild_id)

        _L.debug("deleting guild %s", guild_id)
        await self.client.rest.delete(Route("DELETE", "/guilds/{guild_id}", guild_id=guild_id))
        return old
