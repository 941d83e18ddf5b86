from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Mapping, Optional, Sequence, Tuple, Union

import attr

from ..undefined import UNDEFINED, UndefinedOr
from .channel import GuildChannel, GuildCreateChannelOptions
from .emoji import Emoji
from .enums import (
    DefaultMessageNotificationLevel,
    ExplicitContentFilterLevel,
    VerificationLevel,
)
from .role import Role

if TYPE_CHECKING:
    from ..client import Client
    from ..managers.members import MembersManager

__all__ = (
    "GuildPayload",
    "Guild",
    "GuildPreview",
    "GuildCreateOptions",
    "GuildModifyOptions",
)

GuildPayload = Mapping[str, Any]
""" A guild object as discord sends it """


@attr.define(init=False, eq=False)
class Guild:
    """A discord guild (server). Built from a raw guild payload, the
    member list is only attached when the guild was fetched with one.
    """

    client: Client = attr.field(repr=False)
    id: str = attr.field()
    name: str = attr.field()
    icon: Optional[str] = attr.field(repr=False)
    splash: Optional[str] = attr.field(repr=False)
    discovery_splash: Optional[str] = attr.field(repr=False)
    banner: Optional[str] = attr.field(repr=False)
    description: Optional[str] = attr.field(repr=False)
    owner_id: Optional[str] = attr.field()
    region: Optional[str] = attr.field(repr=False)
    afk_channel_id: Optional[str] = attr.field(repr=False)
    afk_timeout: int = attr.field(repr=False)
    verification_level: int = attr.field(repr=False)
    default_message_notifications: int = attr.field(repr=False)
    explicit_content_filter: int = attr.field(repr=False)
    roles: List[Role] = attr.field(repr=False)
    emojis: List[Emoji] = attr.field(repr=False)
    features: List[str] = attr.field(repr=False)
    system_channel_id: Optional[str] = attr.field(repr=False)
    rules_channel_id: Optional[str] = attr.field(repr=False)
    public_updates_channel_id: Optional[str] = attr.field(repr=False)
    preferred_locale: Optional[str] = attr.field(repr=False)
    approximate_member_count: Optional[int] = attr.field(repr=False)
    approximate_presence_count: Optional[int] = attr.field(repr=False)
    members: Optional[MembersManager] = attr.field(repr=False)
    """ Only set when the payload carried a member list """

    def __init__(self, client: Client, data: GuildPayload):
        self.client = client
        self.id = str(data["id"])
        self.members = None
        self.update(data)

    def update(self, data: GuildPayload) -> None:
        """Reads every known attribute from a (possibly partial) payload"""

        self.name = data.get("name", getattr(self, "name", ""))
        self.icon = data.get("icon")
        self.splash = data.get("splash")
        self.discovery_splash = data.get("discovery_splash")
        self.banner = data.get("banner")
        self.description = data.get("description")
        self.owner_id = data.get("owner_id")
        self.region = data.get("region")
        self.afk_channel_id = data.get("afk_channel_id")
        self.afk_timeout = data.get("afk_timeout", 0)
        self.verification_level = data.get("verification_level", 0)
        self.default_message_notifications = data.get("default_message_notifications", 0)
        self.explicit_content_filter = data.get("explicit_content_filter", 0)
        self.roles = [Role(self.client, role) for role in data.get("roles", [])]
        self.emojis = [Emoji(self.client, emoji) for emoji in data.get("emojis", [])]
        self.features = list(data.get("features", []))
        self.system_channel_id = data.get("system_channel_id")
        self.rules_channel_id = data.get("rules_channel_id")
        self.public_updates_channel_id = data.get("public_updates_channel_id")
        self.preferred_locale = data.get("preferred_locale")
        self.approximate_member_count = data.get("approximate_member_count")
        self.approximate_presence_count = data.get("approximate_presence_count")

    def get_role(self, role_id: str) -> Optional[Role]:
        for role in self.roles:
            if role.id == str(role_id):
                return role
        return None

    async def edit(self, options: GuildModifyOptions) -> Guild:
        """Shortcut for `client.guilds.edit(self, options)`, also refreshes
        this object from the response.
        """

        data = await self.client.guilds.edit(self, options, as_raw=True)
        self.update(data)
        return self

    async def delete(self) -> Optional[Guild]:
        return await self.client.guilds.delete(self)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Guild) and other.id == self.id

    def __hash__(self) -> int:
        return hash(self.id)


@attr.define(frozen=True)
class GuildPreview:
    """Public preview of a guild, readable without being a member"""

    id: str = attr.field()
    name: str = attr.field()
    icon: Optional[str] = attr.field(repr=False)
    splash: Optional[str] = attr.field(repr=False)
    discovery_splash: Optional[str] = attr.field(repr=False)
    emojis: Tuple[Emoji, ...] = attr.field(repr=False)
    features: Tuple[str, ...] = attr.field()
    approximate_member_count: int = attr.field()
    approximate_presence_count: int = attr.field()
    description: Optional[str] = attr.field()


RoleLike = Union[Role, Mapping[str, Any]]
ChannelLike = Union[GuildChannel, GuildCreateChannelOptions, Mapping[str, Any]]


@attr.define(kw_only=True)
class GuildCreateOptions:
    """Options for `GuildManager.create`. `icon` can be a data URI, an
    URL or a local path, the latter two are downloaded/read and inlined.
    """

    name: str = attr.field()
    region: UndefinedOr[str] = attr.field(default=UNDEFINED)
    icon: UndefinedOr[str] = attr.field(default=UNDEFINED)
    verification_level: UndefinedOr[VerificationLevel] = attr.field(default=UNDEFINED)
    roles: UndefinedOr[Sequence[RoleLike]] = attr.field(default=UNDEFINED)
    channels: UndefinedOr[Sequence[ChannelLike]] = attr.field(default=UNDEFINED)
    afk_channel_id: UndefinedOr[str] = attr.field(default=UNDEFINED)
    afk_timeout: UndefinedOr[int] = attr.field(default=UNDEFINED)
    system_channel_id: UndefinedOr[str] = attr.field(default=UNDEFINED)


@attr.define(kw_only=True)
class GuildModifyOptions:
    """Options for `GuildManager.edit`, only the fields that are set are
    sent. Use `None` to clear a nullable field (e.g. remove the icon).
    """

    name: UndefinedOr[str] = attr.field(default=UNDEFINED)
    region: UndefinedOr[Optional[str]] = attr.field(default=UNDEFINED)
    verification_level: UndefinedOr[Optional[VerificationLevel]] = attr.field(default=UNDEFINED)
    default_message_notifications: UndefinedOr[
        Optional[DefaultMessageNotificationLevel]
    ] = attr.field(default=UNDEFINED)
    explicit_content_filter: UndefinedOr[
        Optional[ExplicitContentFilterLevel]
    ] = attr.field(default=UNDEFINED)
    afk_channel_id: UndefinedOr[Optional[str]] = attr.field(default=UNDEFINED)
    afk_timeout: UndefinedOr[int] = attr.field(default=UNDEFINED)
    owner_id: UndefinedOr[str] = attr.field(default=UNDEFINED)
    icon: UndefinedOr[Optional[str]] = attr.field(default=UNDEFINED)
    splash: UndefinedOr[Optional[str]] = attr.field(default=UNDEFINED)
    banner: UndefinedOr[Optional[str]] = attr.field(default=UNDEFINED)
    system_channel_id: UndefinedOr[Optional[str]] = attr.field(default=UNDEFINED)
    rules_channel_id: UndefinedOr[Optional[str]] = attr.field(default=UNDEFINED)
    public_updates_channel_id: UndefinedOr[Optional[str]] = attr.field(default=UNDEFINED)
    preferred_locale: UndefinedOr[Optional[str]] = attr.field(default=UNDEFINED)
