from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Mapping, Optional

import attr

if TYPE_CHECKING:
    from ..client import Client
    from .guild import Guild

__all__ = ("Member",)


@attr.define(init=False, eq=False)
class Member:
    """A user as seen from inside a guild"""

    client: Client = attr.field(repr=False)
    guild: Guild = attr.field(repr=False)
    id: str = attr.field()
    user: Mapping[str, Any] = attr.field(repr=False)
    """ The raw user payload """
    nick: Optional[str] = attr.field()
    roles: List[str] = attr.field()
    """ IDs of the roles the member has """
    joined_at: Optional[str] = attr.field()
    deaf: bool = attr.field()
    mute: bool = attr.field()

    def __init__(self, client: Client, guild: Guild, data: Mapping[str, Any]):
        self.client = client
        self.guild = guild
        self.user = data["user"]
        self.id = str(self.user["id"])
        self.nick = data.get("nick")
        self.roles = list(data.get("roles", []))
        self.joined_at = data.get("joined_at")
        self.deaf = data.get("deaf", False)
        self.mute = data.get("mute", False)

    @property
    def display_name(self) -> str:
        return self.nick or self.user.get("global_name") or self.user.get("username", "")
