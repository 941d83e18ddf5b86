from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping, Optional, Union

import attr

from ..undefined import UNDEFINED, UndefinedOr
from .enums import ChannelType

if TYPE_CHECKING:
    from ..client import Client

__all__ = ("GuildChannel", "GuildCreateChannelOptions")


@attr.define(init=False, eq=False)
class GuildChannel:
    """The parts of a guild channel the guild endpoints care about"""

    client: Client = attr.field(repr=False)
    id: str = attr.field()
    name: str = attr.field()
    type: Union[ChannelType, int] = attr.field()
    parent_id: Optional[str] = attr.field()

    def __init__(self, client: Client, data: Mapping[str, Any]):
        self.client = client
        self.id = str(data["id"])
        self.name = data["name"]
        try:
            self.type = ChannelType(data["type"])
        except ValueError:
            self.type = data["type"]
        self.parent_id = data.get("parent_id")


@attr.define(kw_only=True)
class GuildCreateChannelOptions:
    """A channel to create along with a new guild. `id` is a placeholder
    snowflake other entries (e.g. `parent_id`) can refer to.
    """

    name: str = attr.field()
    type: UndefinedOr[Union[ChannelType, int]] = attr.field(default=UNDEFINED)
    id: UndefinedOr[Union[str, int]] = attr.field(default=UNDEFINED)
    parent_id: UndefinedOr[Optional[Union[str, int]]] = attr.field(default=UNDEFINED)
