""" The object model the managers hand back to the caller """

from . import channel, emoji, enums, guild, member, permissions, role
from .channel import *
from .emoji import *
from .enums import *
from .guild import *
from .member import *
from .permissions import *
from .role import *

__all__ = (
    channel.__all__
    + emoji.__all__
    + enums.__all__
    + guild.__all__
    + member.__all__
    + permissions.__all__
    + role.__all__
)
