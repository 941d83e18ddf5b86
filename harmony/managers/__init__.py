from . import base, guilds, members
from .base import *
from .guilds import *
from .members import *

__all__ = base.__all__ + guilds.__all__ + members.__all__
