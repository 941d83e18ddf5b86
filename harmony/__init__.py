""" A small discord API client built around resource managers, currently
covering guilds: fetch, create, preview, edit and delete.
"""

__version__ = "0.1.0"

from .assets import *
from .cache import *
from .client import *
from .managers import *
from .models import *
from .rest import *
from .undefined import *
