""" This module contains the REST transport used by the managers, it
only covers what the guild endpoints need: routes, JSON bodies, query
parameters and ratelimit aware requests.
"""

from . import builders, client, errors, response, route
from .builders import *
from .client import *
from .errors import *
from .response import *
from .route import *

__all__ = (
    builders.__all__
    + client.__all__
    + errors.__all__
    + response.__all__
    + route.__all__
)
