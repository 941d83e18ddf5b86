from __future__ import annotations

import copy
from typing import Any, Mapping, MutableMapping
from urllib import parse

import attr

from ..undefined import UNDEFINED

__all__ = ("JSONBuilder", "ParamsBuilder")


@attr.define(init=False)
class JSONBuilder:
    """Represents a JSON object, keys whose value is `UNDEFINED`
    are left out of the object entirely.
    """

    inner: MutableMapping[str, Any] = attr.field(init=False)
    """ The inner representation of the JSON """

    def __init__(self, **kwargs: Any):
        self.inner = {}

        for key, value in kwargs.items():
            self.add(key, value)

    def add(self, key: str, value: Any) -> JSONBuilder:
        """Add a key to the JSON mapping

        Parameters
        ----------
        key : builtins.str
            The key.
        value : typing.Any
            The value that the key represents. (Will implicitly
            call `to_json` if the type supports it). Passing
            `UNDEFINED` is a no-op, `None` is kept and sent as null.

        Returns
        -------
        harmony.rest.builders.JSONBuilder
            The builder object, can be used for chaining.
        """

        if value is UNDEFINED:
            return self

        if hasattr(value, "to_json"):
            value = value.to_json()

        self.inner[key] = value
        return self

    def build(self) -> Mapping[str, Any]:
        """Builds the JSON object into a mapping. (This makes
        a deepcopy of the underlying object).

        Returns
        -------
        typing.Mapping[builtins.str, typing.Any]
        """

        return copy.deepcopy(self.inner)


@attr.define(init=False)
class ParamsBuilder:
    """Represents the parameters of the query string"""

    inner: MutableMapping[str, str] = attr.field(init=False)
    """ The inner representation of the parameters """

    def __init__(self, **kwargs: Any):
        self.inner = {}

        for key, value in kwargs.items():
            self.add(key, value)

    def add(self, key: str, value: Any) -> ParamsBuilder:
        """Add a parameter to the parameters

        Parameters
        ----------
        key : builtins.str
            The key.
        value : typing.Any
            The value that the key represents, booleans are
            lowercased the way discord expects them. `UNDEFINED`
            values are skipped.

        Returns
        -------
        harmony.rest.builders.ParamsBuilder
            The builder object, can be used for chaining.
        """

        if value is UNDEFINED:
            return self

        if isinstance(value, bool):
            value = "true" if value else "false"

        self.inner[key] = parse.quote_plus(str(value))

        return self

    def build(self) -> Mapping[str, str]:
        """Build the parameters into a mapping.

        Returns
        -------
        typing.Mapping[builtins.str, builtins.str]
            The mapping referring to the parameters.
        """

        return dict(self.inner)
