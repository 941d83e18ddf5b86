from __future__ import annotations

from typing import Union

import attr

__all__ = ("Permissions",)


@attr.define(init=False)
class Permissions:
    """A permission bitfield. Discord sends these as strings since they
    do not fit in a JSON number anymore.
    """

    bitfield: int = attr.field()
    """ The raw bitfield """

    def __init__(self, bitfield: Union[int, str] = 0):
        self.bitfield = int(bitfield)

    def has(self, flag: int) -> bool:
        """Whether every bit of `flag` is set"""
        return self.bitfield & flag == flag

    def to_json(self) -> str:
        return str(self.bitfield)
