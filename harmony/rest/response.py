import json as jsonlib
from typing import Any, Optional, final

import attr

__all__ = ("Response",)


@final
@attr.define
class Response:
    """The object that represents the response that discord
    sends back after a HTTP request.
    """

    code: int = attr.field()
    """ The status code of the response """

    data: str = attr.field()
    """ The raw data of the response, probably should not be used
    directly, rather call a helper method to get the parsed data.
    """

    content_type: Optional[str] = attr.field(default=None)
    """ The content-type of the response, most likely application/json
    but could be something else (or missing for `204 No Content`).
    """

    @property
    def empty(self) -> bool:
        """Whether discord sent back no body at all"""
        return self.code == 204 or not self.data

    def json(self) -> Any:
        """Returns the parsed JSON data of the response, will
        raise a `ValueError` if the content type is incorrect.
        """

        if self.content_type is not None and self.content_type.startswith(
            "application/json"
        ):
            return jsonlib.loads(self.data)
        else:
            raise ValueError(
                f"content-type must be `application/json` not `{self.content_type}`"
            )

    def unwrap(self) -> Any:
        """Returns the decoded body, or `None` for empty responses"""

        if self.empty:
            return None

        return self.json()
