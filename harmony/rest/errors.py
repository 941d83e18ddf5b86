from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

import attr

__all__ = ("ClientException", "HTTPException", "TooManyRetries")

ErrorData = Union[str, Dict[str, Any]]


class _IndexedList(list):
    def items(self) -> Iterator[Tuple[str, Any]]:
        for n, item in enumerate(self):
            yield str(n), item


def flatten(
    d: Union[Dict[str, Any], _IndexedList], path: Optional[str] = None
) -> List[Tuple[str, Tuple[str, str]]]:
    """Walks discord's nested `errors` object, yielding one
    `(field.path, (message, code))` pair per leaf error.
    """

    if path is None:
        path = ""

    items: List[Tuple[str, Tuple[str, str]]] = []
    for k, v in d.items():
        if k == "_errors":
            for item in v:
                items.append((path[1:], (item["message"], item["code"])))
            continue

        if isinstance(v, dict):
            items.extend(flatten(v, path + "." + k))
        elif isinstance(v, list):
            items.extend(flatten(_IndexedList(v), path + "." + k))
    return items


class ClientException(Exception):
    """Base class for HTTP client exceptions"""


@attr.define(init=False, repr=False)
class HTTPException(ClientException):
    """Base class for errors that were encountered when making
    a HTTP request through the client. The status code and response
    data is included.
    """

    code: int = attr.field()
    """ The HTTP status code """

    data: ErrorData = attr.field()
    """ The actual data of the request """

    route: Optional[str] = attr.field()
    """ `METHOD /path` of the failed request, if known """

    def __init__(self, code: int, data: ErrorData, route: Optional[str] = None):
        self.code = code
        self.data = data
        self.route = route

        super().__init__(repr(self))

    @property
    def message(self) -> Optional[str]:
        """Error message sent by discord"""

        if isinstance(self.data, dict):
            return self.data.get("message")
        return None

    @property
    def errno(self) -> Optional[int]:
        """The JSON error code, e.g. 10004 for an unknown guild"""

        if isinstance(self.data, dict):
            return self.data.get("code")
        return None

    @property
    def errors(self) -> Optional[str]:
        """Returns the prettified error messages (discord nests them
        by field, see `flatten`).
        """

        if isinstance(self.data, dict):
            if "errors" not in self.data:
                return None

            text = "\n".join(
                f"{item} ({code}): {message}"
                for item, (message, code) in flatten(self.data["errors"])
            )
            return text.strip()
        else:
            return self.data

    def __repr__(self) -> str:
        head = f"{self.code} {self.message} ({self.errno})"
        if self.route is not None:
            head = f"{self.route}: {head}"

        errors = self.errors
        if errors:
            return f"{head}\n{errors}"
        return head


class TooManyRetries(ClientException):
    """Raised when the maximum retry depth (5) is reached"""
