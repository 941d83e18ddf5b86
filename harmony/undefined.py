from typing import Final, Literal, TypeVar, Union, final

__all__ = ("UNDEFINED", "UndefinedType", "UndefinedOr")

T = TypeVar("T")


@final
class UndefinedType:
    """Marks a field that was not supplied at all, as opposed to one
    that was explicitly set to `None` (which is sent as JSON `null`).
    """

    __slots__ = ()

    def __bool__(self) -> Literal[False]:
        return False

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __copy__(self) -> "UndefinedType":
        return self

    def __deepcopy__(self, memo: object) -> "UndefinedType":
        return self

    def __reduce__(self) -> str:
        return "UNDEFINED"


UNDEFINED: Final[UndefinedType] = UndefinedType()
""" Singleton used for omitted values """

UndefinedOr = Union[UndefinedType, T]
