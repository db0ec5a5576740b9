"""
Value types shared by builders and resources.
"""


class PhoneNumber:
    """
    A phone number or client endpoint, e.g. ``+14155552671`` or ``client:alice``.

    Immutable; equality and hashing use the endpoint string.
    """

    __slots__ = ("_endpoint",)

    def __init__(self, endpoint: str) -> None:
        object.__setattr__(self, "_endpoint", endpoint)

    @property
    def endpoint(self) -> str:
        return self._endpoint

    def __setattr__(self, name, value):
        raise AttributeError("PhoneNumber is immutable")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PhoneNumber):
            return NotImplemented
        return self._endpoint == other._endpoint

    def __hash__(self) -> int:
        return hash(self._endpoint)

    def __str__(self) -> str:
        return self._endpoint

    def __repr__(self) -> str:
        return f"PhoneNumber({self._endpoint!r})"
