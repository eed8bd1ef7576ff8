__all__ = [
    "AxisError",
    "BaseStairsearchError",
    "DisagreementError",
    "NotStaircaseError",
    "RegionError",
    "ShapeMismatchError",
]


class BaseStairsearchError(ValueError):
    """
    Base error which all stairsearch errors are sub-classed from.
    """

    _msg: str = "{}"

    def __init__(self, *args: object) -> None:
        """
        If a single argument is passed, treat it as a pre-formatted message.

        If multiple arguments are passed, they are used as arguments for a template string class
        variable.
        """
        if len(args) == 1:
            super().__init__(args[0])
        else:
            super().__init__(self._msg.format(*args))


class ShapeMismatchError(BaseStairsearchError):
    """Raised when a flat buffer does not hold exactly ``prod(shape)`` elements."""

    _msg = "Buffer of length {} does not match shape {!r} ({} elements)."


class AxisError(BaseStairsearchError, IndexError):
    """Raised when an axis is out of range for the rank of the array."""

    _msg = "Axis {} is out of bounds for array of dimension {}."


class RegionError(BaseStairsearchError):
    """
    Raised when a search region is malformed: wrong rank, negative bounds,
    ``start > end`` on some axis, or an end past the array extent.
    """

    _msg = "Invalid region {!r} for array of shape {!r}: {}."


class NotStaircaseError(BaseStairsearchError):
    """Raised when a buffer is not sorted along every axis."""

    _msg = "Array of shape {!r} is not sorted along axis {}."


class DisagreementError(BaseStairsearchError, AssertionError):
    """
    Raised when the region search and the brute force scan give different
    answers for the same array and key.
    """

    _msg = "Search returned {} but a linear scan returned {} for key {} in array of shape {!r}."
