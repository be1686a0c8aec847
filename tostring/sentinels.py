"""
Sentinel for arguments that were not provided at all.

UNSET lets a signature tell an omitted argument from an explicit None, which
the helpers need: `ToStringHelper()` names itself after `object`, while
`ToStringHelper(None)` is rejected.

Example:
    >>> def label(name: str | None | UnsetType = UNSET) -> str:
    ...     return ifnotunset(name, default="object")
    >>> label()
    'object'
"""

from typing import Any, Callable, Final

__all__ = [
    'UNSET',
    'UnsetType',
    'ifnotunset',
]


# Sentinel Types -------------------------------------------------------------------------------------------------------

class UnsetType:
    """
    Sentinel type for UNSET.

    Singleton, compared by identity, falsy, and pickled back to the same instance.
    """
    __slots__ = ()
    _instance: 'UnsetType | None' = None

    def __new__(cls) -> 'UnsetType':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return '<UNSET>'

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> tuple:
        return (self.__class__, ())


UNSET: Final = UnsetType()


# Helper Functions -----------------------------------------------------------------------------------------------------

def ifnotunset(value: Any, *, default: Any = None, default_factory: Callable[[], Any] | None = None) -> Any:
    """
    Return `default` (or `default_factory()`) if value is UNSET, otherwise return value.

    Raises:
        ValueError: If both default and default_factory are given.
    """
    if default is not None and default_factory is not None:
        raise ValueError("cannot specify both default and default_factory")
    if value is UNSET:
        return default_factory() if default_factory is not None else default
    return value
