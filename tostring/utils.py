"""
Tostring Utilities shared across the package.

Contains class naming functions used by multiple modules to avoid circular imports.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any

ANONYMOUS_SUFFIX = "$Anonymous"


# Methods --------------------------------------------------------------------------------------------------------------


def anonymous(base: type = object, **namespace: Any) -> type:
    """
    Create an anonymous subclass of `base`.

    The returned class has an empty ``__name__``, so `type_name()` renders it
    through its base class, e.g. ``'Object$Anonymous'``.

    Examples:
        >>> class Object: ...
        >>> type_name(anonymous(Object))
        'Object$Anonymous'
        >>> anonymous(dict, greeting="hi").greeting
        'hi'
    """
    if not isinstance(base, type):
        raise TypeError(f"base must be a class, got {class_name(base)}")
    return type("", (base,), dict(namespace))


def class_name(
    obj: Any,
    fully_qualified: bool = False,
    fully_qualified_builtins: bool = False,
) -> str:
    """
    Get the class name of an object or a class.

    Returns class name whether given an instance or the class itself.
    For example, both `class_name(10)` and `class_name(int)` return 'int'.

    Parameters:
        obj (Any): An object or a class.
        fully_qualified (bool): If true, returns the fully qualified name for user objects or classes.
        fully_qualified_builtins (bool): If true, returns the fully qualified name for builtin objects or classes.

    Returns:
        str: The class name.

    Examples:
        >>> class_name(10)
        'int'
        >>> class_name(10, fully_qualified_builtins=True)
        'builtins.int'
    """
    cls = obj if isinstance(obj, type) else type(obj)
    qualify = fully_qualified_builtins if cls.__module__ == "builtins" else fully_qualified
    if qualify:
        return cls.__module__ + "." + cls.__name__
    return cls.__name__


def is_anonymous(cls: type) -> bool:
    """True if the class has no usable simple name."""
    name = getattr(cls, "__name__", "")
    return not (isinstance(name, str) and name.isidentifier())


def type_name(obj: Any, *, suffix: str | None = None) -> str:
    """
    Display name of a class, or of the class of an instance.

    Python simple names are already unqualified, so a named class renders as
    its ``__name__``. An anonymous class renders as the simple name of its
    first direct base followed by `suffix` (``'$Anonymous'`` by default). Only
    one level of the base chain is looked at: an anonymous base keeps its
    own (non-identifier) name.

    Parameters:
        obj (Any): A class or an instance.
        suffix (str | None): Marker appended for anonymous classes.

    Returns:
        str: The display name.

    Examples:
        >>> type_name(str)
        'str'
        >>> type_name("abc")
        'str'
        >>> type_name(anonymous())
        'object$Anonymous'
    """
    cls = obj if isinstance(obj, type) else type(obj)
    if not is_anonymous(cls):
        return cls.__name__

    suffix = ANONYMOUS_SUFFIX if suffix is None else suffix
    bases = cls.__bases__ or (object,)
    return f"{bases[0].__name__}{suffix}"
