"""
A collection of basic utilities for object introspection and attribute manipulation.

Field access goes through the object's raw storage (instance __dict__ and
__slots__ descriptors), so custom __getattribute__, __getattr__, __setattr__
and same-named properties are bypassed. Failures are reported according to
an `on_error` policy and never abort the caller unless it asks for "raise".
"""

# Standard library -----------------------------------------------------------------------------------------------------
import inspect
import logging
import warnings

from typing import Any, Callable, ClassVar, Iterable, Literal, Protocol, get_origin, runtime_checkable

# Local ----------------------------------------------------------------------------------------------------------------
from .utils import class_name

logger = logging.getLogger(__name__)

OnError = Literal["log", "warn", "ignore", "raise"]

_ON_ERROR = ("log", "warn", "ignore", "raise")
_SLOT_SKIP = ("__dict__", "__weakref__")


# Classes --------------------------------------------------------------------------------------------------------------

@runtime_checkable
class Describable(Protocol):
    """
    Protocol for objects that list their own fields.

    Reflective helpers use ``__describe__()`` instead of introspection when
    the target implements it.
    """

    def __describe__(self) -> Iterable[tuple[str, Any]]: ...


# Methods --------------------------------------------------------------------------------------------------------------

def declared_fields(obj: Any, predicate: Callable[[str], bool] | None = None) -> list[str]:
    """
    Storage names of the fields declared by an object, in declaration order.

    For an instance:
        - fields the class itself declares, in declaration order: own
          ``__slots__`` (mangled as stored), then own annotations
          (ClassVar excluded),
        - then the remaining keys of the instance ``__dict__`` in assignment
          order, minus any field declared by a base class.
    When no class in the MRO declares fields, the instance ``__dict__`` keys
    are used as-is.
    For a class: its own non-dunder, non-callable class attributes.

    Fields inherited from base classes are not included.

    Args:
        obj: Instance or class to inspect.
        predicate: Optional filter applied to each storage name.

    Returns:
        Unique storage names, suitable for get_field().

    Examples:
        >>> class P:
        ...     __slots__ = ("gender", "name")
        >>> declared_fields(P())
        ['gender', 'name']
    """
    if inspect.isclass(obj):
        names = [
            name for name, value in vars(obj).items()
            if not _is_dunder(name) and not _is_routine(value)
        ]
    else:
        instance_names = list(_instance_dict(obj))
        declared = [_declared_names(klass) for klass in type(obj).__mro__]
        if any(declared):
            own = declared[0]
            inherited = {name for names in declared[1:] for name in names} - set(own)
            names = own + [name for name in instance_names if name not in inherited]
        else:
            names = instance_names

    seen = set()
    result = []
    for name in names:
        if name in seen:
            continue
        seen.add(name)
        if predicate is None or predicate(name):
            result.append(name)
    return result


def field_tag(cls: type, name: str) -> str:
    """
    Declared name of a storage name: '_Person__secret' → '__secret'.

    Names mangled for any class in the MRO are unmangled; others are returned as-is.
    """
    for klass in getattr(cls, "__mro__", ()):
        prefix = f"_{klass.__name__.lstrip('_')}__"
        if name.startswith(prefix) and len(name) > len(prefix) and klass.__name__.strip("_"):
            return "__" + name[len(prefix):]
    return name


def get_field(obj: Any, name: str, *, on_error: OnError = "log") -> Any:
    """
    Read a field value from raw storage.

    Looks in the instance __dict__ first, then falls back to
    object.__getattribute__ (slots, class attributes).

    Returns:
        The value, or None when it cannot be read and on_error is not "raise".

    Raises:
        AttributeError, or whatever the storage raises, if on_error="raise".
    """
    _check_on_error(on_error)
    try:
        namespace = _instance_dict(obj)
        if name in namespace:
            return namespace[name]
        return object.__getattribute__(obj, name)
    except Exception as e:
        if on_error == "raise":
            raise
        _report(on_error, f"Can't access field {name!r} of {class_name(obj)}", e)
    return None


def set_field(obj: Any, name: str, value: Any, *, on_error: OnError = "log") -> bool:
    """
    Write a field value through object.__setattr__, bypassing overrides.

    Returns:
        True on success, False when the write failed and on_error is not "raise".
    """
    _check_on_error(on_error)
    try:
        object.__setattr__(obj, name, value)
        return True
    except Exception as e:
        if on_error == "raise":
            raise
        _report(on_error, f"Can't set field {name!r} of {class_name(obj)}", e)
    return False


def mapped_fields(
        obj: Any,
        key_mapper: Callable[[str], str] | None = None,
        value_mapper: Callable[[str], Any] | None = None,
        *,
        predicate: Callable[[str], bool] | None = None,
        on_error: OnError = "log",
) -> dict[str, Any]:
    """
    Map the declared fields of obj to a dict in declaration order.

    Describable objects supply their own (tag, value) pairs and ignore the mappers;
    a failing __describe__() yields an empty dict unless on_error is "raise".

    Args:
        obj: Object to inspect.
        key_mapper: Storage name → key; defaults to field_tag().
        value_mapper: Storage name → value; defaults to get_field().
        predicate: Optional filter on storage names.
        on_error: Failure policy of the default value_mapper.

    Examples:
        >>> class Point:
        ...     def __init__(self):
        ...         self.x, self.y = 1, 2
        >>> mapped_fields(Point())
        {'x': 1, 'y': 2}
    """
    _check_on_error(on_error)
    cls = obj if inspect.isclass(obj) else type(obj)
    if cls is not obj and callable(inspect.getattr_static(cls, "__describe__", None)):
        try:
            return dict(obj.__describe__())
        except Exception as e:
            if on_error == "raise":
                raise
            _report(on_error, f"Can't describe {class_name(obj)}", e)
        return {}

    if key_mapper is None:
        key_mapper = lambda name: field_tag(cls, name)
    if value_mapper is None:
        value_mapper = lambda name: get_field(obj, name, on_error=on_error)

    return {key_mapper(name): value_mapper(name) for name in declared_fields(obj, predicate)}


def methods(cls: type, predicate: Callable[[str], bool] | None = None) -> list[str]:
    """
    Names of the methods of a class, in definition order.

    Abstract classes list every callable member including inherited ones,
    concrete classes only the methods they define themselves. Dunder methods are skipped.
    """
    if inspect.isabstract(cls) or getattr(cls, "_is_protocol", False):
        names = [name for name, _ in inspect.getmembers(cls, callable)]
    else:
        names = [name for name, value in vars(cls).items() if callable(value) or isinstance(value, classmethod)]
    return [name for name in names if not _is_dunder(name) and (predicate is None or predicate(name))]


def is_getter(name: str) -> bool:
    return startswith(name, "get")


def is_setter(name: str) -> bool:
    return startswith(name, "set")


def startswith(name: str, prefix: str) -> bool:
    """True if name starts with prefix and has something after it."""
    return name.startswith(prefix) and len(name) > len(prefix)


def getter_for(cls: type, name: str) -> Any:
    """
    Find the accessor of a field: a property with the field's public name,
    else a 'get_<name>' or 'get<Name>' method.

    Raises:
        LookupError: If the class has no such accessor.
    """
    public = field_tag(cls, name).lstrip("_")
    descriptor = inspect.getattr_static(cls, public, None)
    if isinstance(descriptor, property):
        return descriptor

    candidates = {f"get_{public}", f"get{public[:1].upper()}{public[1:]}"}
    for method in methods(cls, is_getter):
        if method in candidates:
            return getattr(cls, method)
    raise LookupError(f"no getter for field {name!r} in {class_name(cls)}")


def invoke(obj: Any, method: str | Callable, *args: Any, on_error: OnError = "log", **kwargs: Any) -> Any:
    """
    Call a method of obj by name (or a callable directly).

    Returns:
        The call result, or None when the call failed and on_error is not "raise".
    """
    _check_on_error(on_error)
    try:
        func = getattr(obj, method) if isinstance(method, str) else method
        return func(*args, **kwargs)
    except Exception as e:
        if on_error == "raise":
            raise
        _report(on_error, f"Can't invoke {method!r} on {class_name(obj)}", e)
    return None


def new_instance(cls: type, *args: Any, on_error: OnError = "log", **kwargs: Any) -> Any:
    """
    Instantiate cls.

    Returns:
        The new instance, or None when construction failed and on_error is not "raise".
    """
    _check_on_error(on_error)
    try:
        return cls(*args, **kwargs)
    except Exception as e:
        if on_error == "raise":
            raise
        _report(on_error, f"Can't instantiate {class_name(cls)}", e)
    return None


# Private Methods ------------------------------------------------------------------------------------------------------

def _check_on_error(on_error: str) -> None:
    if on_error not in _ON_ERROR:
        raise ValueError(f"on_error must be one of {_ON_ERROR}, got {on_error!r}")


def _declared_names(klass: type) -> list[str]:
    """Storage names a class declares itself: own slots, then own non-ClassVar annotations."""
    names = [_mangle(klass, s) for s in _own_slots(klass) if s not in _SLOT_SKIP]
    try:
        annotations = inspect.get_annotations(klass)
    except Exception:
        annotations = {}
    names.extend(name for name, annotation in annotations.items() if not _is_class_var(annotation))
    return names


def _instance_dict(obj: Any) -> dict[str, Any]:
    try:
        namespace = object.__getattribute__(obj, "__dict__")
    except AttributeError:
        return {}
    return namespace if isinstance(namespace, dict) else {}


def _is_class_var(annotation: Any) -> bool:
    if isinstance(annotation, str):
        return annotation.startswith(("ClassVar", "typing.ClassVar"))
    return annotation is ClassVar or get_origin(annotation) is ClassVar


def _is_dunder(name: str) -> bool:
    return name.startswith("__") and name.endswith("__")


def _is_routine(value: Any) -> bool:
    return callable(value) or isinstance(value, (staticmethod, classmethod, property))


def _mangle(cls: type, name: str) -> str:
    if name.startswith("__") and not name.endswith("__"):
        return f"_{cls.__name__.lstrip('_')}{name}"
    return name


def _own_slots(cls: type) -> tuple[str, ...]:
    slots = cls.__dict__.get("__slots__", ())
    if isinstance(slots, str):
        return (slots,)
    return tuple(slots)


def _report(on_error: str, message: str, exc: Exception) -> None:
    if on_error == "log":
        logger.error(message, exc_info=exc)
    elif on_error == "warn":
        warnings.warn(f"{message}: {type(exc).__name__}: {exc}", RuntimeWarning, stacklevel=3)
