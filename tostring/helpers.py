"""
To-string helpers: readable renderings of an object's named properties.

Two helpers share one abstract base:

- ToStringHelper: entries are registered by hand with a fluent add() API.
- ReflectiveToStringHelper: entries are the target's declared fields,
  introspected once at construction.

Both render as ``Name{tag1 = value1, tag2 = value2}``.

Examples:
    >>> str(ToStringHelper("Point").add("x", 1).add("y", None).omit_null_values())
    'Point{x = 1}'

    >>> class Person:
    ...     def __init__(self, name, age):
    ...         self.name, self.age = name, age
    >>> str(ReflectiveToStringHelper(Person("Daniel", 18)))
    'Person{name = Daniel, age = 18}'
"""

# Standard library -----------------------------------------------------------------------------------------------------
import abc
import logging
from collections.abc import ItemsView, Mapping
from typing import Any, Callable, Self

# Local ----------------------------------------------------------------------------------------------------------------
from .abc import OnError, mapped_fields
from .collections import EntryStore
from .formatters import ToStringOptions, fmt_entry_value, get_options
from .sentinels import UNSET, UnsetType, ifnotunset
from .utils import class_name, type_name

logger = logging.getLogger(__name__)

Entry = tuple[str, Any]


# Classes --------------------------------------------------------------------------------------------------------------

class BaseToStringHelper(abc.ABC):
    """
    Mutable string representation of an arbitrary object.

    Holds an ordered tag → value store, a display name fixed at construction,
    and the rendering options captured at construction. Subclasses decide how
    entries are populated and implement to_string().
    """

    def __init__(self, name: str, *, options: ToStringOptions | None = None) -> None:
        self._name = name
        self._options = get_options() if options is None else options
        self._entries = EntryStore()

    @property
    def name(self) -> str:
        """Display name prefixed to the rendering."""
        return self._name

    @property
    def options(self) -> ToStringOptions:
        return self._options

    def entries(self) -> ItemsView[str, Any]:
        """Live view of (tag, value) pairs in insertion order."""
        return self._entries.entries()

    def get(self, tag: str) -> str:
        """Formatted value bound to tag, the null token if unbound."""
        return self._format(self._entries.get(tag))

    def format_entries(
            self,
            mapper: Callable[[Entry], str] | None = None,
            *,
            predicate: Callable[[Entry], bool] | None = None,
    ) -> str:
        """
        Join entries with the entry separator.

        Args:
            mapper: Entry → text; defaults to '<tag> = <formatted value>'.
            predicate: Keep only entries it accepts.
        """
        mapper = self._format_entry if mapper is None else mapper
        items = self._entries.items()
        if self._options.sort_tags:
            items = sorted(items, key=lambda entry: entry[0])
        return self._options.entry_separator.join(
            mapper(entry) for entry in items if predicate is None or predicate(entry)
        )

    @abc.abstractmethod
    def to_string(self) -> str:
        """Render the helper."""

    def _add(self, tag: str, value: Any) -> None:
        self._entries.put(tag, value)

    def _add_all(self, values: Mapping[str, Any]) -> None:
        self._entries.put_all(values)

    def _format(self, value: Any) -> str:
        return fmt_entry_value(value, owner=self, options=self._options)

    def _format_entry(self, entry: Entry) -> str:
        tag, value = entry
        return f"{tag}{self._options.tag_separator}{self._format(value)}"

    def _render(self, predicate: Callable[[Entry], bool] | None = None) -> str:
        return f"{self._name}{{{self.format_entries(predicate=predicate)}}}"

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return self.to_string()


class ToStringHelper(BaseToStringHelper):
    """
    Builder helper for hand-written renderings.

    The name is a literal str, the display name of a class, or the display
    name of an instance's class; without a name it is 'object'.

    Examples:
        >>> helper = ToStringHelper("toString").add("Non-null property", 1).add("Null property", None)
        >>> str(helper)
        'toString{Non-null property = 1, Null property = null}'
        >>> str(helper.omit_null_values())
        'toString{Non-null property = 1}'
        >>> str(ToStringHelper(str))
        'str{}'
    """

    def __init__(self, name: Any | UnsetType = UNSET, *, options: ToStringOptions | None = None) -> None:
        if name is None:
            raise ValueError("name must be a str, a class or an object, got None")
        options = get_options() if options is None else options
        super().__init__(_display_name(name, options), options=options)
        self._omit_null_values = False

    def add(self, tag: str, value: Any) -> Self:
        """Bind value to tag and return self for chaining."""
        self._add(tag, value)
        return self

    def omit_null_values(self) -> Self:
        """Skip None-valued entries when rendering; returns self."""
        self._omit_null_values = True
        return self

    def to_string(self) -> str:
        return self._render(predicate=lambda entry: not self._should_omit(entry[1]))

    def _should_omit(self, value: Any) -> bool:
        return value is None and self._omit_null_values


class ReflectiveToStringHelper(BaseToStringHelper):
    """
    Helper rendering the declared fields of a target object.

    Fields are read once at construction from raw storage in declaration
    order; see tostring.abc.declared_fields(). A field that cannot be read
    is recorded as None and reported according to on_error.

    Raises:
        ValueError: If target is None or on_error is unknown.
    """

    def __init__(
            self,
            target: Any,
            *,
            on_error: OnError = "log",
            options: ToStringOptions | None = None,
    ) -> None:
        if target is None:
            raise ValueError("target must not be None")
        options = get_options() if options is None else options
        super().__init__(type_name(type(target), suffix=options.anonymous_suffix), options=options)
        self._target = target
        self._introspect_fields(on_error)

    @property
    def target(self) -> Any:
        return self._target

    def to_string(self) -> str:
        return self._render()

    def _introspect_fields(self, on_error: OnError) -> None:
        fields = mapped_fields(self._target, on_error=on_error)
        logger.debug("Introspected %d field(s) of %s", len(fields), class_name(self._target))
        self._add_all(fields)


# Same behaviour under the name used by older callers
AutoToStringHelper = ReflectiveToStringHelper


# Private Methods ------------------------------------------------------------------------------------------------------

def _display_name(name: Any, options: ToStringOptions) -> str:
    name = ifnotunset(name, default=object)
    if isinstance(name, str):
        return name
    return type_name(name, suffix=options.anonymous_suffix)
