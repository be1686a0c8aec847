"""
Value formatting for to-string helpers.

Turns an arbitrary entry value into its display string: null token for None,
a placeholder for the rendering helper itself, optional quoting for text,
deep bracketed rendering for arrays, and the value's own str() otherwise.
Rendering never raises, broken __str__ methods fall back to a type label.

Module-level options are managed with configure() and get_options().
"""

# Standard library -----------------------------------------------------------------------------------------------------
import array
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any, Literal

# Local ----------------------------------------------------------------------------------------------------------------
from .utils import ANONYMOUS_SUFFIX, class_name

ARRAY_TYPES = (list, tuple, array.array)

Preset = Literal["default", "pythonic", "quoted", "sorted"]


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class ToStringOptions:
    """
    Rendering options shared by all helpers.

    Attributes:
        null_token: Text rendered for None values.
        quote_strings: Wrap top-level str values in quote_char.
        quote_char: Quote character used when quote_strings is set.
        entry_separator: Text between rendered entries.
        tag_separator: Text between a tag and its value.
        anonymous_suffix: Marker appended to the base name of anonymous classes.
        self_token: Placeholder for a helper found among its own values;
            ``{name}`` is replaced with the helper class name.
        sort_tags: Render entries sorted by tag instead of insertion order.

    Examples:
        >>> ToStringOptions().null_token
        'null'
        >>> ToStringOptions.quoted().merge(quote_char="'").quote_char
        "'"
    """
    null_token: str = "null"
    quote_strings: bool = False
    quote_char: str = '"'
    entry_separator: str = ", "
    tag_separator: str = " = "
    anonymous_suffix: str = ANONYMOUS_SUFFIX
    self_token: str = "(this {name})"
    sort_tags: bool = False

    @classmethod
    def default(cls) -> "ToStringOptions":
        """Unquoted text, insertion order, 'null' for None."""
        return cls()

    @classmethod
    def pythonic(cls) -> "ToStringOptions":
        """Python literal flavour: 'None' for None, single-quoted text."""
        return cls(null_token="None", quote_strings=True, quote_char="'")

    @classmethod
    def quoted(cls) -> "ToStringOptions":
        """Text values wrapped in double quotes."""
        return cls(quote_strings=True)

    @classmethod
    def sorted(cls) -> "ToStringOptions":
        """Entries rendered sorted by tag."""
        return cls(sort_tags=True)

    @classmethod
    def from_preset(cls, preset: Preset) -> "ToStringOptions":
        factories = {
            "default": cls.default,
            "pythonic": cls.pythonic,
            "quoted": cls.quoted,
            "sorted": cls.sorted,
        }
        if preset not in factories:
            raise ValueError(f"unknown preset {preset!r}, expected one of {sorted(factories)}")
        return factories[preset]()

    def merge(self, **overrides: Any) -> "ToStringOptions":
        """
        Return a copy with `overrides` applied.

        Raises:
            TypeError: If an override does not name an option.
        """
        names = {f.name for f in fields(self)}
        unknown = sorted(set(overrides) - names)
        if unknown:
            raise TypeError(f"unknown option(s) {unknown}, expected any of {sorted(names)}")
        return replace(self, **overrides)


_options = ToStringOptions()


# Methods --------------------------------------------------------------------------------------------------------------

def configure(preset: Preset | None = None, **overrides: Any) -> ToStringOptions:
    """
    Update module-level options used by helpers created afterwards.

    A preset replaces the current options before `overrides` are merged;
    without a preset, overrides merge into the current options.

    Returns:
        The new module-level options.
    """
    global _options
    base = _options if preset is None else ToStringOptions.from_preset(preset)
    _options = base.merge(**overrides)
    return _options


def get_options() -> ToStringOptions:
    """Current module-level options."""
    return _options


def fmt_entry_value(value: Any, *, owner: Any = None, options: ToStringOptions | None = None) -> str:
    """
    Format an entry value for display.

    Rules, first match wins:
        - None → options.null_token
        - the owner itself → options.self_token, e.g. '(this ToStringHelper)'
        - str → the text, quoted if options.quote_strings (str-based Enum members are not quoted)
        - array (list, tuple, array.array, n-dim array) → fmt_array()
        - anything else → str(value)

    Args:
        value: Any Python object.
        owner: The helper being rendered; matched by identity.
        options: Rendering options, module-level options if None.

    Returns:
        Display string, never raises.

    Examples:
        >>> fmt_entry_value(None)
        'null'
        >>> fmt_entry_value([[1.1, 2.2], [3.3, 4.4, 5.5]])
        '[[1.1, 2.2], [3.3, 4.4, 5.5]]'
        >>> fmt_entry_value("Daniel", options=ToStringOptions.quoted())
        '"Daniel"'
    """
    options = _options if options is None else options

    if value is None:
        return options.null_token
    if owner is not None and value is owner:
        return _fmt_self(owner, options)
    if isinstance(value, str) and not isinstance(value, Enum):
        if options.quote_strings:
            return f"{options.quote_char}{value}{options.quote_char}"
        return str(value)
    if is_array(value):
        return fmt_array(value, owner=owner, options=options)
    return _safe_str(value)


def fmt_array(value: Any, *, owner: Any = None, options: ToStringOptions | None = None) -> str:
    """
    Format an array as '[e1, e2, ...]', recursing into nested arrays.

    Elements use their own display form (str values are never quoted here).
    An array found inside itself renders as '[...]'. Nesting too deep to
    recurse renders as a type label.

    Examples:
        >>> import array
        >>> fmt_array(array.array("i", [1, 2, 3]))
        '[1, 2, 3]'
        >>> fmt_array(("a", None, [True]))
        '[a, null, [True]]'
    """
    options = _options if options is None else options
    try:
        return _fmt_array(value, owner, options, seen=set())
    except RecursionError:
        return f"<{type(value).__name__} object (too deeply nested)>"


def is_array(obj: Any) -> bool:
    """
    True for list, tuple, array.array and n-dimensional arrays.

    N-dimensional arrays are duck-typed: an instance exposing ``ndim >= 1``
    and a ``tolist()`` method (numpy.ndarray and friends).
    """
    if isinstance(obj, ARRAY_TYPES):
        return True
    if isinstance(obj, type):
        return False
    try:
        ndim = getattr(obj, "ndim", None)
        return isinstance(ndim, int) and ndim >= 1 and callable(getattr(obj, "tolist", None))
    except Exception:
        return False


# Private Methods ------------------------------------------------------------------------------------------------------

def _fmt_array(value: Any, owner: Any, options: ToStringOptions, seen: set[int]) -> str:
    if id(value) in seen:
        return "[...]"
    if isinstance(value, ARRAY_TYPES):
        items = value
    else:
        try:
            items = value.tolist()
        except Exception:
            return _safe_str(value)

    seen.add(id(value))
    try:
        parts = [_fmt_element(x, owner, options, seen) for x in items]
    finally:
        seen.discard(id(value))
    return "[" + ", ".join(parts) + "]"


def _fmt_element(x: Any, owner: Any, options: ToStringOptions, seen: set[int]) -> str:
    if x is None:
        return options.null_token
    if owner is not None and x is owner:
        return _fmt_self(owner, options)
    if is_array(x):
        return _fmt_array(x, owner, options, seen)
    return _safe_str(x)


def _fmt_self(owner: Any, options: ToStringOptions) -> str:
    return options.self_token.format(name=class_name(owner))


def _safe_str(obj: Any) -> str:
    """
    Defensive str() call - handle broken __str__ methods gracefully
    """
    try:
        return str(obj)
    except Exception as e:
        return f"<{type(obj).__name__} object (str failed: {type(e).__name__})>"
