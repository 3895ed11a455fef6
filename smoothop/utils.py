"""
smoothop utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the tokenizer, the command tree, the program
  builder and the help renderer.

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with None.
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, but preserve legitimate falsey values like None/0/""/[].

- aslist(value)
  • Normalize “one or many” configuration values (a name or an iterable of names) into a fresh list.

- to_number(text)
  • Numeric coercion of flag values:
    decimal/exponent literals and 0x/0o/0b integers; blank means zero; Infinity/NaN are rejected.

- stringify(value)
  • Render scalars the way command lines spell them (true/false, 3 rather than 3.0).

- sentences(text)
  • Split a paragraph into sentences for description blocks.

- split_flags(text)
  • Split an option declaration like "-g, --global" into bare names.

Stability and contract
- Names in __all__ are re-exported for consumers; everything else may change without notice.

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> to_number("42"), to_number("3.14"), to_number("foo")
    (42, 3.14, Unset)
    >>> sentences("Build it. Then ship it!")
    ['Build it.', 'Then ship it!']
    >>> split_flags("-g, --global")
    ['g', 'global']
"""
import functools
import math
import re
from collections.abc import Iterable
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    This is used when None is a legitimate user value, but the API needs a way
    to distinguish “not provided” from “provided as None”. A single instance,
    Unset, is exposed for use as the default in internal parameters.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset" for friendly diagnostics.
    - Non-subclassable: this type is sealed; do not subclass.
    - Singleton per process: UnsetType() always yields the same instance.
    """

    def __or__(self, other, /):
        """
        Support PEP 604 unions in annotations (e.g., str | UnsetType).
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        """
        Support reversed PEP 604 unions when UnsetType appears on the right.
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        """
        Ensure a single instance for this sentinel type.
        """
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __copy__(self):
        return self

    def __deepcopy__(self, memo, /):
        return self

    def __init_subclass__(cls, **options):
        """
        Disallow subclassing to preserve sentinel semantics.
        """
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Resolve an internal Unset sentinel to a concrete default.

    This returns the given object unless it is the Unset sentinel, in which case
    the provided default is returned. Falsey values like None, 0, "", or [] are
    preserved as-is: they are not treated as “unset”.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(None, "fallback")   -> None
    """
    return object if object is not Unset else default


def aslist(object, /):
    """
    Normalize a “one or many” value into a new list.

    - Unset / None -> []
    - str          -> [str]
    - Iterable     -> list(iterable)
    - anything else -> [object]

    A new list is always returned so callers can extend it freely without
    touching the configuration they were given.
    """
    if object is Unset or object is None:
        return []
    if isinstance(object, str):
        return [object]
    if isinstance(object, Iterable):
        return list(object)
    return [object]


_NUMBER = re.compile(r"""
    (?P<decimal>[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)
    |
    (?P<radix>0[xX][0-9a-fA-F]+|0[oO][0-7]+|0[bB][01]+)
""", re.VERBOSE | re.ASCII)


def to_number(text, /):
    """
    Coerce a token to a finite number, or return Unset when it is not one.

    rules
    - surrounding whitespace is ignored; a blank string is 0.
    - decimal literals with optional sign, fraction and exponent are accepted.
    - 0x / 0o / 0b prefixed literals are accepted as integers (unsigned).
    - Infinity, NaN, digit separators ("1_000"), non-ASCII digits and anything else are rejected.

    returns
    - int for integral literals written without fraction/exponent (and radix literals).
    - float otherwise.
    - Unset when the text is not a number.
    """
    if not isinstance(text, str):
        raise TypeError("to_number() argument must be a string")

    if not (text := text.strip()):
        return 0

    if not (match := _NUMBER.fullmatch(text)):
        return Unset

    if match["radix"]:
        return int(text, 0)

    if re.fullmatch(r"[+-]?\d+", text, re.ASCII):
        return int(text)

    if not math.isfinite(number := float(text)):
        return Unset
    return number


def stringify(object, /):
    """
    Render a scalar the way a command line would spell it.

    - True / False -> "true" / "false"
    - None         -> "null"
    - integral floats drop their fraction (3.0 -> "3")
    - everything else -> str(object)
    """
    if object is True:
        return "true"
    if object is False:
        return "false"
    if object is None:
        return "null"
    if isinstance(object, float) and object.is_integer():
        return str(int(object))
    return str(object)


def sentences(text, /):
    """
    Split a paragraph into sentences.

    A sentence ends after '.', '?' or '!' when the next non-space character is
    an uppercase letter. Whitespace between sentences is dropped.

        >>> sentences("Hello there. Who are you? Nobody!")
        ['Hello there.', 'Who are you?', 'Nobody!']
    """
    return re.sub(r"([.?!])\s*(?=[A-Z])", r"\1|", text or "").split("|")


def split_flags(text, /):
    """
    Split an option declaration into bare flag names.

    Leading dashes, commas and whitespace are separators:

        >>> split_flags("-g, --global")
        ['g', 'global']
        >>> split_flags("--dry-run")
        ['dry-run']
    """
    return [part for part in re.split(r"^-{1,2}|,|\s+-{1,2}|\s+", text or "") if part]


Unset = UnsetType()
"""
Internal sentinel for “not provided”.

Use Unset as a default when None is a valid, user-meaningful value but you still
need to distinguish “no input” from “explicitly passed None”.
"""


__all__ = (
    # Functions
    "coalesce",
    "aslist",
    "to_number",
    "stringify",
    "sentences",
    "split_flags",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
