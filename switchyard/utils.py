"""
Switchyard utilities (internal helpers shared by the registry and dispatcher).

Overview
- UnsetType / Unset
  • Singleton sentinel for “argument not provided”, distinct from None.
  • Falsey, printable as "Unset", non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default; None/0/""/[] pass through untouched.

- progname(path=Unset)
  • Base name of the running program, honoring a __prog__ override in __main__.

- synopsis(text)
  • First line of a multi-line synopsis, as shown in listings.

Names not in __all__ are internal and may change without notice.
"""
import functools
import os.path
import sys
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset".
    - Singleton per process: UnsetType() always yields the same instance.
    """

    def __or__(self, other, /):
        """
        Support PEP 604 unions in isinstance checks (e.g., isinstance(x, str | Unset)).
        """
        try:
            return type(self) | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


Unset = UnsetType()


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(None, "fallback")   -> None
    """
    return object if object is not Unset else default


def progname(path=Unset, /):
    """
    Return the program name shown to users.

    Lookup order
    - a __prog__ attribute on __main__ (host override),
    - the base name of `path` when given,
    - the base name of sys.argv[0].
    """
    override = getattr(sys.modules.get("__main__"), "__prog__", Unset)
    if isinstance(override, str) and override:
        return override
    return os.path.basename(coalesce(path, sys.argv[0] if sys.argv else "")) or "?"


def synopsis(text, /):
    """
    Keep only the first line of a synopsis (listings are one row per subcommand).
    """
    lines = str(text).split("\n")
    return lines[0] if lines else ""


__all__ = (
    "UnsetType",
    "Unset",
    "coalesce",
    "progname",
    "synopsis",
)
