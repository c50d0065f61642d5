"""
Switchyard flag sets: a thin adapter over argparse.

What this module provides
- FlagSet: one per subcommand per dispatch. Subcommands declare their flags on it
  (flag()/option()), the dispatcher parses the subcommand's arguments with it, and
  the residual positional arguments are read back from .args.
- FlagSpec: immutable record describing one declared flag (used by help rendering).
- FlagError: raised when parsing fails; carries argparse's message verbatim.

Parsing rules
- Flags are spelled with a single dash (-verbose); the double-dash spelling
  (--verbose) is accepted as an alias.
- Valued flags accept both "-name value" and "-name=value".
- Presence flags take no separate value, but accept an inline one:
  -verbose=false, -verbose=true (also 1/0, t/f, T/F, TRUE/FALSE, True/False).
- Flag parsing stops at the first non-flag argument: that argument and everything
  after it is residual, even if it looks like a flag. A leading "--" ends flag
  parsing and is dropped.
- No abbreviations, no built-in -h.

Binding
- A FlagSet may be bound to a target object (the subcommand). Declaring a flag
  stores its default on the target, and a successful parse stores the parsed
  values there, so Execute-time code reads plain attributes (self.verbose).
- A flag whose destination names a method or property of the target is rejected at
  declaration time.
"""
import argparse
import builtins
import re
from collections import namedtuple
from types import MappingProxyType

from rich.text import Text

from .utils import Unset, coalesce

# Positional sink for everything that is not a flag; the leading space keeps it
# out of the namespace of any legal flag name.
_RESIDUAL = " residual"

_NAME = re.compile(r"[A-Za-z0-9][A-Za-z0-9_.-]*")


class FlagError(Exception):
    """
    Raised by FlagSet.parse() when the arguments do not match the declared flags.
    """


_TRUE = frozenset(("1", "t", "T", "true", "TRUE", "True"))
_FALSE = frozenset(("0", "f", "F", "false", "FALSE", "False"))


def boolean(text, /):
    """Convert the inline value of a presence flag (-verbose=false)."""
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(text)


class _Parser(argparse.ArgumentParser):
    # argparse reports most problems through error(), which prints and exits; the
    # dispatcher decides how to surface the problem instead.
    def error(self, message):
        raise FlagError(message)


FlagSpec = namedtuple("FlagSpec", ("name", "dest", "default", "descr", "type", "choices"))
FlagSpec.__doc__ = """
Immutable description of one declared flag.

- name: flag name without dashes ("verbose").
- dest: attribute name the value is stored under ("verbose", "dry_run").
- default: value used when the flag is absent.
- descr: one-line help text.
- type: bool for presence flags, the converter for valued flags.
- choices: tuple of accepted values (empty when unrestricted).
"""


class FlagSet:
    """
    Per-subcommand flag declarations and parse results.

    Lifecycle
    - Constructed fresh for each dispatch (and for each help lookup).
    - Populated by Subcommand.arguments(flags).
    - parse(args) may be called once per dispatch; afterwards .args, .values and
      .parsed reflect the outcome.
    """

    def __init__(self, name, /, target=Unset):
        if not isinstance(name, str) or not name:
            raise TypeError("FlagSet() name must be a non-empty string")
        self._name = name
        self._target = target
        self._flags = {}
        self._values = {}
        self._args = ()
        self._parsed = False
        self._parser = _Parser(prog=name, add_help=False, allow_abbrev=False)
        self._parser.add_argument(_RESIDUAL, nargs=argparse.REMAINDER, help=argparse.SUPPRESS)

    @property
    def name(self):
        return self._name

    @property
    def args(self):
        """Residual positional arguments left over by the last parse()."""
        return self._args

    @property
    def values(self):
        """Read-only mapping of dest -> current value for every declared flag."""
        return MappingProxyType(self._values)

    @property
    def parsed(self):
        return self._parsed

    def flag(self, name, /, descr="", *, dest=Unset):
        """
        Declare a presence flag: False by default, True when given.
        """
        # Bare spellings are rewritten to "-name=true" by parse().
        return self._declare(
            name, False, descr, dest, bool, (),
            action="store", nargs="?", const=True, type=boolean, metavar="bool",
        )

    def option(self, name, /, default=Unset, descr="", *, type=Unset, dest=Unset, choices=()):
        """
        Declare a valued flag.

        Parameters
        - default: value when the flag is absent (None when omitted).
        - type: converter applied to the raw string; inferred from default when omitted,
          str otherwise.
        - choices: iterable of accepted (converted) values.
        """
        default = coalesce(default)
        type = coalesce(type, builtins.type(default) if default is not None else str)
        if type is bool:
            raise TypeError(f"flag {name!r}: use flag() to declare boolean flags")
        if not callable(type):
            raise TypeError(f"flag {name!r}: type must be callable")
        choices = tuple(choices)
        return self._declare(
            name, default, descr, dest, type, choices,
            action="store", type=type, metavar=getattr(type, "__name__", "value"),
            **({"choices": choices} if choices else {}),
        )

    def _declare(self, name, default, descr, dest, type, choices, /, **options):
        if not isinstance(name, str) or not _NAME.fullmatch(name):
            raise ValueError(f"invalid flag name {name!r}")
        if not isinstance(descr, str):
            raise TypeError(f"flag {name!r}: description must be a string")
        if any(spec.name == name for spec in self._flags.values()):
            raise ValueError(f"flag {name!r} is already declared on {self._name!r}")

        dest = coalesce(dest, name.replace("-", "_").replace(".", "_"))
        if not isinstance(dest, str) or not dest.isidentifier():
            raise ValueError(f"flag {name!r}: destination must be an identifier")
        if dest in self._flags:
            raise ValueError(f"flag {name!r} collides with flag {self._flags[dest].name!r}")
        if self._target is not Unset:
            cls = builtins.type(self._target)
            attribute = getattr(cls, dest, None)
            if callable(attribute) or isinstance(attribute, property):
                raise ValueError(f"flag {name!r} would shadow {cls.__name__}.{dest}")

        self._parser.add_argument("-" + name, "--" + name, dest=dest, default=default, **options)
        self._flags[dest] = spec = FlagSpec(name, dest, default, descr, type, choices)
        self._values[dest] = default
        if self._target is not Unset:
            setattr(self._target, dest, default)
        return spec

    def parse(self, args, /):
        """
        Parse `args` against the declared flags and return the residual arguments.

        Raises
        - FlagError: unknown flag, missing value, failed conversion, invalid choice.
        """
        args = list(args)
        if not all(isinstance(arg, str) for arg in args):
            raise TypeError("FlagSet.parse() arguments must be strings")

        namespace = self._parser.parse_args(self._explicit(args))

        residual = list(getattr(namespace, _RESIDUAL) or ())
        if residual[:1] == ["--"]:
            del residual[0]

        self._values = {dest: getattr(namespace, dest) for dest in self._flags}
        if self._target is not Unset:
            for dest, value in self._values.items():
                setattr(self._target, dest, value)
        self._args = tuple(residual)
        self._parsed = True
        return self._args

    def _explicit(self, args):
        # Presence flags are declared with an optional value; spell bare ones as
        # "-name=true" so they never swallow the following positional argument.
        args = list(args)
        index = 0
        while index < len(args):
            arg = args[index]
            if arg == "--" or arg == "-" or not arg.startswith("-"):
                break
            name = arg[2:] if arg.startswith("--") else arg[1:]
            if "=" not in name:
                spec = self.lookup(name)
                if spec is None:
                    break
                if spec.type is bool:
                    args[index] = arg + "=true"
                else:
                    index += 1
            index += 1
        return args

    def lookup(self, name, /):
        """Return the FlagSpec declared under `name` (without dashes), or None."""
        for spec in self._flags.values():
            if spec.name == name:
                return spec
        return None

    def defaults(self, *, colorful=False):
        """
        Render every declared flag, sorted by name, with its help text and default.

            -count int
                how many times (default 3)
            -verbose
                be chatty
        """
        def styled(fragment, style):
            return Text(fragment, style if colorful else "")

        lines = []
        for spec in sorted(self._flags.values(), key=lambda spec: spec.name):
            head = Text.assemble("  ", styled("-" + spec.name, "bold #22C55E" if spec.type is bool else "bold #00E6FF"))
            if spec.type is not bool:
                head.append(" ")
                head.append(styled(getattr(spec.type, "__name__", "value"), "bold #FFD600"))
            lines.append(head)

            body = spec.descr
            if spec.choices:
                body += " (choices: %s)" % ", ".join(map(str, spec.choices))
            if spec.default not in (None, "", 0, False):
                body += f" (default {spec.default!r})"
            lines.append(Text("    \t" + body))
        return Text("\n").join(lines)

    def __iter__(self):
        return iter(tuple(self._flags.values()))

    def __len__(self):
        return len(self._flags)

    def __contains__(self, name):
        return self.lookup(name) is not None

    def __repr__(self):
        return f"{type(self).__name__}({self._name!r}, flags={[spec.name for spec in self]!r})"


__all__ = (
    "FlagError",
    "FlagSpec",
    "FlagSet",
)
