"""
Switchyard registry: the ordered set of subcommands an application exposes.

A Registry is an explicit object owned by the embedding application (no module
globals), so several independent registries can live in one process. The
constructor inserts the built-in subcommands before anything else:

- help             always
- commands         unless commands=False
- bash-completion  unless completion=False

Names are unique: registering a second subcommand under a taken name fails with
DuplicateNameError instead of silently shadowing the first one.
"""
import os.path
import re
import sys
from collections import defaultdict

from rich.text import Text

from .commands import BashCompletion, CommandList, Help
from .faults import DuplicateNameError
from .subcommands import Subcommand
from .utils import Unset, progname, synopsis

_NAME = re.compile(r"[^\s-]\S*")


class Registry:
    """
    Insertion-ordered collection of subcommands.

    Options
    - prog: program name shown in help and the completion script. When omitted,
      __prog__ in __main__ or the base name of sys.argv[0] is used (resolved lazily).
    - commands / completion: pre-register the "commands" / "bash-completion" built-ins.
    - colorful: style rich output with the palette (see __styles__ in __main__).
    """

    def __init__(self, prog=Unset, /, *, commands=True, completion=True, colorful=False):
        if not isinstance(prog, str | Unset):
            raise TypeError("Registry() prog must be a string")
        self._prog = prog
        self._colorful = bool(colorful)
        self._known = []
        self._index = {}

        self.register(Help(self))
        if commands:
            self.register(CommandList(self))
        if completion:
            self.register(BashCompletion(self))

    @property
    def prog(self):
        if self._prog:
            return os.path.basename(self._prog)
        return progname()

    @property
    def colorful(self):
        return self._colorful

    @property
    def names(self):
        """Registered names in registration order."""
        return tuple(self._index)

    def register(self, subcommand, /):
        """
        Append a subcommand and return it.

        Accepts an instance, or a Subcommand class which is instantiated without
        arguments (the class is returned, so this doubles as a class decorator).

        Raises
        - TypeError: the object does not implement arguments/info/execute, or info()
          does not return two strings.
        - ValueError: the name is empty, contains whitespace, or starts with '-'.
        - DuplicateNameError: the name is already registered.
        """
        if isinstance(subcommand, type):
            if not issubclass(subcommand, Subcommand):
                raise TypeError("register() argument must implement arguments(), info() and execute()")
            self.register(subcommand())
            return subcommand

        if not isinstance(subcommand, Subcommand):
            raise TypeError("register() argument must implement arguments(), info() and execute()")

        info = subcommand.info()
        if not isinstance(info, tuple) or len(info) != 2 or not all(isinstance(part, str) for part in info):
            raise TypeError(f"{type(subcommand).__name__}.info() must return a (name, synopsis) pair of strings")

        name, _ = info
        if not _NAME.fullmatch(name):
            raise ValueError(f"invalid subcommand name {name!r}")
        if name in self._index:
            raise DuplicateNameError(
                f"subcommand {name!r} is already registered",
                hint="pick another name for one of the two subcommands",
            )

        self._known.append(subcommand)
        self._index[name] = subcommand
        return subcommand

    def list(self):
        """
        Return (name, synopsis) pairs in registration order.

        Callers sort as needed; the help listing sorts by name.
        """
        return tuple(subcommand.info() for subcommand in self._known)

    def lookup(self, name, /):
        """Return the subcommand registered under `name`, or None."""
        return self._index.get(name)

    def __iter__(self):
        return iter(tuple(self._known))

    def __len__(self):
        return len(self._known)

    def __contains__(self, name):
        return name in self._index

    def __repr__(self):
        return f"{type(self).__name__}({self.prog!r}, names={list(self.names)!r})"

    def __rich__(self):
        """
        Sorted listing: one row per subcommand, names padded to a common column.
        """
        styles = defaultdict(str, {
            "name-column": "bold #36C5F0",  # sky-blue subcommand names
            "synopsis": "#9CA3AF",  # muted gray descriptions
        } | getattr(sys.modules.get("__main__"), "__styles__", {}))

        def styler(style):
            return styles[style] if self.colorful else ""

        entries = sorted(self.list())
        width = max((len(name) for name, _ in entries), default=0) + 1

        return Text("\n").join(
            Text.assemble("\t", (name.ljust(width), styler("name-column")), (synopsis(text), styler("synopsis")))
            for name, text in entries
        )


__all__ = (
    "Registry",
)
