"""
Switchyard dispatcher: route an argument vector to one registered subcommand.

Algorithm (one deterministic pass, no retries)
1. Build a fresh FlagSet for every registered subcommand, bound to it, and let the
   subcommand declare its flags.
2. Resolve the requested name:
   • the first argument, when it names a registered subcommand;
   • otherwise the base name of the invoked program (argv[0]), so a binary linked
     under a subcommand's name behaves as that subcommand.
   The first argument wins when both match.
3. No match → UnknownSubcommandError (MissingSubcommandError when no argument was
   given at all). The rendering lists every registered subcommand.
4. Parse the remaining arguments with the selected FlagSet → FlagParseError on failure.
5. Call execute() with the residual positional arguments and return its exit code.

Surfacing faults
- shell=False (library use): faults are raised to the caller.
- shell=True (entry points): faults are printed on stderr and the process exits
  with status 1.
"""
import os.path
import shlex
import sys
from collections.abc import Iterable

from .faults import FlagParseError, MissingSubcommandError, UnknownSubcommandError, trigger
from .flags import FlagError, FlagSet
from .registry import Registry
from .utils import Unset


class Dispatcher:
    """
    Runs the subcommand selected by an argument vector against one Registry.

    Options
    - shell: print faults and exit(1) instead of raising them.
    - fancy: render faults inside a rich panel.
    """

    def __init__(self, registry, /, *, shell=False, fancy=False):
        if not isinstance(registry, Registry):
            raise TypeError("Dispatcher() argument must be a registry")
        self._registry = registry
        self._shell = bool(shell)
        self._fancy = bool(fancy)

    @property
    def registry(self):
        return self._registry

    @property
    def shell(self):
        return self._shell

    @property
    def fancy(self):
        return self._fancy

    def trigger(self, fault, /, **options):
        """
        Surface a fault with this dispatcher's runtime options attached.

        Never returns: the fault is raised, or printed before exit(1) in shell mode.
        """
        trigger(
            fault,
            **options,
            registry=self._registry,
            shell=self._shell,
            fancy=self._fancy,
            colorful=self._registry.colorful,
        )

    def resolve(self, argv, /):
        """
        Return (name, offset) for the subcommand `argv` selects, or (None, None).

        `offset` is the index in argv where the subcommand's own arguments start.
        """
        if len(argv) > 1 and argv[1] in self._registry:
            return argv[1], 2
        if argv and (name := os.path.basename(argv[0])) in self._registry:
            return name, 1
        return None, None

    def execute(self, argv=Unset, /):
        """
        Dispatch and return the selected subcommand's exit code.

        Parameters
        - argv: full argument vector, program path first.
          • Unset: sys.argv.
          • str: split with shlex.split.
          • Iterable[str]: used as-is.

        Raises (shell=False)
        - MissingSubcommandError / UnknownSubcommandError: nothing to run.
        - FlagParseError: the selected subcommand rejected its flags.
        - TypeError: invalid argv, or execute() returned a non-integer.
        """
        if argv is Unset:
            argv = list(sys.argv)
        elif isinstance(argv, str):
            argv = shlex.split(argv)
        elif isinstance(argv, Iterable):
            argv = list(argv)
            if not all(isinstance(arg, str) for arg in argv):
                raise TypeError("execute() argument must be a string or an iterable of strings")
        else:
            raise TypeError("execute() argument must be a string or an iterable of strings")

        # One fresh, bound flag set per subcommand for this dispatch only.
        flagsets = {}
        for subcommand in self._registry:
            name, _ = subcommand.info()
            flagsets[name] = flags = FlagSet(name, subcommand)
            subcommand.arguments(flags)

        name, offset = self.resolve(argv)

        if name is None:
            if len(argv) > 1:
                fault = UnknownSubcommandError(
                    f"Invalid subcommand {argv[1]!r}, available choices are:",
                    hint=f"run '{self._registry.prog} help' for details on each subcommand",
                )
            else:
                fault = MissingSubcommandError(
                    "No subcommand given, available choices are:",
                    hint=f"run '{self._registry.prog} help' for details on each subcommand",
                )
            self.trigger(fault)

        flags = flagsets[name]
        try:
            flags.parse(argv[offset:])
        except FlagError as error:
            self.trigger(FlagParseError(
                f"Error parsing flags: {error}",
                hint=f"run '{self._registry.prog} help {name}' to see the accepted flags",
            ))

        code = self._registry.lookup(name).execute(list(flags.args))
        if code is None:
            return 0
        if isinstance(code, bool) or not isinstance(code, int):
            raise TypeError(f"subcommand {name!r} must return an integer exit code, not {type(code).__name__}")
        return code

    def __repr__(self):
        return f"{type(self).__name__}({self._registry!r}, shell={self._shell!r})"


def execute(registry, argv=Unset, /, **options):
    """
    Convenience runner for entry points: dispatch in shell mode and return the code.

        registry = Registry()
        registry.register(Run())
        sys.exit(execute(registry))
    """
    options.setdefault("shell", True)
    return Dispatcher(registry, **options).execute(argv)


__all__ = (
    "Dispatcher",
    "execute",
)
