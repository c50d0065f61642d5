"""
Switchyard subcommand contract.

A subcommand has a name, a one-line synopsis, flags of its own, and an action that
returns an exit code:

    class Run(Subcommand):
        def arguments(self, flags):
            flags.flag("verbose", "be chatty")

        def info(self):
            return "run", "Runs some magic, and dumps its arguments."

        def execute(self, args):
            for index, arg in enumerate(args):
                print(index, arg, "(verbose)" if self.verbose else "")
            return 0

Subclassing is optional: any object providing arguments(), info() and execute()
is accepted (see Subcommand.__subclasshook__). NoFlags supplies an empty
arguments() for subcommands without flags.
"""
from abc import ABC, abstractmethod


class Subcommand(ABC):
    """
    Capability every registered subcommand implements.

    Methods
    - arguments(flags): declare accepted flags on the FlagSet. Called once per
      dispatch, before parsing.
    - info() -> (name, synopsis): identifying name and one-line description.
      Must return the same values for the whole run.
    - execute(args) -> int: run with the positional arguments left over after flag
      parsing; the result is the exit code (0 = success).
    """

    @abstractmethod
    def arguments(self, flags):
        ...

    @abstractmethod
    def info(self):
        ...

    @abstractmethod
    def execute(self, args):
        ...

    @classmethod
    def __subclasshook__(cls, other):
        if cls is Subcommand:
            for method in ("arguments", "info", "execute"):
                if not any(callable(vars(base).get(method)) for base in other.__mro__):
                    return NotImplemented
            return True
        return NotImplemented


class NoFlags(Subcommand):
    """
    Base for subcommands that accept no flags: only info() and execute() remain.
    """

    def arguments(self, flags):
        pass


__all__ = (
    "Subcommand",
    "NoFlags",
)
