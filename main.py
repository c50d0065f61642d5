"""
Example application with two subcommands:

    main.py help
    main.py help run
    main.py run -verbose 1 2 3
    main.py version

Linking the script under the name "run" or "version" selects that subcommand
without an explicit argument.
"""
import sys

from rich.console import Console

from switchyard import Dispatcher, NoFlags, Registry, Subcommand

console = Console(highlight=False)


class Run(Subcommand):
    """Takes a single optional flag and dumps its arguments."""

    def arguments(self, flags):
        flags.flag("verbose", "Should we be verbose")

    def info(self):
        return "run", "Runs some magic, and dumps its arguments."

    def execute(self, args):
        console.print("I am a running application!")
        console.print(f"Verbose flag is {self.verbose}")
        for index, arg in enumerate(args):
            console.print(f"Argument {index} is {arg}")
        return 0


class Version(NoFlags):

    def info(self):
        return "version", "Show the application version."

    def execute(self, args):
        console.print("I am application version 1.0")
        return 0


registry = Registry()
registry.register(Run())
registry.register(Version())


if __name__ == '__main__':
    sys.exit(Dispatcher(registry, shell=True).execute())
