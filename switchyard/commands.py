"""
Switchyard built-in subcommands.

- Help ("help"): lists every subcommand, or details the flags of the named ones.
- CommandList ("commands"): bare names, one per line, for shell completion.
- BashCompletion ("bash-completion"): prints a bash completion script for the program.

Each built-in holds a reference to the Registry it was created for and reads the
program name and styling options from it at execution time.
"""
import sys
from collections import defaultdict

from rich.console import Console
from rich.text import Text

from .flags import FlagSet
from .subcommands import NoFlags


def _console():
    # Created per call so redirected streams (pipes, tests) are honored.
    return Console(highlight=False, soft_wrap=True)


class Help(NoFlags):
    """
    Built-in help subcommand.

    Without arguments the sorted listing of every subcommand is shown. Each
    argument is looked up as a subcommand name and its synopsis, usage line and
    flags are shown; names that are not registered are skipped.
    """

    def __init__(self, registry, /):
        self._registry = registry

    def info(self):
        return "help", "Show usage information."

    def execute(self, args):
        console = _console()
        registry = self._registry

        styles = defaultdict(str, {
            "section": "bold #FFFFFF",  # pure white headers
            "program-name": "bold #FF4D94",  # magenta-pink brand pop
            "synopsis": "italic #A3A3A3",  # neutral gray
            "epilog": "#737373",  # dim footer gray
        } | getattr(sys.modules.get("__main__"), "__styles__", {}))

        def styler(style):
            return styles[style] if registry.colorful else ""

        if not args:
            console.print(Text("Available subcommands:", styler("section")))
            console.print()
            console.print(registry)
            console.print()
            console.print(Text.assemble(
                ("For more details please run '", styler("epilog")),
                (f"{registry.prog} help subcommand", styler("program-name")),
                ("'.", styler("epilog")),
            ))
            return 0

        for name in args:
            subcommand = registry.lookup(name)
            if subcommand is None:
                continue

            _, synopsis = subcommand.info()
            flags = FlagSet(name)
            subcommand.arguments(flags)

            console.print(Text("Synopsis:", styler("section")))
            console.print(Text.assemble("\t", (synopsis, styler("synopsis"))))
            console.print()
            console.print(Text("Usage:", styler("section")))
            console.print(Text.assemble(
                "\t",
                (f"{registry.prog} {name}", styler("program-name")),
                " [flags]" if len(flags) else "",
            ))
            console.print()

            if len(flags):
                console.print()
                console.print(Text("Available flags:", styler("section")))
                console.print(flags.defaults(colorful=registry.colorful))

        return 0


class CommandList(NoFlags):
    """
    Built-in "commands" subcommand: registered names in registration order.
    """

    def __init__(self, registry, /):
        self._registry = registry

    def info(self):
        return "commands", "Show all available sub-commands."

    def execute(self, args):
        console = _console()
        for name in self._registry.names:
            console.out(name, highlight=False)
        return 0


_TEMPLATE = r"""
_subcommands_#Command#()
{
    local cur
    COMPREPLY=()

    # Variable to hold the current word
    cur="${COMP_WORDS[COMP_CWORD]}"

    # The first argument is one of the available sub-commands.
    if [ $COMP_CWORD = 1 ]; then

        local subs=$(#Command# commands)
        COMPREPLY=($(compgen -W "${subs}" -- "$cur"))
    else

        # If we see a dash complete from the available flags,
        # otherwise a file/directory.
        if [[ "$cur" =~ ^-.* ]];  then
            local flags="$(#Command# help ${COMP_WORDS[1]} | awk '{print $1}' | grep -- '^-')"
            COMPREPLY=($(compgen -W "${flags}" -- "$cur"))
        else
            COMPREPLY=($(compgen -f -- "${cur}"))
        fi
    fi
}

complete -F _subcommands_#Command# #Command#
"""


class BashCompletion(NoFlags):
    """
    Built-in "bash-completion" subcommand.

    Usage:
        eval "$(prog bash-completion)"
    """

    def __init__(self, registry, /):
        self._registry = registry

    def info(self):
        return "bash-completion", "Generate and output a bash completion-script."

    def execute(self, args):
        # Function name stays a plain identifier whatever the program is called.
        prog = self._registry.prog
        script = _TEMPLATE.replace("_subcommands_#Command#", "_subcommands_" + "".join(
            char if char.isalnum() else "_" for char in prog
        ))
        _console().out(script.replace("#Command#", prog), highlight=False)
        return 0


__all__ = (
    "Help",
    "CommandList",
    "BashCompletion",
)
