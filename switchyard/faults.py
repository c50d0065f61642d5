"""
Switchyard faults (dispatch and registration errors) and their rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing fault.
- SubcommandException: base type carrying a message + options; knows how to render
  itself with rich and how to surface itself (raise or print-and-exit).
- UnknownSubcommandError / MissingSubcommandError: routing failures.
- FlagParseError: the selected subcommand rejected its flags.
- DuplicateNameError: a second subcommand tried to register under a taken name.
- trigger(): central entry point to surface a fault with runtime options.

Integration
- The dispatcher builds a fault and calls trigger(fault, shell=..., registry=..., ...).
- In non-shell mode the fault is raised to the embedding caller; in shell mode it is
  printed on stderr (with the subcommand listing when a registry is attached) and the
  process exits with status 1.

Host hooks (looked up on __main__)
- __codes__: mapping FaultCode -> label, used by FaultCode.normalize().
- __styles__: palette overrides for the renderer.
- __prog__: program name shown in the header.
"""
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, progname


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - routing (1110x): UNKNOWN_SUBCOMMAND, MISSING_SUBCOMMAND
    - flags (1111x): MALFORMED_FLAGS
    - registration (1120x): DUPLICATE_NAME
    """
    # --- routing errors ---
    UNKNOWN_SUBCOMMAND = 11101
    MISSING_SUBCOMMAND = 11102

    # --- flag errors ---
    MALFORMED_FLAGS    = 11111

    # --- registration errors ---
    DUPLICATE_NAME     = 11201

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(sys.modules.get("__main__"), "__codes__", {}).get(self, self.value))


class SubcommandException(Exception):
    """
    base fault: a message plus read-only rendering/runtime options.

    recognised options
    - code, title, hint: header and footer copy.
    - shell: surface by printing + exiting instead of raising.
    - fancy: wrap the rendering in a panel.
    - colorful: apply the palette.
    - registry: when present, the subcommand listing is appended to the rendering.
    """
    code = Unset
    title = "fault"

    def __init__(self, message, /, **options):
        if not isinstance(message, str):
            raise TypeError(f"{type(self).__name__}() message must be a string")
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message

    def __rich__(self):
        main = sys.modules.get("__main__")
        colorful = self.options.get("colorful", False)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), styles[style] if colorful else "")

        code = self.options.get("code", self.code)
        registry = self.options.get("registry")

        header = Text.assemble(
            "[ ",
            text(registry.prog if registry is not None else progname(), "prog-name"),
            " — ",
            text(code.normalize() if isinstance(code, FaultCode) else "?", "code"),
            " | ",
            text(self.options.get("title", self.title).title(), "error-title"),
            " ]"
        )
        renders = [header, text(self.message, "error-message")]

        # The listing is the actionable part of a routing fault: show every choice.
        if registry is not None:
            renders.extend((Text(""), registry, Text("")))

        if hint := self.options.get("hint"):
            renders.append(Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))

        if self.options.get("fancy"):
            return Panel(Group(*renders[1:]), title=header, title_align="left")

        return Group(*renders)

    def __trigger__(self):
        if not self.options.get("shell"):
            raise self from None
        Console(stderr=True, highlight=False).print(self, soft_wrap=True)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnknownSubcommandError(SubcommandException):
    code = FaultCode.UNKNOWN_SUBCOMMAND
    title = "unknown subcommand"


class MissingSubcommandError(UnknownSubcommandError):
    code = FaultCode.MISSING_SUBCOMMAND
    title = "missing subcommand"


class FlagParseError(SubcommandException):
    code = FaultCode.MALFORMED_FLAGS
    title = "malformed flags"


class DuplicateNameError(SubcommandException, ValueError):
    code = FaultCode.DUPLICATE_NAME
    title = "duplicate name"


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see SubcommandException).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via rich and the process exits; otherwise the
      merged fault is raised.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


__all__ = (
    "FaultCode",
    "SubcommandException",
    "UnknownSubcommandError",
    "MissingSubcommandError",
    "FlagParseError",
    "DuplicateNameError",
    "trigger",
)
