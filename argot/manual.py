"""
Argot manual page (help text) renderer.

render(interface) builds a rich renderable out of the read-only surface of an
interface: its name, about text, commands and arguments. It never touches the
parse state.

Layout
    usage: tool [command] [arguments]

    about text

    commands:
      build STRING   build the project (requires --output)

    arguments:
      -o | --output STRING
                     where to write (default is 'dist')
      -v | --verbose
                     (required)

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
- When the interface is not colorful, styling is suppressed.
"""
from collections import defaultdict

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console()


def render(interface, /, width=Unset):
    """
    Build the manual page of `interface`.

    Palette keys
    - usage-label, program-name, usage-section, about-section
    - group-label, command-name, flag-name, metavar
    - description, default, required, requires
    - panel-title, panel-subtitle
    """
    styles = defaultdict(str, {
        # === Head sections ===
        "usage-label": "bold #00E6FF",  # CYAN → signature info color
        "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
        "usage-section": "bold #36C5F0",  # SKY-BLUE → softer than cyan
        "about-section": "italic #A3A3A3",  # Neutral gray

        # === Groups ===
        "group-label": "bold #FFFFFF",  # Pure white headers
        "command-name": "bold #00E6FF",  # CYAN for commands
        "flag-name": "bold #22C55E",  # GREEN for flags
        "metavar": "bold #FFD600",  # AMBER for value types

        # === Notes on entries ===
        "description": "#9CA3AF",  # Muted gray
        "default": "#D1D5DB",
        "required": "bold #EF4444",
        "requires": "#36C5F0 dim",

        # === Fancy panel ===
        "panel-title": "bold #FF4D94",
        "panel-subtitle": "#9CA3AF",
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if interface.colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), styler(style))

    if width is Unset:
        width = console.width
    width = max(width - 4 * interface.fancy, 40)

    padding = 2   # Leading spaces before the names column
    indent = 15   # Column for description wrap/hanging indent

    def metavar(entity):
        if (valuetype := entity.valuetype) is None:
            return Text("")
        if " " in valuetype:
            return Text.assemble(" [", text(valuetype, "metavar"), "]")
        return Text.assemble(" ", text(valuetype, "metavar"))

    def entry(names, entity, notes):
        section = Text(" " * padding)
        section.append(names).append(metavar(entity))

        body = Text(" ").join(part for part in (text(entity.descr, "description"), *notes) if part)
        if not body:
            return section
        if len(section) >= indent:
            section.append("\n").append(" " * indent)
        else:
            section.append(" " * (indent - len(section)))
        wrapped = body.wrap(console, width - indent)
        section.append(wrapped[0] if wrapped else Text(""))
        for line in wrapped[1:]:
            section.append("\n").append(" " * indent).append(line)
        return section

    renders = []

    usage = Text()
    usage.append("usage", styler("usage-label")).append(":")
    usage.append(" ")
    usage.append(text(interface.name, "program-name"))
    if interface.commands:
        usage.append(" ").append(text("[command]", "usage-section"))
    if interface.arguments:
        usage.append(" ").append(text("[arguments]", "usage-section"))
    renders.append(usage.append("\n"))

    if interface.about:
        renders.append(text(interface.about, "about-section").append("\n"))

    if interface.commands:
        section = Text()
        section.append(text("commands", "group-label")).append(":").append("\n")
        for command in interface.commands:
            notes = []
            if command.requires:
                notes.append(Text.assemble(
                    text("(requires ", "requires"),
                    Text(", ").join(text(argument.longflag, "flag-name") for argument in command.requires),
                    text(")", "requires"),
                ))
            if command.has_default:
                notes.append(text("(default is '%s')" % (command.default,), "default"))
            section.append(entry(text(command.name, "command-name"), command, notes)).append("\n")
        renders.append(section)

    if interface.arguments:
        section = Text()
        section.append(text("arguments", "group-label")).append(":").append("\n")
        for argument in interface.arguments:
            notes = []
            if argument.has_default:
                notes.append(text("(default is '%s')" % (argument.default,), "default"))
            elif argument.required:
                notes.append(text("(required)", "required"))
            names = Text(" | ").join(text(flag, "flag-name") for flag in argument.flags)
            section.append(entry(names, argument, notes)).append("\n")
        renders.append(section)

    renders[-1].rstrip()

    renderable = Group(*renders)

    if interface.fancy:
        renderable = Panel(
            renderable,
            title=Text.assemble("[", " ", f"{interface.name} MANUAL".upper(), " ", "]", style=styler("panel-title")),
            title_align="left",
            subtitle=text("version %s" % interface.version, "panel-subtitle"),
        )

    return renderable


__all__ = (
    "render",
)
