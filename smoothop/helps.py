"""
Help and version rendering.

Layout (plain form, two-space indentation, four-space column gutter):

      Description
        Builds the project.

      Usage
        $ bin build <src> [options]

      Aliases
        $ bin b

      Options
        -o, --out     Output directory  (default dist)
        -h, --help    Displays this message

      Examples
        $ bin build src --out=public

- The root help of a multi-command program lists "Available Commands" (first
  description sentence of each) instead of "Aliases", followed by a pointer to
  per-command help for the first two commands.
- "-v, --version" is listed only for the root entry; "-h, --help" everywhere.
- Sections without content are omitted.

Palette keys (override with __styles__ in __main__, used only when colorful=True)
- section-label, program-name, usage, description, command-name, option-label,
  option-description, default, example, hint
"""
import re
from collections import defaultdict

from rich.text import Text

from .tree import ALL, DEFAULT
from .utils import *

GAP = 4
INDENT = "  "

HELP_OPTION = ("-h, --help", "Displays this message", Unset)
VERSION_OPTION = ("-v, --version", "Displays current version", Unset)


def _palette(colorful):
    styles = defaultdict(str, {
        "section-label": "bold #FFFFFF",  # Pure white headers
        "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
        "usage": "bold #36C5F0",  # SKY-BLUE → softer than cyan
        "description": "italic #A3A3A3",  # Neutral gray
        "command-name": "bold #36C5F0",  # Sky-blue subcommands
        "option-label": "bold #00E6FF",  # CYAN for options
        "option-description": "#9CA3AF",  # Muted gray
        "default": "#FFD600",  # AMBER for defaults
        "example": "#E5E7EB",
        "hint": "#737373",  # Dim footer gray
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    return styler


def _prefixed(bin, text, styler):
    """
    "$ <bin> <text>" with every run of whitespace collapsed to one space.
    """
    line = re.sub(r"\s+", " ", f"$ {bin} {text}")
    head = len(f"$ {bin}")
    return Text.assemble(line[:2], (line[2:head], styler("program-name")), (line[head:], styler("usage")))


def _section(title, lines, styler):
    """
    One block: blank line, indented title, doubly indented lines, trailing newline.
    """
    if not lines:
        return Text()
    section = Text("\n" + INDENT).append(title, styler("section-label"))
    for line in lines:
        section.append("\n" + INDENT * 2).append(line)
    return section.append("\n")


def _columns(rows, styler, style):
    """
    Two-column layout: label padded to the widest label + GAP, then the text and
    an optional "(default <value>)" suffix.
    """
    if not rows:
        return []
    width = max(len(label) for label, *_ in rows) + GAP
    lines = []
    for label, descr, default in rows:
        line = Text.assemble((label, styler(style)), " " * (width - len(label)), (descr, styler("option-description")))
        if default is not Unset and default is not None:
            line.append("  ").append(f"(default {stringify(default)})", styler("default"))
        lines.append(line)
    return lines


def render_help(program, name=DEFAULT, /, *, colorful=False):
    """
    Render the help of one command (or of the root entry) as rich Text.

    parameters
    - program: the Program to describe.
    - name: command name or alias; DEFAULT renders the root help.
    - colorful: apply the palette.

    the tree is only read; built-in options are added to a local copy of the list.
    """
    styler = _palette(colorful)
    tree = program.tree
    bin = program.bin

    try:
        entry = tree.entry(name)
    except KeyError:
        raise ValueError(f"unknown command {name!r}") from None

    rows = [(spec.label, spec.descr, spec.default) for spec in (*entry.options, *tree[ALL].options)]
    if entry.name == DEFAULT:
        rows.append(VERSION_OPTION)
    rows.append(HELP_OPTION)

    usage = entry.usage + " [options]" if rows else entry.usage

    help = Text()
    help.append(_section("Description", [Text(line, styler("description")) for line in entry.descr], styler))
    help.append(_section("Usage", [_prefixed(bin, usage, styler)], styler))

    if not program.single and entry.name == DEFAULT:
        commands = [(command, (child.descr or [""])[0], Unset) for command, child in tree.commands()]
        help.append(_section("Available Commands", _columns(commands, styler, "command-name"), styler))
        help.append("\n" + INDENT).append("For more info, run any command with the `--help` flag", styler("hint"))
        for command, *_ in commands[:2]:
            help.append("\n" + INDENT * 2).append(_prefixed(bin, f"{command} --help", styler))
        help.append("\n")
    elif not program.single:
        help.append(_section("Aliases", [_prefixed(bin, alias, styler) for alias in entry.aliases], styler))

    help.append(_section("Options", _columns(rows, styler, "option-label"), styler))
    help.append(_section("Examples", [_prefixed(bin, example, styler) for example in entry.examples], styler))
    return help


def render_version(program, /, *, colorful=False):
    """
    "<bin>, <version>"
    """
    styler = _palette(colorful)
    return Text.assemble((program.bin, styler("program-name")), ", ", program.ver)


__all__ = (
    "render_help",
    "render_version",
)
