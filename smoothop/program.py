"""
smoothop program layer: declare commands fluently, then parse an argument vector.

What this module provides
- Program: chainable builder over a CommandTree plus the resolver/dispatcher.
  • command / describe / option / alias / action / example / version build the tree.
  • parse(args, **options) resolves the command, tokenizes the flags, checks the
    positional arity and calls the handler (or returns a Dispatch when lazy=True).
  • help(name) / version output go through the program's Host.
- Dispatch: (name, handler, args) descriptor; calling it runs the handler.
- program(...): factory mirroring Program(...).

Quick start
    from smoothop import program

    cli = program("pkg")
    cli.version("1.2.0").option("-g, --global", "Act on the global scope")

    cli.command("install <name> [dir]", "Install a package.", alias="i")
    cli.option("-f, --force", "Reinstall when present", False)
    cli.action(lambda name, dir, flags: print(name, dir, flags["force"]))

    cli.command("remote add <name> <url>").action(lambda name, url, flags: ...)

    cli.parse(["i", "rich", "--force"])      # prints: rich None True

Resolution rules
- The longest registered prefix of the positional tokens wins; "remote add"
  beats "remote" when both exist.
- An alias redirects to its command's canonical name, multi-word names included.
- With no match, the default command (command(..., default=True)) runs.
- Option scopes merge as: caller overrides > command > global.
- "<x>" placeholders are required, "[x]" placeholders are optional (None when
  missing); the flags (a ParseResult) always come last.

Faults
- Builder misuse raises immediately (see smoothop.faults definition errors).
- Parse faults go through Program.trigger: printed + exit in shell mode, raised otherwise.
"""
import os.path
import shlex
import sys
import warnings
from collections import namedtuple
from collections.abc import Iterable

from .faults import *
from .faults import trigger as _trigger
from .helps import render_help, render_version
from .host import Host
from .tokenizer import Rejected, tokenize
from .tree import *
from .utils import *

META = {"h": "help", "v": "version"}


class Dispatch(namedtuple("Dispatch", ("name", "handler", "args"))):
    """
    Lazy outcome of Program.parse(..., lazy=True).

    - name: resolved command name ("__default__" for single-command programs).
    - handler: the attached action, or None when none was attached.
    - args: required positionals, optional positionals (None when missing), flags.
    """
    __slots__ = ()

    def __call__(self):
        if self.handler is None:
            raise TypeError(f"command {self.name!r} has no action")
        return self.handler(*self.args)


class Program:
    """
    Chainable command-line program.

    Construction
    - name: program name, optionally followed by a usage tail ("bin <type> [dir]").
      Defaults to the running script's file name. A usage tail implies single mode.
    - single: single-command program (no command matching, no command() calls).
    - version: version printed by --version (same as calling version()).
    - shell: print faults and exit (True) or raise them (False).
    - colorful: style help and error output.
    - host: Host used to print and exit.

    Cursor
    - command() moves the cursor; describe/option/alias/action/example apply to it.
    - Before any command() call, option() targets the global scope while
      describe/action/example target the root entry.
    """

    def __init__(self, name=Unset, single=False, /, *, version=Unset, shell=True, colorful=False, host=Unset):
        if not isinstance(name := coalesce(name, os.path.basename(sys.argv[0])), str):
            raise TypeError("Program() name must be a string")
        if not (segments := name.split()):
            raise ValueError("Program() name cannot be empty")
        if not isinstance(host := coalesce(host, Host()), Host):
            raise TypeError("Program() host must be a Host")

        self._bin, *rest = segments
        self._ver = str(coalesce(version, "0.0.0"))
        self._tree = CommandTree()
        self._single = False
        self._default = Unset
        self._cursor = Unset

        self.shell = shell
        self.colorful = colorful
        self.host = host

        single = bool(single) or bool(rest)

        # internal shapes
        self.command(ALL)
        self.command(" ".join((DEFAULT, *rest)) if single else f"{DEFAULT} <command>")
        self._single = single
        self._cursor = Unset

    @property
    def bin(self):
        return self._bin

    @property
    def ver(self):
        return self._ver

    @property
    def tree(self):
        return self._tree

    @property
    def single(self):
        return self._single

    @property
    def default(self):
        """
        name of the fallback command, or None.
        """
        return coalesce(self._default)

    def _current(self, fallback, /):
        return self._tree[coalesce(self._cursor, fallback)]

    def command(self, usage, descr=Unset, /, *, alias=Unset, default=False):
        """
        Declare a command and select it.

        - usage: literal name segments followed by "<required>" / "[optional]" placeholders,
          e.g. "remote add <name> <url>".
        - descr: description (string split into sentences, or a list of sentences).
        - alias: one alias name or several.
        - default: run this command when no command name matches.
        """
        if self._single:
            raise SingleModeCommandError('Disable "single" mode to add commands')

        entry = self._tree.define(usage)
        self._cursor = entry.name

        if default:
            self._default = entry.name
        if alias:
            self.alias(*aslist(alias))
        if descr:
            self.describe(descr)
        return self

    def describe(self, text, /):
        """
        Set the description of the current command (or of the root entry).
        """
        self._current(DEFAULT).descr = sentences(text) if isinstance(text, str) else list(text)
        return self

    def alias(self, *names):
        """
        Add alternative names for the current command.

        Aliases are not checked against existing command names: a clash replaces
        the command's binding and emits an AliasShadowWarning. The command's own
        name is skipped.
        """
        if self._single:
            raise AliasInSingleModeError('Cannot call `alias()` in "single" mode')
        if self._cursor is Unset:
            raise AliasWithoutCommandError("Cannot call `alias()` before defining a command")

        entry = self._tree[self._cursor]
        for name in (name for names in names for name in aslist(names)):
            if name == entry.name:
                continue
            if isinstance(self._tree.get(name), CommandEntry):
                warnings.warn(AliasShadowWarning(
                    f"alias {name!r} of {entry.name!r} shadows the command {name!r}",
                    alias=name,
                    command=entry.name,
                ), stacklevel=2)
            entry.aliases.append(name)
            self._tree.link(name, entry.name)
        return self

    def option(self, flags, descr=Unset, default=Unset, /):
        """
        Declare an option on the current command (or globally before any command).

        - flags: "-g, --global", "--global -g" or "--global"; the one-letter name is the alias.
        - descr: help text.
        - default: fallback value; its type (bool/str) decides how the flag is cast.
        """
        if not (names := split_flags(flags)):
            raise ValueError("option() flags cannot be empty")

        flag, alias, *_ = (*names, Unset)
        if alias and len(alias) > 1:
            flag, alias = alias, flag

        spec = OptionSpec(flag, alias, descr or "", default)
        entry = self._current(ALL)
        entry.scope.declare(spec)
        entry.options.append(spec)
        return self

    def action(self, handler, /):
        """
        Attach the handler of the current command (or of the root entry).

        The handler receives the positionals in usage order, then the flags.
        """
        if not callable(handler):
            raise TypeError("action() argument must be callable")
        self._current(DEFAULT).handler = handler
        return self

    def example(self, text, /):
        """
        Add an example invocation (shown as "$ <bin> <text>").
        """
        self._current(DEFAULT).examples.append(text)
        return self

    def version(self, text, /):
        """
        Set the version printed by --version / -v.
        """
        self._ver = str(text)
        return self

    def help(self, name=Unset, /):
        """
        Print the help of a command, or the root help.
        """
        self.host.print(render_help(self, name or DEFAULT, colorful=self.colorful))

    def trigger(self, fault, /, **options):
        """
        Surface a parse fault with this program's runtime options.
        """
        _trigger(fault, **{
            "prog": self._bin,
            "shell": self.shell,
            "colorful": self.colorful,
            "host": self.host,
        } | options)

    def _match(self, args, positionals):
        """
        Walk growing prefixes of the positionals against the tree.

        Aliases rewrite both lists in place to the canonical tokens. Returns
        (matched name or Unset, last tried prefix or Unset).
        """
        matched = Unset
        tried = Unset
        index = 1
        while index <= len(positionals):
            tried = " ".join(positionals[:index])
            node = None if internal(tried) else self._tree.get(tried)
            if isinstance(node, Alias):
                tokens = (matched := self._tree.entry(tried).name).split()
                start = args.index(positionals[0])
                args[start:start + index] = tokens
                positionals[:index] = tokens
                index = len(tokens)
            elif isinstance(node, CommandEntry):
                matched = tried
            elif matched is not Unset:
                break
            index += 1
        return matched, tried

    def parse(self, args=Unset, /, *, lazy=False, alias=Unset, boolean=(), string=(), default=Unset, unknown=Unset, leak=True):
        """
        Resolve and dispatch an argument vector.

        parameters
        - args: Iterable of tokens (converted with stringify), a shell-like string
          (split with shlex), or Unset for sys.argv[1:].
        - lazy: return a Dispatch instead of calling the handler.
        - alias / boolean / string / default / unknown / leak: tokenizer options;
          alias and default override the command and global declarations.

        returns
        - the handler's return value, a Dispatch (lazy=True), or None when help or
          version was printed or a fault was surfaced without exiting.
        """
        if args is Unset:
            args = sys.argv[1:]
        elif isinstance(args, str):
            args = shlex.split(args)
        elif not isinstance(args, Iterable):
            raise TypeError("parse() argument must be a string or an iterable")
        args = [stringify(arg) for arg in args]

        argv = tokenize(args, alias=META)
        fallback = False

        if self._single:
            name = DEFAULT
        else:
            name, tried = self._match(args, list(argv.positionals))
            if fallback := name is Unset:
                if self._default is not Unset:
                    name = self._default
                    args[:0] = name.split()
                elif tried is not Unset:
                    return self.trigger(InvalidCommandError(f"Invalid command: {tried}"))

        if argv.get("help"):
            return self.help(DEFAULT if self._single or fallback else name)
        if argv.get("version"):
            return self.host.print(render_version(self, colorful=self.colorful))

        if name is Unset:
            return self.trigger(NoCommandSpecifiedError("No command specified."))

        entry = self._tree.entry(name)
        scope = OptionScope.merge(self._tree[ALL].scope, entry.scope, OptionScope(alias, default))

        if not self._single:
            tokens = name.split()
            try:
                start = args.index(tokens[0])
            except ValueError:
                pass
            else:
                del args[start:start + len(tokens)]

        flags = tokenize(
            args,
            alias=scope.alias,
            boolean=boolean,
            string=string,
            default=scope.default,
            unknown=unknown,
            leak=leak,
        )
        if isinstance(flags, Rejected):
            message = flags.value if isinstance(flags.value, str) and flags.value else "Parsed unknown option flag(s)!"
            return self.trigger(UnknownFlagError(message, value=flags.value, token=flags.token))

        if len(flags.positionals) < entry.arity:
            prog = self._bin if self._single else f"{self._bin} {entry.name}"
            return self.trigger(InsufficientArgumentsError("Insufficient arguments!"), prog=prog)

        arguments = flags.positionals[:entry.arity]
        del flags.positionals[:entry.arity]
        for _ in entry.optional:
            arguments.append(flags.positionals.pop(0) if flags.positionals else None)
        arguments.append(flags)

        dispatch = Dispatch(entry.name, coalesce(entry.handler, None), tuple(arguments))
        return dispatch if lazy else dispatch()

    def __repr__(self):
        return f"{type(self).__name__}({self._bin!r}, single={self._single!r}, version={self._ver!r})"

    def __rich_repr__(self):
        yield self._bin
        yield "single", self._single, False
        yield "version", self._ver
        yield "commands", [name for name, _ in self._tree.commands()]


def program(name=Unset, single=False, /, **options):
    """
    Create a Program (same arguments as Program(...)).

        >>> cli = program("bin <type> [dir]")
        >>> cli.single
        True
    """
    return Program(name, single, **options)


__all__ = (
    "Dispatch",
    "Program",
    "program",
)
