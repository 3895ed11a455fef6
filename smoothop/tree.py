"""
smoothop command tree: the passive structure the builder fills and the resolver reads.

Overview
- OptionSpec: one declared option (canonical name, alias, default, help label).
- OptionScope: the alias/default configuration of one scope (global or a command).
  Scopes merge with OptionScope.merge(global, command, overrides); later scopes win.
- CommandEntry: one command (usage placeholders, description, options, aliases,
  examples, handler).
- Alias: a tree node that redirects to a canonical command name.
- CommandTree: ordered mapping name -> CommandEntry | Alias with the two internal
  entries "__all__" (global options) and "__default__" (root / single command).

Notes
- Internal names start with "__" and never show up in usage strings or in the
  command list of the root help.
- The tree is written during the build phase only. Reading it while parsing has
  no side effects, so a built tree can be shared.
"""
from .faults import DuplicateCommandError
from .utils import *

ALL = "__all__"
DEFAULT = "__default__"


def internal(name, /):
    """
    Whether a command name is one of the reserved, synthetic entries.
    """
    return name.startswith("__")


class OptionSpec:
    """
    one declared option.

    - name: canonical (long) flag name, without dashes.
    - alias: short alias name or Unset.
    - descr: help text ("" when not given).
    - default: default value or Unset.
    - label: help label, e.g. "-g, --global".
    """
    __slots__ = ("name", "alias", "descr", "default")

    def __init__(self, name, alias=Unset, descr="", default=Unset, /):
        self.name = name
        self.alias = alias
        self.descr = descr
        self.default = default

    @property
    def label(self):
        if self.alias:
            return f"-{self.alias}, --{self.name}"
        return f"--{self.name}"

    def __repr__(self):
        return f"{type(self).__name__}({self.label!r}, descr={self.descr!r}, default={self.default!r})"


class OptionScope:
    """
    alias and default configuration of one scope.

    - alias: mapping of alias -> list of canonical names (the tokenizer's shape).
    - default: mapping of canonical name -> default value (Unset when declared without one).
    """
    __slots__ = ("alias", "default")

    def __init__(self, alias=Unset, default=Unset, /):
        self.alias = dict(coalesce(alias, {}))
        self.default = dict(coalesce(default, {}))

    def declare(self, spec, /):
        """
        Register an OptionSpec: alias link, then default (or an Unset marker when
        the option has neither, so strict parsing still recognizes it).
        """
        if spec.alias:
            self.alias[spec.alias] = [*self.alias.get(spec.alias, ()), spec.name]
        if spec.default is not Unset:
            self.default[spec.name] = spec.default
        elif not spec.alias:
            self.default[spec.name] = Unset

    @classmethod
    def merge(cls, *scopes):
        """
        Merge scopes left to right into a new scope; later keys win.

        None of the merged scopes are modified.
        """
        merged = cls()
        for scope in scopes:
            merged.alias.update(scope.alias)
            merged.default.update(scope.default)
        return merged

    def __repr__(self):
        return f"{type(self).__name__}(alias={self.alias!r}, default={self.default!r})"


class CommandEntry:
    """
    one node of the command tree.

    - name: canonical name (space-joined literal segments).
    - usage: usage string shown in help ("<name> <placeholders...>").
    - required / optional: placeholder tokens in declared order.
    - descr: list of sentences.
    - options: OptionSpec list in declaration order.
    - scope: OptionScope for this command.
    - aliases: alias names that redirect here.
    - examples: example invocations (without the program name).
    - handler: callable or Unset.
    """
    __slots__ = ("name", "usage", "required", "optional", "descr", "options", "scope", "aliases", "examples", "handler")

    def __init__(self, name, placeholders=(), /):
        self.name = name
        self.required = [x for x in placeholders if x.startswith("<")]
        self.optional = [x for x in placeholders if x.startswith("[")]
        self.usage = " ".join(placeholders if internal(name) else (name, *placeholders))
        self.descr = []
        self.options = []
        self.scope = OptionScope()
        self.aliases = []
        self.examples = []
        self.handler = Unset

    @property
    def arity(self):
        return len(self.required)

    def __repr__(self):
        return f"{type(self).__name__}({self.name!r}, usage={self.usage!r})"

    def __rich_repr__(self):
        yield "name", self.name
        yield "usage", self.usage
        yield "aliases", self.aliases, []
        yield "handler", self.handler, Unset


class Alias:
    """
    a tree node redirecting to a canonical command name (not an owner of it).
    """
    __slots__ = ("target",)

    def __init__(self, target, /):
        self.target = target

    def __eq__(self, other, /):
        if isinstance(other, Alias):
            return self.target == other.target
        return NotImplemented

    def __hash__(self):
        return hash((Alias, self.target))

    def __repr__(self):
        return f"{type(self).__name__}({self.target!r})"


class CommandTree:
    """
    Mapping of command name -> CommandEntry | Alias, in registration order.
    """

    def __init__(self):
        self._nodes = {}

    def define(self, usage, /):
        """
        Create and register a CommandEntry from a usage pattern.

        Literal segments (not starting with '<' or '[') form the name; the rest
        are placeholders. A name already bound to a CommandEntry is a duplicate;
        an alias binding is replaced.
        """
        names = []
        placeholders = []
        for segment in usage.split():
            (placeholders if segment[0] in "<[" else names).append(segment)

        name = " ".join(names)
        if isinstance(self._nodes.get(name), CommandEntry):
            raise DuplicateCommandError(f"Command already exists: {name}")

        entry = self._nodes[name] = CommandEntry(name, placeholders)
        return entry

    def link(self, alias, target, /):
        self._nodes[alias] = Alias(target)

    def get(self, name, default=None, /):
        return self._nodes.get(name, default)

    def entry(self, name, /):
        """
        Return the CommandEntry for a name, following Alias redirections.

        An alias may point at a name that a later alias shadowed, so chains are
        followed until a CommandEntry is reached. Raises KeyError for unknown
        names and for chains that loop.
        """
        node = self._nodes[name]
        seen = {name}
        while isinstance(node, Alias):
            if node.target in seen:
                raise KeyError(name)
            seen.add(node.target)
            node = self._nodes[node.target]
        return node

    def commands(self):
        """
        Iterate (name, entry) over user-visible commands (no aliases, no internal entries).
        """
        for name, node in self._nodes.items():
            if isinstance(node, CommandEntry) and not internal(name):
                yield name, node

    def __getitem__(self, name, /):
        return self._nodes[name]

    def __repr__(self):
        return f"{type(self).__name__}({list(self._nodes)!r})"


__all__ = (
    "ALL",
    "DEFAULT",
    "internal",
    "OptionSpec",
    "OptionScope",
    "CommandEntry",
    "Alias",
    "CommandTree",
)
