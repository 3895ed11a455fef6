"""
smoothop tokenizer: turn a flat argument list into typed flags and positionals.

Scope
- tokenize(args, **config): stateless, single pass over the tokens.
- ParseResult: dict of flag name -> value, plus the leftover positionals.
- Rejected: the error arm of the tokenizer result (strict mode only).

Token classes
- "--"               → everything after it is positional, verbatim.
- "word"             → positional.
- "--no-name"        → name = False.
- "--name[=value]"   → long flag; value inline or taken from the next token.
- "-abc[=value]"     → cluster of short flags; a and b are True, c gets the value.

Typing
- string-typed names never get numeric coercion.
- boolean-typed names accept "true"/"false"; any other value records True and
  is handed back to the positionals (as a number when it is numeric), so
  "--force build" keeps "build" as a positional. Pass leak=False to drop it.
- untyped names are coerced to numbers when they look numeric.
- defaults imply a type: a bool default makes the name boolean, a str default
  makes it a string.

Result contract
- tokenize() returns a ParseResult on success.
- In strict mode (unknown=callable) the first unrecognized flag stops the walk
  and tokenize() returns Rejected(unknown(token), token). Callers branch on
  isinstance(result, Rejected).
"""
from .utils import *


class ParseResult(dict):
    """
    Flags by name, plus the positional tokens that were not bound to a flag.

        >>> result = tokenize(["build", "--out=dist", "-v"])
        >>> result
        ParseResult(['build'], {'out': 'dist', 'v': True})
        >>> result.positionals
        ['build']
    """

    def __init__(self, positionals=(), /, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.positionals = list(positionals)

    def __eq__(self, other, /):
        if isinstance(other, ParseResult):
            return self.positionals == other.positionals and dict.__eq__(self, other)
        return dict.__eq__(self, other)

    def __repr__(self):
        return f"{type(self).__name__}({self.positionals!r}, {dict(self)!r})"

    def __rich_repr__(self):
        yield self.positionals
        yield dict(self)


class Rejected:
    """
    Outcome of a strict-mode parse that met an unrecognized flag.

    - value: whatever the caller's `unknown` callback returned (unmodified).
    - token: the offending flag, spelled with the dashes it was given.
    """
    __slots__ = ("value", "token")

    def __init__(self, value, token, /):
        self.value = value
        self.token = token

    def __repr__(self):
        return f"{type(self).__name__}(value={self.value!r}, token={self.token!r})"

    def __rich_repr__(self):
        yield "value", self.value
        yield "token", self.token


def _close_aliases(alias):
    """
    Build the symmetric closure of an alias mapping.

    {"g": "global"} → {"g": ["global"], "global": ["g"]}
    {"o": ["out", "output"]} → {"o": ["out", "output"], "out": ["output", "o"], "output": ["out", "o"]}
    """
    closure = {}
    for key, names in coalesce(alias, {}).items():
        names = closure[key] = aslist(names)
        for index, name in enumerate(names):
            closure[name] = [*names[:index], *names[index + 1:], key]
    return closure


def _spread(names, closure):
    """
    Extend a set of flag names with every alias of every member.
    """
    spread = set(names)
    for name in names:
        spread.update(closure.get(name, ()))
    return spread


def _cast(name, value, result, *, booleans, strings, leak):
    """
    Coerce one raw value according to the name's declared type.
    """
    if name in strings:
        return "" if value is None or value is True else str(value)
    if isinstance(value, bool):
        return value
    if name in booleans:
        if value == "false":
            return False
        if value == "true":
            return True
        if leak:
            result.positionals.append(coalesce(to_number(value), value))
        return bool(value)
    return coalesce(to_number(value), value)


def _store(result, name, value):
    """
    Record a value; repeated names turn into a list.
    """
    try:
        old = result[name]
    except KeyError:
        result[name] = value
        return
    if old is None:
        result[name] = value
    elif isinstance(old, list):
        old.append(value)
    else:
        result[name] = [old, value]


def tokenize(args, /, *, alias=Unset, boolean=(), string=(), default=Unset, unknown=Unset, leak=True):
    """
    parse a flat token list into flags and positionals.

    parameters
    - args: Sequence[str]
      the raw tokens (no program name).
    - alias: Mapping[str, str | Iterable[str]]
      alias groups; the mapping is closed symmetrically before use.
    - boolean / string: str | Iterable[str]
      names forced to boolean or string semantics (aliases inherit the type).
    - default: Mapping[str, bool | str | int | float | Unset]
      fallback values; also imply a type and mark the name as known.
    - unknown: Callable[[str], Any]
      enables strict mode; called with the offending token, its return value is
      wrapped into Rejected and returned without looking at further tokens.
    - leak: bool
      hand a non-boolean value given to a boolean flag back to the positionals.

    none of the configuration objects are mutated.
    """
    closure = _close_aliases(alias)
    booleans = _spread(aslist(boolean), closure)
    strings = _spread(aslist(string), closure)
    defaults = dict(coalesce(default, {}))

    # defaults imply a type and register the name (and its aliases) as known
    for key, value in defaults.items():
        names = closure.setdefault(key, [])
        if isinstance(value, bool):
            booleans.update((key, *names))
        elif isinstance(value, str):
            strings.update((key, *names))

    strict = unknown is not Unset
    known = frozenset(closure) if strict else frozenset()

    result = ParseResult()
    index = 0
    length = len(args)

    while index < length:
        token = args[index]

        if token == "--":
            result.positionals.extend(args[index + 1:])
            break

        dashes = len(token) - len(token.lstrip("-"))

        if dashes == 0:
            result.positionals.append(token)
        elif token.startswith("no-", dashes):
            name = token[dashes + 3:]
            if strict and name not in known:
                return Rejected(unknown(token), token)
            result[name] = False
        else:
            name, _, value = token[dashes:].partition("=")
            if not value:
                if index + 1 == length or args[index + 1].startswith("-"):
                    value = True
                else:
                    index += 1
                    value = args[index]

            names = [name] if dashes == 2 else list(name)
            for position, name in enumerate(names):
                if strict and name not in known:
                    return Rejected(unknown(offender := "-" * dashes + name), offender)
                raw = True if position + 1 < len(names) else value
                _store(result, name, _cast(name, raw, result, booleans=booleans, strings=strings, leak=leak))

        index += 1

    for key, value in defaults.items():
        if key not in result and value is not Unset:
            result[key] = value

    # first spelling of an alias group wins, then fans out to the others
    spread = set()
    for key in list(result):
        if key in spread:
            continue
        for name in closure.get(key, ()):
            result[name] = result[key]
            spread.add(name)

    return result


__all__ = (
    "ParseResult",
    "Rejected",
    "tokenize",
)
