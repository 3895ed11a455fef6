"""
Host capability: the only two things smoothop needs from its environment.

- print(renderable): write one block of output (help, version, errors).
- exit(code=1): terminate the process.

The default Host prints through a rich Console on stdout (no markup parsing, no
syntax highlighting, soft wrapping so help columns stay intact) and exits with
sys.exit. Embedders and tests pass their own Console, or subclass Host to
capture output and replace exit.

    >>> import io
    >>> from rich.console import Console
    >>> host = Host(Console(file=io.StringIO(), width=120))
"""
import sys

from rich.console import Console

from .utils import Unset


class Host:
    __slots__ = ("console",)

    def __init__(self, console=Unset, /):
        if console is Unset:
            console = Console(highlight=False, soft_wrap=True)
        elif not isinstance(console, Console):
            raise TypeError("Host() argument must be a rich console")
        self.console = console

    def print(self, renderable, /):
        self.console.print(renderable, markup=False, highlight=False, soft_wrap=True)

    def exit(self, code=1, /):
        sys.exit(code)

    def __repr__(self):
        return f"{type(self).__name__}({self.console!r})"


__all__ = (
    "Host",
)
