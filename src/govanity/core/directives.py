"""Parser for ``gopkg`` directives.

Packages can be declared in a compact line-oriented format::

    gopkg <path> [<vcs>] <uri> {
        submodule <subpath> [<suburi>]
    }

The block is optional. Tokens follow shell quoting rules and ``#`` starts a
comment.
"""

import shlex
from dataclasses import replace

from govanity.core.registration import PackageRegistration, Submodule
from govanity.errors import DirectiveError

DIRECTIVE = "gopkg"
SUBMODULE = "submodule"


def _tokenize(line: str, lineno: int) -> list[str]:
    try:
        return shlex.split(line, comments=True)
    except ValueError as e:
        raise DirectiveError(str(e), lineno) from e


def parse_directives(text: str) -> list[PackageRegistration]:
    """Parse directive text into unprovisioned registrations.

    Args:
        text: Directive file contents

    Returns:
        Registrations in declaration order

    Raises:
        DirectiveError: On unknown directives, wrong argument counts or
            unbalanced blocks
    """
    registrations: list[PackageRegistration] = []
    current: PackageRegistration | None = None
    submodules: list[Submodule] = []
    block_start = 0

    for lineno, line in enumerate(text.splitlines(), start=1):
        tokens = _tokenize(line, lineno)
        if not tokens:
            continue

        if current is not None:
            if tokens == ["}"]:
                registrations.append(replace(current, submodules=tuple(submodules)))
                current = None
                continue
            if tokens[0] != SUBMODULE:
                raise DirectiveError(f"unrecognized subdirective '{tokens[0]}'", lineno)
            if len(tokens) not in (2, 3):
                raise DirectiveError(
                    "usage: submodule <subpath> [<suburi>]", lineno
                )
            submodules.append(
                Submodule(path=tokens[1], url=tokens[2] if len(tokens) == 3 else "")
            )
            continue

        if tokens[0] != DIRECTIVE:
            raise DirectiveError(f"unrecognized directive '{tokens[0]}'", lineno)

        args = tokens[1:]
        opens_block = bool(args) and args[-1] == "{"
        if opens_block:
            args = args[:-1]

        match args:
            case [path, url]:
                registration = PackageRegistration(path=path, url=url)
            case [path, vcs, url]:
                registration = PackageRegistration(path=path, url=url, vcs=vcs)
            case _:
                raise DirectiveError(f"usage: {DIRECTIVE} <path> [<vcs>] <uri>", lineno)

        if opens_block:
            current = registration
            submodules = []
            block_start = lineno
        else:
            registrations.append(registration)

    if current is not None:
        raise DirectiveError(f"unclosed block for {current.path}", block_start)

    return registrations
