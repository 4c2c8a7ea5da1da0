"""
pixconv/script.py
Operation script parsing.

A script is a list of statements separated by ';' or newlines:

    resize 100 200; blur 1
    flip_horizontal  # comments run to the end of the line
    flip_vertical
"""

import re
from typing import Callable, Dict, List, Tuple

from .errors import ScriptError
from .imgtypes import Blur, FlipHorizontal, FlipVertical, Operation, Resize

_INT_RE = re.compile(r"^[0-9]+$")


def _uint(token: str, what: str, statement: int) -> int:
    if not _INT_RE.match(token):
        raise ScriptError(f"Statement {statement}: {what} must be a non-negative integer, got {token!r}")
    return int(token)


def _parse_blur(args: List[str], n: int) -> Operation:
    (sigma,) = args
    return Blur(sigma=_uint(sigma, "blur sigma", n))


def _parse_resize(args: List[str], n: int) -> Operation:
    width, height = (_uint(a, "resize dimension", n) for a in args)
    if width == 0 or height == 0:
        raise ScriptError(f"Statement {n}: resize dimensions must be positive, got {width}x{height}")
    return Resize(width=width, height=height)


# name -> (argument count, builder)
_STATEMENTS: Dict[str, Tuple[int, Callable[[List[str], int], Operation]]] = {
    "blur": (1, _parse_blur),
    "flip_horizontal": (0, lambda args, n: FlipHorizontal()),
    "flip_vertical": (0, lambda args, n: FlipVertical()),
    "resize": (2, _parse_resize),
}


def _statements(text: str):
    lines = (line.split("#", 1)[0] for line in text.splitlines())
    for chunk in ";".join(lines).split(";"):
        chunk = chunk.strip()
        if chunk:
            yield chunk


def parse_script(text: str) -> List[Operation]:
    """
    Parse an operation script into an ordered list of operations.

    Raises:
        ScriptError: unknown statement, wrong argument count or bad value
    """
    operations: List[Operation] = []
    for n, statement in enumerate(_statements(text), 1):
        name, *args = statement.split()
        key = name.lower()
        if key not in _STATEMENTS:
            known = ", ".join(sorted(_STATEMENTS))
            raise ScriptError(f"Statement {n}: unknown operation {name!r} (known: {known})")
        arity, build = _STATEMENTS[key]
        if len(args) != arity:
            raise ScriptError(f"Statement {n}: {key} takes {arity} argument(s), got {len(args)}")
        operations.append(build(args, n))
    return operations
