"""Route Grammar - Pattern parsing and matcher synthesis.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.

Grammar:
    path       := segment ('/' segment)*
    segment    := literal-text | ':' identifier ['(' constraint ')']
    identifier := [A-Za-z_][A-Za-z0-9_]*

Examples:
    users                 -> [Constant("users")]
    users/:id             -> [Constant("users"), Parameter("id")]
    files/:name(.+\\.txt) -> [Constant("files"), Parameter("name", ".+\\.txt")]
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union

from roadrouter_core.utils.helpers import strip_slashes

DEFAULT_CONSTRAINT = "[^/]+"

_IDENT_START = re.compile(r"[A-Za-z_]")
_IDENT_CHAR = re.compile(r"[A-Za-z0-9_]")


class ParseError(Exception):
    """Raised when a route pattern is malformed."""

    def __init__(self, message: str, pattern: str = "", position: int = -1):
        self.pattern = pattern
        self.position = position
        if position >= 0:
            message = f"{message} (pattern {pattern!r}, offset {position})"
        elif pattern:
            message = f"{message} (pattern {pattern!r})"
        super().__init__(message)


@dataclass(frozen=True)
class ConstantSegment:
    """Literal path text."""

    text: str

    def to_regex(self) -> str:
        return re.escape(self.text)


@dataclass(frozen=True)
class ParameterSegment:
    """Named parameter, optionally restricted by an inline constraint."""

    name: str
    constraint: Optional[str] = None

    @property
    def regex(self) -> str:
        return self.constraint if self.constraint is not None else DEFAULT_CONSTRAINT

    def to_regex(self) -> str:
        return f"(?P<{self.name}>{self.regex})"


Segment = Union[ConstantSegment, ParameterSegment]


class _Scanner:
    """Single-pass scanner over a trimmed pattern."""

    def __init__(self, pattern: str):
        self.pattern = pattern
        self.pos = 0

    def at_end(self) -> bool:
        return self.pos >= len(self.pattern)

    def peek(self) -> str:
        return self.pattern[self.pos] if not self.at_end() else ""

    def error(self, message: str) -> ParseError:
        return ParseError(message, self.pattern, self.pos)

    def literal(self) -> ConstantSegment:
        end = self.pattern.find("/", self.pos)
        if end == -1:
            end = len(self.pattern)
        text = self.pattern[self.pos:end]
        self.pos = end
        return ConstantSegment(text)

    def parameter(self) -> ParameterSegment:
        self.pos += 1  # ':'
        start = self.pos

        if self.at_end() or not _IDENT_START.match(self.peek()):
            raise self.error("Parameter name must start with a letter or underscore")

        while not self.at_end() and _IDENT_CHAR.match(self.peek()):
            self.pos += 1
        name = self.pattern[start:self.pos]

        constraint = None
        if self.peek() == "(":
            constraint = self.constraint()

        if not self.at_end() and self.peek() != "/":
            raise self.error(f"Invalid character {self.peek()!r} in parameter {name!r}")

        return ParameterSegment(name, constraint)

    def constraint(self) -> str:
        open_at = self.pos
        self.pos += 1  # '('
        depth = 1
        start = self.pos

        while not self.at_end():
            char = self.peek()
            if char == "\\":
                self.pos += 2
                continue
            if char == "(":
                depth += 1
            elif char == ")":
                depth -= 1
                if depth == 0:
                    break
            self.pos += 1

        if depth != 0 or self.at_end():
            self.pos = open_at
            raise self.error("Unmatched '(' in parameter constraint")

        body = self.pattern[start:self.pos]
        self.pos += 1  # ')'

        if not body:
            self.pos = open_at
            raise self.error("Empty parameter constraint")

        try:
            re.compile(body)
        except re.error as e:
            self.pos = open_at
            raise self.error(f"Invalid parameter constraint {body!r}: {e}") from e

        return body

    def segments(self) -> Tuple[Segment, ...]:
        if not self.pattern:
            return ()

        result = []
        while True:
            if self.peek() == ":":
                result.append(self.parameter())
            else:
                result.append(self.literal())

            if self.at_end():
                break
            self.pos += 1  # '/'

        return tuple(result)


def parse(pattern: str) -> Tuple[Segment, ...]:
    """Parse a route pattern into segments.

    Leading and trailing slashes are ignored. Empty segments produced by
    repeated slashes are kept as empty constants.

    Raises:
        ParseError: If parameter syntax is malformed or the segments do
            not compile into a matcher.
    """
    trimmed = strip_slashes(pattern)
    segments = _Scanner(trimmed).segments()

    seen = set()
    for segment in segments:
        if isinstance(segment, ParameterSegment):
            if segment.name in seen:
                raise ParseError(f"Duplicate parameter {segment.name!r}", trimmed)
            seen.add(segment.name)

    # Constraints that compile alone can still clash inside the full matcher
    # (inline global flags, group names, backreferences).
    for anchored in (True, False):
        try:
            re.compile(compile_segments(segments, anchored=anchored))
        except re.error as e:
            raise ParseError(f"Invalid route matcher: {e}", trimmed) from e

    return segments


def compile_segments(segments: Sequence[Segment], anchored: bool = True) -> str:
    """Build the regex source for a segment list.

    The result is anchored at the start and at the very end of the string
    (``\\Z``, so a trailing newline never matches). With ``anchored=False``
    the end anchor is replaced by a segment-boundary lookahead, so the regex
    tests whether a path begins with the pattern. An empty segment list is a
    prefix of every path.
    """
    body = "/".join(segment.to_regex() for segment in segments)
    if anchored:
        return f"^{body}\\Z"
    if not segments:
        return "^"
    return f"^{body}(?=/|\\Z)"


__all__ = [
    "ParseError",
    "ConstantSegment",
    "ParameterSegment",
    "Segment",
    "DEFAULT_CONSTRAINT",
    "parse",
    "compile_segments",
]
