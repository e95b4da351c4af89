"""Path pattern compiler.

Turns an Express-style path pattern into a compiled regex plus the ordered
list of capture slots it produces::

    "/users"                -> no keys, optional trailing slash
    "/users/:id"            -> one key, "id"
    "/users/:id(\\d+)"      -> one key, custom pattern
    "/files/:path*"         -> zero or more segments
    "/test/:p1/(p2|p3)"     -> keys "p1" and "0" (unnamed group)
    "/assets/*"             -> key "0", matches anything

A pre-compiled ``re.Pattern`` is used as-is; its groups become keys, named
groups keeping their name and unnamed ones numbered from ``"0"``.
"""

import logging
import re
from dataclasses import dataclass
from typing import TypeAlias

from bluejacket.errors import ConfigurationError
from bluejacket.routing.rule import ParamKey

logger = logging.getLogger("bluejacket.routing")

Pattern: TypeAlias = str | re.Pattern[str]

_DELIMITER = "/"

# Groups: 1 escaped char, 2 prefix, 3 name, 4 custom capture,
# 5 unnamed group, 6 modifier, 7 bare asterisk
_TOKEN_RE = re.compile(
    r"(\\.)"
    r"|([/.])?(?:(?::(\w+)(?:\(((?:\\.|[^\\()])+)\))?|\(((?:\\.|[^\\()])+)\))([+*?])?|(\*))"
)

_ESCAPE_STRING_RE = re.compile(r"([.+*?=^!:${}()\[\]|/\\])")
_ESCAPE_GROUP_RE = re.compile(r"([=!:$/()])")


def _escape_string(value: str) -> str:
    return _ESCAPE_STRING_RE.sub(r"\\\1", value)


def _escape_group(value: str) -> str:
    return _ESCAPE_GROUP_RE.sub(r"\\\1", value)


@dataclass(frozen=True, slots=True)
class CompiledPattern:
    """A compiled pattern: the regex and its capture slots, in group order."""

    source: str
    regex: re.Pattern[str]
    keys: tuple[ParamKey, ...]

    def match(self, route: str) -> tuple[str | None, ...] | None:
        """Return the capture groups if *route* matches, else ``None``."""
        found = self.regex.search(route)
        if found is None:
            return None
        return found.groups()


MATCH_ALL = CompiledPattern(source="*", regex=re.compile(r".*", re.DOTALL), keys=())
"""Matches every path unconditionally, with no captures."""


def parse_pattern(pattern: str) -> list[str | ParamKey]:
    """Split a pattern string into literal text and capture slots.

    Examples::

        "/users"        -> ["/users"]
        "/users/:id"    -> ["/users", ParamKey("id", prefix="/")]
        "/a/(b|c)"      -> ["/a", ParamKey("0", prefix="/", pattern="b|c")]
    """
    tokens: list[str | ParamKey] = []
    unnamed = 0
    index = 0
    literal = ""

    for found in _TOKEN_RE.finditer(pattern):
        literal += pattern[index : found.start()]
        index = found.end()

        escaped, prefix, name, capture, group, modifier, asterisk = found.groups()
        if escaped:
            literal += escaped[1]
            continue

        if literal:
            tokens.append(literal)
            literal = ""

        following = pattern[index] if index < len(pattern) else None
        delimiter = prefix or _DELIMITER
        if name is None:
            name = str(unnamed)
            unnamed += 1

        if capture or group:
            key_pattern = _escape_group(capture or group)
        elif asterisk:
            key_pattern = ".*"
        else:
            key_pattern = f"[^{_escape_string(delimiter)}]+?"

        tokens.append(
            ParamKey(
                name=name,
                prefix=prefix or "",
                delimiter=delimiter,
                optional=modifier in ("?", "*"),
                repeat=modifier in ("+", "*"),
                partial=prefix is not None and following is not None and following != prefix,
                asterisk=bool(asterisk),
                pattern=key_pattern,
            )
        )

    literal += pattern[index:]
    if literal:
        tokens.append(literal)
    return tokens


def tokens_to_regex(
    tokens: list[str | ParamKey],
    *,
    strict: bool = False,
) -> str:
    """Build the anchored regex source for parsed *tokens*."""
    route = ""
    for token in tokens:
        if isinstance(token, str):
            route += _escape_string(token)
            continue

        prefix = _escape_string(token.prefix)
        capture = f"(?:{token.pattern})"
        if token.repeat:
            capture += f"(?:{prefix}{capture})*"

        if not token.optional:
            capture = f"{prefix}({capture})"
        elif token.partial:
            capture = f"{prefix}({capture})?"
        else:
            capture = f"(?:{prefix}({capture}))?"
        route += capture

    delimiter = _escape_string(_DELIMITER)
    if not strict:
        # Accept one optional trailing delimiter
        route = route.removesuffix(delimiter) + f"(?:{delimiter}(?=\\Z))?"

    return f"^{route}\\Z"


def _regex_keys(regex: re.Pattern[str]) -> tuple[ParamKey, ...]:
    """Capture slots of a caller-built regex, in group order."""
    names = {index: name for name, index in regex.groupindex.items()}
    keys: list[ParamKey] = []
    unnamed = 0
    for index in range(1, regex.groups + 1):
        name = names.get(index)
        if name is None:
            name = str(unnamed)
            unnamed += 1
        keys.append(ParamKey(name=name, pattern=""))
    return tuple(keys)


def compile_pattern(
    pattern: Pattern,
    *,
    case_sensitive: bool = False,
    strict: bool = False,
) -> CompiledPattern:
    """Compile *pattern* into a ``CompiledPattern``.

    The flags apply to string patterns only; a pre-compiled regex keeps
    its own flags and is searched as-is.

    Raises ``ConfigurationError`` if the pattern cannot be compiled.
    """
    if isinstance(pattern, re.Pattern):
        if not isinstance(pattern.pattern, str):
            msg = f"Pattern {pattern.pattern!r} must match text, not bytes."
            raise ConfigurationError(msg)
        return CompiledPattern(source=pattern.pattern, regex=pattern, keys=_regex_keys(pattern))

    if not isinstance(pattern, str):
        msg = f"Pattern must be a str or compiled regex, got {type(pattern).__name__}."
        raise ConfigurationError(msg)

    tokens = parse_pattern(pattern)
    source = tokens_to_regex(tokens, strict=strict)
    flags = 0 if case_sensitive else re.IGNORECASE
    try:
        regex = re.compile(source, flags)
    except re.error as exc:
        msg = f"Invalid path pattern {pattern!r}: {exc}"
        raise ConfigurationError(msg) from exc

    keys = tuple(token for token in tokens if isinstance(token, ParamKey))
    logger.debug("compiled %r -> %s (%d keys)", pattern, source, len(keys))
    return CompiledPattern(source=pattern, regex=regex, keys=keys)
