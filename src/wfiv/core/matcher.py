"""Family selection by shell-style glob patterns.

Supported syntax:
- ``*`` matches any run of characters, ``?`` a single character
- ``[abc]``, ``[a-z]`` and ``[!abc]`` match character classes
- ``{a,b}`` matches any of the comma separated alternatives
- ``\\`` escapes the next character

Patterns match the whole family name, case-sensitively.
"""

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from wfiv.domain import FamilyDescriptor
from wfiv.exceptions import InvalidPattern


@dataclass(frozen=True)
class GlobPattern:
    """A compiled glob pattern.

    Attributes:
        pattern: The source pattern
        index: Position of the pattern in the user's argument list
        regex: Compiled regular expression equivalent
    """

    pattern: str
    index: int
    regex: re.Pattern[str]

    def match(self, name: str) -> bool:
        """Test whether the name matches the pattern."""
        return self.regex.fullmatch(name) is not None


def _translate(pattern: str, index: int) -> str:
    out: list[str] = []
    depth = 0
    i, n = 0, len(pattern)
    while i < n:
        c = pattern[i]
        i += 1
        if c == "\\":
            if i >= n:
                raise InvalidPattern(pattern, index, "trailing escape character")
            out.append(re.escape(pattern[i]))
            i += 1
        elif c == "*":
            out.append(".*")
        elif c == "?":
            out.append(".")
        elif c == "[":
            j = i
            negate = j < n and pattern[j] == "!"
            if negate:
                j += 1
            start = j
            # A leading ']' is part of the class.
            if j < n and pattern[j] == "]":
                j += 1
            while j < n and pattern[j] != "]":
                j += 1
            if j >= n:
                raise InvalidPattern(pattern, index, f"unclosed character class at {i - 1}")
            members = pattern[start:j]
            if not members:
                raise InvalidPattern(pattern, index, f"empty character class at {i - 1}")
            members = members.replace("\\", "\\\\").replace("^", "\\^").replace("[", "\\[")
            out.append(f"[{'^' if negate else ''}{members}]")
            i = j + 1
        elif c == "{":
            depth += 1
            out.append("(?:")
        elif c == "}":
            if depth == 0:
                raise InvalidPattern(pattern, index, f"unmatched '}}' at {i - 1}")
            depth -= 1
            out.append(")")
        elif c == "," and depth > 0:
            out.append("|")
        else:
            out.append(re.escape(c))
    if depth:
        raise InvalidPattern(pattern, index, "unclosed '{'")
    return "".join(out)


def compile_glob(pattern: str, index: int = 0) -> GlobPattern:
    """Compile a glob pattern.

    Args:
        pattern: Glob pattern
        index: Position of the pattern in the argument list

    Returns:
        Compiled pattern

    Raises:
        InvalidPattern: If the pattern is malformed
    """
    source = _translate(pattern, index)
    try:
        regex = re.compile(source, re.S)
    except re.error as e:
        raise InvalidPattern(pattern, index, str(e)) from e
    return GlobPattern(pattern=pattern, index=index, regex=regex)


def compile_patterns(patterns: Iterable[str]) -> list[GlobPattern]:
    """Compile every pattern, failing on the first malformed one."""
    return [compile_glob(pattern, i) for i, pattern in enumerate(patterns)]


def select_families(
    families: Sequence[FamilyDescriptor],
    patterns: Sequence[GlobPattern],
    show_all: bool = False,
) -> list[FamilyDescriptor]:
    """Select the families to render.

    Args:
        families: Catalog families, in catalog order
        patterns: Compiled patterns
        show_all: Select the whole catalog, ignoring patterns

    Returns:
        Selected families in catalog order, each at most once
    """
    if show_all:
        return list(families)
    if not patterns:
        return []
    return [f for f in families if any(p.match(f.family) for p in patterns)]
