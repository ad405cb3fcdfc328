# src/novel_kit/parsers/headings.py

"""Chapter heading recognition.

Headings are recognised by a small set of named sub-matchers, tried in order.
Each one is anchored at the start of the trimmed line and returns a tagged
HeadingMatch, or None when the line is not a heading of its kind.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum


class HeadingKind(str, Enum):
    """Which heading convention a line matched."""

    CJK_NUMBERED = "cjk_numbered"
    LATIN_NUMBERED = "latin_numbered"
    NAMED_SECTION = "named_section"


@dataclass(frozen=True)
class HeadingMatch:
    kind: HeadingKind
    text: str
    marker: str
    number: str | None = None


CJK_NUMERAL_CHARS = "0-9０-９零〇一二两兩三四五六七八九十百千"
CJK_CHAPTER_UNITS = "章卷回節篇"
# also measure words in prose ("第一部电影", "第二节课"), so they must end the heading word
CJK_MEASURE_UNITS = "节集部"
_UNIT_BOUNDARY = r"(?=\s|$|[:：、.．·])"

# well-formed Roman numerals, non-empty
_ROMAN_UPPER = r"(?=[IVXLCDM])M{0,3}(?:CM|CD|D?C{0,3})(?:XC|XL|L?X{0,3})(?:IX|IV|V?I{0,3})"
_ROMAN_ANY = r"(?=[ivxlcdm])m{0,3}(?:cm|cd|d?c{0,3})(?:xc|xl|l?x{0,3})(?:ix|iv|v?i{0,3})"

_CJK_NUMBERED_RE = re.compile(
    rf"^第\s*(?P<number>[{CJK_NUMERAL_CHARS}]+)\s*"
    rf"(?P<unit>[{CJK_CHAPTER_UNITS}]|[{CJK_MEASURE_UNITS}]{_UNIT_BOUNDARY})"
)
_LATIN_NUMBERED_RE = re.compile(
    r"^(?P<marker>chapter|part|volume|vol|book)\s*\.?\s*"
    # uppercase numerals may be followed by a title, lowercase ones must end the line
    rf"(?P<number>\d+|(?-i:{_ROMAN_UPPER})(?![A-Za-z])|{_ROMAN_ANY}(?=\W*$))",
    re.IGNORECASE,
)
_NAMED_SECTION_RE = re.compile(
    r"^(?P<marker>序[章言]?|楔子|番外|后记|後記|尾声|尾聲"
    r"|introduction|prologue|epilogue|interlude)",
    re.IGNORECASE,
)


def match_cjk_numbered(line: str) -> HeadingMatch | None:
    m = _CJK_NUMBERED_RE.match(line)
    if m is None:
        return None
    return HeadingMatch(
        kind=HeadingKind.CJK_NUMBERED,
        text=line,
        marker=m.group("unit"),
        number=m.group("number"),
    )


def match_latin_numbered(line: str) -> HeadingMatch | None:
    m = _LATIN_NUMBERED_RE.match(line)
    if m is None:
        return None
    return HeadingMatch(
        kind=HeadingKind.LATIN_NUMBERED,
        text=line,
        marker=m.group("marker").lower(),
        number=m.group("number"),
    )


def match_named_section(line: str) -> HeadingMatch | None:
    m = _NAMED_SECTION_RE.match(line)
    if m is None:
        return None
    return HeadingMatch(
        kind=HeadingKind.NAMED_SECTION,
        text=line,
        marker=m.group("marker").lower(),
    )


HeadingMatcher = Callable[[str], "HeadingMatch | None"]

DEFAULT_MATCHERS: tuple[HeadingMatcher, ...] = (
    match_cjk_numbered,
    match_latin_numbered,
    match_named_section,
)


def match_heading(
    line: str,
    matchers: tuple[HeadingMatcher, ...] = DEFAULT_MATCHERS,
) -> HeadingMatch | None:
    """Return the first sub-matcher hit for a line, or None.

    The line is trimmed before matching so indented headings are still found.
    """
    clean = line.strip()
    if not clean:
        return None
    for matcher in matchers:
        result = matcher(clean)
        if result is not None:
            return result
    return None
