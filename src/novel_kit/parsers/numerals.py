# src/novel_kit/parsers/numerals.py

"""Conversion of CJK numeral expressions to Arabic numbers."""

import re

CJK_DIGITS: dict[str, int] = {
    "零": 0,
    "〇": 0,
    "一": 1,
    "二": 2,
    "两": 2,
    "兩": 2,
    "三": 3,
    "四": 4,
    "五": 5,
    "六": 6,
    "七": 7,
    "八": 8,
    "九": 9,
}

CJK_UNITS: dict[str, int] = {
    "十": 10,
    "百": 100,
    "千": 1000,
}

_ASCII_DIGITS_RE = re.compile(r"^[0-9]+$")
_FULLWIDTH_DIGITS = str.maketrans("０１２３４５６７８９", "0123456789")


def to_arabic(numeral: str) -> str:
    """Convert a CJK or mixed numeral string to a decimal string.

    Digit-only strings (fullwidth digits are folded to ASCII) are returned
    unchanged. Everything else is read as a traditional numeral expression: a
    unit multiplies the pending digit (1 when nothing is pending, so "十二" is
    12) and the pending digit is flushed at the end. Characters that are
    neither digits nor units are skipped.

    Examples:
        >>> to_arabic("一百二十三")
        '123'
        >>> to_arabic("十")
        '10'
        >>> to_arabic("42")
        '42'
    """
    numeral = numeral.translate(_FULLWIDTH_DIGITS)
    if _ASCII_DIGITS_RE.match(numeral):
        return numeral

    total = 0
    pending = 0
    seen_unit = False

    for char in numeral:
        if char in CJK_UNITS:
            unit = CJK_UNITS[char]
            # bare leading unit ("十二", "百五") or "零十" counts as one of it
            if pending == 0 and (unit == 10 or not seen_unit):
                pending = 1
            total += pending * unit
            pending = 0
            seen_unit = True
        elif char in CJK_DIGITS:
            pending = CJK_DIGITS[char]
        elif char.isdecimal():
            pending = int(char)

    total += pending
    return str(total)
