# src/novel_kit/parsers/titles.py

import re

from .headings import CJK_NUMERAL_CHARS
from .numerals import to_arabic

_LATIN_CHAPTER_RE = re.compile(r"^Chapter\s*\.?\s*(\d+)", re.IGNORECASE)
_CJK_CHAPTER_RE = re.compile(rf"^第\s*([{CJK_NUMERAL_CHARS}]+)\s*[章卷]")
_PROLOGUE_RE = re.compile(r"序[章言]?|Introduction|Prologue", re.IGNORECASE)
_EPILOGUE_RE = re.compile(r"尾声|尾聲|Epilogue", re.IGNORECASE)


def normalize_title(raw_heading: str) -> str:
    """Canonicalize a raw heading into its display form.

    Rules, first hit wins:
    1. "Chapter 12", "chapter.12 - The Storm" -> "Chapter 12"
    2. "第十二章 风起" -> "Chapter 12"
    3. prologue markers -> "Prologue"
    4. epilogue markers -> "Epilogue"
    5. anything else is returned unchanged.

    The Latin rule runs first so "Chapter 3" is never read as a CJK numeral.
    """
    title = raw_heading.strip()

    latin = _LATIN_CHAPTER_RE.match(title)
    if latin:
        return f"Chapter {latin.group(1)}"

    cjk = _CJK_CHAPTER_RE.match(title)
    if cjk:
        return f"Chapter {to_arabic(cjk.group(1))}"

    if _PROLOGUE_RE.search(title):
        return "Prologue"
    if _EPILOGUE_RE.search(title):
        return "Epilogue"

    return raw_heading
