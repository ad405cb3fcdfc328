# src/novel_kit/parsers/base.py

from abc import ABC, abstractmethod

from .models import Chapter


class NovelParser(ABC):
    @abstractmethod
    def parse(self, text: str) -> list[Chapter]:
        """
        Split decoded text into an ordered list of chapters.

        Requirements:
        - Deterministic output for same input
        - Never raises on malformed input; unknown lines become plain segments
        - Segment ids are unique and increasing across the whole document
        """
        raise NotImplementedError
