import pytest

from novel_kit.vocabulary.database import VocabularyDatabase
from novel_kit.vocabulary.targets import TargetWord, extract_target_words


@pytest.fixture
def vocabulary() -> VocabularyDatabase:
    return VocabularyDatabase.from_words(
        {
            1: ["the", "he", "cat", "sat", "filled"],
            2: ["walked", "into"],
            3: ["harbor", "lantern"],
            5: ["melancholy"],
        }
    )


class TestExtractTargetWords:
    def test_keeps_tiers_three_and_up(self, vocabulary: VocabularyDatabase) -> None:
        targets = extract_target_words("He walked into the harbor.", vocabulary)

        assert targets == [TargetWord(word="harbor", level=3)]

    def test_out_of_syllabus_lowercase_kept(self, vocabulary: VocabularyDatabase) -> None:
        targets = extract_target_words("the cat sat quietly", vocabulary)

        assert targets == [TargetWord(word="quietly", level=99)]

    def test_capitalized_unknown_words_skipped(self, vocabulary: VocabularyDatabase) -> None:
        """Names are skipped, including an unknown first word of the sentence."""
        targets = extract_target_words("Zhang walked into Beijing harbor", vocabulary)

        assert [t.word for t in targets] == ["harbor"]

    def test_capitalized_known_words_kept(self, vocabulary: VocabularyDatabase) -> None:
        targets = extract_target_words("Melancholy filled the harbor", vocabulary)

        assert targets == [
            TargetWord(word="Melancholy", level=5),
            TargetWord(word="harbor", level=3),
        ]

    def test_deduplicated_case_insensitively(self, vocabulary: VocabularyDatabase) -> None:
        targets = extract_target_words("Lantern lantern LANTERN harbor", vocabulary)

        assert [t.word for t in targets] == ["Lantern", "harbor"]

    def test_first_occurrence_order(self, vocabulary: VocabularyDatabase) -> None:
        targets = extract_target_words("lantern, harbor, lantern", vocabulary)

        assert [t.word for t in targets] == ["lantern", "harbor"]

    def test_custom_irregular_table(self, vocabulary: VocabularyDatabase) -> None:
        irregular = {"lanterns": "lantern", "harbours": "harbor"}

        targets = extract_target_words("the harbours were dark", vocabulary, irregular)

        assert targets == [
            TargetWord(word="harbours", level=3),
            TargetWord(word="were", level=99),
            TargetWord(word="dark", level=99),
        ]

    def test_single_letters_ignored(self, vocabulary: VocabularyDatabase) -> None:
        assert extract_target_words("a b c", vocabulary) == []
