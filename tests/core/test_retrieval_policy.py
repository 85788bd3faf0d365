"""
Test suite for the retrieval decision policy.

System role: Verification of the search gate in front of embedding
"""

import pytest

from policy_chat.core.retrieval_policy import (
    FOLLOW_UP_PREFIXES,
    SKIP_RETRIEVAL_PHRASES,
    should_retrieve,
)


class TestShouldRetrieveGreetings:
    """Greeting and acknowledgment vocabulary."""

    @pytest.mark.parametrize("phrase", SKIP_RETRIEVAL_PHRASES)
    @pytest.mark.parametrize("suffix", ["", ".", "!"])
    @pytest.mark.parametrize("prior_turn_count", [0, 1, 12])
    def test_vocabulary_never_retrieves(self, phrase: str, suffix: str, prior_turn_count: int) -> None:
        assert should_retrieve(f"{phrase}{suffix}", prior_turn_count) is False

    def test_normalizes_case_and_whitespace(self) -> None:
        assert should_retrieve("  Thanks!  ", 0) is False
        assert should_retrieve("OK", 3) is False

    def test_phrase_with_extra_words_retrieves(self) -> None:
        assert should_retrieve("thanks, what is my deductible?", 0) is True

    def test_double_punctuation_retrieves(self) -> None:
        assert should_retrieve("thanks!!", 0) is True


class TestShouldRetrieveFollowUps:
    """Short follow-ups inside an ongoing conversation."""

    def test_short_follow_up_with_history_skips(self) -> None:
        assert should_retrieve("what about flood?", 2) is False

    def test_short_follow_up_without_history_retrieves(self) -> None:
        assert should_retrieve("what about flood?", 0) is True

    @pytest.mark.parametrize("prefix", FOLLOW_UP_PREFIXES)
    def test_long_follow_up_retrieves(self, prefix: str) -> None:
        # Arrange
        message = f"{prefix} the exclusions listed in the cyber endorsement"
        assert len(message) >= 25

        # Act / Assert
        assert should_retrieve(message, 4) is True

    def test_boundary_at_25_characters(self) -> None:
        # Arrange
        under = "how" + "x" * 21
        at = "how" + "x" * 22

        # Assert
        assert len(under) == 24 and should_retrieve(under, 1) is False
        assert len(at) == 25 and should_retrieve(at, 1) is True


class TestShouldRetrieveQuestions:
    def test_substantive_question_retrieves(self) -> None:
        assert should_retrieve("What are the coverage limits?", 0) is True

    def test_empty_message_retrieves(self) -> None:
        assert should_retrieve("", 0) is True
