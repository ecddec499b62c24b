"""Tests for quiz scoring and topic navigation."""
import pytest

from bot.config import TOPICS
from bot.models import QuizQuestion
from bot.services.quiz_scoring import pick_bracket, score_quiz
from bot.services.topics import filter_topics, next_topic


def question(correct="B"):
    return QuizQuestion(question="Q?", options=["A", "B", "C", "D"], correct_answer=correct)


class TestScoreQuiz:

    def test_all_correct(self):
        result = score_quiz([question()] * 7, ["B"] * 7)
        assert (result.score, result.total) == (7, 7)
        assert result.percentage == 100
        assert result.icon == "🏆"

    def test_partial(self):
        result = score_quiz([question()] * 10, ["B"] * 7 + ["A"] * 3)
        assert result.score == 7
        assert result.percentage == pytest.approx(70.0)
        assert result.message == "Great job! You have a solid understanding."

    def test_unanswered_questions_count_as_wrong(self):
        result = score_quiz([question()] * 4, ["B"])
        assert result.score == 1
        assert result.percentage == 25.0

    def test_empty_quiz(self):
        result = score_quiz([], [])
        assert result.total == 0
        assert result.percentage == 0.0

    @pytest.mark.parametrize("percentage, icon", [
        (100, "🏆"),
        (99.9, "🧠"),
        (70, "🧠"),
        (50, "💡"),
        (49, "📖"),
        (0, "📖"),
    ])
    def test_brackets(self, percentage, icon):
        assert pick_bracket(percentage)[1] == icon


class TestTopics:

    def test_filter_is_case_insensitive(self):
        assert "Routing" in filter_topics("rOUT")
        assert "Eloquent ORM" in filter_topics("eloquent")

    def test_filter_no_match(self):
        assert filter_topics("kubernetes") == []

    def test_filter_empty_term_returns_all(self):
        assert filter_topics("  ") == TOPICS

    def test_next_topic(self):
        assert next_topic(TOPICS[0]) == TOPICS[1]

    def test_next_topic_at_end_or_unknown(self):
        assert next_topic(TOPICS[-1]) is None
        assert next_topic("Not a topic") is None
