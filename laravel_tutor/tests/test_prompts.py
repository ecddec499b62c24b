"""Tests for request building and response schemas."""
from bot.llm.prompts import build_feedback_request, build_lesson_request, build_placement_quiz_request
from bot.llm.schemas import LESSON_SCHEMA, PLACEMENT_QUIZ_SCHEMA, build_lesson_schema


class TestLessonRequest:

    def test_prompt_mentions_topic_and_parts(self):
        request = build_lesson_request("Eloquent ORM")

        assert '"Eloquent ORM"' in request.prompt
        assert "Laravel" in request.prompt
        assert "fill-in-the-blanks" in request.prompt
        assert "7 multiple-choice questions" in request.prompt
        assert "expert Laravel tutor" in request.system_instruction

    def test_carries_lesson_schema(self):
        request = build_lesson_request("Routing")

        assert request.schema_name == "lesson"
        assert set(request.schema["required"]) >= {
            "explanation", "interactiveCodeExample", "interviewQuestion", "quiz",
        }

    def test_subject_is_configurable(self):
        request = build_lesson_request("Routing", subject="Symfony")

        assert "Symfony" in request.prompt
        assert "Symfony" in request.system_instruction


class TestPlacementQuizRequest:

    def test_prompt(self):
        request = build_placement_quiz_request()

        assert "exactly 10" in request.prompt
        assert "Routing, Eloquent ORM, Blade Templates, Controllers, and Middleware" in request.prompt
        assert "4 options" in request.prompt
        assert "JSON array" in request.system_instruction

    def test_schema_is_array_of_questions(self):
        request = build_placement_quiz_request()

        assert request.schema is PLACEMENT_QUIZ_SCHEMA
        assert request.schema["type"] == "array"
        assert request.schema_name == "placement_quiz"


class TestFeedbackRequest:

    def test_free_text_request(self):
        request = build_feedback_request("What is a service container?", "A DI registry")

        assert request.schema is None
        assert '"What is a service container?"' in request.prompt
        assert '"A DI registry"' in request.prompt
        assert "(2-4 sentences)" in request.prompt
        assert "Start with a positive note" in request.prompt
        assert "Do not provide a sample answer" in request.prompt


class TestSchemas:

    def test_default_lesson_schema_is_laravel(self):
        assert LESSON_SCHEMA == build_lesson_schema("Laravel")

    def test_building_for_other_subject_does_not_touch_default(self):
        before = repr(LESSON_SCHEMA)
        build_lesson_schema("Django")
        assert repr(LESSON_SCHEMA) == before
