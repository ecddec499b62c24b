"""JSON schemas sent to the provider as structured-output constraints."""
import copy

QUIZ_QUESTION_SCHEMA = {
    "type": "object",
    "properties": {
        "question": {
            "type": "string",
            "description": "A multiple-choice question about the topic.",
        },
        "options": {
            "type": "array",
            "items": {"type": "string"},
            "description": "An array of 4 possible answers for the question.",
        },
        "correctAnswer": {
            "type": "string",
            "description": "The correct answer from the provided options.",
        },
    },
    "required": ["question", "options", "correctAnswer"],
}

INTERACTIVE_CODE_EXAMPLE_SCHEMA = {
    "type": "object",
    "properties": {
        "setupCode": {
            "type": "string",
            "description": (
                "The initial part of the code example that sets the context. "
                "This code will be displayed as static text. Can be empty."
            ),
        },
        "interactiveCode": {
            "type": "string",
            "description": (
                "The part of the code with placeholders for the user to fill in. "
                "Use placeholders like [[BLANK_1]], [[BLANK_2]], etc. for the parts "
                "the user needs to complete."
            ),
        },
        "solution": {
            "type": "array",
            "items": {"type": "string"},
            "description": (
                "An array of strings that are the correct answers for the corresponding "
                "blanks in 'interactiveCode'. E.g., the first string is the solution for [[BLANK_1]]."
            ),
        },
        "explanation": {
            "type": "string",
            "description": (
                "A brief explanation of what the complete code does. This will be shown "
                "after the user solves the interactive part. Use markdown for formatting."
            ),
        },
    },
    "required": ["setupCode", "interactiveCode", "solution", "explanation"],
}


def build_lesson_schema(subject: str) -> dict:
    """Lesson schema with the subject name filled into the descriptions."""
    code_example = copy.deepcopy(INTERACTIVE_CODE_EXAMPLE_SCHEMA)
    code_example["description"] = (
        f"A relevant and simple interactive code example for the {subject} topic. "
        "It should be a fill-in-the-blanks exercise."
    )
    return {
        "type": "object",
        "properties": {
            "explanation": {
                "type": "string",
                "description": (
                    f"A clear and concise explanation of the {subject} topic, suitable "
                    "for a beginner. Use markdown for formatting."
                ),
            },
            "interactiveCodeExample": code_example,
            "interviewQuestion": {
                "type": "object",
                "properties": {
                    "question": {
                        "type": "string",
                        "description": "A potential interview question about the topic to test deep understanding.",
                    },
                    "sampleAnswer": {
                        "type": "string",
                        "description": "An ideal, expert-level answer to the interview question. Use markdown for formatting.",
                    },
                },
                "required": ["question", "sampleAnswer"],
            },
            "quiz": {
                "type": "array",
                "description": "An array of exactly 7 multiple-choice quiz questions based on the explanation and code example.",
                "items": QUIZ_QUESTION_SCHEMA,
            },
        },
        "required": ["explanation", "interactiveCodeExample", "interviewQuestion", "quiz"],
    }


LESSON_SCHEMA = build_lesson_schema("Laravel")

PLACEMENT_QUIZ_SCHEMA = {
    "type": "array",
    "description": "An array of exactly 10 multiple-choice quiz questions.",
    "items": QUIZ_QUESTION_SCHEMA,
}
