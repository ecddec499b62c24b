"""Configuration settings using pydantic-settings."""
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Telegram Bot
    BOT_TOKEN: str = Field(..., min_length=1, description="Telegram Bot API token")

    # Content provider (any OpenAI-compatible endpoint)
    LLM_API_KEY: str = Field(..., min_length=1, description="API key for the content provider")
    LLM_BASE_URL: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta/openai/",
        description="Base URL of the OpenAI-compatible API",
    )
    LLM_MODEL: str = Field(default="gemini-2.5-flash", description="Model used for lesson content")
    LLM_TIMEOUT: float = Field(default=60.0, description="Provider request timeout in seconds")
    LLM_MAX_ATTEMPTS: int = Field(default=3, description="Maximum attempts per provider call")
    LLM_INITIAL_DELAY_MS: int = Field(
        default=1000,
        description="Delay before the first retry, doubled on every further retry"
    )

    # Course
    SUBJECT: str = Field(default="Laravel", description="Framework or language being taught")

    # Logging
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )

    class Config:
        """Pydantic config."""
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"
        str_strip_whitespace = True


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance. Raises ValidationError if required values are missing."""
    return Settings()


TOPICS = [
    "Introduction to Laravel",
    "Installation & Setup",
    "Directory Structure",
    "Routing",
    "Middleware",
    "CSRF Protection",
    "Controllers",
    "Requests",
    "Responses",
    "Views",
    "Blade Templates",
    "URL Generation",
    "Session",
    "Validation",
    "Error Handling",
    "Logging",
    "Artisan Console",
    "Database: Getting Started",
    "Database: Query Builder",
    "Database: Migrations",
    "Database: Seeding",
    "Eloquent ORM",
    "Eloquent: Relationships",
    "Eloquent: Collections",
    "Eloquent: Mutators & Casting",
    "Eloquent: API Resources",
    "Authentication",
    "Authorization",
    "Events",
    "Queues",
    "Task Scheduling",
    "Mail",
    "Notifications",
    "File Storage",
    "Caching",
    "Testing: Getting Started",
    "HTTP Tests",
]

PLACEMENT_SUBTOPICS = ["Routing", "Eloquent ORM", "Blade Templates", "Controllers", "Middleware"]

LESSON_QUIZ_SIZE = 7
PLACEMENT_QUIZ_SIZE = 10

# Minimum quiz score (percent) that unlocks the "Next lesson" button
NEXT_LESSON_THRESHOLD = 70
