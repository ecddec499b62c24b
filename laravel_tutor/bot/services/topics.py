from typing import List, Optional

from bot.config import TOPICS


def filter_topics(search_term: str, topics: List[str] = TOPICS) -> List[str]:
    """Case-insensitive substring search over the topic list."""
    term = search_term.strip().lower()
    return [topic for topic in topics if term in topic.lower()]


def next_topic(topic: str, topics: List[str] = TOPICS) -> Optional[str]:
    """Topic after the given one, or None for the last (or an unknown) topic."""
    if topic not in topics:
        return None
    index = topics.index(topic)
    if index < len(topics) - 1:
        return topics[index + 1]
    return None
