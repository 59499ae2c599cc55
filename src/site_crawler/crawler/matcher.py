"""Stopping predicate for the phrase-gated crawler."""


def should_scrape_content(content: str, target_phrase: str) -> bool:
    """Case-sensitive substring check; no normalization."""
    return target_phrase in content
