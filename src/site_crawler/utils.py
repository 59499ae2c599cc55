"""Utility functions for site-crawler."""

import random
import time
from typing import List, Optional
from urllib.parse import urlparse
import logging


def setup_logging(level: str = 'INFO', log_file: Optional[str] = None):
    """
    Set up logging configuration.

    Args:
        level: Logging level ('DEBUG', 'INFO', 'WARNING', 'ERROR')
        log_file: Optional log file path
    """
    log_format = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=log_format,
        handlers=handlers
    )


def validate_url(url: str) -> bool:
    """
    Validate if string is an absolute URL.

    Args:
        url: URL string to validate

    Returns:
        True if valid URL, False otherwise
    """
    try:
        result = urlparse(url)
        return all([result.scheme, result.netloc])
    except ValueError:
        return False


def extract_domain(url: str) -> str:
    """Get the host part of a URL for per-domain storage."""
    try:
        host = urlparse(url).hostname
    except ValueError:
        host = None
    return host or 'unknown_domain'


def random_user_agent(user_agents: List[str]) -> str:
    """Pick a client identification string at random."""
    return random.choice(user_agents)


def random_delay(min_secs: float, max_secs: float) -> float:
    """
    Sleep for a random duration within a range.

    Args:
        min_secs: Lower bound in seconds
        max_secs: Upper bound in seconds

    Returns:
        Seconds actually slept
    """
    if max_secs < min_secs:
        min_secs, max_secs = max_secs, min_secs
    delay = random.uniform(min_secs, max_secs)
    time.sleep(delay)
    return delay


def format_duration(seconds: float) -> str:
    """
    Format duration to human readable string.

    Args:
        seconds: Duration in seconds

    Returns:
        Formatted string (e.g., '1h 30m 45s')
    """
    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    secs = int(seconds % 60)

    parts = []
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")
    if secs > 0 or not parts:
        parts.append(f"{secs}s")

    return ' '.join(parts)
