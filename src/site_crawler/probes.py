"""Standalone probes run before a crawl; none of them affect traversal."""

from typing import Dict, List, Optional, Tuple
import logging

from site_crawler.fetcher import Fetcher

logger = logging.getLogger(__name__)

COMMON_DIRECTORIES = ['/backup', '/config', '/logs', '/uploads']


def check_open_directories(base_url: str, fetcher: Fetcher,
                           directories: Optional[List[str]] = None) -> List[str]:
    """
    Request common sensitive paths and report those that answer 2xx.

    Args:
        base_url: Website base URL
        fetcher: Fetcher used for the requests
        directories: Paths to try (defaults to COMMON_DIRECTORIES)

    Returns:
        Full URLs that responded successfully
    """
    found = []
    for directory in directories or COMMON_DIRECTORIES:
        full_url = f"{base_url.rstrip('/')}{directory}"
        fetched = fetcher.fetch(full_url)
        if fetched.ok:
            logger.info(f"Open directory found: {full_url}")
            found.append(full_url)
        elif fetched.error is not None:
            logger.debug(f"Probe of {full_url} failed: {fetched.error.message}")
    return found


def fetch_with_cookies(url: str, fetcher: Fetcher) -> Tuple[Optional[int], Dict[str, str]]:
    """
    Fetch a page once and report its status and the cookies it sets.

    Returns:
        (status code or None on transport failure, cookies by name)
    """
    fetched = fetcher.fetch(url)
    if fetched.error is not None and fetched.status_code is None:
        logger.warning(f"Cookie probe of {url} failed: {fetched.error.message}")
        return None, {}

    cookies = fetched.cookies or {}
    logger.info(f"Response status: {fetched.status_code} ({len(cookies)} cookies)")
    return fetched.status_code, cookies
