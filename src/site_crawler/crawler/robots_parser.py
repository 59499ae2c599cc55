"""Informational robots.txt reader."""

from typing import Dict, List, Optional
import logging

from site_crawler.fetcher import Fetcher


class RobotsParser:
    """Reports robots.txt rules; never gates the crawlers."""

    def __init__(self, fetcher: Fetcher):
        """Initialize robots parser."""
        self.fetcher = fetcher
        self.robots_cache: Dict[str, Optional[str]] = {}
        self.logger = logging.getLogger(self.__class__.__name__)

    def _get_robots_url(self, base_url: str) -> str:
        """Get robots.txt URL for a site base URL."""
        return f"{base_url.rstrip('/')}/robots.txt"

    def fetch_robots(self, base_url: str) -> Optional[str]:
        """
        Fetch robots.txt text for a site.

        Args:
            base_url: Website base URL

        Returns:
            File contents, or None if it could not be read
        """
        robots_url = self._get_robots_url(base_url)

        if robots_url in self.robots_cache:
            return self.robots_cache[robots_url]

        fetched = self.fetcher.fetch(robots_url)
        if fetched.error is not None:
            self.logger.warning(f"Failed to fetch robots.txt from {robots_url}: {fetched.error.message}")
            text = None
        elif not fetched.ok:
            self.logger.info(f"No robots.txt found at {robots_url} (status {fetched.status_code})")
            text = None
        else:
            text = fetched.body

        self.robots_cache[robots_url] = text
        return text

    def get_disallowed_paths(self, base_url: str) -> List[str]:
        """
        Get disallowed paths from robots.txt.

        One entry per ``Disallow`` line in file order; a directive with
        no value is reported as ``/``.

        Args:
            base_url: Website base URL

        Returns:
            List of disallowed path values
        """
        text = self.fetch_robots(base_url)
        if not text:
            return []

        disallowed = []
        for line in text.splitlines():
            if not line.startswith('Disallow'):
                continue

            _, sep, value = line.partition(': ')
            path = value.strip() if sep else ''
            disallowed.append(path or '/')

        for path in disallowed:
            self.logger.info(f"Disallowed path found: {path}")

        return disallowed
