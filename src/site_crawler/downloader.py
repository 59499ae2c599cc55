"""Media download for the content sink."""

import time
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse, unquote
import logging

from curl_cffi import requests

from site_crawler.config import Config
from site_crawler.models import ErrorKind, PageError
from site_crawler.utils import random_user_agent


class DownloadManager:
    """Downloads referenced media files into per-domain storage."""

    def __init__(self, config: Config, session: Optional[requests.Session] = None):
        """Initialize download manager."""
        self.config = config
        self.session = session or self._create_session()
        self.logger = logging.getLogger(self.__class__.__name__)

    def _create_session(self) -> requests.Session:
        """Initialize curl-cffi session for downloads."""
        return requests.Session(
            impersonate=self.config.scraper_config.browser_profile,
            timeout=self.config.scraper_config.timeout,
            verify=self.config.scraper_config.verify_ssl
        )

    @staticmethod
    def filename_for(url: str, default: str) -> str:
        """Last path segment of a URL, or default if it has none."""
        name = unquote(urlparse(url).path.rstrip('/').rsplit('/', 1)[-1])
        return name or default

    def download_file(self, url: str, output_path: Path) -> Optional[PageError]:
        """
        Download a single file.

        Args:
            url: Media URL
            output_path: Destination file

        Returns:
            None on success, otherwise the failure
        """
        start_time = time.time()
        headers = {}
        if self.config.scraper_config.user_agents:
            headers['User-Agent'] = random_user_agent(self.config.scraper_config.user_agents)

        try:
            response = self.session.get(url, headers=headers)
        except Exception as e:
            return PageError(url=url, kind=ErrorKind.NETWORK, message=f"Failed to make request: {e}")

        if not 200 <= response.status_code < 300:
            return PageError(
                url=url,
                kind=ErrorKind.HTTP,
                message="Failed to download media",
                status_code=response.status_code
            )

        try:
            content = response.content
        except Exception as e:
            return PageError(url=url, kind=ErrorKind.BODY_READ, message=f"Failed to read bytes: {e}")

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, 'wb') as f:
                f.write(content)
        except OSError as e:
            return PageError(url=url, kind=ErrorKind.SINK, message=f"Failed to write '{output_path}': {e}")

        self.logger.info(
            f"Saved {url} to {output_path} ({len(content)} bytes, {time.time() - start_time:.1f}s)"
        )
        return None

    def close(self):
        """Close the download session."""
        if self.session:
            self.session.close()
