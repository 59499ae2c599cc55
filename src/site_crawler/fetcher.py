"""Single-request HTTP fetcher built on curl-cffi."""

from dataclasses import dataclass
from typing import Optional, Dict
import logging

from curl_cffi import requests

from site_crawler.config import Config
from site_crawler.models import ErrorKind, PageError
from site_crawler.utils import random_user_agent


@dataclass
class FetchResult:
    """Outcome of one GET request."""
    url: str
    status_code: Optional[int] = None
    body: Optional[str] = None
    error: Optional[PageError] = None
    cookies: Optional[Dict[str, str]] = None

    @property
    def ok(self) -> bool:
        """True for a readable 2xx response."""
        return (
            self.error is None
            and self.status_code is not None
            and 200 <= self.status_code < 300
        )

    def http_error(self) -> Optional[PageError]:
        """Error record for a non-success status, if any."""
        if self.error is not None or self.ok:
            return None
        return PageError(
            url=self.url,
            kind=ErrorKind.HTTP,
            message="Non-success status",
            status_code=self.status_code
        )

    @property
    def failure(self) -> Optional[PageError]:
        """Whatever stopped this response from being usable."""
        return self.error or self.http_error()


class Fetcher:
    """Issues one GET per call; never retries."""

    def __init__(self, config: Config, session: Optional[requests.Session] = None):
        """Initialize fetcher."""
        self.config = config
        self.session = session or self._create_session()
        self.logger = logging.getLogger(self.__class__.__name__)

    def _create_session(self) -> requests.Session:
        """Create a new HTTP session with browser impersonation."""
        return requests.Session(
            impersonate=self.config.scraper_config.browser_profile,
            timeout=self.config.scraper_config.timeout,
            verify=self.config.scraper_config.verify_ssl
        )

    def _build_headers(self, headers: Optional[Dict[str, str]]) -> Dict[str, str]:
        merged = dict(headers or {})
        if not any(name.lower() == 'user-agent' for name in merged):
            user_agents = self.config.scraper_config.user_agents
            if user_agents:
                merged['User-Agent'] = random_user_agent(user_agents)
        return merged

    def fetch(self, url: str, headers: Optional[Dict[str, str]] = None) -> FetchResult:
        """
        Fetch a URL once.

        Args:
            url: Absolute URL to request
            headers: Extra headers merged over the session defaults

        Returns:
            FetchResult carrying status and body, or an error record
        """
        try:
            response = self.session.get(url, headers=self._build_headers(headers))
        except Exception as e:
            self.logger.debug(f"Request to {url} failed: {e}")
            return FetchResult(
                url=url,
                error=PageError(url=url, kind=ErrorKind.NETWORK, message=str(e))
            )

        result = FetchResult(url=url, status_code=response.status_code)

        try:
            result.body = response.text
        except Exception as e:
            self.logger.debug(f"Failed to read body of {url}: {e}")
            result.error = PageError(
                url=url,
                kind=ErrorKind.BODY_READ,
                message=str(e),
                status_code=response.status_code
            )
            return result

        if response.cookies:
            result.cookies = {k: v for k, v in response.cookies.items()}

        return result

    def close(self):
        """Close the underlying session."""
        if self.session:
            self.session.close()
