"""Shared fixtures: an in-memory web and a config that ignores local files."""

from typing import Dict, List, Optional, Tuple, Union

import pytest

from site_crawler.config import Config
from site_crawler.fetcher import FetchResult
from site_crawler.models import ErrorKind, PageError

Page = Union[str, Tuple[int, str]]


class FakeFetcher:
    """Serves pages from a dict; unknown URLs fail like a refused connection."""

    def __init__(self, pages: Dict[str, Page], cookies: Optional[Dict[str, str]] = None):
        self.pages = pages
        self.cookies = cookies
        self.calls: List[str] = []
        self.headers: List[Optional[Dict[str, str]]] = []
        self.closed = False

    def fetch(self, url: str, headers: Optional[Dict[str, str]] = None) -> FetchResult:
        self.calls.append(url)
        self.headers.append(headers)

        page = self.pages.get(url)
        if page is None:
            return FetchResult(
                url=url,
                error=PageError(url=url, kind=ErrorKind.NETWORK, message="connection refused")
            )

        status, body = page if isinstance(page, tuple) else (200, page)
        return FetchResult(url=url, status_code=status, body=body, cookies=self.cookies)

    def close(self):
        self.closed = True


def links_page(*hrefs: str, text: str = "") -> str:
    anchors = "".join(f'<a href="{href}">{href}</a>' for href in hrefs)
    return f"<html><body><p>{text}</p>{anchors}</body></html>"


@pytest.fixture
def config(tmp_path, monkeypatch):
    for name in ('SITE_CRAWLER_TIMEOUT', 'SITE_CRAWLER_BROWSER', 'SITE_CRAWLER_VERIFY_SSL',
                 'SITE_CRAWLER_USER_AGENT', 'SITE_CRAWLER_MAX_DEPTH', 'SITE_CRAWLER_FOLLOW_LINKS',
                 'SITE_CRAWLER_OUTPUT_DIR', 'SITE_CRAWLER_ERROR_LOG'):
        monkeypatch.delenv(name, raising=False)

    cfg = Config(str(tmp_path / 'no-such-config.json'))
    cfg.sink.output_dir = tmp_path / 'scraped_data'
    cfg.sink.error_log = tmp_path / 'error.log'
    cfg.sink.scripts_dir = tmp_path / 'scraped_js'
    return cfg
