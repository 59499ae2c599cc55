"""Base crawler interface and common functionality."""

from abc import ABC, abstractmethod
from typing import Set, List, Optional, Dict, Callable
from dataclasses import dataclass, field
from urllib.parse import urlparse
from datetime import datetime
import logging

from lxml import etree

from site_crawler.config import Config
from site_crawler.error_log import ErrorLog, NullErrorLog
from site_crawler.fetcher import Fetcher, FetchResult
from site_crawler.models import ErrorKind, PageError, TraversalConfig
from site_crawler.sink import NullSink, PageSink
from site_crawler.crawler.frontier import VisitedSet
from site_crawler.crawler.links import links_from_tree, parse_document


@dataclass
class CrawlResult:
    """Result of a crawling operation."""
    start_url: str
    visited_urls: List[str] = field(default_factory=list)
    failed_urls: Dict[str, str] = field(default_factory=dict)
    matched_urls: List[str] = field(default_factory=list)
    errors: List[PageError] = field(default_factory=list)
    pages_fetched: int = 0
    expansion_waves: int = 0
    stopped: bool = False
    start_time: datetime = field(default_factory=datetime.now)
    end_time: Optional[datetime] = None

    @property
    def duration(self) -> float:
        """Get crawl duration in seconds."""
        if self.end_time:
            return (self.end_time - self.start_time).total_seconds()
        return 0

    @property
    def scraped_urls(self) -> List[str]:
        """Visited URLs whose page was fetched and read successfully."""
        return [url for url in self.visited_urls if url not in self.failed_urls]

    @property
    def success_rate(self) -> float:
        """Calculate success rate of crawled URLs."""
        if not self.visited_urls:
            return 0.0
        return len(self.scraped_urls) / len(self.visited_urls)


class BaseCrawler(ABC):
    """Abstract base class for web crawlers."""

    def __init__(
        self,
        config: Config,
        fetcher: Optional[Fetcher] = None,
        sink: Optional[PageSink] = None,
        error_log: Optional[ErrorLog] = None,
        traversal: Optional[TraversalConfig] = None,
        url_filter: Optional[Callable[[str], bool]] = None
    ):
        """
        Initialize base crawler.

        Args:
            config: Application configuration
            fetcher: HTTP fetcher to use (creates new if None)
            sink: Collaborator receiving every scraped page
            error_log: Append-only failure log (discards if None)
            traversal: Traversal settings (defaults to config.traversal)
            url_filter: Custom URL filter function
        """
        self.config = config
        self.fetcher = fetcher or Fetcher(config)
        self.sink = sink or NullSink()
        self.error_log = error_log or NullErrorLog()
        self.traversal = traversal or config.traversal
        self.url_filter = url_filter

        self.visited = VisitedSet()
        self._stop_requested = False

        self.logger = logging.getLogger(self.__class__.__name__)

    def _in_scope(self, url: str) -> bool:
        """Check if a discovered URL may be enqueued."""
        try:
            parsed = urlparse(url)
        except ValueError:
            return False

        if parsed.scheme not in ('http', 'https') or not parsed.netloc:
            return False

        if self.traversal.allowed_domains:
            domain = (parsed.hostname or '').lower()
            if not any(domain == allowed.lower() or domain.endswith('.' + allowed.lower())
                       for allowed in self.traversal.allowed_domains):
                return False

        if self.url_filter and not self.url_filter(url):
            return False

        return True

    def _should_enqueue(self, url: str) -> bool:
        return url not in self.visited and self._in_scope(url)

    def _page_limit_reached(self) -> bool:
        return 0 <= self.traversal.max_pages <= len(self.visited)

    def _record_error(self, result: CrawlResult, error: PageError):
        """Keep a failure on the result, in the logs and in the error log."""
        result.errors.append(error)
        result.failed_urls.setdefault(error.url, error.message)
        self.logger.warning(error.format_line())
        self.error_log.record(error)

    def _fetch_page(self, url: str, result: CrawlResult,
                    headers: Optional[Dict[str, str]] = None) -> Optional[str]:
        """Fetch a page; returns its body or None after recording why not."""
        fetched: FetchResult = self.fetcher.fetch(url, headers=headers)
        result.pages_fetched += 1

        failure = fetched.failure
        if failure is not None:
            self._record_error(result, failure)
            return None

        return fetched.body

    def _extract_links(self, body: str, url: str, result: CrawlResult) -> Set[str]:
        """Extract links, recording a parse error instead of raising."""
        try:
            tree = parse_document(body)
        except (etree.ParserError, ValueError) as e:
            self._record_error(result, PageError(url=url, kind=ErrorKind.PARSE, message=str(e)))
            return set()

        return links_from_tree(tree, url)

    def _run_sink(self, url: str, body: str, result: CrawlResult):
        """Hand a page to the sink; its failures never stop traversal."""
        try:
            for error in self.sink.process_page(url, body) or []:
                result.errors.append(error)
                self.error_log.record(error)
        except Exception as e:
            error = PageError(url=url, kind=ErrorKind.SINK, message=str(e))
            result.errors.append(error)
            self.logger.warning(error.format_line())
            self.error_log.record(error)

    def _finish(self, result: CrawlResult) -> CrawlResult:
        result.visited_urls = self.visited.in_order()
        result.stopped = self._stop_requested
        result.end_time = datetime.now()
        return result

    def stop(self):
        """Ask a running crawl to return after the current page."""
        self._stop_requested = True

    @abstractmethod
    def crawl(self, start_url: str, *args, **kwargs) -> CrawlResult:
        """
        Crawl website starting from given URL.

        Args:
            start_url: URL to start crawling from

        Returns:
            CrawlResult containing visited URLs and statistics
        """
        pass

    def reset(self):
        """Reset crawler state for new crawl."""
        self.visited.clear()
        self._stop_requested = False
