"""Full scraping workflow: probes, recursive crawl, politeness delay."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional
import logging

from site_crawler.config import Config
from site_crawler.crawler import PhraseCrawler, RecursiveCrawler, RobotsParser
from site_crawler.crawler.base_crawler import CrawlResult
from site_crawler.error_log import ErrorLog
from site_crawler.fetcher import Fetcher
from site_crawler.models import TraversalConfig
from site_crawler.probes import check_open_directories, fetch_with_cookies
from site_crawler.sink import ContentSink, NullSink, PageSink
from site_crawler.utils import random_delay


@dataclass
class WorkflowReport:
    """Everything one `Scraper.run` found."""
    url: str
    disallowed_paths: List[str] = field(default_factory=list)
    open_directories: List[str] = field(default_factory=list)
    status_code: Optional[int] = None
    cookies: Dict[str, str] = field(default_factory=dict)
    crawl: Optional[CrawlResult] = None
    delay: float = 0.0


class Scraper:
    """Wires fetcher, sinks and crawlers together from one Config."""

    def __init__(self, config: Config, fetcher: Optional[Fetcher] = None,
                 sink: Optional[PageSink] = None, error_log: Optional[ErrorLog] = None):
        """Initialize the scraper."""
        self.config = config
        self.fetcher = fetcher or Fetcher(config)
        self.error_log = error_log or ErrorLog(config.sink.error_log)
        self.sink = sink if sink is not None else self._create_sink()
        self.robots_parser = RobotsParser(self.fetcher)
        self.logger = logging.getLogger(self.__class__.__name__)

    def _create_sink(self) -> ContentSink:
        return ContentSink(self.config, fetcher=self.fetcher)

    def recursive_crawler(self, traversal: Optional[TraversalConfig] = None,
                          scrape_content: bool = True) -> RecursiveCrawler:
        return RecursiveCrawler(
            self.config,
            fetcher=self.fetcher,
            sink=self.sink if scrape_content else NullSink(),
            error_log=self.error_log,
            traversal=traversal
        )

    def phrase_crawler(self, traversal: Optional[TraversalConfig] = None,
                       scrape_content: bool = False) -> PhraseCrawler:
        return PhraseCrawler(
            self.config,
            fetcher=self.fetcher,
            sink=self.sink if scrape_content else NullSink(),
            error_log=self.error_log,
            traversal=traversal
        )

    def crawl(self, url: str, traversal: Optional[TraversalConfig] = None,
              scrape_content: bool = True) -> CrawlResult:
        """Scrape every page reachable from url."""
        return self.recursive_crawler(traversal, scrape_content).crawl(url)

    def search(self, url: str, target_phrase: str,
               traversal: Optional[TraversalConfig] = None,
               scrape_content: bool = False) -> CrawlResult:
        """Follow links only out of pages that contain target_phrase."""
        return self.phrase_crawler(traversal, scrape_content).crawl(url, target_phrase)

    def run(self, url: str, delay: bool = True) -> WorkflowReport:
        """
        Run the whole workflow against a site.

        Reads robots.txt, probes common directories, fetches the seed once
        to report cookies, crawls recursively, then sleeps for a random
        politeness delay.

        Args:
            url: Site base URL
            delay: Whether to sleep after the crawl

        Returns:
            WorkflowReport with all findings
        """
        self.logger.info(f"Starting scraping workflow for {url}")
        report = WorkflowReport(url=url)

        report.disallowed_paths = self.robots_parser.get_disallowed_paths(url)
        report.open_directories = check_open_directories(url, self.fetcher)
        report.status_code, report.cookies = fetch_with_cookies(url, self.fetcher)

        report.crawl = self.crawl(url)

        if delay:
            low, high = self.config.scraper_config.politeness_delay
            report.delay = random_delay(low, high)

        self.logger.info(f"Scraping workflow completed for {url}")
        return report

    def close(self):
        """Close network sessions."""
        if isinstance(self.sink, ContentSink):
            self.sink.close()
        self.fetcher.close()
