"""
site-crawler: a polite recursive web crawler.

This module provides both a CLI interface and a scriptable API for walking a
site from a seed URL, either following every link depth-first or following
only pages that contain a target phrase, breadth-first.
"""

from site_crawler.config import Config, load_config
from site_crawler.crawler import (
    CrawlResult, PhraseCrawler, RecursiveCrawler,
    extract_links, normalize_link, should_scrape_content
)
from site_crawler.error_log import ErrorLog
from site_crawler.fetcher import Fetcher, FetchResult
from site_crawler.models import (
    BrowserProfile, DepthMode, ErrorKind, PageError,
    ScraperConfig, SinkConfig, TraversalConfig
)
from site_crawler.scraper import Scraper, WorkflowReport
from site_crawler.sink import ContentSink, NullSink

__version__ = "0.1.0"

__all__ = [
    # Main classes
    'Scraper',
    'Config',
    'Fetcher',
    'RecursiveCrawler',
    'PhraseCrawler',
    'ContentSink',
    'NullSink',
    'ErrorLog',

    # Models
    'CrawlResult',
    'FetchResult',
    'WorkflowReport',
    'PageError',
    'ErrorKind',
    'DepthMode',
    'BrowserProfile',
    'ScraperConfig',
    'SinkConfig',
    'TraversalConfig',

    # Functions
    'load_config',
    'extract_links',
    'normalize_link',
    'should_scrape_content',
    'create_scraper',
    'quick_crawl'
]


def create_scraper(config_path: str = None) -> Scraper:
    """
    Create a configured scraper instance.

    Args:
        config_path: Path to configuration file

    Returns:
        Configured Scraper instance

    Example:
        >>> scraper = create_scraper()
        >>> result = scraper.crawl('https://example.com')
    """
    return Scraper(load_config(config_path))


def quick_crawl(url: str, target_phrase: str = None, max_depth: int = 3) -> CrawlResult:
    """
    Quick crawl function for simple use cases.

    Args:
        url: Seed URL
        target_phrase: If given, only expand pages containing it
        max_depth: Expansion limit for phrase-gated crawling

    Returns:
        CrawlResult with visited URLs and errors

    Example:
        >>> result = quick_crawl('https://example.com', 'Example Domain')
        >>> print(result.matched_urls)
    """
    scraper = create_scraper()

    try:
        if target_phrase is None:
            return scraper.crawl(url)
        traversal = scraper.config.traversal.with_updates(max_depth=max_depth)
        return scraper.search(url, target_phrase, traversal)
    finally:
        scraper.close()
