"""Web crawler module for URL discovery and site traversal."""

from .base_crawler import BaseCrawler, CrawlResult
from .bfs_crawler import PhraseCrawler
from .dfs_crawler import RecursiveCrawler
from .frontier import Frontier, VisitedSet
from .links import extract_links, normalize_link
from .matcher import should_scrape_content
from .robots_parser import RobotsParser

__all__ = [
    'BaseCrawler',
    'CrawlResult',
    'PhraseCrawler',
    'RecursiveCrawler',
    'Frontier',
    'VisitedSet',
    'RobotsParser',
    'extract_links',
    'normalize_link',
    'should_scrape_content'
]
