"""Depth-first crawler that expands every page it can read."""

from site_crawler.crawler.base_crawler import BaseCrawler, CrawlResult
from site_crawler.crawler.frontier import Frontier


class RecursiveCrawler(BaseCrawler):
    """Crawler that follows every reachable link, depth-first.

    Has no depth limit: a run ends when no unvisited URL is reachable,
    when ``max_pages`` is hit, or when ``stop()`` is called. Each page is
    handed to the sink before its links are explored.
    """

    def crawl(self, start_url: str) -> CrawlResult:
        """
        Crawl website using depth-first expansion.

        Args:
            start_url: URL to start crawling from

        Returns:
            CrawlResult containing visited URLs and statistics
        """
        self.reset()

        result = CrawlResult(start_url=start_url)

        # Explicit work stack in place of recursion
        stack = Frontier(lifo=True, entries=[(start_url, 0)])

        while stack:
            if self._stop_requested:
                self.logger.info("Stop requested, leaving remaining links unexplored")
                break

            if self._page_limit_reached():
                self.logger.info(f"Reached max pages limit ({self.traversal.max_pages})")
                break

            current_url, depth = stack.pop()

            if not self.visited.mark(current_url):
                continue

            self.logger.info(f"Scraping {current_url} (depth: {depth})")
            body = self._fetch_page(current_url, result)
            if body is None:
                continue

            self._run_sink(current_url, body, result)

            links = self._extract_links(body, current_url, result)

            # Reverse so the smallest link is popped first
            children = [link for link in sorted(links) if self._should_enqueue(link)]
            for link in reversed(children):
                stack.push(link, depth + 1)

            self.logger.debug(f"Found {len(links)} links on {current_url}")

        self._finish(result)

        self.logger.info(
            f"Recursive crawl completed: {len(result.visited_urls)} visited, "
            f"{len(result.failed_urls)} failed, "
            f"duration: {result.duration:.2f}s"
        )

        return result
