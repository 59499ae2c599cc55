"""Breadth-first crawler gated by a target phrase."""

from site_crawler.models import DepthMode
from site_crawler.crawler.base_crawler import BaseCrawler, CrawlResult
from site_crawler.crawler.frontier import Frontier
from site_crawler.crawler.matcher import should_scrape_content


class PhraseCrawler(BaseCrawler):
    """Crawler that only follows links out of pages containing a phrase.

    In the default ``wave`` depth mode a single counter is shared by the
    whole run and advances once for every page whose links get enqueued,
    so ``max_depth`` bounds the number of expanding pages rather than the
    graph distance from the seed. ``per_url`` mode compares each entry's
    own distance from the seed instead.
    """

    def crawl(self, start_url: str, target_phrase: str) -> CrawlResult:
        """
        Crawl website using phrase-gated BFS.

        Args:
            start_url: URL to start crawling from
            target_phrase: Case-sensitive phrase a page must contain
                for its links to be followed

        Returns:
            CrawlResult containing visited and matched URLs
        """
        self.reset()

        result = CrawlResult(start_url=start_url)
        traversal = self.traversal
        per_url = traversal.depth_mode == DepthMode.PER_URL

        headers = {'User-Agent': traversal.user_agent} if traversal.user_agent else None

        queue = Frontier(entries=[(start_url, 0)])
        current_depth = 0

        while queue:
            if self._stop_requested:
                self.logger.info("Stop requested, leaving frontier undrained")
                break

            if self._page_limit_reached():
                self.logger.info(f"Reached max pages limit ({traversal.max_pages})")
                break

            current_url, url_depth = queue.pop()

            if not self.visited.mark(current_url):
                continue

            self.logger.info(f"Visiting {current_url}")
            body = self._fetch_page(current_url, result, headers=headers)
            if body is None:
                continue

            if not should_scrape_content(body, target_phrase):
                self.logger.info(f"Target phrase not found in {current_url}")
                continue

            self.logger.info(f"Target phrase found in {current_url}")
            result.matched_urls.append(current_url)
            self._run_sink(current_url, body, result)

            depth = url_depth if per_url else current_depth
            if not traversal.follow_links or depth >= traversal.max_depth:
                continue

            links = self._extract_links(body, current_url, result)
            for link in sorted(links):
                if self._should_enqueue(link):
                    queue.push(link, url_depth + 1)

            current_depth += 1
            result.expansion_waves += 1

        self._finish(result)

        self.logger.info(
            f"Phrase crawl completed: {len(result.visited_urls)} visited, "
            f"{len(result.matched_urls)} matched, "
            f"{len(result.failed_urls)} failed, "
            f"{result.expansion_waves} expansions, "
            f"duration: {result.duration:.2f}s"
        )

        return result
