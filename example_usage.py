#!/usr/bin/env python3
"""
Example usage of site-crawler scriptable API.
"""

from site_crawler import create_scraper
from site_crawler.models import DepthMode


def example_full_workflow():
    """Robots, open directories, cookie probe, recursive scrape, delay."""
    print("Full Workflow Example")
    print("-" * 40)

    scraper = create_scraper()

    # report = scraper.run('https://example.com')
    # print(f"Disallowed: {report.disallowed_paths}")
    # print(f"Open directories: {report.open_directories}")
    # print(f"Scraped {len(report.crawl.scraped_urls)} pages")

    scraper.close()


def example_phrase_search():
    """Follow links only out of pages mentioning a phrase."""
    print("Phrase Search Example")
    print("-" * 40)

    scraper = create_scraper()
    traversal = scraper.config.traversal.with_updates(
        max_depth=2,
        user_agent='site-crawler-example/0.1',
        depth_mode=DepthMode.WAVE
    )
    print(f"Traversal settings: {traversal}")

    # result = scraper.search('https://example.com', 'Example Domain', traversal)
    # for url in result.matched_urls:
    #     print(f"Match: {url}")

    scraper.close()


if __name__ == "__main__":
    example_full_workflow()
    print()
    example_phrase_search()
