"""Tests for the depth-first recursive crawler."""

from site_crawler.crawler import RecursiveCrawler
from site_crawler.error_log import ErrorLog
from site_crawler.models import ErrorKind, TraversalConfig

from tests.conftest import FakeFetcher, links_page

A = "https://site.test/a"
B = "https://site.test/b"
C = "https://site.test/c"
D = "https://site.test/d"
E = "https://site.test/e"


class RecordingSink:

    def __init__(self, crawler_to_stop=None, fail=False):
        self.pages = []
        self.crawler_to_stop = crawler_to_stop
        self.fail = fail

    def process_page(self, url, html_content):
        self.pages.append(url)
        if self.crawler_to_stop is not None:
            self.crawler_to_stop.stop()
        if self.fail:
            raise RuntimeError("disk full")
        return None


def make_crawler(config, pages, **kwargs):
    fetcher = FakeFetcher(pages)
    return RecursiveCrawler(config, fetcher=fetcher, **kwargs), fetcher


def test_three_node_cycle_terminates(config):
    crawler, fetcher = make_crawler(config, {
        A: links_page("/b"),
        B: links_page("/c"),
        C: links_page("/a"),
    })

    result = crawler.crawl(A)

    assert result.visited_urls == [A, B, C]
    assert sorted(fetcher.calls) == [A, B, C]
    assert result.errors == []


def test_children_explored_depth_first_in_sorted_order(config):
    crawler, fetcher = make_crawler(config, {
        A: links_page("/c", "/b"),
        B: links_page("/d"),
        C: links_page(),
        D: links_page(),
    })

    result = crawler.crawl(A)

    assert result.visited_urls == [A, B, D, C]


def test_diamond_fetches_shared_child_once(config):
    crawler, fetcher = make_crawler(config, {
        A: links_page("/b", "/c"),
        B: links_page("/d"),
        C: links_page("/d"),
        D: links_page("/a", "/b"),
    })

    result = crawler.crawl(A)

    assert fetcher.calls.count(D) == 1
    assert len(fetcher.calls) == len(set(fetcher.calls)) == 4
    assert len(result.visited_urls) == 4


def test_http_error_stops_only_that_branch(config):
    crawler, fetcher = make_crawler(config, {
        A: links_page("/b", "/c"),
        B: (404, links_page("/e")),
        C: links_page(),
        E: links_page(),
    })

    result = crawler.crawl(A)

    assert result.visited_urls == [A, B, C]
    assert E not in fetcher.calls
    assert [e.kind for e in result.errors] == [ErrorKind.HTTP]
    assert result.errors[0].status_code == 404
    assert B in result.failed_urls
    assert result.scraped_urls == [A, C]


def test_network_error_is_recorded_and_siblings_continue(config):
    crawler, fetcher = make_crawler(config, {
        A: links_page("/b", "/c"),
        C: links_page(),
    })

    result = crawler.crawl(A)

    assert result.visited_urls == [A, B, C]
    assert result.failed_urls[B] == "connection refused"
    assert result.errors[0].kind == ErrorKind.NETWORK


def test_failed_seed_ends_run_without_raising(config):
    crawler, _ = make_crawler(config, {})

    result = crawler.crawl(A)

    assert result.visited_urls == [A]
    assert result.scraped_urls == []
    assert result.success_rate == 0.0


def test_unparseable_page_records_parse_error(config):
    crawler, _ = make_crawler(config, {
        A: links_page("/b"),
        B: "   ",
    })

    result = crawler.crawl(A)

    assert result.visited_urls == [A, B]
    assert [e.kind for e in result.errors] == [ErrorKind.PARSE]


def test_xhtml_page_is_expanded(config):
    crawler, _ = make_crawler(config, {
        A: '<?xml version="1.0" encoding="UTF-8"?>\n<html><body><a href="/b">b</a></body></html>',
        B: links_page(),
    })

    result = crawler.crawl(A)

    assert result.visited_urls == [A, B]
    assert result.errors == []


def test_every_scraped_page_reaches_the_sink(config):
    sink = RecordingSink()
    crawler, _ = make_crawler(config, {
        A: links_page("/b", "/c"),
        B: (500, "oops"),
        C: links_page(),
    }, sink=sink)

    crawler.crawl(A)

    assert sink.pages == [A, C]


def test_sink_failure_is_not_fatal(config):
    crawler, _ = make_crawler(config, {
        A: links_page("/b"),
        B: links_page(),
    }, sink=RecordingSink(fail=True))

    result = crawler.crawl(A)

    assert result.visited_urls == [A, B]
    assert {e.kind for e in result.errors} == {ErrorKind.SINK}
    assert result.failed_urls == {}


def test_out_of_scope_links_are_not_followed(config):
    traversal = TraversalConfig(allowed_domains=["site.test"])
    crawler, fetcher = make_crawler(config, {
        A: links_page("/b", "mailto:someone@site.test", "https://elsewhere.test/",
                      "https://docs.site.test/x"),
        B: links_page(),
        "https://docs.site.test/x": links_page(),
    }, traversal=traversal)

    result = crawler.crawl(A)

    assert result.visited_urls == [A, "https://docs.site.test/x", B]
    assert "https://elsewhere.test/" not in fetcher.calls


def test_max_pages_caps_the_run(config):
    traversal = TraversalConfig(max_pages=2)
    crawler, _ = make_crawler(config, {
        A: links_page("/b", "/c"),
        B: links_page(),
        C: links_page(),
    }, traversal=traversal)

    result = crawler.crawl(A)

    assert result.visited_urls == [A, B]


def test_stop_returns_after_current_page(config):
    crawler, _ = make_crawler(config, {
        A: links_page("/b"),
        B: links_page(),
    })
    crawler.sink = RecordingSink(crawler_to_stop=crawler)

    result = crawler.crawl(A)

    assert result.visited_urls == [A]
    assert result.stopped


def test_visited_set_cleared_between_runs(config):
    crawler, fetcher = make_crawler(config, {A: links_page("/b"), B: links_page()})

    crawler.crawl(A)
    second = crawler.crawl(A)

    assert second.visited_urls == [A, B]
    assert fetcher.calls == [A, B, A, B]


def test_errors_written_to_error_log(config, tmp_path):
    log_path = tmp_path / "logs" / "error.log"
    crawler, _ = make_crawler(config, {A: links_page("/b")}, error_log=ErrorLog(log_path))

    crawler.crawl(A)

    lines = log_path.read_text().splitlines()
    assert len(lines) == 1
    assert "[network]" in lines[0]
    assert B in lines[0]
