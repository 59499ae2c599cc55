"""Tests for link resolution and extraction."""

from site_crawler.crawler.links import extract_links, normalize_link
from site_crawler.crawler.matcher import should_scrape_content


class TestNormalizeLink:

    def test_relative_link_joined_to_base(self):
        assert normalize_link("/about", "https://example.com") == "https://example.com/about"

    def test_absolute_link_unchanged_for_any_base(self):
        assert normalize_link("https://other.com/x", "https://example.com") == "https://other.com/x"
        assert normalize_link("http://other.com", "not a url") == "http://other.com"

    def test_relative_to_nested_page(self):
        assert normalize_link("intro", "https://example.com/docs/page") == "https://example.com/docs/intro"
        assert normalize_link("../up", "https://example.com/docs/page") == "https://example.com/up"

    def test_invalid_base_returns_link_as_is(self):
        assert normalize_link("/about", "not a url") == "/about"

    def test_unresolvable_link_is_none(self):
        assert normalize_link("//[::1", "https://example.com") is None

    def test_no_canonicalization(self):
        assert normalize_link("/About/", "https://example.com") == "https://example.com/About/"


class TestExtractLinks:

    def test_relative_href(self):
        links = extract_links("<a href='/about'>x</a>", "https://example.com")
        assert links == {"https://example.com/about"}

    def test_absolute_href_passes_through(self):
        links = extract_links("<a href='https://other.com'>x</a>", "https://example.com")
        assert links == {"https://other.com"}

    def test_mixed_links(self):
        html = '<a href="/about">About</a> <a href="https://example.com">Home</a>'
        links = extract_links(html, "https://test.com")
        assert links == {"https://test.com/about", "https://example.com"}

    def test_duplicates_collapse(self):
        html = '<a href="/a">1</a><a href="/a">2</a><a href="https://example.com/a">3</a>'
        assert extract_links(html, "https://example.com") == {"https://example.com/a"}

    def test_area_elements_and_missing_href(self):
        html = '<map><area href="/region"></map><a name="anchor">no href</a><a href="">empty</a>'
        assert extract_links(html, "https://example.com") == {"https://example.com/region"}

    def test_bad_link_does_not_abort_the_rest(self):
        html = '<a href="//[::1">bad</a><a href="/ok">ok</a>'
        assert extract_links(html, "https://example.com") == {"https://example.com/ok"}

    def test_empty_markup(self):
        assert extract_links("", "https://example.com") == set()
        assert extract_links("   ", "https://example.com") == set()

    def test_xhtml_with_encoding_declaration(self):
        markup = (
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            '<html xmlns="http://www.w3.org/1999/xhtml"><body>'
            '<a href="/b">b</a><p>caf\u00e9</p></body></html>'
        )
        assert extract_links(markup, "https://site.test/a") == {"https://site.test/b"}


class TestMatcher:

    def test_substring_match(self):
        assert should_scrape_content("<p>Rust crawler</p>", "crawler")

    def test_case_sensitive(self):
        assert not should_scrape_content("<p>Rust Crawler</p>", "crawler")

    def test_missing_phrase(self):
        assert not should_scrape_content("<p>nothing here</p>", "crawler")
