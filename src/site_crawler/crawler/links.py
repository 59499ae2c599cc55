"""Link extraction and resolution."""

from typing import Optional, Set
from urllib.parse import urljoin
import logging

from lxml import etree, html

from site_crawler.utils import validate_url

logger = logging.getLogger(__name__)

LINK_XPATH = '//a[@href] | //area[@href]'


def normalize_link(link: str, base_url: str) -> Optional[str]:
    """
    Resolve a link against the URL of the page it was found on.

    Links that already start with ``http`` come back untouched. If the
    base is not an absolute URL the link is returned as-is. Returns None
    when the link cannot be resolved at all.
    """
    if link.startswith('http'):
        return link

    if not validate_url(base_url):
        return link

    try:
        resolved = urljoin(base_url, link)
    except ValueError:
        return None

    return resolved or None


def parse_document(markup: str) -> html.HtmlElement:
    """Parse markup into an lxml tree; raises ParserError on unusable input."""
    if not markup or not markup.strip():
        raise etree.ParserError("Document is empty")

    try:
        return html.fromstring(markup)
    except ValueError:
        # lxml refuses str input carrying an XML encoding declaration
        return html.fromstring(markup.encode('utf-8'))


def links_from_tree(tree: html.HtmlElement, base_url: str) -> Set[str]:
    """Collect resolved hrefs from a parsed document."""
    links = set()

    for element in tree.xpath(LINK_XPATH):
        href = (element.get('href') or '').strip()
        if not href:
            continue

        absolute_url = normalize_link(href, base_url)
        if absolute_url:
            links.add(absolute_url)
        else:
            logger.debug(f"Dropping unresolvable link {href!r} on {base_url}")

    return links


def extract_links(markup: str, base_url: str) -> Set[str]:
    """
    Extract the set of absolute links from a page.

    Args:
        markup: HTML content
        base_url: URL the content was fetched from

    Returns:
        Deduplicated set of resolved URLs (empty if the markup is unusable)
    """
    try:
        tree = parse_document(markup)
    except (etree.ParserError, ValueError) as e:
        logger.debug(f"Failed to parse {base_url}: {e}")
        return set()

    return links_from_tree(tree, base_url)
