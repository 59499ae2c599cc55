"""Content sinks that receive every page a crawler scrapes."""

import re
from pathlib import Path
from typing import Iterable, List, Optional, Protocol
import logging

from lxml import etree, html

from site_crawler.config import Config
from site_crawler.downloader import DownloadManager
from site_crawler.fetcher import Fetcher
from site_crawler.models import ErrorKind, PageError
from site_crawler.utils import extract_domain

EMAIL_PATTERN = re.compile(r'[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}')
ERROR_MARKERS = ('Exception', 'Stack trace')


class PageSink(Protocol):
    """Anything that can consume a scraped page."""

    def process_page(self, url: str, html_content: str) -> Optional[List[PageError]]:
        ...


class NullSink:
    """Sink that ignores every page."""

    def process_page(self, url: str, html_content: str) -> Optional[List[PageError]]:
        return None


class ContentSink:
    """Writes page text, media and scan findings under a per-domain folder.

    Nothing here raises into the crawler: failures are logged and handed
    back as PageError records.
    """

    def __init__(self, config: Config, downloader: Optional[DownloadManager] = None,
                 fetcher: Optional[Fetcher] = None):
        self.config = config
        self.settings = config.sink
        self.downloader = downloader
        self.fetcher = fetcher
        self.logger = logging.getLogger(self.__class__.__name__)
        self._owns_downloader = False

        if self.settings.download_media and self.downloader is None:
            if self.fetcher is not None:
                self.downloader = DownloadManager(config, session=self.fetcher.session)
            else:
                self.downloader = DownloadManager(config)
                self._owns_downloader = True

    def close(self):
        """Close the download session if this sink opened it."""
        if self._owns_downloader and self.downloader is not None:
            self.downloader.close()
            self._owns_downloader = False

    def domain_dir(self, url: str) -> Path:
        return Path(self.settings.output_dir) / extract_domain(url)

    def process_page(self, url: str, html_content: str) -> List[PageError]:
        """
        Scrape one page into the output directory.

        Args:
            url: Resolved page URL
            html_content: Page body

        Returns:
            Failures met while scraping (possibly empty)
        """
        errors: List[PageError] = []
        directory = self.domain_dir(url)

        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            return [self._error(url, f"Failed to create directory '{directory}': {e}")]

        from site_crawler.crawler.links import parse_document

        try:
            tree = parse_document(html_content)
        except (etree.ParserError, ValueError) as e:
            errors.append(PageError(url=url, kind=ErrorKind.PARSE, message=str(e)))
            tree = None

        if tree is not None:
            self._append(directory / 'content.txt', self.describe_page(url, tree), url, errors)

            if self.settings.download_media and self.downloader is not None:
                errors.extend(self.download_media(url, tree, directory))

            self.scan_scripts(url, tree, errors)

        if self.settings.scan_emails:
            emails = self.find_emails(html_content)
            if emails:
                self._append(directory / 'emails.txt', emails, url, errors)

        self.scan_for_errors(url, html_content)

        for error in errors:
            self.logger.warning(error.format_line())

        return errors

    def describe_page(self, url: str, tree: html.HtmlElement) -> List[str]:
        """Text lines for headers, paragraphs, meta tags and forms."""
        lines = [f"URL: {url}"]

        for header in tree.xpath('//h1 | //h2 | //h3 | //h4 | //h5 | //h6'):
            lines.append(f"Header: {header.text_content().strip()}")

        for paragraph in tree.xpath('//p'):
            lines.append(f"Paragraph: {paragraph.text_content().strip()}")

        for meta in tree.xpath('//meta[@name and @content]'):
            lines.append(f"Meta Tag - Name: {meta.get('name')}, Content: {meta.get('content')}")

        for form in tree.xpath('//form'):
            lines.append(f"Form found! Action: {form.get('action', '')}, Method: {form.get('method', 'get').upper()}")
            for field in form.xpath('.//input'):
                lines.append(
                    f"Input - Name: {field.get('name', 'Unnamed Input')}, Type: {field.get('type', 'text')}"
                )

        return lines

    def media_urls(self, url: str, tree: html.HtmlElement) -> List[str]:
        """Absolute URLs of images and videos referenced by the page."""
        from site_crawler.crawler.links import normalize_link

        found = []
        for src in tree.xpath('//img/@src | //video/@src | //source/@src'):
            media_url = normalize_link(str(src).strip(), url)
            if media_url and media_url not in found:
                found.append(media_url)
        return found

    def download_media(self, url: str, tree: html.HtmlElement, directory: Path) -> List[PageError]:
        errors = []
        for media_url in self.media_urls(url, tree):
            target = directory / DownloadManager.filename_for(media_url, 'media.bin')
            self.logger.info(f"Downloading media: {media_url}")
            error = self.downloader.download_file(media_url, target)
            if error is not None:
                errors.append(error)
        return errors

    @staticmethod
    def find_emails(html_content: str) -> List[str]:
        """Email-like substrings in page order."""
        return EMAIL_PATTERN.findall(html_content)

    def scan_scripts(self, url: str, tree: html.HtmlElement, errors: List[PageError]):
        """Log scripts that mention any configured keyword."""
        from site_crawler.crawler.links import normalize_link

        keywords = self.settings.js_keywords
        for script in tree.xpath('//script'):
            inline = script.text_content()
            for keyword in keywords:
                if keyword in inline:
                    self.logger.warning(f"Found '{keyword}' in inline JS on {url}")

            src = script.get('src')
            if not src or not self.settings.save_external_scripts or self.fetcher is None:
                continue

            js_url = normalize_link(src.strip(), url)
            if not js_url:
                continue

            fetched = self.fetcher.fetch(js_url)
            if fetched.failure is not None:
                errors.append(fetched.failure)
                continue

            for keyword in keywords:
                if keyword in fetched.body:
                    self.logger.warning(f"Found '{keyword}' in external JS {js_url}")

            target = Path(self.settings.scripts_dir) / DownloadManager.filename_for(js_url, 'script.js')
            try:
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text(fetched.body, encoding='utf-8')
                self.logger.info(f"Saved JS file to '{target}'")
            except OSError as e:
                errors.append(self._error(js_url, f"Failed to save JS file '{target}': {e}"))

    def scan_for_errors(self, url: str, html_content: str) -> bool:
        """Log pages that look like they leak errors or stack traces."""
        if any(marker in html_content for marker in ERROR_MARKERS):
            self.logger.warning(f"Potential error or stack trace found on {url}")
            return True
        return False

    def _append(self, path: Path, lines: Iterable[str], url: str, errors: List[PageError]):
        try:
            with open(path, 'a', encoding='utf-8') as f:
                for line in lines:
                    f.write(f"{line}\n")
        except OSError as e:
            errors.append(self._error(url, f"Failed to write '{path}': {e}"))

    @staticmethod
    def _error(url: str, message: str) -> PageError:
        return PageError(url=url, kind=ErrorKind.SINK, message=message)
