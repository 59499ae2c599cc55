"""Command-line interface for site-crawler."""

import argparse
from typing import Optional, List
from rich.console import Console
from rich.table import Table

from site_crawler.config import Config, load_config, create_default_config
from site_crawler.crawler.base_crawler import CrawlResult
from site_crawler.models import DepthMode
from site_crawler.scraper import Scraper
from site_crawler.sink import NullSink
from site_crawler.utils import setup_logging, format_duration

console = Console()


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog='site-crawler',
        description='Polite recursive web crawler with phrase-gated search',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        '--version',
        action='version',
        version='%(prog)s 0.1.0'
    )

    parser.add_argument(
        '--config',
        type=str,
        help='Path to configuration file (default: config.py in current dir)'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose output'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Run command
    run_parser = subparsers.add_parser(
        'run',
        help='Probe a site, then scrape everything reachable from it'
    )
    run_parser.add_argument('url', type=str, help='Site base URL')
    run_parser.add_argument(
        '--no-delay',
        action='store_true',
        help='Skip the politeness delay after the crawl'
    )

    # Crawl command
    crawl_parser = subparsers.add_parser(
        'crawl',
        help='Follow every link depth-first and scrape each page'
    )
    crawl_parser.add_argument('url', type=str, help='Seed URL')
    crawl_parser.add_argument(
        '--no-sink',
        action='store_true',
        help='Only walk the site; write nothing to disk'
    )
    crawl_parser.add_argument(
        '--max-pages',
        type=int,
        help='Stop after this many pages (default: unlimited)'
    )
    crawl_parser.add_argument(
        '--domain',
        action='append',
        dest='domains',
        help='Only follow links to this domain (repeatable)'
    )

    # Search command
    search_parser = subparsers.add_parser(
        'search',
        help='Follow links only out of pages containing a phrase'
    )
    search_parser.add_argument('url', type=str, help='Seed URL')
    search_parser.add_argument('phrase', type=str, help='Case-sensitive target phrase')
    search_parser.add_argument(
        '--max-depth',
        type=int,
        help='Maximum number of expansions (default: from config, 3)'
    )
    search_parser.add_argument(
        '--no-follow',
        action='store_true',
        help='Check the seed only; never enqueue links'
    )
    search_parser.add_argument(
        '--user-agent',
        type=str,
        help='User-Agent header to send'
    )
    search_parser.add_argument(
        '--per-url-depth',
        action='store_true',
        help='Measure depth per URL instead of one counter per run'
    )
    search_parser.add_argument(
        '--scrape',
        action='store_true',
        help='Also write matching pages to the content sink'
    )

    # Robots command
    robots_parser = subparsers.add_parser(
        'robots',
        help='List Disallow entries from robots.txt'
    )
    robots_parser.add_argument('url', type=str, help='Site base URL')

    # Probe command
    probe_parser = subparsers.add_parser(
        'probe',
        help='Check common sensitive directories'
    )
    probe_parser.add_argument('url', type=str, help='Site base URL')

    # Config command
    config_parser = subparsers.add_parser(
        'config',
        help='Manage configuration settings'
    )
    config_subparsers = config_parser.add_subparsers(dest='config_action')

    config_subparsers.add_parser(
        'show',
        help='Show current configuration'
    )

    config_init_parser = config_subparsers.add_parser(
        'init',
        help='Initialize default configuration file'
    )
    config_init_parser.add_argument(
        '--path',
        type=str,
        default='./config.py',
        help='Path for configuration file (default: ./config.py)'
    )

    return parser


def print_crawl_summary(result: CrawlResult, title: str):
    """Render a crawl result as a table."""
    table = Table(title=title)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Start URL", result.start_url)
    table.add_row("Visited", str(len(result.visited_urls)))
    table.add_row("Scraped", str(len(result.scraped_urls)))
    table.add_row("Failed", str(len(result.failed_urls)))
    if result.matched_urls or result.expansion_waves:
        table.add_row("Matched", str(len(result.matched_urls)))
        table.add_row("Expansions", str(result.expansion_waves))
    table.add_row("Duration", format_duration(result.duration))
    if result.stopped:
        table.add_row("Stopped early", "yes")

    console.print(table)

    if result.failed_urls:
        console.print("\n[bold]Failures:[/bold]")
        for url, message in result.failed_urls.items():
            console.print(f"  [red]✗[/red] {url}: {message}")


def _print_list(items: List[str], found: str, empty: str):
    if not items:
        console.print(f"[yellow]{empty}[/yellow]")
        return
    for item in items:
        console.print(f"[green]{found}[/green] {item}")


def handle_run(args, config: Config) -> int:
    """Handle the run command."""
    scraper = Scraper(config)
    try:
        report = scraper.run(args.url, delay=not args.no_delay)
    finally:
        scraper.close()

    _print_list(report.disallowed_paths, "Disallowed:", "No Disallow entries found")
    _print_list(report.open_directories, "Open directory:", "No open directories found")
    console.print(f"Seed status: {report.status_code} ({len(report.cookies)} cookies)")
    print_crawl_summary(report.crawl, f"Scrape of {args.url}")
    return 0


def handle_crawl(args, config: Config) -> int:
    """Handle the crawl command."""
    updates = {}
    if args.max_pages is not None:
        updates['max_pages'] = args.max_pages
    if args.domains:
        updates['allowed_domains'] = args.domains
    traversal = config.traversal.with_updates(**updates)

    scraper = Scraper(config, sink=NullSink() if args.no_sink else None)
    try:
        with console.status(f"[green]Crawling {args.url}..."):
            result = scraper.crawl(args.url, traversal)
    finally:
        scraper.close()

    print_crawl_summary(result, f"Crawl of {args.url}")
    return 0


def handle_search(args, config: Config) -> int:
    """Handle the search command."""
    updates = {}
    if args.max_depth is not None:
        updates['max_depth'] = args.max_depth
    if args.no_follow:
        updates['follow_links'] = False
    if args.user_agent:
        updates['user_agent'] = args.user_agent
    if args.per_url_depth:
        updates['depth_mode'] = DepthMode.PER_URL
    traversal = config.traversal.with_updates(**updates)

    scraper = Scraper(config) if args.scrape else Scraper(config, sink=NullSink())
    try:
        with console.status(f"[green]Searching {args.url} for {args.phrase!r}..."):
            result = scraper.search(args.url, args.phrase, traversal, scrape_content=args.scrape)
    finally:
        scraper.close()

    print_crawl_summary(result, f"Search for {args.phrase!r}")
    _print_list(result.matched_urls, "Match:", "Target phrase not found on any page")
    return 0


def handle_robots(args, config: Config) -> int:
    """Handle the robots command."""
    scraper = Scraper(config, sink=NullSink())
    try:
        paths = scraper.robots_parser.get_disallowed_paths(args.url)
    finally:
        scraper.close()

    _print_list(paths, "Disallowed:", "No Disallow entries found")
    return 0


def handle_probe(args, config: Config) -> int:
    """Handle the probe command."""
    from site_crawler.probes import check_open_directories

    scraper = Scraper(config, sink=NullSink())
    try:
        found = check_open_directories(args.url, scraper.fetcher)
    finally:
        scraper.close()

    _print_list(found, "Open directory:", "No open directories found")
    return 0


def handle_config(args, config: Config) -> int:
    """Handle the config command."""
    if args.config_action == 'init':
        create_default_config(args.path)
        console.print(f"[green]✓[/green] Configuration file created at {args.path}")
    elif args.config_action == 'show':
        for key, value in config.to_dict().items():
            if isinstance(value, dict):
                console.print(f"\n[cyan]{key}:[/cyan]")
                for k, v in value.items():
                    console.print(f"  {k}: {v}")
            else:
                console.print(f"{key}: {value}")
    else:
        console.print("[yellow]Specify a config action: show or init[/yellow]")
        return 1

    return 0


HANDLERS = {
    'run': handle_run,
    'crawl': handle_crawl,
    'search': handle_search,
    'robots': handle_robots,
    'probe': handle_probe,
    'config': handle_config,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    setup_logging('DEBUG' if args.verbose else 'INFO')

    try:
        config = load_config(args.config)
        return HANDLERS[args.command](args, config)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        return 130
    except Exception as e:
        console.print(f"[red]Unexpected error: {str(e)}[/red]")
        if args.verbose:
            console.print_exception()
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
