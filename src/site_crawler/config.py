"""Configuration management for site-crawler."""

import os
import json
from pathlib import Path
from typing import Optional, Dict, Any
from dotenv import load_dotenv

from site_crawler.models import ScraperConfig, TraversalConfig, SinkConfig, BrowserProfile


class Config:
    """Configuration manager for the crawler."""

    def __init__(self, config_path: Optional[str] = None):
        """Initialize configuration from file or defaults."""
        self.config_path = config_path or self._find_config_file()
        self.scraper_config = ScraperConfig()
        self.traversal = TraversalConfig()
        self.sink = SinkConfig()
        self._custom_settings: Dict[str, Any] = {}

        # Load environment variables
        load_dotenv()

        # Load configuration if file exists
        if self.config_path and Path(self.config_path).exists():
            self._load_from_file()

        # Override with environment variables
        self._load_from_env()

    def _find_config_file(self) -> Optional[str]:
        """Find configuration file in common locations."""
        search_paths = [
            Path.cwd() / "config.py",
            Path.cwd() / "config.json",
            Path.home() / ".site-crawler" / "config.py",
            Path.home() / ".config" / "site-crawler" / "config.json",
        ]

        for path in search_paths:
            if path.exists():
                return str(path)

        return None

    def _load_from_file(self):
        """Load configuration from file."""
        path = Path(self.config_path)

        if path.suffix == '.py':
            self._load_python_config(path)
        elif path.suffix == '.json':
            self._load_json_config(path)

    def _load_python_config(self, path: Path):
        """Load configuration from Python file."""
        import importlib.util

        spec = importlib.util.spec_from_file_location("site_crawler_user_config", path)
        if spec and spec.loader:
            config_module = importlib.util.module_from_spec(spec)
            spec.loader.exec_module(config_module)

            if hasattr(config_module, 'SCRAPER_CONFIG'):
                self.scraper_config = ScraperConfig(**config_module.SCRAPER_CONFIG)

            if hasattr(config_module, 'TRAVERSAL'):
                self.traversal = TraversalConfig(**config_module.TRAVERSAL)

            if hasattr(config_module, 'SINK'):
                self.sink = SinkConfig(**config_module.SINK)

            if hasattr(config_module, 'CUSTOM'):
                self._custom_settings = config_module.CUSTOM

    def _load_json_config(self, path: Path):
        """Load configuration from JSON file."""
        with open(path, 'r') as f:
            data = json.load(f)

        if 'scraper' in data:
            self.scraper_config = ScraperConfig(**data['scraper'])

        if 'traversal' in data:
            self.traversal = TraversalConfig(**data['traversal'])

        if 'sink' in data:
            self.sink = SinkConfig(**data['sink'])

        if 'custom' in data:
            self._custom_settings = data['custom']

    def _load_from_env(self):
        """Override configuration with environment variables."""
        if timeout := os.getenv('SITE_CRAWLER_TIMEOUT'):
            self.scraper_config.timeout = int(timeout)

        if browser := os.getenv('SITE_CRAWLER_BROWSER'):
            try:
                self.scraper_config.browser_profile = BrowserProfile[browser.upper()].value
            except KeyError:
                pass

        if verify_ssl := os.getenv('SITE_CRAWLER_VERIFY_SSL'):
            self.scraper_config.verify_ssl = verify_ssl.lower() in ('true', '1', 'yes')

        # Traversal settings are frozen, so rebuild instead of assigning
        traversal_updates: Dict[str, Any] = {}
        if user_agent := os.getenv('SITE_CRAWLER_USER_AGENT'):
            traversal_updates['user_agent'] = user_agent

        if max_depth := os.getenv('SITE_CRAWLER_MAX_DEPTH'):
            traversal_updates['max_depth'] = int(max_depth)

        if follow_links := os.getenv('SITE_CRAWLER_FOLLOW_LINKS'):
            traversal_updates['follow_links'] = follow_links.lower() in ('true', '1', 'yes')

        if traversal_updates:
            self.traversal = self.traversal.with_updates(**traversal_updates)

        if output_dir := os.getenv('SITE_CRAWLER_OUTPUT_DIR'):
            self.sink.output_dir = Path(output_dir)

        if error_log := os.getenv('SITE_CRAWLER_ERROR_LOG'):
            self.sink.error_log = Path(error_log)

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by key."""
        if key in self._custom_settings:
            return self._custom_settings[key]

        for section in (self.scraper_config, self.traversal, self.sink):
            if hasattr(section, key):
                return getattr(section, key)

        return default

    def set(self, key: str, value: Any):
        """Set configuration value."""
        if hasattr(self.scraper_config, key):
            setattr(self.scraper_config, key, value)
        elif hasattr(self.traversal, key):
            self.traversal = self.traversal.with_updates(**{key: value})
        elif hasattr(self.sink, key):
            setattr(self.sink, key, value)
        else:
            self._custom_settings[key] = value

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            'scraper': self.scraper_config.model_dump(mode='json'),
            'traversal': self.traversal.model_dump(mode='json'),
            'sink': self.sink.model_dump(mode='json'),
            'custom': self._custom_settings
        }

    def save(self, path: Optional[str] = None):
        """Save configuration to file."""
        save_path = Path(path or self.config_path or './config.json')

        if save_path.suffix == '.py':
            self._save_python_config(save_path)
        else:
            self._save_json_config(save_path)

    def _save_python_config(self, path: Path):
        """Save configuration as Python file."""
        sections = [
            ('# HTTP settings', 'SCRAPER_CONFIG', 'scraper'),
            ('# Traversal settings', 'TRAVERSAL', 'traversal'),
            ('# Content sink settings', 'SINK', 'sink'),
            ('# Custom settings', 'CUSTOM', 'custom'),
        ]
        data = self.to_dict()

        config_str = '"""Configuration file for site-crawler."""\n'
        for comment, name, key in sections:
            config_str += f"\n{comment}\n{name} = {{\n"
            for item_key, value in data[key].items():
                config_str += f"    {item_key!r}: {value!r},\n"
            config_str += "}\n"

        with open(path, 'w') as f:
            f.write(config_str)

    def _save_json_config(self, path: Path):
        """Save configuration as JSON file."""
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)


def load_config(config_path: Optional[str] = None) -> Config:
    """Load configuration from file or create default."""
    return Config(config_path)


def create_default_config(path: str = './config.py'):
    """Create a default configuration file."""
    config = Config()
    config.save(path)
