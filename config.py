"""Configuration file for site-crawler."""

# HTTP settings
SCRAPER_CONFIG = {
    'timeout': 30,
    'verify_ssl': True,
    'browser_profile': 'chrome120',
    'user_agents': ['Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36', 'Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36', 'Mozilla/5.0 (iPhone; CPU iPhone OS 14_6 like Mac OS X) AppleWebKit/605.1.15'],
    'politeness_delay': [2.0, 5.0],
}

# Traversal settings
TRAVERSAL = {
    'follow_links': True,
    'max_depth': 3,
    'user_agent': None,
    'depth_mode': 'wave',
    'allowed_domains': None,
    'max_pages': -1,
}

# Content sink settings
SINK = {
    'output_dir': 'scraped_data',
    'error_log': 'error.log',
    'download_media': True,
    'scan_emails': True,
    'js_keywords': ['apiKey', 'token'],
    'save_external_scripts': False,
    'scripts_dir': 'scraped_js',
}

# Custom settings
CUSTOM = {
}
