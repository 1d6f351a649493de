"""Page Scraper: render a URL in headless Chromium and return its title,
meta description and first heading over HTTP.
"""

__version__ = "0.1.0"
