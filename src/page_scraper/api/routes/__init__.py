"""Route modules mounted by ``page_scraper.api.main.create_app``."""
