"""Hot Ones episode catalog: scraping, classification and browsing."""

__version__ = "0.1.0"
