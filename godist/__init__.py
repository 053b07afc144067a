"""Go distribution catalog, resolver and verified downloader."""

__version__ = "1.0.2"
