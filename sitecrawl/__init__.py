"""
SiteCrawl package initializer.
Defines package version; the command-line entry point lives in sitecrawl.cli.
"""
__version__ = "0.1.0"
