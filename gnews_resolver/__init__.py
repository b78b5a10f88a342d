"""
Google News Resolver

Resolves Google News redirect URLs to the publisher's article URL with a
retrying headless browser and a chain of fallback heuristics, then extracts
publication date, body text and domain from the article page.
"""

__version__ = "1.0.0"
__author__ = "Ateet Vatan Bahmani"
