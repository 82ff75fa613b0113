"""JSON API over the auboutdufil.com free music catalog.

Catalog pages are fetched, the track listings are extracted from the markup
and served as JSON, with a short-lived cache in front of the extraction.
"""
