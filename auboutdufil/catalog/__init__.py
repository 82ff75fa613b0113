"""Extraction of track listings from catalog pages.

locator finds the per-track containers, fields decodes individual values,
assembler turns one container into a Track and pipeline ties fetching and
extraction together.
"""
