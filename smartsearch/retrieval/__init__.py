"""Retrieval package.

Provides the Exa search client and the mapping of raw provider records to
canonical result items. No ranking or re-sorting is applied.
"""
