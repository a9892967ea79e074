"""Utility helpers."""

from .http import HTTPClient, HTTPPageFetcher, raise_for_status

__all__ = ["HTTPClient", "HTTPPageFetcher", "raise_for_status"]
