"""
Data models for the URL shortener application.

This module imports and exports all SQLModel models used in the application.
"""

from shortener.models.url import UrlRecord, UrlRecordBase, UrlRecordCreate

__all__ = [
    "UrlRecord",
    "UrlRecordBase",
    "UrlRecordCreate",
]
