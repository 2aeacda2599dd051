"""
SQLAlchemy models for the Book Service.

Import all models here to make them available when importing from the models package.
"""

from book_service.models.book import Book, CascadeIntent, CascadeStatus

__all__ = ["Book", "CascadeIntent", "CascadeStatus"]
