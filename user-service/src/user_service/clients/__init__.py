from .book_service_client import BookServiceClient, get_book_service_client

__all__ = ["BookServiceClient", "get_book_service_client"]
