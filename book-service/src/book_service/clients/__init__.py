from .user_service_client import UserServiceClient, get_user_service_client

__all__ = ["UserServiceClient", "get_user_service_client"]
