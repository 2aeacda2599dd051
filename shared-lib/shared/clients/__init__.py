from .service_client import ServiceClient, UpstreamResult

__all__ = ["ServiceClient", "UpstreamResult"]
