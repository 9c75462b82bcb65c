from .client import close_http_client, get_http_client, request_with_retry

__all__ = ["close_http_client", "get_http_client", "request_with_retry"]
