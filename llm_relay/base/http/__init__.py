"""HTTP utilities package.

Exposes pooled httpx clients.
"""

from .client import STREAM_PURPOSE, close_all_clients, get_httpx_client

__all__ = ["get_httpx_client", "close_all_clients", "STREAM_PURPOSE"]
