"""HTTP utilities package.

Builds the ``httpx`` clients owned by the chat driver.
"""

from .client import build_httpx_client, user_agent

__all__ = ["build_httpx_client", "user_agent"]
