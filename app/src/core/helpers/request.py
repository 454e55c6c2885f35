from typing import Any, Literal

from fastapi import Request
from src.core.constants import DEFAULT_PROXY_COUNT, DEFAULT_PROXY_HEADERS


def get_client_ip(
    request: Request,
    proxy_headers: list[str] | None = None,
    trusted_proxies: list[str] | None = None,
    proxy_count: int | None = None,
) -> str | None:
    """
    Extract the client IP address, honouring the usual proxy headers.

    With `trusted_proxies`, an `X-Forwarded-For` chain is only trusted when its
    last hop is a known proxy, and the address `proxy_count` hops before it is used.
    """
    proxy_headers = proxy_headers or DEFAULT_PROXY_HEADERS
    proxy_count = proxy_count or DEFAULT_PROXY_COUNT

    for header_name in proxy_headers:
        header_value = request.headers.get(header_name)
        if not header_value:
            continue

        if header_name != "X-Forwarded-For" or "," not in header_value:
            return header_value.strip()

        ips = [ip.strip() for ip in header_value.split(",")]

        if not trusted_proxies:
            return ips[0]

        if ips[-1] in trusted_proxies and proxy_count < len(ips):
            return ips[-1 - proxy_count]

    if request.client and request.client.host:
        return request.client.host

    return None


def get_user_agent(request: Request) -> str:
    return request.headers.get("User-Agent", "Unknown")


def get_request_info(request: Request, keys: list[Literal["user_agent", "ip_address", "request_id"]]) -> dict[str, Any]:
    """
    Extract specified information from the request object.

    Args:
        request (Request): The FastAPI request object.
        keys (list): Keys to extract, any of `user_agent`, `ip_address` and `request_id`.

    Returns:
        dict: A dictionary containing the extracted information.
    """
    info: dict[str, Any] = {}

    if "user_agent" in keys:
        info["user_agent"] = get_user_agent(request)

    if "request_id" in keys:
        info["request_id"] = getattr(request.state, "request_id", None) or "Unknown"

    if "ip_address" in keys:
        info["ip_address"] = get_client_ip(request) or "Unknown"

    return info
