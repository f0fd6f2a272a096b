"""Client identifier used as the rate limiter's partition key.

Resolution order (first match wins):
  1. CF-Connecting-IP: set by Cloudflare, returned verbatim
  2. X-Forwarded-For: first hop of the comma-separated chain
  3. "<User-Agent>-<Accept-Language>", each defaulting to "unknown"

The fallback is weak (many clients share a UA string) but still better
than a single global bucket when the app runs without a proxy.
"""

from collections.abc import Mapping

from starlette.datastructures import Headers

UNKNOWN = "unknown"


def _lowercase_keys(headers: Mapping[str, str]) -> dict[str, str]:
    # Plain mappings are read as-is; no latin-1 round trip through Headers
    return {str(name).lower(): value for name, value in headers.items()}


def get_client_identifier(headers: Headers | Mapping[str, str]) -> str:
    lookup: Mapping[str, str] = (
        headers if isinstance(headers, Headers) else _lowercase_keys(headers)
    )

    cf_ip = lookup.get("cf-connecting-ip")
    if cf_ip:
        return cf_ip

    forwarded_for = lookup.get("x-forwarded-for")
    if forwarded_for:
        first_hop = forwarded_for.split(",")[0].strip()
        if first_hop:
            return first_hop

    user_agent = lookup.get("user-agent") or UNKNOWN
    language = lookup.get("accept-language") or UNKNOWN
    return f"{user_agent}-{language}"
