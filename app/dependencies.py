from fastapi import Request

from app.services.rate_limiter import RateLimiter


def get_rate_limiter(request: Request) -> RateLimiter:
    """Dependency returning the limiter created at startup."""
    return request.app.state.rate_limiter


def get_client_ip(request: Request) -> str:
    """First X-Forwarded-For hop, falling back to the peer address."""
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    if request.client and request.client.host:
        return request.client.host
    return "anonymous"
