"""Request-scoped dependencies shared by the routes."""

import random

from fastapi import Request, Response

from quotefeed.config import FeedConfig, settings
from quotefeed.core.sampling import new_rng
from quotefeed.services.identity_service import ResolvedActor, resolve_actor


def get_feed_config() -> FeedConfig:
    return settings.FEED


def get_rng() -> random.Random:
    return new_rng()


def _is_https(request: Request) -> bool:
    forwarded_proto = request.headers.get("x-forwarded-proto", "")
    if forwarded_proto:
        return forwarded_proto.split(",")[0].strip() == "https"
    return request.url.scheme == "https"


async def get_actor(request: Request, response: Response) -> ResolvedActor:
    """Resolve the acting identity; hand a freshly minted guest id back as a cookie."""
    actor = resolve_actor(
        request.headers.get("authorization"),
        request.cookies.get(settings.GUEST_COOKIE_NAME),
    )
    if actor.minted:
        response.set_cookie(
            settings.GUEST_COOKIE_NAME,
            actor.actor_id,
            max_age=settings.GUEST_COOKIE_MAX_AGE,
            path="/",
            httponly=True,
            samesite="lax",
            secure=_is_https(request),
        )
    return actor


def client_address(request: Request) -> str:
    """Originating client address: first X-Forwarded-For hop, else the peer."""
    forwarded_for = request.headers.get("x-forwarded-for", "")
    if forwarded_for:
        first_hop = forwarded_for.split(",")[0].strip()
        if first_hop:
            return first_hop
    if request.client is not None:
        return request.client.host
    return "unknown"


def rate_limit_key(request: Request, actor: ResolvedActor) -> str:
    """Registered actors are limited per account, guests per client address.

    Guest ids are free to mint by dropping the cookie, so they cannot carry a limit.
    """
    if actor.is_registered:
        return f"actor:{actor.actor_id}"
    return f"addr:{client_address(request)}"
