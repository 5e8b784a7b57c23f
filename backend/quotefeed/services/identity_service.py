"""Identity service - works out which actor a request is acting for.

Resolution order: a valid bearer token names a registered actor; otherwise
a well-formed guest cookie is reused; otherwise a new guest id is minted and
has to be written back to the client. Resolution never raises: anything
unusable degrades to a guest identity.
"""

import uuid
from dataclasses import dataclass

import structlog
from jose import JWTError, jwt

from quotefeed.config import Settings, settings

logger = structlog.get_logger()

REGISTERED = "registered"
GUEST = "guest"


@dataclass(frozen=True)
class ResolvedActor:
    actor_id: str
    kind: str  # REGISTERED or GUEST
    role: str | None = None
    is_verified: bool = False
    minted: bool = False  # fresh guest id that still has to be sent as a cookie

    @property
    def is_registered(self) -> bool:
        return self.kind == REGISTERED


def bearer_token(authorization: str | None) -> str | None:
    """Extract the token from an `Authorization: Bearer <token>` header value."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        return None
    return token


def parse_guest_id(value: str | None) -> str | None:
    """Return the guest id if value is a canonical UUID string, else None."""
    if not value:
        return None
    try:
        parsed = uuid.UUID(value)
    except ValueError:
        return None
    canonical = str(parsed)
    if canonical != value.lower():
        return None
    return canonical


def _registered_from_token(token: str, conf: Settings) -> ResolvedActor | None:
    try:
        payload = jwt.decode(token, conf.JWT_SECRET, algorithms=[conf.JWT_ALGORITHM])
    except JWTError:
        logger.debug("auth_token_rejected")
        return None

    actor_id = payload.get("id") or payload.get("sub")
    if not actor_id:
        logger.debug("auth_token_missing_id")
        return None

    return ResolvedActor(
        actor_id=str(actor_id),
        kind=REGISTERED,
        role=payload.get("role"),
        is_verified=bool(payload.get("is_verified", False)),
    )


def resolve_actor(
    authorization: str | None,
    guest_cookie: str | None,
    conf: Settings = settings,
) -> ResolvedActor:
    """Resolve the acting identity from the auth header and the guest cookie."""
    token = bearer_token(authorization)
    if token:
        actor = _registered_from_token(token, conf)
        if actor is not None:
            return actor

    guest_id = parse_guest_id(guest_cookie)
    if guest_id is not None:
        return ResolvedActor(actor_id=guest_id, kind=GUEST, role=GUEST)

    minted = str(uuid.uuid4())
    logger.debug("guest_identity_minted")
    return ResolvedActor(actor_id=minted, kind=GUEST, role=GUEST, minted=True)
