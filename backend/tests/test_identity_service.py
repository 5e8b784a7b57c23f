"""Tests for the identity service - token, cookie and guest minting paths."""

import uuid

from conftest import make_token
from quotefeed.services.identity_service import (
    GUEST,
    REGISTERED,
    bearer_token,
    parse_guest_id,
    resolve_actor,
)

GUEST_ID = "3f2b8c1e-9a4d-4e6f-8b1a-2c3d4e5f6a7b"


def test_valid_token_wins():
    token = make_token("user-1", role="admin", is_verified=True)
    actor = resolve_actor(f"Bearer {token}", GUEST_ID)
    assert actor.actor_id == "user-1"
    assert actor.kind == REGISTERED
    assert actor.is_registered
    assert actor.role == "admin"
    assert actor.is_verified is True
    assert actor.minted is False


def test_token_with_sub_claim():
    from jose import jwt
    from quotefeed.config import settings

    token = jwt.encode({"sub": "user-2"}, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
    actor = resolve_actor(f"Bearer {token}", None)
    assert actor.actor_id == "user-2"
    assert actor.kind == REGISTERED


def test_cookie_reused():
    actor = resolve_actor(None, GUEST_ID)
    assert actor.actor_id == GUEST_ID
    assert actor.kind == GUEST
    assert actor.minted is False


def test_same_cookie_same_actor():
    assert resolve_actor(None, GUEST_ID).actor_id == resolve_actor(None, GUEST_ID).actor_id


def test_no_cookie_mints_fresh_ids():
    first = resolve_actor(None, None)
    second = resolve_actor(None, None)
    assert first.minted and second.minted
    assert first.actor_id != second.actor_id
    assert uuid.UUID(first.actor_id)


def test_invalid_cookie_mints():
    actor = resolve_actor(None, "not-a-uuid")
    assert actor.minted
    assert actor.actor_id != "not-a-uuid"


def test_bad_signature_degrades_to_guest():
    token = make_token("user-1", secret="some-other-secret")
    actor = resolve_actor(f"Bearer {token}", GUEST_ID)
    assert actor.kind == GUEST
    assert actor.actor_id == GUEST_ID


def test_garbage_token_degrades_to_guest():
    actor = resolve_actor("Bearer definitely.not.ajwt", None)
    assert actor.kind == GUEST
    assert actor.minted


def test_token_without_id_degrades_to_guest():
    from jose import jwt
    from quotefeed.config import settings

    token = jwt.encode({"role": "user"}, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
    actor = resolve_actor(f"Bearer {token}", GUEST_ID)
    assert actor.kind == GUEST


def test_bearer_token_parsing():
    assert bearer_token("Bearer abc") == "abc"
    assert bearer_token("bearer abc") == "abc"
    assert bearer_token("Basic abc") is None
    assert bearer_token("Bearer ") is None
    assert bearer_token(None) is None


def test_parse_guest_id():
    assert parse_guest_id(GUEST_ID) == GUEST_ID
    assert parse_guest_id(GUEST_ID.upper()) == GUEST_ID
    assert parse_guest_id(GUEST_ID.replace("-", "")) is None
    assert parse_guest_id("") is None
    assert parse_guest_id(None) is None
