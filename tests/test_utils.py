import time
from datetime import datetime, timezone

import jwt
import pytest

from tulusapi.utils import current_time, generate_token


def test_get_current_time():
    before = datetime.now(timezone.utc)
    got = current_time()
    after = datetime.now(timezone.utc)
    assert got.tzinfo == timezone.utc
    assert before <= got <= after


def test_generate_token_round_trip():
    payload = {"user_name": "alice", "exp": int(time.time()) + 300, "is": "7"}
    encoded = generate_token(payload, "secret")
    assert jwt.decode(encoded, "secret", algorithms=["HS256"]) == payload


def test_generate_token_header():
    claims = {"user_name": "alice"}
    encoded = generate_token(claims, "secret")
    assert jwt.get_unverified_header(encoded) == {"alg": "HS256", "typ": "JWT"}


def test_generate_token_wrong_key_fails_verification():
    claims = {"user_name": "alice"}
    encoded = generate_token(claims, "secret")
    with pytest.raises(jwt.InvalidSignatureError):
        jwt.decode(encoded, "placeholder", algorithms=["HS256"])


def test_generate_token_rejects_unserialisable_payload():
    claims = {"user_name": object()}
    with pytest.raises(TypeError):
        generate_token(claims, "secret")