"""
Tests for bearer parsing and JWT encode/decode.
"""

import time

import pytest

from shared.exceptions import TokenInvalid, TokenMissing
from shared.security.jwt import decode_jwt, encode_jwt, parse_bearer

SECRET = "test-secret"


@pytest.mark.parametrize("header", [None, ""])
def test_parse_bearer_missing(header):
    with pytest.raises(TokenMissing):
        parse_bearer(header)


@pytest.mark.parametrize("header", ["token-only", "Basic abc", "Bearer a b"])
def test_parse_bearer_malformed(header):
    with pytest.raises(TokenInvalid):
        parse_bearer(header)


def test_parse_bearer_accepts_any_scheme_case():
    assert parse_bearer("bearer abc") == "abc"
    assert parse_bearer("Bearer abc") == "abc"


def test_encode_decode_round_trip():
    claims = {"userId": "u1", "role": "user", "exp": int(time.time()) + 60}

    token = encode_jwt(claims, secret=SECRET, algorithm="HS256")

    assert decode_jwt(token, secret=SECRET, algorithm="HS256") == claims


def test_decode_rejects_wrong_secret():
    token = encode_jwt({"exp": int(time.time()) + 60}, secret=SECRET, algorithm="HS256")

    with pytest.raises(TokenInvalid):
        decode_jwt(token, secret="other", algorithm="HS256")


def test_decode_rejects_expired():
    token = encode_jwt({"exp": int(time.time()) - 10}, secret=SECRET, algorithm="HS256")

    with pytest.raises(TokenInvalid):
        decode_jwt(token, secret=SECRET, algorithm="HS256")


def test_decode_requires_expiry():
    token = encode_jwt({"userId": "u1"}, secret=SECRET, algorithm="HS256")

    with pytest.raises(TokenInvalid):
        decode_jwt(token, secret=SECRET, algorithm="HS256")


def test_decode_rejects_garbage():
    with pytest.raises(TokenInvalid):
        decode_jwt("not-a-jwt", secret=SECRET, algorithm="HS256")
