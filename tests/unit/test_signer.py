# -*- mode: python; coding: utf-8 -*-
#
# Copyright (C) 2025 Benjamin Thomas Schwertfeger
# All rights reserved.
# https://github.com/btschwertfeger
#

"""
Test module for request signing.

The golden values were computed independently from the message strings with
``openssl dgst -sha256 -hmac``. A change of any of them means that the
signed message changed and every authenticated request would be rejected.
"""

import time
from decimal import Decimal
from unittest.mock import patch
from urllib.parse import parse_qsl

import pytest

from exchange_client.core import signer
from exchange_client.exceptions import ExchangeError, ExchangeErrorType
from exchange_client.models.exchange import Side

SECRET = "t7T0YlFnYXk0Fx3JswQsDrViLg1Gh3DUU5Mr"  # noqa: S105
AUTH = {"api_key": "B2Rou0PLPpGqcU0Vu2", "timestamp": 1542434791000}


class TestSign:
    """Test cases for the HMAC signature"""

    def test_documented_example(self) -> None:
        """Test the signature of the example in the Bybit API documentation"""
        message = (
            "api_key=B2Rou0PLPpGqcU0Vu2&leverage=100&symbol=BTCUSD"
            "&timestamp=1542434791000"
        )
        assert (
            signer.sign(SECRET, message)
            == "670e3e4aa32b243f2dedf1dafcec2fd17a440e71b05681550416507de591d908"
        )

    def test_deterministic(self) -> None:
        """Test that the same secret and message always give the same signature"""
        params = {"symbol": "BTCUSDT", "coin": "BTC"}
        first = signer.sign_query(SECRET, params, AUTH)
        second = signer.sign_query(SECRET, dict(reversed(params.items())), AUTH)
        assert first == second

    def test_different_secret_different_signature(self) -> None:
        """Test that the signature depends on the secret"""
        message = "api_key=x&timestamp=1"
        assert signer.sign(SECRET, message) != signer.sign(SECRET + "x", message)


class TestCanonicalQuery:
    """Test cases for the canonical projection of parameters"""

    def test_sorted_by_key(self) -> None:
        """Test that keys are emitted in ascending order regardless of input order"""
        query = signer.canonical_query({"symbol": "BTC", "api_key": "X"})
        assert query == "api_key=X&symbol=BTC"

    def test_sorted_byte_wise(self) -> None:
        """Test that upper case keys sort before lower case keys"""
        query = signer.canonical_query({"b": 1, "a": 2, "Z": 3, "_": 4})
        assert [key for key, _ in parse_qsl(query)] == ["Z", "_", "a", "b"]

    def test_none_values_are_dropped(self) -> None:
        """Test that parameters without value are not part of the message"""
        assert signer.canonical_query({"coin": None, "api_key": "X"}) == "api_key=X"

    def test_values_are_url_encoded(self) -> None:
        """Test that reserved characters are encoded"""
        assert signer.canonical_query({"a": "x&y=z"}) == "a=x%26y%3Dz"

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (True, "true"),
            (False, "false"),
            (Decimal("0.001"), "0.001"),
            (Decimal("1E+3"), "1000"),
            (Side.SELL, "Sell"),
            (42, "42"),
            ("GoodTillCancel", "GoodTillCancel"),
        ],
    )
    def test_render(self, value: object, expected: str) -> None:
        """Test the string rendering of parameter values"""
        assert signer.render(value) == expected

    def test_render_rejects_floats(self) -> None:
        """Test that floats cannot be signed"""
        with pytest.raises(TypeError, match="float"):
            signer.render(0.1)


class TestSignQuery:
    """Test cases for signed GET query strings"""

    def test_golden_query(self) -> None:
        """Test the query string for a fixed secret, timestamp and parameters"""
        assert signer.sign_query(SECRET, {"symbol": "BTCUSDT"}, AUTH) == (
            "api_key=B2Rou0PLPpGqcU0Vu2&symbol=BTCUSDT&timestamp=1542434791000"
            "&sign=2b9c43c35c7b9d048bf26b6f78ace9c391bc5927717194dc428e8371fee3b563"
        )

    def test_sign_is_not_self_included(self) -> None:
        """Test that the signature covers everything but itself"""
        query = signer.sign_query(SECRET, {"symbol": "BTCUSDT"}, AUTH)
        message, _, signature = query.rpartition("&sign=")

        assert "sign=" not in message
        assert signer.sign(SECRET, message) == signature

    def test_sign_parameter_is_reserved(self) -> None:
        """Test that callers cannot pass their own signature"""
        with pytest.raises(ValueError, match="reserved"):
            signer.sign_query(SECRET, {"sign": "abc"}, AUTH)

    def test_auth_parameters_win_ties(self) -> None:
        """Test that the injected auth parameters override caller parameters"""
        query = signer.sign_query(SECRET, {"api_key": "other"}, AUTH)
        assert dict(parse_qsl(query))["api_key"] == "B2Rou0PLPpGqcU0Vu2"


class TestSignBody:
    """Test cases for signed POST bodies"""

    def test_golden_body(self) -> None:
        """Test the body of a limit order for a fixed secret and timestamp"""
        body = {
            "side": "Sell",
            "symbol": "BTCUSDT",
            "order_type": "Limit",
            "qty": "0.001",
            "price": "22200",
            "time_in_force": "GoodTillCancel",
            "reduce_only": False,
            "close_on_trigger": False,
        }
        signed = signer.sign_body(SECRET, body, AUTH)

        assert signed == body | AUTH | {
            "sign": "c9d5bd83a26e6d64967ddb32f5b8e2564255657d3126777643b9b8be16044ec2",
        }

    def test_body_is_not_modified(self) -> None:
        """Test that the caller's body is left untouched"""
        body = {"symbol": "BTCUSDT"}
        signer.sign_body(SECRET, body, AUTH)
        assert body == {"symbol": "BTCUSDT"}

    def test_sign_covers_merged_body(self) -> None:
        """Test that the signature is computed over the merged body without itself"""
        signed = signer.sign_body(SECRET, {"symbol": "BTCUSDT"}, AUTH)
        signature = signed.pop("sign")
        assert signer.sign(SECRET, signer.canonical_query(signed)) == signature


class TestTimestamp:
    """Test cases for the request timestamp"""

    def test_milliseconds(self) -> None:
        """Test that the timestamp is the current time in milliseconds"""
        before = int(time.time() * 1000)
        assert before - 1 <= signer.timestamp_ms() <= int(time.time() * 1000) + 1

    def test_clock_unavailable(self) -> None:
        """Test that a failing clock raises a RequestError"""
        with (
            patch("exchange_client.core.signer.time.time_ns", side_effect=OSError),
            pytest.raises(ExchangeError) as exc_info,
        ):
            signer.timestamp_ms()

        assert exc_info.value.kind == ExchangeErrorType.REQUEST_ERROR
