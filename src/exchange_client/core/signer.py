# -*- mode: python; coding: utf-8 -*-
#
# Copyright (C) 2025 Benjamin Thomas Schwertfeger
# All rights reserved.
# https://github.com/btschwertfeger
#

"""
Request signing

The message to sign is the same for GET and POST requests: the top-level
parameters merged with the auth parameters, sorted byte-wise by key, rendered
as strings, URL-encoded and joined as ``key=value`` pairs with ``&``. The
signature is the lowercase hex HMAC-SHA256 of that message keyed with the
account's secret. The ``sign`` parameter itself is never part of the message.
"""

import hashlib
import hmac
import time
from decimal import Decimal
from enum import Enum
from typing import Any
from urllib.parse import urlencode

from exchange_client.exceptions import ExchangeError, ExchangeErrorType

SIGN_KEY = "sign"


def timestamp_ms() -> int:
    """Current Unix time in milliseconds."""
    try:
        return time.time_ns() // 1_000_000
    except OSError as exc:
        raise ExchangeError(
            ExchangeErrorType.REQUEST_ERROR,
            f"System clock is unavailable: {exc}",
        ) from exc


def auth_params(
    api_key: str,
    timestamp: int,
    recv_window: int | None = None,
) -> dict[str, Any]:
    """The parameters injected into every authenticated request."""
    params: dict[str, Any] = {"api_key": api_key, "timestamp": timestamp}
    if recv_window is not None:
        params["recv_window"] = recv_window
    return params


def render(value: Any) -> str:  # noqa: ANN401
    """Renders a parameter value the way it appears in the signed message."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, Decimal):
        return format(value, "f")
    if isinstance(value, (str, int)):
        return str(value)
    raise TypeError(
        f"Cannot sign parameter value of type {type(value).__name__}: {value!r}",
    )


def wire_value(value: Any) -> Any:  # noqa: ANN401
    """
    JSON value of a body parameter. Strings are the same as in the signed
    message, only booleans and integers stay JSON literals.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and not isinstance(value, Enum):
        return value
    return render(value)


def canonical_query(params: dict[str, Any]) -> str:
    """
    Sorted, URL-encoded ``key=value&...`` projection of ``params``.

    Parameters with ``None`` values are dropped. Keys are compared as UTF-8
    bytes so that the order does not depend on the locale.
    """
    items = sorted(
        ((key, render(value)) for key, value in params.items() if value is not None),
        key=lambda item: item[0].encode(),
    )
    return urlencode(items)


def sign(secret: str, message: str) -> str:
    """HMAC-SHA256 of ``message`` keyed with ``secret`` as lowercase hex."""
    return hmac.new(
        secret.encode(),
        message.encode(),
        hashlib.sha256,
    ).hexdigest()


def sign_query(
    secret: str,
    params: dict[str, Any],
    auth: dict[str, Any],
) -> str:
    """
    Returns the query string for an authenticated GET request.

    The signed message is the canonical query of ``params`` merged with
    ``auth``, the returned string is that message with ``&sign=<hex>``
    appended.
    """
    message = canonical_query(_merge(params, auth))
    return f"{message}&{SIGN_KEY}={sign(secret, message)}"


def sign_body(
    secret: str,
    body: dict[str, Any],
    auth: dict[str, Any],
) -> dict[str, Any]:
    """
    Returns the body of an authenticated POST request: ``body`` merged with
    ``auth`` plus the ``sign`` computed over their canonical projection.
    """
    merged = {
        key: value for key, value in _merge(body, auth).items() if value is not None
    }
    merged[SIGN_KEY] = sign(secret, canonical_query(merged))
    return merged


def _merge(params: dict[str, Any], auth: dict[str, Any]) -> dict[str, Any]:
    if SIGN_KEY in params:
        raise ValueError(f"'{SIGN_KEY}' is reserved for the request signature")
    # Auth parameters win ties.
    return params | auth
