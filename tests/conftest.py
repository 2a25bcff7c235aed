# -*- mode: python; coding: utf-8 -*-
#
# Copyright (C) 2025 Benjamin Thomas Schwertfeger
# All rights reserved.
# https://github.com/btschwertfeger
#

from collections.abc import Callable
from unittest.mock import Mock

import pytest
from requests import Response, Session

from exchange_client.adapters.exchanges.bybit import BybitExchangeClientAdapter
from exchange_client.models.configuration import Credentials

# Example credentials from the Bybit API documentation
API_KEY = "B2Rou0PLPpGqcU0Vu2"
SECRET_KEY = "t7T0YlFnYXk0Fx3JswQsDrViLg1Gh3DUU5Mr"  # noqa: S105
TIMESTAMP = 1542434791000


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(
        api_key=API_KEY,
        secret_key=SECRET_KEY,
        exchange_account_id="123456",
    )


@pytest.fixture
def make_response() -> Callable[..., Response]:
    """Returns a factory for real responses with a fixed body."""

    def factory(body: str, status_code: int = 200) -> Response:
        response = Response()
        response.status_code = status_code
        response.reason = "OK" if status_code < 400 else "Error"
        response._content = body.encode()
        response.encoding = "utf-8"
        response.url = "https://api.bybit.com"
        return response

    return factory


@pytest.fixture
def session() -> Mock:
    """Session stub, set ``session.send.return_value`` to answer requests."""
    return Mock(spec=Session)


@pytest.fixture
def bybit_client(credentials: Credentials, session: Mock) -> BybitExchangeClientAdapter:
    return BybitExchangeClientAdapter(
        credentials,
        session=session,
        clock=lambda: TIMESTAMP,
    )
