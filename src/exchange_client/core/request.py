# -*- mode: python; coding: utf-8 -*-
#
# Copyright (C) 2025 Benjamin Thomas Schwertfeger
# All rights reserved.
# https://github.com/btschwertfeger
#

"""Assembles ready-to-send HTTP requests. No I/O happens here."""

from collections.abc import Callable
from logging import getLogger
from typing import Any, Self
from urllib.parse import urlencode

from pydantic import SecretStr, TypeAdapter
from requests import PreparedRequest, Request
from requests.exceptions import RequestException

from exchange_client.core import signer
from exchange_client.exceptions import ExchangeError, ExchangeErrorType

LOG = getLogger(__name__)

_BODY_ADAPTER = TypeAdapter(dict[str, Any])


class RequestBuilder:
    """
    Builds GET requests with their parameters in the query string and POST
    requests with a JSON body. Authenticated requests carry ``api_key``,
    ``timestamp`` and ``sign`` as computed by :mod:`exchange_client.core.signer`.
    """

    def __init__(  # noqa: PLR0913
        self: Self,
        base_url: str,
        api_key: str,
        secret_key: SecretStr,
        *,
        recv_window: int | None = None,
        clock: Callable[[], int] = signer.timestamp_ms,
    ) -> None:
        self.__base_url = base_url.rstrip("/")
        self.__api_key = api_key
        self.__secret_key = secret_key
        self.__recv_window = recv_window
        self.__clock = clock

    @property
    def base_url(self: Self) -> str:
        return self.__base_url

    def build(
        self: Self,
        method: str,
        endpoint: str,
        params: dict[str, Any] | None = None,
        *,
        auth: bool = False,
    ) -> PreparedRequest:
        """
        Returns the prepared request for ``method`` against ``endpoint``.

        Raises ExchangeError with kind RequestError if the URL is malformed or
        the parameters cannot be encoded.
        """
        method = method.upper()
        params = params or {}
        try:
            if method == "GET":
                request = self.__build_get(endpoint, params, auth=auth)
            elif method == "POST":
                request = self.__build_post(endpoint, params, auth=auth)
            else:
                raise ValueError(f"Unsupported HTTP method '{method}'")
            return request.prepare()
        except (
            RequestException,
            TypeError,
            ValueError,
        ) as exc:
            raise ExchangeError(
                ExchangeErrorType.REQUEST_ERROR,
                f"Cannot build {method} request for '{endpoint}': {exc}",
            ) from exc

    def __auth_params(self: Self) -> dict[str, Any]:
        return signer.auth_params(
            api_key=self.__api_key,
            timestamp=self.__clock(),
            recv_window=self.__recv_window,
        )

    def __build_get(
        self: Self,
        endpoint: str,
        params: dict[str, Any],
        *,
        auth: bool,
    ) -> Request:
        if auth:
            query = signer.sign_query(
                self.__secret_key.get_secret_value(),
                params,
                self.__auth_params(),
            )
        else:
            query = urlencode(
                [
                    (key, signer.render(value))
                    for key, value in params.items()
                    if value is not None
                ],
            )
        url = f"{self.__base_url}{endpoint}"
        if query:
            url = f"{url}?{query}"
        LOG.debug("Built GET %s (auth=%s)", endpoint, auth)
        return Request("GET", url)

    def __build_post(
        self: Self,
        endpoint: str,
        body: dict[str, Any],
        *,
        auth: bool,
    ) -> Request:
        if auth:
            body = signer.sign_body(
                self.__secret_key.get_secret_value(),
                body,
                self.__auth_params(),
            )
        else:
            body = {key: value for key, value in body.items() if value is not None}
        LOG.debug("Built POST %s (auth=%s)", endpoint, auth)
        return Request(
            "POST",
            f"{self.__base_url}{endpoint}",
            data=_BODY_ADAPTER.dump_json(
                {key: signer.wire_value(value) for key, value in body.items()},
            ),
            headers={"Content-Type": "application/json"},
        )
