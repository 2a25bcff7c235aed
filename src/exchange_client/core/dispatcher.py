# -*- mode: python; coding: utf-8 -*-
#
# Copyright (C) 2025 Benjamin Thomas Schwertfeger
# All rights reserved.
# https://github.com/btschwertfeger
#

"""Sends prepared requests and decodes their JSON responses."""

from collections.abc import Callable
from decimal import Decimal
from logging import getLogger
from typing import Any, Self, TypeVar
from urllib.parse import urlsplit

from pydantic import TypeAdapter, ValidationError
from requests import PreparedRequest, Response, Session
from requests.exceptions import JSONDecodeError, RequestException

from exchange_client.exceptions import ExchangeError, ExchangeErrorType

LOG = getLogger(__name__)

DEFAULT_TIMEOUT = 10.0

T = TypeVar("T")


class Dispatcher:
    """
    Executes requests over a shared session.

    The session is only used through ``Session.send`` and may be shared by
    concurrent callers.
    """

    def __init__(
        self: Self,
        session: Session | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.__session = session if session is not None else Session()
        self.__timeout = timeout

    @property
    def timeout(self: Self) -> float:
        return self.__timeout

    def send(
        self: Self,
        request: PreparedRequest,
        schema: type[T],
        *,
        timeout: float | None = None,
        unwrap: Callable[[Any], Any] | None = None,
    ) -> T:
        """
        Sends ``request`` and validates the JSON response against ``schema``.

        ``timeout`` overrides the default timeout in seconds for this call.
        ``unwrap`` receives the decoded JSON and returns the part to validate,
        exchanges use it to strip their response envelope.

        Raises ExchangeError with kind RequestError on transport failures and
        non-2xx responses, and with kind ParsingError if the body is not JSON
        or does not match ``schema``. The raw body is part of the message.
        """
        response = self.__execute(request, timeout)
        payload = _json(response)
        try:
            if unwrap is not None:
                payload = unwrap(payload)
            return TypeAdapter(schema).validate_python(payload)
        except ValidationError as exc:
            raise ExchangeError(
                ExchangeErrorType.PARSING_ERROR,
                f"Could not decode response {response.text!r}: {exc}",
            ) from exc

    def __execute(
        self: Self,
        request: PreparedRequest,
        timeout: float | None,
    ) -> Response:
        path = urlsplit(request.url or "").path
        LOG.debug("Sending %s %s", request.method, path)
        try:
            response = self.__session.send(
                request,
                timeout=self.__timeout if timeout is None else timeout,
            )
        except RequestException as exc:
            LOG.warning("%s %s failed: %s", request.method, path, exc)
            raise ExchangeError(
                ExchangeErrorType.REQUEST_ERROR,
                f"{request.method} {path} failed: {exc}",
            ) from exc

        if not 200 <= response.status_code < 300:  # noqa: PLR2004
            LOG.warning(
                "%s %s returned HTTP %d",
                request.method,
                path,
                response.status_code,
            )
            raise ExchangeError(
                ExchangeErrorType.REQUEST_ERROR,
                f"{request.method} {path} returned HTTP {response.status_code}:"
                f" {response.text}",
                code=response.status_code,
            )
        return response


def _json(response: Response) -> Any:  # noqa: ANN401
    try:
        return response.json(parse_float=Decimal)
    except JSONDecodeError as exc:
        raise ExchangeError(
            ExchangeErrorType.PARSING_ERROR,
            f"Could not decode response {response.text!r}: {exc}",
        ) from exc
