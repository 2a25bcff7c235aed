# -*- mode: python; coding: utf-8 -*-
#
# Copyright (C) 2025 Benjamin Thomas Schwertfeger
# All rights reserved.
# https://github.com/btschwertfeger
#

"""Exceptions raised by the exchange client."""

from enum import StrEnum
from typing import Self


class ExchangeErrorType(StrEnum):
    """Closed set of failure kinds an exchange operation can report."""

    UNKNOWN = "Unknown"
    REQUEST_ERROR = "RequestError"
    RATE_LIMIT = "RateLimit"
    ORDER_NOT_FOUND = "OrderNotFound"
    ORDER_COMPLETED = "OrderCompleted"
    INSUFFICIENT_FUNDS = "InsufficientFunds"
    INVALID_ORDER = "InvalidOrder"
    AUTHENTICATION = "Authentication"
    PARSING_ERROR = "ParsingError"
    SERVICE_UNAVAILABLE = "ServiceUnavailable"


class ExchangeError(Exception):
    """
    Typed failure of a request against an exchange.

    ``code`` holds the HTTP status of transport-level failures only and is
    ``None`` otherwise, e.g. for connection errors or undecodable responses.
    ``ret_code`` holds the exchange's own error code of a rejected request.
    """

    def __init__(
        self: Self,
        kind: ExchangeErrorType,
        message: str,
        code: int | None = None,
        *,
        ret_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.code = code
        self.ret_code = ret_code

    def __str__(self: Self) -> str:
        text = f"{self.kind}: {self.message}"
        if self.code is not None:
            text += f" (code={self.code})"
        if self.ret_code is not None:
            text += f" (ret_code={self.ret_code})"
        return text

    def __repr__(self: Self) -> str:
        return (
            f"{type(self).__name__}(kind={self.kind!r}, message={self.message!r},"
            f" code={self.code!r}, ret_code={self.ret_code!r})"
        )


class ConfigurationError(Exception):
    """Settings are missing or malformed."""
