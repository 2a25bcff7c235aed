# -*- mode: python; coding: utf-8 -*-
#
# Copyright (C) 2025 Benjamin Thomas Schwertfeger
# All rights reserved.
# https://github.com/btschwertfeger
#

from collections.abc import Callable
from decimal import Decimal
from logging import getLogger
from typing import Any, Self, TypeVar

from pydantic import BaseModel
from requests import Session

from exchange_client.core import signer
from exchange_client.core.dispatcher import DEFAULT_TIMEOUT, Dispatcher
from exchange_client.core.request import RequestBuilder
from exchange_client.exceptions import ExchangeError, ExchangeErrorType
from exchange_client.interfaces.exchange import IExchangeClient
from exchange_client.models.configuration import Credentials
from exchange_client.models.exchange import (
    ExchangeBalance,
    ExchangeBalancesAndPositions,
    Order,
    OrderCanceledId,
    PlaceOrder,
)

LOG = getLogger(__name__)

T = TypeVar("T")

BASE_URL = "https://api.bybit.com"
TESTNET_URL = "https://api-testnet.bybit.com"

# https://bybit-exchange.github.io/docs/inverse/#t-errors
BYBIT_ERROR_MAP: dict[int, ExchangeErrorType] = {
    # Authentication
    10002: ExchangeErrorType.AUTHENTICATION,  # timestamp outside recv_window
    10003: ExchangeErrorType.AUTHENTICATION,  # invalid api_key
    10004: ExchangeErrorType.AUTHENTICATION,  # invalid sign
    10005: ExchangeErrorType.AUTHENTICATION,  # permission denied
    33004: ExchangeErrorType.AUTHENTICATION,  # api_key expired
    # Rate limiting
    10006: ExchangeErrorType.RATE_LIMIT,
    10018: ExchangeErrorType.RATE_LIMIT,
    # Exchange internal
    10016: ExchangeErrorType.SERVICE_UNAVAILABLE,
    # Orders
    20001: ExchangeErrorType.ORDER_NOT_FOUND,
    30034: ExchangeErrorType.ORDER_NOT_FOUND,
    30032: ExchangeErrorType.ORDER_COMPLETED,  # already filled
    30037: ExchangeErrorType.ORDER_COMPLETED,  # already cancelled
    30010: ExchangeErrorType.INSUFFICIENT_FUNDS,
    30031: ExchangeErrorType.INSUFFICIENT_FUNDS,
    30049: ExchangeErrorType.INSUFFICIENT_FUNDS,
    10001: ExchangeErrorType.INVALID_ORDER,  # params error
    30021: ExchangeErrorType.INVALID_ORDER,
    30022: ExchangeErrorType.INVALID_ORDER,
    30024: ExchangeErrorType.INVALID_ORDER,
    30062: ExchangeErrorType.INVALID_ORDER,
    30067: ExchangeErrorType.INVALID_ORDER,
}


class BybitEnvelopeSchema(BaseModel):
    """Outer wrapper of every Bybit REST response"""

    ret_code: int
    ret_msg: str = ""
    result: Any = None
    time_now: Decimal | None = None  # "1577444332.192859"
    ext_code: str | None = None
    ext_info: Any = None


class BybitWalletBalanceSchema(BaseModel):
    """Balance of one coin, extended fields like equity are ignored"""

    wallet_balance: Decimal


def map_error(envelope: BybitEnvelopeSchema) -> ExchangeError:
    """Translates a rejected request into the typed error."""
    return ExchangeError(
        BYBIT_ERROR_MAP.get(envelope.ret_code, ExchangeErrorType.UNKNOWN),
        envelope.ret_msg or "Request rejected by Bybit",
        ret_code=envelope.ret_code,
    )


def check_envelope(payload: Any) -> BybitEnvelopeSchema:  # noqa: ANN401
    """Validates the envelope and raises if Bybit rejected the request."""
    envelope = BybitEnvelopeSchema.model_validate(payload)
    if envelope.ret_code != 0:
        raise map_error(envelope)
    return envelope


def unwrap(payload: Any) -> Any:  # noqa: ANN401
    return check_envelope(payload).result


class BybitExchangeClientAdapter(IExchangeClient):
    """Client for the Bybit v2 REST API."""

    BALANCE_ENDPOINT = "/v2/private/wallet/balance"
    PLACE_ORDER_ENDPOINT = "/v2/private/order/create"
    OPEN_ORDERS_ENDPOINT = "/v2/private/order"
    CANCEL_ORDER_ENDPOINT = "/v2/private/order/cancel"
    SERVER_TIME_ENDPOINT = "/v2/public/time"

    def __init__(  # noqa: PLR0913
        self: Self,
        credentials: Credentials,
        *,
        testnet: bool = False,
        recv_window: int | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        session: Session | None = None,
        clock: Callable[[], int] = signer.timestamp_ms,
    ) -> None:
        self.__exchange_account_id = credentials.exchange_account_id
        self.__builder = RequestBuilder(
            base_url=TESTNET_URL if testnet else BASE_URL,
            api_key=credentials.api_key,
            secret_key=credentials.secret_key,
            recv_window=recv_window,
            clock=clock,
        )
        self.__dispatcher = Dispatcher(session=session, timeout=timeout)

    @property
    def exchange_account_id(self: Self) -> str:
        return self.__exchange_account_id

    @property
    def base_url(self: Self) -> str:
        return self.__builder.base_url

    # == Implemented abstract methods from IExchangeClient =====================

    def get_balance(
        self: Self,
        asset: str | None = None,
        *,
        timeout: float | None = None,
    ) -> ExchangeBalancesAndPositions:
        """
        {
            "BTC": {"equity": 1002, "available_balance": 999.99, "wallet_balance": 1000, ...},
            ...
        }
        """
        LOG.debug("Retrieving the balances (asset=%s)...", asset)
        wallets = self.__request(
            "GET",
            self.BALANCE_ENDPOINT,
            dict[str, BybitWalletBalanceSchema],
            params={"coin": asset},
            timeout=timeout,
        )
        return ExchangeBalancesAndPositions(
            balances={
                coin: ExchangeBalance(balance=wallet.wallet_balance)
                for coin, wallet in wallets.items()
            },
            positions=None,
        )

    def place_order(
        self: Self,
        order: PlaceOrder,
        *,
        timeout: float | None = None,
    ) -> Order:
        LOG.info(
            "Placing %s %s order: %s %s @ %s",
            order.order_type,
            order.side,
            order.qty,
            order.symbol,
            order.price,
        )
        placed = self.__request(
            "POST",
            self.PLACE_ORDER_ENDPOINT,
            Order,
            params=order.model_dump(mode="json", exclude_none=True),
            timeout=timeout,
        )
        LOG.info("Placed order '%s' (%s)", placed.order_id, placed.order_status)
        return placed

    def get_order(
        self: Self,
        symbol: str,
        *,
        timeout: float | None = None,
    ) -> list[Order]:
        """
        Returns the active orders of ``symbol``.

        FIXME: Bybit returns at most 500 orders here, further pages are not
               requested.
        """
        LOG.debug("Retrieving open orders for %s...", symbol)
        orders = self.__request(
            "GET",
            self.OPEN_ORDERS_ENDPOINT,
            list[Order] | None,
            params={"symbol": symbol},
            timeout=timeout,
        )
        return orders or []

    def cancel_order(
        self: Self,
        symbol: str,
        order_id: str,
        *,
        timeout: float | None = None,
    ) -> OrderCanceledId:
        LOG.info("Canceling order '%s' (%s)...", order_id, symbol)
        return self.__request(
            "POST",
            self.CANCEL_ORDER_ENDPOINT,
            OrderCanceledId,
            params={"symbol": symbol, "order_id": order_id},
            timeout=timeout,
        )

    # == Custom Bybit Methods for convenience ==================================

    def get_server_time(self: Self, *, timeout: float | None = None) -> Decimal:
        """Returns the server time in seconds, the request is not signed."""
        request = self.__builder.build("GET", self.SERVER_TIME_ENDPOINT, auth=False)
        envelope = self.__dispatcher.send(
            request,
            BybitEnvelopeSchema,
            timeout=timeout,
            unwrap=check_envelope,
        )
        if envelope.time_now is None:
            raise ExchangeError(
                ExchangeErrorType.PARSING_ERROR,
                f"No server time in response: {envelope.model_dump_json()}",
            )
        return envelope.time_now

    def __request(  # noqa: PLR0913
        self: Self,
        method: str,
        endpoint: str,
        schema: type[T],
        *,
        params: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> T:
        request = self.__builder.build(method, endpoint, params, auth=True)
        try:
            return self.__dispatcher.send(
                request,
                schema,
                timeout=timeout,
                unwrap=unwrap,
            )
        except ExchangeError as exc:
            LOG.error("%s %s failed: %s", method, endpoint, exc)
            raise
