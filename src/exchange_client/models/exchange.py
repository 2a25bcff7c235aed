# -*- mode: python; coding: utf-8 -*-
#
# Copyright (C) 2025 Benjamin Thomas Schwertfeger
# All rights reserved.
# https://github.com/btschwertfeger
#

"""
Exchange models exchanged between callers and the exchange clients.

Quantities, prices and balances are ``Decimal`` so that traded sizes never
pass through binary floating point. The enum values are the string tokens
used on the wire.
"""

from decimal import Decimal
from enum import StrEnum
from typing import Annotated, Self

from pydantic import BaseModel, Field, PlainSerializer, model_validator

# Plain notation in JSON, "0.00000001" instead of "1E-8"
PlainDecimal = Annotated[
    Decimal,
    PlainSerializer(
        lambda value: format(value, "f"),
        return_type=str,
        when_used="json",
    ),
]


class ExchangeType(StrEnum):
    """Exchanges a client can be constructed for."""

    BYBIT = "bybit"
    BINANCE = "binance"
    FTX = "ftx"


def exchange_from_string(exchange: str) -> ExchangeType:
    """Returns the exchange type for a name like "bybit" or "Ftx"."""
    try:
        return ExchangeType(exchange.strip().lower())
    except ValueError:
        raise ValueError(f"{exchange} <- is not a exchange type") from None


class Side(StrEnum):
    BUY = "Buy"
    SELL = "Sell"


class OrderType(StrEnum):
    LIMIT = "Limit"
    MARKET = "Market"


class TimeInForce(StrEnum):
    GOOD_TILL_CANCEL = "GoodTillCancel"
    FILL_OR_KILL = "FillOrKill"
    IMMEDIATE_OR_CANCEL = "ImmediateOrCancel"


class OrderStatus(StrEnum):
    """Order states as reported by the exchange"""

    CREATED = "Created"
    NEW = "New"
    PARTIALLY_FILLED = "PartiallyFilled"
    FILLED = "Filled"
    PENDING_CANCEL = "PendingCancel"
    CANCELLED = "Cancelled"
    REJECTED = "Rejected"
    # Conditional orders
    UNTRIGGERED = "Untriggered"
    TRIGGERED = "Triggered"
    DEACTIVATED = "Deactivated"
    ACTIVE = "Active"


class PlaceOrder(BaseModel):
    """
    Outbound order request.

    ``price`` is required by the exchange for limit orders and ignored for
    market orders. This is not checked locally, the exchange rejects such
    orders with an InvalidOrder error.
    """

    side: Side
    symbol: str = Field(..., min_length=1, description="Trading pair, e.g. BTCUSDT")
    order_type: OrderType
    qty: PlainDecimal = Field(..., gt=0, description="Order quantity")
    price: PlainDecimal | None = Field(None, gt=0, description="Limit price")
    time_in_force: TimeInForce = TimeInForce.GOOD_TILL_CANCEL
    reduce_only: bool = False
    close_on_trigger: bool = False


class Order(BaseModel):
    """Order as acknowledged by the exchange"""

    user_id: int
    order_id: str = Field(..., min_length=1)
    symbol: str
    side: Side
    order_type: OrderType
    price: PlainDecimal
    qty: PlainDecimal
    order_status: OrderStatus


class ExchangeBalance(BaseModel):
    balance: PlainDecimal


class ExchangeBalancesAndPositions(BaseModel):
    """
    Account snapshot keyed by the asset symbols as returned by the exchange.

    ``positions`` is ``None`` for exchanges that do not report derivatives
    margin data.
    """

    balances: dict[str, ExchangeBalance]
    positions: dict[str, ExchangeBalance] | None = None

    @model_validator(mode="after")
    def validate_asset_keys(self: Self) -> Self:
        """Validate that no asset symbol is empty"""
        if any(not asset for asset in self.balances):
            raise ValueError("Asset symbols of balances must not be empty")
        return self


class OrderCanceledId(BaseModel):
    order_id: str = Field(..., min_length=1)
