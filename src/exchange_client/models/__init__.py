# -*- mode: python; coding: utf-8 -*-
#
# Copyright (C) 2025 Benjamin Thomas Schwertfeger
# All rights reserved.
# https://github.com/btschwertfeger
#

from exchange_client.models.configuration import (
    Credentials,
    Pair,
    Settings,
    Strategy,
)
from exchange_client.models.exchange import (
    ExchangeBalance,
    ExchangeBalancesAndPositions,
    ExchangeType,
    Order,
    OrderCanceledId,
    OrderStatus,
    OrderType,
    PlaceOrder,
    Side,
    TimeInForce,
    exchange_from_string,
)

__all__ = [
    "Credentials",
    "ExchangeBalance",
    "ExchangeBalancesAndPositions",
    "ExchangeType",
    "Order",
    "OrderCanceledId",
    "OrderStatus",
    "OrderType",
    "Pair",
    "PlaceOrder",
    "Settings",
    "Side",
    "Strategy",
    "TimeInForce",
    "exchange_from_string",
]
