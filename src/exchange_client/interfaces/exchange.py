# -*- mode: python; coding: utf-8 -*-
#
# Copyright (C) 2025 Benjamin Thomas Schwertfeger
# All rights reserved.
# https://github.com/btschwertfeger
#

"""
Interface of the exchange clients

Each exchange provides one adapter implementing this capability set. The
interface carries no shared state or behaviour.
"""

from abc import ABC, abstractmethod
from typing import Self

from exchange_client.models.exchange import (
    ExchangeBalancesAndPositions,
    Order,
    OrderCanceledId,
    PlaceOrder,
)


class IExchangeClient(ABC):
    """Interface for trading operations on an exchange account."""

    @abstractmethod
    def get_balance(
        self: Self,
        asset: str | None = None,
        *,
        timeout: float | None = None,
    ) -> ExchangeBalancesAndPositions:
        """
        Get the balances of the account, optionally filtered to ``asset``.

        ``timeout`` is the deadline in seconds for this call.
        """
        raise NotImplementedError(
            "This method should be implemented in the concrete exchange class.",
        )

    @abstractmethod
    def place_order(
        self: Self,
        order: PlaceOrder,
        *,
        timeout: float | None = None,
    ) -> Order:
        """Place a new order."""
        raise NotImplementedError(
            "This method should be implemented in the concrete exchange class.",
        )

    @abstractmethod
    def get_order(
        self: Self,
        symbol: str,
        *,
        timeout: float | None = None,
    ) -> list[Order]:
        """
        Get the open orders for ``symbol``.

        Only the first page returned by the exchange is read.
        """
        raise NotImplementedError(
            "This method should be implemented in the concrete exchange class.",
        )

    @abstractmethod
    def cancel_order(
        self: Self,
        symbol: str,
        order_id: str,
        *,
        timeout: float | None = None,
    ) -> OrderCanceledId:
        """Cancel an order."""
        raise NotImplementedError(
            "This method should be implemented in the concrete exchange class.",
        )
