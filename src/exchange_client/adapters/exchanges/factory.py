# -*- mode: python; coding: utf-8 -*-
#
# Copyright (C) 2025 Benjamin Thomas Schwertfeger
# All rights reserved.
# https://github.com/btschwertfeger
#

"""Selects the client implementation for an exchange type."""

from logging import getLogger
from typing import Any

from exchange_client.adapters.exchanges.bybit import BybitExchangeClientAdapter
from exchange_client.interfaces.exchange import IExchangeClient
from exchange_client.models.configuration import Settings
from exchange_client.models.exchange import ExchangeType

LOG = getLogger(__name__)


def init_exchange_client(
    exchange_type: ExchangeType,
    settings: Settings,
    **kwargs: Any,  # noqa: ANN401
) -> IExchangeClient:
    """
    Returns the client for ``exchange_type`` using the credentials stored
    under the exchange's name in ``settings``.

    Keyword arguments are passed to the client, e.g. ``testnet``,
    ``recv_window`` or ``timeout``.
    """
    match exchange_type:
        case ExchangeType.BYBIT:
            credentials = settings.credentials_for(exchange_type.value)
            LOG.info(
                "Initializing Bybit client for account '%s'",
                credentials.exchange_account_id,
            )
            return BybitExchangeClientAdapter(credentials, **kwargs)
        case ExchangeType.BINANCE | ExchangeType.FTX:
            raise NotImplementedError(
                f"The {exchange_type.name.title()} client is not implemented yet.",
            )
        case _:
            raise ValueError(f"{exchange_type} <- is not a exchange type")
