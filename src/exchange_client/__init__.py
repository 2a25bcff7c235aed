# -*- mode: python; coding: utf-8 -*-
#
# Copyright (C) 2025 Benjamin Thomas Schwertfeger
# All rights reserved.
# https://github.com/btschwertfeger
#

"""Client for authenticated cryptocurrency exchange REST trading APIs."""

from exchange_client.adapters.exchanges import (
    BybitExchangeClientAdapter,
    init_exchange_client,
)
from exchange_client.exceptions import (
    ConfigurationError,
    ExchangeError,
    ExchangeErrorType,
)
from exchange_client.interfaces import IExchangeClient

__all__ = [
    "BybitExchangeClientAdapter",
    "ConfigurationError",
    "ExchangeError",
    "ExchangeErrorType",
    "IExchangeClient",
    "init_exchange_client",
]
