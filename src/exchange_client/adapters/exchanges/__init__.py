# -*- mode: python; coding: utf-8 -*-
#
# Copyright (C) 2025 Benjamin Thomas Schwertfeger
# All rights reserved.
# https://github.com/btschwertfeger
#

from exchange_client.adapters.exchanges.bybit import BybitExchangeClientAdapter
from exchange_client.adapters.exchanges.factory import init_exchange_client

__all__ = ["BybitExchangeClientAdapter", "init_exchange_client"]
