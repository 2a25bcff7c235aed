# -*- mode: python; coding: utf-8 -*-
#
# Copyright (C) 2025 Benjamin Thomas Schwertfeger
# All rights reserved.
# https://github.com/btschwertfeger
#

from exchange_client.interfaces.exchange import IExchangeClient

__all__ = ["IExchangeClient"]
