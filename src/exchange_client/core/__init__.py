# -*- mode: python; coding: utf-8 -*-
#
# Copyright (C) 2025 Benjamin Thomas Schwertfeger
# All rights reserved.
# https://github.com/btschwertfeger
#
# Authenticated request pipeline: signer -> request builder -> dispatcher

from exchange_client.core.dispatcher import Dispatcher
from exchange_client.core.request import RequestBuilder

__all__ = ["Dispatcher", "RequestBuilder"]
