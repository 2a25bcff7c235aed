# -*- mode: python; coding: utf-8 -*-
#
# Copyright (C) 2025 Benjamin Thomas Schwertfeger
# All rights reserved.
# https://github.com/btschwertfeger
#

"""
Configuration models and the loader for the settings files.

Settings are loaded once at start-up and passed explicitly into client
construction. All models are frozen.
"""

import tomllib
from decimal import Decimal
from logging import getLogger
from pathlib import Path
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, SecretStr, ValidationError

from exchange_client.exceptions import ConfigurationError

LOG = getLogger(__name__)

CONFIG_PATH = Path("settings/config.toml")
CREDENTIALS_PATH = Path("settings/credentials.toml")

CONFIG_EXAMPLE = """
[strategy]
currency_pair = { base = "ada", quote = "usdt" }
max_amount = 0.1
"""

CREDENTIALS_EXAMPLE = """
[exchanges]
    [exchanges.bybit]
    secret_key = ""
    api_key = ""
    exchange_account_id = ""
"""


class Credentials(BaseModel):
    """Authentication material of one exchange account."""

    model_config = ConfigDict(frozen=True)

    api_key: str
    secret_key: SecretStr
    exchange_account_id: str


class Pair(BaseModel):
    model_config = ConfigDict(frozen=True)

    base: str
    quote: str


class Strategy(BaseModel):
    model_config = ConfigDict(frozen=True)

    max_amount: Decimal
    currency_pair: Pair


class Settings(BaseModel):
    """Strategy and the credentials for each configured exchange."""

    model_config = ConfigDict(frozen=True)

    strategy: Strategy
    exchanges_credentials: dict[str, Credentials]

    @classmethod
    def from_files(
        cls: type[Self],
        config_path: Path | str = CONFIG_PATH,
        credentials_path: Path | str = CREDENTIALS_PATH,
    ) -> Self:
        """
        Loads the strategy from ``config_path`` and the exchange credentials
        from ``credentials_path``. Both are TOML files.
        """
        config = _read_toml(Path(config_path), example=CONFIG_EXAMPLE)
        credentials = _read_toml(Path(credentials_path), example=CREDENTIALS_EXAMPLE)

        if "strategy" not in config:
            raise ConfigurationError(
                f"No [strategy] table in {config_path}, it should look like:"
                f"\n{CONFIG_EXAMPLE}",
            )
        if not isinstance(exchanges := credentials.get("exchanges"), dict):
            raise ConfigurationError(
                f"No [exchanges] table in {credentials_path}, it should look like:"
                f"\n{CREDENTIALS_EXAMPLE}",
            )

        try:
            settings = cls(
                strategy=config["strategy"],
                exchanges_credentials=exchanges,
            )
        except ValidationError as exc:
            raise ConfigurationError(
                f"Invalid settings: {exc}\nconfig.toml should look like:"
                f"\n{CONFIG_EXAMPLE}\ncredentials.toml should look like:"
                f"\n{CREDENTIALS_EXAMPLE}",
            ) from exc

        LOG.debug(
            "Loaded settings for exchanges: %s",
            ", ".join(settings.exchanges_credentials),
        )
        return settings

    def credentials_for(self: Self, exchange: str) -> Credentials:
        """Returns the credentials stored under the exchange's name."""
        try:
            return self.exchanges_credentials[exchange]
        except KeyError:
            raise ConfigurationError(
                f"No credentials for '{exchange}', add an [exchanges.{exchange}]"
                " table with api_key, secret_key and exchange_account_id.",
            ) from None


def _read_toml(path: Path, example: str) -> dict[str, Any]:
    try:
        with path.open("rb") as file:
            return tomllib.load(file, parse_float=Decimal)
    except FileNotFoundError as exc:
        raise ConfigurationError(
            f"{path} is missing, it should look like:\n{example}",
        ) from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigurationError(f"{path} is not valid TOML: {exc}") from exc
