#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Copyright (C) 2025 Benjamin Thomas Schwertfeger
# GitHub: https://github.com/btschwertfeger
#

import sys
from collections.abc import Iterator
from contextlib import contextmanager
from decimal import Decimal, InvalidOperation
from logging import DEBUG, INFO, WARNING, basicConfig, getLogger
from typing import Any

from click import (
    BOOL,
    FLOAT,
    INT,
    STRING,
    BadParameter,
    ClickException,
    Context,
    echo,
    pass_context,
)
from cloup import Choice, HelpFormatter, HelpTheme, Style, group, option
from pydantic import BaseModel, TypeAdapter, ValidationError

from exchange_client.adapters.exchanges import (
    BybitExchangeClientAdapter,
    init_exchange_client,
)
from exchange_client.exceptions import ConfigurationError, ExchangeError
from exchange_client.interfaces import IExchangeClient
from exchange_client.models.configuration import (
    CONFIG_PATH,
    CREDENTIALS_PATH,
    Settings,
)
from exchange_client.models.exchange import (
    ExchangeType,
    Order,
    OrderType,
    PlaceOrder,
    Side,
    TimeInForce,
    exchange_from_string,
)

LOG = getLogger(__name__)

FORMATTER_SETTINGS = HelpFormatter.settings(
    theme=HelpTheme(
        invoked_command=Style(fg="bright_yellow"),
        heading=Style(fg="bright_white", bold=True),
        constraint=Style(fg="magenta"),
        col1=Style(fg="bright_yellow"),
    ),
)


def print_version(ctx: Context, param: Any, value: Any) -> None:  # noqa: ANN401, ARG001
    """Prints the version of the package"""
    if not value or ctx.resilient_parsing:
        return
    from importlib.metadata import (  # noqa: PLC0415 # pylint: disable=import-outside-toplevel
        version,
    )

    echo(version("exchange-client"))
    ctx.exit()


def ensure_larger_than_zero(
    ctx: Context,
    param: Any,  # noqa: ANN401
    value: Any,  # noqa: ANN401
) -> Any:  # noqa: ANN401
    """Ensure the value is larger than 0"""
    if value is not None and value <= 0:
        ctx.fail(f"Value for option '{param.name}' must be larger than 0")
    return value


def to_decimal(
    ctx: Context,  # noqa: ARG001
    param: Any,  # noqa: ANN401
    value: str | None,
) -> Decimal | None:
    """Converts the option value to a Decimal without passing through float"""
    if value is None:
        return None
    try:
        return Decimal(value)
    except InvalidOperation:
        raise BadParameter(f"'{value}' is not a decimal number", param=param) from None


@contextmanager
def exchange_errors() -> Iterator[None]:
    """Renders exchange and configuration errors as CLI errors"""
    try:
        yield
    except (
        ExchangeError,
        ConfigurationError,
        NotImplementedError,
        ValidationError,
    ) as exc:
        LOG.debug("Command failed", exc_info=exc)
        raise ClickException(str(exc)) from exc


def client_from_context(ctx: Context) -> IExchangeClient:
    """Builds the exchange client from the group options"""
    options = ctx.obj
    settings = Settings.from_files(
        config_path=options["config"],
        credentials_path=options["credentials"],
    )
    kwargs: dict[str, Any] = {"testnet": options["testnet"]}
    if options["recv_window"] is not None:
        kwargs["recv_window"] = options["recv_window"]
    if options["timeout"] is not None:
        kwargs["timeout"] = options["timeout"]
    return init_exchange_client(
        exchange_from_string(options["exchange"]),
        settings,
        **kwargs,
    )


def show(result: BaseModel | list[Order]) -> None:
    if isinstance(result, BaseModel):
        echo(result.model_dump_json(indent=2))
    else:
        echo(TypeAdapter(list[Order]).dump_json(result, indent=2).decode())


@group(
    context_settings={
        "auto_envvar_prefix": "EXCHANGE_CLIENT",
        "help_option_names": ["-h", "--help"],
    },
    formatter_settings=FORMATTER_SETTINGS,
    no_args_is_help=True,
)
@option(
    "--version",
    is_flag=True,
    callback=print_version,
    expose_value=False,
    is_eager=True,
)
@option(
    "--config",
    type=STRING,
    default=str(CONFIG_PATH),
    show_default=True,
    help="Path to the TOML file holding the strategy settings.",
)
@option(
    "--credentials",
    type=STRING,
    default=str(CREDENTIALS_PATH),
    show_default=True,
    help="Path to the TOML file holding the exchange credentials.",
)
@option(
    "--exchange",
    type=Choice(choices=[e.value for e in ExchangeType], case_sensitive=False),
    default=ExchangeType.BYBIT.value,
    show_default=True,
    help="The exchange to trade on.",
)
@option(
    "--testnet",
    is_flag=True,
    default=False,
    help="Use the exchange's testnet.",
)
@option(
    "--recv-window",
    type=INT,
    required=False,
    callback=ensure_larger_than_zero,
    help="Milliseconds a signed request stays valid on the exchange.",
)
@option(
    "--timeout",
    type=FLOAT,
    required=False,
    callback=ensure_larger_than_zero,
    help="Timeout of each request in seconds.",
)
@option(
    "-v",
    "--verbose",
    count=True,
    help="Increase the verbosity of output. Use -vv for even more verbosity.",
)
@pass_context
def cli(ctx: Context, **kwargs: dict) -> None:
    """
    Command-line interface entry point
    """
    ctx.ensure_object(dict)
    ctx.obj |= kwargs

    verbosity = kwargs.get("verbose", 0)

    basicConfig(
        format="%(asctime)s %(levelname)8s | %(message)s",
        datefmt="%Y/%m/%d %H:%M:%S",
        level=INFO if verbosity == 0 else DEBUG,
    )

    if verbosity > 1:  # type: ignore[operator]
        getLogger("requests").setLevel(DEBUG)
        getLogger("urllib3").setLevel(DEBUG)
    else:
        getLogger("requests").setLevel(WARNING)
        getLogger("urllib3").setLevel(WARNING)


@cli.command(formatter_settings=FORMATTER_SETTINGS)
@option("--asset", type=STRING, required=False, help="Only show this asset.")
@pass_context
def balance(ctx: Context, asset: str | None) -> None:
    """Show the account balances"""
    with exchange_errors():
        show(client_from_context(ctx).get_balance(asset))


@cli.command(name="place-order", formatter_settings=FORMATTER_SETTINGS)
@option("--symbol", type=STRING, required=True, help="The trading pair, e.g. BTCUSDT.")
@option(
    "--side",
    type=Choice(choices=[s.value for s in Side], case_sensitive=True),
    required=True,
)
@option(
    "--order-type",
    type=Choice(choices=[o.value for o in OrderType], case_sensitive=True),
    default=OrderType.LIMIT.value,
    show_default=True,
)
@option("--qty", type=STRING, required=True, callback=to_decimal)
@option(
    "--price",
    type=STRING,
    required=False,
    callback=to_decimal,
    help="Required for limit orders.",
)
@option(
    "--time-in-force",
    type=Choice(choices=[t.value for t in TimeInForce], case_sensitive=True),
    default=TimeInForce.GOOD_TILL_CANCEL.value,
    show_default=True,
)
@option("--reduce-only", type=BOOL, is_flag=True, default=False)
@option("--close-on-trigger", type=BOOL, is_flag=True, default=False)
@pass_context
def place_order(ctx: Context, **kwargs: Any) -> None:  # noqa: ANN401
    """Place an order"""
    with exchange_errors():
        show(client_from_context(ctx).place_order(PlaceOrder(**kwargs)))


@cli.command(formatter_settings=FORMATTER_SETTINGS)
@option("--symbol", type=STRING, required=True)
@pass_context
def orders(ctx: Context, symbol: str) -> None:
    """List the open orders of a symbol"""
    with exchange_errors():
        show(client_from_context(ctx).get_order(symbol))


@cli.command(formatter_settings=FORMATTER_SETTINGS)
@option("--symbol", type=STRING, required=True)
@option("--order-id", type=STRING, required=True)
@pass_context
def cancel(ctx: Context, symbol: str, order_id: str) -> None:
    """Cancel an order"""
    with exchange_errors():
        show(client_from_context(ctx).cancel_order(symbol, order_id))


@cli.command(name="server-time", formatter_settings=FORMATTER_SETTINGS)
@pass_context
def server_time(ctx: Context) -> None:
    """Show the exchange's server time"""
    with exchange_errors():
        client = client_from_context(ctx)
        if not isinstance(client, BybitExchangeClientAdapter):
            raise ClickException(f"{ctx.obj['exchange']} has no server time endpoint")
        echo(client.get_server_time())


@cli.command(formatter_settings=FORMATTER_SETTINGS)
@option("--symbol", type=STRING, default="BTCUSDT", show_default=True)
@option("--qty", type=STRING, default="0.001", show_default=True, callback=to_decimal)
@option("--price", type=STRING, default="22200", show_default=True, callback=to_decimal)
@option(
    "-f",
    "--force",
    required=False,
    type=BOOL,
    default=False,
    is_flag=True,
    show_default=True,
)
@pass_context
def demo(
    ctx: Context,
    symbol: str,
    qty: Decimal,
    price: Decimal,
    force: bool,  # noqa: FBT001
) -> None:
    """
    Fetch the balances, place a limit sell order, list the open orders and
    cancel the placed order.
    """
    if not force:
        print("Not placing orders, -f is required!")  # noqa: T201
        sys.exit(1)

    with exchange_errors():
        client = client_from_context(ctx)
        show(client.get_balance())
        placed = client.place_order(
            PlaceOrder(
                side=Side.SELL,
                symbol=symbol,
                order_type=OrderType.LIMIT,
                qty=qty,
                price=price,
                time_in_force=TimeInForce.GOOD_TILL_CANCEL,
            ),
        )
        show(placed)
        show(client.get_order(symbol))
        show(client.cancel_order(symbol, placed.order_id))
