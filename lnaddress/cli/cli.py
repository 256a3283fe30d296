#!/usr/bin/env python

import asyncio
from functools import wraps

import click
from click import Context
from loguru import logger

from ..core.errors import LightningAddressError
from ..core.helpers import sat_to_msat
from ..core.logging import configure_logger
from ..core.settings import settings
from ..lnurl import LightningAddress


class NaturalOrderGroup(click.Group):
    """For listing commands in help in order of definition"""

    def list_commands(self, ctx):
        return self.commands.keys()


# https://github.com/pallets/click/issues/85#issuecomment-503464628
def coro(f):
    @wraps(f)
    def wrapper(*args, **kwargs):
        return asyncio.run(f(*args, **kwargs))

    return wrapper


def exit_on_error(f):
    """Prints lightning address errors and exits with status 1."""

    @wraps(f)
    async def wrapper(*args, **kwargs):
        try:
            return await f(*args, **kwargs)
        except LightningAddressError as exc:
            logger.debug(f"{type(exc).__name__}: {exc}")
            print(f"Error: {exc.detail}")
            raise click.exceptions.Exit(1)

    return wrapper


@click.group(cls=NaturalOrderGroup)
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Print debug logs.",
)
@click.pass_context
def cli(ctx: Context, debug: bool):
    if debug:
        settings.debug = True
    configure_logger()


@cli.command("resolve", help="Resolve a lightning address.")
@click.argument("address", type=str)
@click.pass_context
@coro
@exit_on_error
async def resolve_command(ctx: Context, address: str):
    lightning_address = await LightningAddress.create(address)
    descriptor = lightning_address.descriptor
    print(f"Address: {descriptor.address}")
    print(f"Callback: {descriptor.callback_url}")
    print(
        f"Sendable: {descriptor.min_sendable_sat} - {descriptor.max_sendable_sat} sat"
    )
    if descriptor.description:
        print(f"Description: {descriptor.description}")
    if descriptor.allows_comments:
        print(f"Comments: up to {descriptor.comment_allowed} characters")
    if descriptor.allows_nostr and descriptor.nostr_pubkey:
        print(f"Nostr pubkey: {descriptor.nostr_pubkey}")


@cli.command("invoice", help="Request an invoice from a lightning address.")
@click.argument("address", type=str)
@click.argument("amount", type=click.IntRange(min=1))
@click.option(
    "--msat",
    is_flag=True,
    default=False,
    help="Amount is in millisatoshis instead of satoshis.",
)
@click.pass_context
@coro
@exit_on_error
async def invoice_command(ctx: Context, address: str, amount: int, msat: bool):
    amount_msat = amount if msat else sat_to_msat(amount)
    lightning_address = await LightningAddress.create(address)
    invoice = await lightning_address.get_invoice(amount_msat)
    print(f"Invoice: {invoice.bolt11}")
    if invoice.success_action and invoice.success_action.message:
        print(f"Message: {invoice.success_action.message}")
