import sys

import pytest
import respx
from click.testing import CliRunner
from httpx import Response
from loguru import logger

from lnaddress.cli.cli import cli

WELL_KNOWN_URL = "https://example.com/.well-known/lnurlp/alice"
CALLBACK_URL = "https://example.com/cb"


@pytest.fixture(autouse=True)
def restore_logger():
    yield
    # the cli logs to the stderr of the runner, which is closed after invoke
    logger.remove()
    logger.add(sys.stderr, level="TRACE")


@respx.mock
def test_resolve(well_known_response):
    well_known_response["commentAllowed"] = 32
    respx.get(WELL_KNOWN_URL).mock(return_value=Response(200, json=well_known_response))
    runner = CliRunner()
    result = runner.invoke(cli, ["resolve", "alice@example.com"])
    assert result.exception is None
    assert result.exit_code == 0
    assert "Callback: https://example.com/cb\n" in result.output
    assert "Sendable: 1 - 100000 sat" in result.output
    assert "Description: pay alice" in result.output
    assert "Comments: up to 32 characters" in result.output


@respx.mock
def test_invoice(well_known_response, payment_request):
    respx.get(WELL_KNOWN_URL).mock(return_value=Response(200, json=well_known_response))
    route = respx.get(CALLBACK_URL).mock(
        return_value=Response(
            200,
            json={
                "pr": payment_request,
                "successAction": {"tag": "message", "message": "thanks!"},
            },
        )
    )
    runner = CliRunner()
    result = runner.invoke(cli, ["invoice", "alice@example.com", "1000"])
    assert result.exception is None
    assert result.exit_code == 0
    assert route.calls.last.request.url == f"{CALLBACK_URL}?amount=1000000"
    assert f"Invoice: {payment_request}" in result.output
    assert "Message: thanks!" in result.output


@respx.mock
def test_invoice_msat(well_known_response, payment_request_1):
    respx.get(WELL_KNOWN_URL).mock(return_value=Response(200, json=well_known_response))
    route = respx.get(CALLBACK_URL).mock(
        return_value=Response(200, json={"pr": payment_request_1})
    )
    runner = CliRunner()
    result = runner.invoke(cli, ["invoice", "alice@example.com", "1000", "--msat"])
    assert result.exit_code == 0
    assert route.calls.last.request.url == f"{CALLBACK_URL}?amount=1000"


@respx.mock
def test_invoice_amount_out_of_range(well_known_response):
    respx.get(WELL_KNOWN_URL).mock(return_value=Response(200, json=well_known_response))
    runner = CliRunner()
    result = runner.invoke(cli, ["invoice", "alice@example.com", "200000"])
    assert result.exit_code == 1
    assert "Error: amount out of range" in result.output


def test_resolve_malformed_address():
    runner = CliRunner()
    result = runner.invoke(cli, ["resolve", "alice@example.com@example.org"])
    assert result.exit_code == 1
    assert "Error: expected exactly one '@'" in result.output
