import pytest

from lnaddress.core.errors import MalformedAddressError
from lnaddress.lnurl.resolver import AddressResolver, parse_address


@pytest.mark.parametrize(
    "address, username, domain",
    [
        ("alice@example.com", "alice", "example.com"),
        ("bob_42@pay.example.org", "bob_42", "pay.example.org"),
        ("  carol@example.com\n", "carol", "example.com"),
        ("dave@localhost:8080", "dave", "localhost:8080"),
    ],
)
def test_parse_address(address, username, domain):
    parsed = parse_address(address)
    assert parsed.username == username
    assert parsed.domain == domain


@pytest.mark.parametrize(
    "address",
    [
        "alice",
        "",
        "@",
        "@example.com",
        "alice@",
        "alice@example.com@evil.com",
        "alice@@example.com",
        "al ice@example.com",
        "alice@example.com/path",
        "alice@example.com?x=1",
        "alice#1@example.com",
        "alice@example.com:abc",
        "alice@256.1.1.1",
        "alice@:8080",
    ],
)
def test_parse_address_malformed(address):
    with pytest.raises(MalformedAddressError):
        parse_address(address)


def test_parse_address_not_a_string():
    with pytest.raises(MalformedAddressError):
        parse_address(None)  # type: ignore


def test_resolver_parses_on_construction():
    resolver = AddressResolver("alice@example.com")
    assert resolver.address.username == "alice"
    assert AddressResolver.parse("bob@example.com").username == "bob"

    with pytest.raises(MalformedAddressError):
        AddressResolver("alice@example.com@example.org")
