import copy

import pytest

from lnaddress.core.settings import settings

settings.debug = True
settings.log_level = "TRACE"
settings.lnurl_timeout = None
settings.socks_proxy = None
settings.http_proxy = None
settings.lnurl_check_invoice_amount = True
settings.lnurl_verify_description_hash = False


# 1000 sat
PAYMENT_REQUEST = (
    "lnbc10u1pjap7phpp50s9lzr3477j0tvacpfy2ucrs4q0q6cvn232ex7nt2zqxxxj8gxrsdpv2phhwetjv4jzqcneypqyc6t8dp6xu6twva2xjuzzda6qcqzzsxqrrsss"
    "p575z0n39w2j7zgnpqtdlrgz9rycner4eptjm3lz363dzylnrm3h4s9qyyssqfz8jglcshnlcf0zkw4qu8fyr564lg59x5al724kms3h6gpuhx9xrfv27tgx3l3u3cyf6"
    "3r52u0xmac6max8mdupghfzh84t4hfsvrfsqwnuszf"
)

# 1 sat
PAYMENT_REQUEST_1 = (
    "lnbc10n1pjaxujrpp5sqehn6h5p8xpa0c0lvj5vy3a537gxfk5e7h2ate2alfw3y5cm6xqdpv2phhwetjv4jzqcneypqyc6t8dp6xu6twva2xjuzzda6qcqzzsxqrrsss"
    "p5fkxsvyl0r32mvnhv9cws4rp986v0wjl2lp93zzl8jejnuwzvpynq9qyyssqqmsnatsz87qrgls98c97dfa6l2z3rzg2x6kxmrvpz886rwjylmd56y3qxzfulrq03kkh"
    "hwk6r32wes6pjt2zykhnsjn30c6uhuk0wugp3x74al"
)

WELL_KNOWN_RESPONSE = {
    "tag": "payRequest",
    "callback": "https://example.com/cb/",
    "minSendable": 1000,
    "maxSendable": 100000000,
    "metadata": '[["text/plain","pay alice"]]',
    "nostrPubkey": "",
    "allowsNostr": False,
    "commentAllowed": 0,
}


@pytest.fixture
def well_known_response() -> dict:
    return copy.deepcopy(WELL_KNOWN_RESPONSE)


@pytest.fixture(autouse=True)
def reset_lnurl_settings():
    yield
    settings.lnurl_check_invoice_amount = True
    settings.lnurl_verify_description_hash = False


@pytest.fixture
def payment_request() -> str:
    return PAYMENT_REQUEST


@pytest.fixture
def payment_request_1() -> str:
    return PAYMENT_REQUEST_1
