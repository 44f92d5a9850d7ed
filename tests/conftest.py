import pytest

from minidp.encoding import deflate
from minidp.encoding import encode_base64
from minidp.idp_config import IdPConfig
from minidp.profile import Profile

ACS_URL = "https://sp.example/acs"

# As sent by service providers that rely on the conventional prefixes without declaring them
UNDECLARED_PREFIX_REQUEST = (
    '<samlp:AuthnRequest ID="req-1" AssertionConsumerServiceURL="https://sp.example/acs" '
    'IssueInstant="2024-01-01T00:00:00Z"><saml:Issuer>sp-entity</saml:Issuer></samlp:AuthnRequest>'
)

AUTHN_REQUEST = """<?xml version="1.0" encoding="UTF-8"?>
<samlp:AuthnRequest
    xmlns:samlp="urn:oasis:names:tc:SAML:2.0:protocol"
    xmlns:saml="urn:oasis:names:tc:SAML:2.0:assertion"
    ID="_a74a1d41b7bc"
    Version="2.0"
    IssueInstant="2024-05-17T09:30:12Z"
    AssertionConsumerServiceURL="https://sp.example/acs">
    <saml:Issuer>https://sp.example/metadata</saml:Issuer>
</samlp:AuthnRequest>"""


def encode_saml_request(xml):
    if isinstance(xml, str):
        xml = xml.encode("utf-8")
    return encode_base64(deflate(xml))


@pytest.fixture
def saml_request_encoder():
    return encode_saml_request


@pytest.fixture
def profile():
    return Profile(
        ID="U042",
        Email="jane.doe@example.com",
        Username="jdoe",
        FirstName="Jane",
        LastName="Doe",
        NickName="JD",
        Locale="sv",
    )


@pytest.fixture
def idp_config_dict():
    config = {
        "PORT": 8000,
        "LOGGING": {"version": 1, "disable_existing_loggers": False},
    }
    return config


@pytest.fixture
def idp_config(idp_config_dict):
    return IdPConfig(idp_config_dict)


@pytest.fixture
def authn_request_xml():
    return AUTHN_REQUEST


@pytest.fixture
def undeclared_prefix_request_xml():
    return UNDECLARED_PREFIX_REQUEST


@pytest.fixture
def context():
    from minidp.context import Context
    return Context()
