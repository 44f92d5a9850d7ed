"""
Decoding and parsing of AuthnRequests received over the HTTP-Redirect binding.
"""
import logging
import re
from urllib.parse import parse_qsl

from defusedxml import DefusedXmlException
from defusedxml import ElementTree

from .encoding import decode_base64
from .encoding import inflate
from .exception import DecodeError
from .exception import ParseError
from .saml_util import NAMESPACE_ASSERTION
from .saml_util import NAMESPACE_PROTOCOL
from .saml_util import PREFIXES
from .saml_util import qname
from .saml_util import str_to_datetime


logger = logging.getLogger(__name__)

SAML_REQUEST_PARAM = "SAMLRequest"
RELAY_STATE_PARAM = "RelayState"

# Byte order mark and XML declaration, neither may appear inside the wrapper element
_XML_PROLOG = re.compile(rb"^(?:\xef\xbb\xbf)?\s*(?:<\?xml[^>]*\?>)?")


class AuthnRequest(object):
    """
    The parts of a SAML AuthnRequest needed to address a response to it.
    """

    def __init__(self, id, consumer_url, issue_instant=None, issuer=None):
        """
        :type id: str
        :type consumer_url: str
        :type issue_instant: datetime.datetime
        :type issuer: str

        :param id: The request ID
        :param consumer_url: The AssertionConsumerServiceURL the response is posted to
        :param issue_instant: When the request was issued
        :param issuer: The entity id of the requesting service provider
        """
        self.id = id
        self.consumer_url = consumer_url
        self.issue_instant = issue_instant
        self.issuer = issuer

    def to_dict(self):
        return {
            "id": self.id,
            "consumer_url": self.consumer_url,
            "issue_instant": self.issue_instant.isoformat() if self.issue_instant else None,
            "issuer": self.issuer,
        }

    def __eq__(self, other):
        if not isinstance(other, AuthnRequest):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return "AuthnRequest({})".format(self.to_dict())


def decode_request(query):
    """
    Extracts the SAMLRequest parameter and undoes its transport encoding.

    :type query: dict[str, str] | str
    :rtype: bytes

    :param query: The query parameters, or the raw query string
    :return: The request XML
    :raise DecodeError: if the parameter is missing or not base64
    :raise DecompressError: if the decoded parameter is not a raw DEFLATE stream
    """
    if isinstance(query, str):
        query = dict(parse_qsl(query))

    encoded_request = (query or {}).get(SAML_REQUEST_PARAM)
    if not encoded_request:
        raise DecodeError("Missing '{}' query parameter".format(SAML_REQUEST_PARAM))

    compressed_request = decode_base64(encoded_request)
    return inflate(compressed_request)


def _parse_xml(xml):
    try:
        return ElementTree.fromstring(xml)
    except ElementTree.ParseError as e:
        if "unbound prefix" not in str(e):
            raise

    # Some service providers use the samlp/saml prefixes without declaring them
    logger.debug("Request uses undeclared namespace prefixes, resolving the SAML defaults")
    declarations = " ".join(
        'xmlns:{prefix}="{ns}"'.format(prefix=prefix, ns=ns) for prefix, ns in PREFIXES.items()
    )
    body = _XML_PROLOG.sub(b"", xml, count=1)
    wrapped = b"<wrapper " + declarations.encode("ascii") + b">" + body + b"</wrapper>"
    return ElementTree.fromstring(wrapped)[0]


def parse_request(xml):
    """
    Parses the XML of an AuthnRequest.

    :type xml: bytes | str
    :rtype: AuthnRequest

    :param xml: The request XML
    :return: The parsed request
    :raise ParseError: if xml is not an AuthnRequest, lacks the ID or
        AssertionConsumerServiceURL attribute, or has a malformed IssueInstant
    """
    if isinstance(xml, str):
        xml = xml.encode("utf-8")

    try:
        root = _parse_xml(xml)
    except (ElementTree.ParseError, DefusedXmlException) as e:
        raise ParseError("Cannot parse request XML: {}".format(e)) from e

    if root.tag != qname(NAMESPACE_PROTOCOL, "AuthnRequest"):
        raise ParseError("Unexpected root element {}".format(root.tag))

    request_id = root.get("ID")
    if not request_id:
        raise ParseError("AuthnRequest has no ID")

    consumer_url = root.get("AssertionConsumerServiceURL")
    if not consumer_url:
        raise ParseError("AuthnRequest has no AssertionConsumerServiceURL")

    issue_instant = root.get("IssueInstant")
    if issue_instant is not None:
        try:
            issue_instant = str_to_datetime(issue_instant)
        except ValueError as e:
            raise ParseError("Malformed IssueInstant: {}".format(e)) from e

    issuer = None
    issuer_element = root.find(qname(NAMESPACE_ASSERTION, "Issuer"))
    if issuer_element is not None and issuer_element.text:
        issuer = issuer_element.text.strip()

    return AuthnRequest(request_id, consumer_url, issue_instant, issuer)
