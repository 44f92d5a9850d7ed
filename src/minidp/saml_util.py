"""
SAML 2.0 names and value formats shared by the request parser and the
response builder.
"""
import re
from datetime import datetime
from datetime import timedelta
from datetime import timezone

NAMESPACE_PROTOCOL = "urn:oasis:names:tc:SAML:2.0:protocol"
NAMESPACE_ASSERTION = "urn:oasis:names:tc:SAML:2.0:assertion"
NAMESPACE_XMLDSIG = "http://www.w3.org/2000/09/xmldsig#"
NAMESPACE_XS = "http://www.w3.org/2001/XMLSchema"
NAMESPACE_XSI = "http://www.w3.org/2001/XMLSchema-instance"

PREFIXES = {
    "samlp": NAMESPACE_PROTOCOL,
    "saml": NAMESPACE_ASSERTION,
}

BINDING_HTTP_POST = "urn:oasis:names:tc:SAML:2.0:bindings:HTTP-POST"

STATUS_SUCCESS = "urn:oasis:names:tc:SAML:2.0:status:Success"
NAMEID_FORMAT_ENTITY = "urn:oasis:names:tc:SAML:2.0:nameid-format:entity"
NAMEID_FORMAT_UNSPECIFIED = "urn:oasis:names:tc:SAML:2.0:nameid-format:unspecified"
SCM_BEARER = "urn:oasis:names:tc:SAML:2.0:cm:bearer"
AUTHN_PASSWORD = "urn:oasis:names:tc:SAML:2.0:ac:classes:Password"
NAME_FORMAT_BASIC = "urn:oasis:names:tc:SAML:2.0:attrname-format:basic"

TIME_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

_DATETIME_RE = re.compile(
    r"^(?P<base>\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<fraction>\d+))?"
    r"(?P<offset>Z|[+-]\d{2}:\d{2})?$"
)

# Characters outside the XML 1.0 Char production can't appear in a document, escaped or not
_NON_XML_CHAR = re.compile("[^\t\n\r\u0020-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


def qname(namespace, tag):
    return "{{{ns}}}{tag}".format(ns=namespace, tag=tag)


def verify_xml_text(name, value):
    """
    :type name: str
    :type value: str

    :param name: What the value is, used in the error message
    :param value: Text to be placed in an XML document
    :raise ValueError: if value holds a character XML 1.0 does not allow
    """
    match = _NON_XML_CHAR.search(value)
    if match is not None:
        raise ValueError("{name} contains a character not allowed in XML: {char!r}".format(
            name=name, char=match.group(0)))


def instant(now=None):
    """
    Formats a point in time as a SAML xs:dateTime in UTC.

    :type now: datetime.datetime
    :rtype: str

    :param now: the time to format, the current time if not given
    :return: e.g. 2024-01-01T00:00:00Z
    """
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return now.strftime(TIME_FORMAT)


def str_to_datetime(value):
    """
    Parses an xs:dateTime value. A value without offset is taken as UTC,
    which is what SAML requires all times to be in.

    :type value: str
    :rtype: datetime.datetime

    :param value: e.g. 2024-01-01T00:00:00Z or 2024-01-01T01:00:00.1234567+01:00
    :return: a timezone aware datetime
    :raise ValueError: if value is not an xs:dateTime
    """
    match = _DATETIME_RE.match(value.strip())
    if match is None:
        raise ValueError("'{}' is not an xs:dateTime".format(value))

    parsed = datetime.strptime(match.group("base"), "%Y-%m-%dT%H:%M:%S")
    fraction = match.group("fraction")
    if fraction:
        parsed = parsed.replace(microsecond=int(fraction[:6].ljust(6, "0")))

    offset = match.group("offset")
    if not offset or offset == "Z":
        return parsed.replace(tzinfo=timezone.utc)

    sign = 1 if offset[0] == "+" else -1
    hours, minutes = int(offset[1:3]), int(offset[4:6])
    return parsed.replace(tzinfo=timezone(sign * timedelta(hours=hours, minutes=minutes)))
