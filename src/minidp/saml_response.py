"""
Builds the SAML Response sent back over the HTTP-POST binding.
"""
import logging

from chevron import ChevronError
from chevron import render as render_mustache

from .encoding import encode_base64
from .exception import RenderError
from .saml_util import AUTHN_PASSWORD
from .saml_util import NAME_FORMAT_BASIC
from .saml_util import NAMEID_FORMAT_ENTITY
from .saml_util import NAMEID_FORMAT_UNSPECIFIED
from .saml_util import NAMESPACE_ASSERTION
from .saml_util import NAMESPACE_PROTOCOL
from .saml_util import NAMESPACE_XMLDSIG
from .saml_util import NAMESPACE_XS
from .saml_util import NAMESPACE_XSI
from .saml_util import SCM_BEARER
from .saml_util import STATUS_SUCCESS
from .saml_util import instant
from .saml_util import verify_xml_text
from .util import new_saml_id


logger = logging.getLogger(__name__)

# Every {{name}} is XML escaped by the renderer, never use {{{name}}} or {{&name}} here.
SAML_RESPONSE_TEMPLATE = """\
<samlp:Response xmlns:samlp="{{ns.samlp}}" xmlns:saml="{{ns.saml}}" xmlns:xs="{{ns.xs}}" \
xmlns:xsi="{{ns.xsi}}" Destination="{{destination}}" ID="{{response_id}}" \
{{#in_response_to}}InResponseTo="{{in_response_to}}" {{/in_response_to}}\
IssueInstant="{{issue_instant}}" Version="2.0">
  <Signature xmlns="{{ns.ds}}" />
  <samlp:Status>
    <samlp:StatusCode Value="{{status}}" />
  </samlp:Status>
  <saml:Assertion ID="{{assertion_id}}" IssueInstant="{{issue_instant}}" Version="2.0">
    <saml:Issuer Format="{{issuer_format}}" />
    <saml:Subject>
      <saml:NameID Format="{{name_id_format}}">{{profile.ID}}</saml:NameID>
      <saml:SubjectConfirmation Method="{{confirmation_method}}" />
    </saml:Subject>
    <saml:AuthnStatement AuthnInstant="{{issue_instant}}">
      <saml:AuthnContext>
        <saml:AuthnContextClassRef>{{authn_context_class}}</saml:AuthnContextClassRef>
      </saml:AuthnContext>
    </saml:AuthnStatement>
    <saml:AttributeStatement>
      {{#attributes}}
      <saml:Attribute Name="{{name}}" NameFormat="{{name_format}}">
        <saml:AttributeValue xsi:type="xs:string">{{value}}</saml:AttributeValue>
      </saml:Attribute>
      {{/attributes}}
    </saml:AttributeStatement>
  </saml:Assertion>
</samlp:Response>
"""

NAMESPACES = {
    "samlp": NAMESPACE_PROTOCOL,
    "saml": NAMESPACE_ASSERTION,
    "xs": NAMESPACE_XS,
    "xsi": NAMESPACE_XSI,
    "ds": NAMESPACE_XMLDSIG,
}


class ResponseContext(object):
    """
    Everything the response template is rendered from.
    """

    def __init__(self, assertion_id, destination, issue_instant, profile, response_id=None,
                 in_response_to=None):
        """
        :type assertion_id: str
        :type destination: str
        :type issue_instant: str
        :type profile: minidp.profile.Profile
        :type response_id: str
        :type in_response_to: str

        :param assertion_id: ID of the assertion
        :param destination: The ACS URL the response is posted to
        :param issue_instant: The xs:dateTime the response is built at
        :param profile: The asserted identity
        :param response_id: ID of the response, the assertion ID if not given
        :param in_response_to: ID of the request being answered, if it should be referenced
        """
        self.assertion_id = assertion_id
        self.response_id = response_id or assertion_id
        self.destination = destination
        self.issue_instant = issue_instant
        self.profile = profile
        self.in_response_to = in_response_to

    def to_template_data(self):
        return {
            "ns": NAMESPACES,
            "destination": self.destination,
            "response_id": self.response_id,
            "assertion_id": self.assertion_id,
            "in_response_to": self.in_response_to,
            "issue_instant": self.issue_instant,
            "status": STATUS_SUCCESS,
            "issuer_format": NAMEID_FORMAT_ENTITY,
            "name_id_format": NAMEID_FORMAT_UNSPECIFIED,
            "confirmation_method": SCM_BEARER,
            "authn_context_class": AUTHN_PASSWORD,
            "profile": self.profile.to_dict(),
            "attributes": [
                {"name": name, "name_format": NAME_FORMAT_BASIC, "value": value}
                for name, value in self.profile.attributes
            ],
        }


def _verify_values(response_context):
    values = [
        ("Destination", response_context.destination),
        ("Response ID", response_context.response_id),
        ("Assertion ID", response_context.assertion_id),
        ("InResponseTo", response_context.in_response_to or ""),
    ]
    values.extend(
        ("Profile {}".format(name), value) for name, value in response_context.profile.to_dict().items()
    )
    for name, value in values:
        verify_xml_text(name, value)


def render_response(response_context):
    """
    Renders the Response XML.

    :type response_context: ResponseContext
    :rtype: str
    :raise RenderError: if a value can't be put in XML or the template can't be rendered
    """
    try:
        _verify_values(response_context)
    except ValueError as e:
        raise RenderError("Cannot render SAML response: {}".format(e), stage="build") from e

    try:
        return render_mustache(SAML_RESPONSE_TEMPLATE, response_context.to_template_data())
    except ChevronError as e:
        raise RenderError("Cannot render SAML response: {}".format(e), stage="build") from e


def build_response(request_id, destination, profile, now=None, mint_response_id=False):
    """
    Builds the base64 encoded SAML Response answering an AuthnRequest.

    By default the request ID is reused as both response and assertion ID.
    With mint_response_id, fresh IDs are generated and the request ID is
    referenced through InResponseTo instead.

    :type request_id: str
    :type destination: str
    :type profile: minidp.profile.Profile
    :type now: datetime.datetime
    :type mint_response_id: bool
    :rtype: str

    :param request_id: ID of the AuthnRequest being answered
    :param destination: The ACS URL the response is posted to
    :param profile: The asserted identity
    :param now: The time the response is issued at, the current time if not given
    :param mint_response_id: Whether to generate new IDs for the response and assertion
    :return: The response XML, UTF-8 encoded and then base64 encoded
    """
    if mint_response_id:
        response_context = ResponseContext(new_saml_id(), destination, instant(now), profile,
                                           response_id=new_saml_id(), in_response_to=request_id)
    else:
        response_context = ResponseContext(request_id, destination, instant(now), profile)

    xml = render_response(response_context)
    logger.debug("Built SAML response: {}".format(xml))
    return encode_base64(xml.encode("utf-8"))
