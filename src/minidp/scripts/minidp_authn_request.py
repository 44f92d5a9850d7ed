from urllib.parse import urlencode

import click
from chevron import render as render_mustache

from ..authn_request import RELAY_STATE_PARAM
from ..authn_request import SAML_REQUEST_PARAM
from ..encoding import deflate
from ..encoding import encode_base64
from ..saml_util import BINDING_HTTP_POST
from ..saml_util import NAMESPACE_ASSERTION
from ..saml_util import NAMESPACE_PROTOCOL
from ..saml_util import instant
from ..util import new_saml_id

AUTHN_REQUEST_TEMPLATE = """\
<samlp:AuthnRequest xmlns:samlp="{{samlp}}" xmlns:saml="{{saml}}" ID="{{id}}" Version="2.0" \
IssueInstant="{{issue_instant}}" Destination="{{destination}}" \
ProtocolBinding="{{binding}}" AssertionConsumerServiceURL="{{acs_url}}">\
{{#issuer}}<saml:Issuer>{{issuer}}</saml:Issuer>{{/issuer}}\
</samlp:AuthnRequest>"""


def create_authn_request(acs_url, destination, issuer=None, request_id=None, now=None):
    """
    :type acs_url: str
    :type destination: str
    :type issuer: str
    :type request_id: str
    :type now: datetime.datetime
    :rtype: str

    :param acs_url: Where the IdP should post its response
    :param destination: The IdP SSO URL the request is sent to
    :param issuer: Entity id of the requester
    :param request_id: ID of the request, generated if not given
    :param now: Issue instant, the current time if not given
    :return: AuthnRequest XML
    """
    data = {
        "samlp": NAMESPACE_PROTOCOL,
        "saml": NAMESPACE_ASSERTION,
        "id": request_id or new_saml_id(),
        "issue_instant": instant(now),
        "destination": destination,
        "binding": BINDING_HTTP_POST,
        "acs_url": acs_url,
        "issuer": issuer,
    }
    return render_mustache(AUTHN_REQUEST_TEMPLATE, data)


def encode_authn_request(xml):
    """
    :type xml: str
    :rtype: str
    :return: the SAMLRequest value of the HTTP-Redirect binding
    """
    return encode_base64(deflate(xml.encode("utf-8")))


def create_redirect_url(idp_url, xml, relay_state=None):
    params = {SAML_REQUEST_PARAM: encode_authn_request(xml)}
    if relay_state:
        params[RELAY_STATE_PARAM] = relay_state
    separator = "&" if "?" in idp_url else "?"
    return idp_url + separator + urlencode(params)


@click.command()
@click.argument("idp_url")
@click.option("--acs-url", type=click.STRING, required=True,
              help="AssertionConsumerServiceURL the response should be posted to.")
@click.option("--issuer", type=click.STRING, default=None, help="Entity id of the requester.")
@click.option("--request-id", type=click.STRING, default=None, help="ID of the request, generated if not given.")
@click.option("--relay-state", type=click.STRING, default=None, help="RelayState to send along.")
@click.option("--encoded-only", is_flag=True, type=click.BOOL, default=False,
              help="Print only the encoded SAMLRequest value instead of the redirect URL.")
def construct_authn_request(idp_url, acs_url, issuer, request_id, relay_state, encoded_only):
    """Print an HTTP-Redirect AuthnRequest for the IdP at IDP_URL."""
    xml = create_authn_request(acs_url, idp_url, issuer=issuer, request_id=request_id)
    if encoded_only:
        click.echo(encode_authn_request(xml))
    else:
        click.echo(create_redirect_url(idp_url, xml, relay_state))
