"""
The SSO endpoint: answers HTTP-Redirect AuthnRequests over HTTP-POST.
"""
import logging

import minidp.logging_util as lu
from minidp.authn_request import RELAY_STATE_PARAM
from minidp.authn_request import decode_request
from minidp.authn_request import parse_request
from minidp.post_form import render_form
from minidp.response import Response
from minidp.saml_response import build_response


logger = logging.getLogger(__name__)


class SAMLRedirectFrontend(object):
    """
    Decodes an AuthnRequest from the query string, builds a Response asserting
    the profile supplied for the request, and returns the form that posts it to
    the request's AssertionConsumerServiceURL.

    Each stage either hands its result to the next or raises a
    minidp.exception.MinIdPStageError naming itself, which ends the request.
    """

    KEY_AUTHN_REQUEST = "authn_request"

    def __init__(self, profile_provider, mint_response_id=False, propagate_relay_state=False):
        """
        :type profile_provider: (minidp.context.Context) -> minidp.profile.Profile
        :type mint_response_id: bool
        :type propagate_relay_state: bool

        :param profile_provider: Supplies the identity to assert for a request
        :param mint_response_id: Generate response and assertion IDs instead of reusing the request ID
        :param propagate_relay_state: Echo the request's RelayState back to the service provider
        """
        self.profile_provider = profile_provider
        self.mint_response_id = mint_response_id
        self.propagate_relay_state = propagate_relay_state

    def handle_authn_request(self, context):
        """
        :type context: minidp.context.Context
        :rtype: minidp.response.Response

        :param context: The request context
        :return: A response holding the self-submitting POST form
        """
        xml = decode_request(context.qs_params)
        lu.minidp_logging(logger, logging.DEBUG, "Decoded SAML request: {}".format(xml), context)

        authn_request = parse_request(xml)
        context.decorate(self.KEY_AUTHN_REQUEST, authn_request)
        msg = {
            "message": "SAML auth requested",
            "authn_request": authn_request.to_dict(),
        }
        lu.minidp_logging(logger, logging.DEBUG, msg, context)

        profile = self.profile_provider(context)
        saml_response = build_response(
            authn_request.id,
            authn_request.consumer_url,
            profile,
            mint_response_id=self.mint_response_id,
        )
        lu.minidp_logging(logger, logging.DEBUG, "SAML response built: {}".format(saml_response), context)

        relay_state = ""
        if self.propagate_relay_state:
            relay_state = context.qs_params.get(RELAY_STATE_PARAM, "")
        form = render_form(saml_response, authn_request.consumer_url, relay_state)

        msg = "Posting SAML response for subject {subject} to {url}".format(
            subject=profile.ID, url=authn_request.consumer_url
        )
        lu.minidp_logging(logger, logging.INFO, msg, context)
        return Response(form)
