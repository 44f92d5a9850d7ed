"""
The minidp main module
"""
import logging

import minidp.logging_util as lu
from minidp.exception import DecodeError
from minidp.exception import DecompressError
from minidp.exception import MinIdPStageError
from minidp.exception import ParseError
from minidp.frontend import SAMLRedirectFrontend
from minidp.profile import StaticProfileProvider
from minidp.response import BadRequest
from minidp.response import ServiceError


logger = logging.getLogger(__name__)

# Errors caused by what the service provider sent, rather than by the IdP
REQUEST_ERRORS = (DecodeError, DecompressError, ParseError)


class IdPBase(object):
    """
    Base class for a minidp server.
    Does not contain any server parts.
    """

    def __init__(self, config, profile_provider=None):
        """
        Creates a minidp base

        :type config: minidp.idp_config.IdPConfig
        :type profile_provider: (minidp.context.Context) -> minidp.profile.Profile

        :param config: minidp config
        :param profile_provider: Supplies the identity to assert, a static
            provider built from the PROFILE config if not given
        """
        self.config = config
        if profile_provider is None:
            profile_provider = StaticProfileProvider.from_config(self.config["PROFILE"])

        self.frontend = SAMLRedirectFrontend(
            profile_provider,
            mint_response_id=self.config["MINT_RESPONSE_ID"],
            propagate_relay_state=self.config["PROPAGATE_RELAY_STATE"],
        )
        logger.info("SSO endpoint bound to all paths")

    def run(self, context):
        """
        Runs the SSO endpoint with the given context.

        Stage errors never reach the caller as data: the response has an error
        status and an empty body.

        :type context: minidp.context.Context
        :rtype: minidp.response.Response

        :param context: The request context
        :return: response
        """
        try:
            resp = self.frontend.handle_authn_request(context)
        except REQUEST_ERRORS as e:
            msg = {
                "message": "Failed to handle SAML request",
                "stage": e.stage,
                "error": str(e),
            }
            lu.minidp_logging(logger, logging.ERROR, msg, context)
            return BadRequest()
        except MinIdPStageError as e:
            msg = {
                "message": "Failed to build SAML response",
                "stage": e.stage,
                "error": str(e),
            }
            lu.minidp_logging(logger, logging.ERROR, msg, context, exc_info=True)
            return ServiceError()
        else:
            return resp
