# -*- coding: utf-8 -*-
"""
    minidp
    ~~~~~~~~~~~~~~~~

    A minimal SAML 2.0 Identity Provider endpoint.
    Answers HTTP-Redirect AuthnRequests with an HTTP-POST Response
    describing a configured identity.

    :license: APACHE 2.0, see LICENSE for more details.
"""
from importlib.metadata import version as _resolve_package_version


def _parse_version():
    value = _resolve_package_version("minidp")
    return value


__version__ = _parse_version()
