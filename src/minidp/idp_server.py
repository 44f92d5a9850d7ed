import logging
import logging.config
from urllib.parse import parse_qsl as _parse_query_string

import minidp
import minidp.logging_util as lu

from .base import IdPBase
from .context import Context
from .response import ServiceError


logger = logging.getLogger(__name__)

DEFAULT_LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {
            "format": "[%(asctime)s] [%(levelname)s] [%(name)s.%(funcName)s] %(message)s"
        }
    },
    "handlers": {
        "stdout": {
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stdout",
            "level": "DEBUG",
            "formatter": "simple",
        }
    },
    "loggers": {"minidp": {"level": "DEBUG"}},
    "root": {"level": "INFO", "handlers": ["stdout"]},
}


def parse_query_string(data):
    """
    :type data: str | None
    :rtype: dict[str, str]
    :return: The query parameters, the first value of each name winning
    """
    query_param_dict = {}
    for name, value in _parse_query_string(data or ""):
        query_param_dict.setdefault(name, value)
    return query_param_dict


def collect_http_headers(environ):
    headers = {
        header_name: header_value
        for header_name, header_value in environ.items()
        if (
            header_name.startswith("HTTP_")
            or header_name.startswith("REMOTE_")
        )
    }
    return headers


class ToBytesMiddleware(object):
    """Converts a message to bytes to be sent by WSGI server."""

    def __init__(self, app):
        self.app = app

    def __call__(self, environ, start_response):
        data = self.app(environ, start_response)

        if isinstance(data, list):
            encoded_data = []
            for d in data:
                if isinstance(d, bytes):
                    encoded_data.append(d)
                else:
                    encoded_data.append(d.encode("utf-8"))
            return encoded_data

        if isinstance(data, str):
            return data.encode("utf-8")

        return data


class WsgiApplication(IdPBase):
    def __init__(self, config, profile_provider=None):
        super().__init__(config, profile_provider)

    def __call__(self, environ, start_response):
        context = Context()
        context.path = environ.get('PATH_INFO', '').lstrip('/')
        context.request_uri = environ.get("REQUEST_URI")
        context.request_method = environ.get("REQUEST_METHOD")
        context.qs_params = parse_query_string(environ.get("QUERY_STRING"))
        context.http_headers = collect_http_headers(environ)

        logline = {
            "message": "IdP received request",
            "path": context.path,
            "request_method": context.request_method,
            "request_uri": context.request_uri,
            "query_params": context.qs_params,
            "http_headers": context.http_headers,
        }
        lu.minidp_logging(logger, logging.DEBUG, logline, context)

        try:
            resp = self.run(context)
            return resp(environ, start_response)
        except Exception as e:
            lu.minidp_logging(logger, logging.ERROR, str(e), context, exc_info=True)
            resp = ServiceError()
            return resp(environ, start_response)


def make_app(idp_config, profile_provider=None):
    """
    Configures logging and composes the WSGI application.

    :type idp_config: minidp.idp_config.IdPConfig
    :type profile_provider: (minidp.context.Context) -> minidp.profile.Profile

    :param idp_config: minidp config
    :param profile_provider: Supplies the identity to assert, see minidp.base.IdPBase
    :return: a WSGI application
    """
    try:
        logging.config.dictConfig(idp_config.get("LOGGING", DEFAULT_LOGGING_CONFIG))

        logger.info("Running minidp version {v}".format(v=minidp.__version__))

        res1 = WsgiApplication(idp_config, profile_provider)
        res2 = ToBytesMiddleware(res1)
        res = res2

        return res
    except Exception:
        logline = "Failed to create WSGI app."
        logger.exception(logline)
        raise
