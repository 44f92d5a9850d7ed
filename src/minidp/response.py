"""
Response objects used in minidp
"""


class Response(object):
    """
    A WSGI callable HTTP response.

    Error responses are sent with an empty body: why a SAML request failed is
    only reported in the IdP log, never to the requester.
    """
    _status = "200 OK"
    _content_type = "text/html"

    def __init__(self, message="", status=None, headers=None, content=None):
        """
        :type message: str
        :type status: str
        :type headers: list[(str, str)]
        :type content: str

        :param message: The response body
        :param status: The status line, the class default if not given
        :param headers: Extra headers
        :param content: The content type, the class default if not given
        """
        self.status = status or self._status
        self.headers = list(headers or [])
        self.message = message

        if not any(name.lower() == "content-type" for name, _ in self.headers):
            self.headers.append(("Content-Type", content or self._content_type))

    def __call__(self, environ, start_response):
        """
        :type environ: dict[str, str]
        :type start_response: (str, list[(str, str)]) -> None

        :param environ: The WSGI environ
        :param start_response: The WSGI start_response
        :return: The body as a list of chunks
        """
        start_response(self.status, self.headers)
        return [self.message]


class BadRequest(Response):
    _status = "400 Bad Request"


class ServiceError(Response):
    _status = "500 Internal Service Error"
