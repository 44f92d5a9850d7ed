from typing import Any, Optional

from minidp.util import rndstr


class Context(object):
    """
    Holds the data of the request currently being handled
    """

    def __init__(self) -> None:
        self._path: Optional[str] = None
        self.request_id: str = rndstr(8)
        self.request_uri: Optional[str] = None
        self.request_method: Optional[str] = None
        self.qs_params: dict[str, str] = {}
        self.http_headers: dict[str, str] = {}
        # This dict is a data carrier between the stages handling the request.
        self.internal_data: dict[str, Any] = {}

    @property
    def path(self) -> Optional[str]:
        """
        Get the path

        :return: context path
        """
        return self._path

    @path.setter
    def path(self, p: str) -> None:
        """
        Inserts a path to the context.
        The path is stored without its leading '/', the root path as ''.

        :type p: str

        :param p: A path to an endpoint.
        :return: None
        """
        if p is None:
            raise ValueError("path can't be set to None")
        elif p.startswith("/"):
            raise ValueError("path can't start with '/'")
        self._path = p

    def decorate(self, key: str, value: Any) -> "Context":
        """
        Add information to the context
        """
        self.internal_data[key] = value
        return self

    def get_decoration(self, key: str) -> Any:
        """
        Retrieve information from the context
        """
        value = self.internal_data.get(key)
        return value
