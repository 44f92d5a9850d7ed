"""
YAML loading for minidp configuration files.

Two tags are added to PyYAML's safe loader:

    PORT: !ENV MINIDP_LISTEN_PORT
    PROFILE:
      Email: !ENV PROFILE_EMAIL:user1@example.com
      ID: !ENVFILE PROFILE_ID_FILE

!ENV takes the value of an environment variable, falling back to the text
after the first ':' when the variable is unset. !ENVFILE takes the contents of
the file named by an environment variable.
"""
import os

from yaml import SafeLoader as _safe_loader
from yaml import YAMLError
from yaml import safe_load as load

TAG_ENV = "!ENV"
TAG_ENVFILE = "!ENVFILE"


def _constructor_env_variables(loader, node):
    """
    :param yaml.Loader loader: the yaml loader
    :param node: the tagged node, holding NAME or NAME:default
    :return: value of the environment variable, or the default
    """
    raw_value = loader.construct_scalar(node)
    name, has_default, default = raw_value.partition(":")
    value = os.environ.get(name)
    if value is None and has_default:
        value = default
    if value is None:
        msg = "Environment variable {name} referenced at {mark} is not set".format(
            name=name, mark=node.start_mark
        )
        raise YAMLError(msg)
    return value


def _constructor_envfile_variables(loader, node):
    """
    :param yaml.Loader loader: the yaml loader
    :param node: the tagged node, holding the environment variable name
    :return: contents of the file the environment variable points to
    """
    name = loader.construct_scalar(node)
    filepath = os.environ.get(name)
    try:
        with open(filepath, "r") as fd:
            return fd.read().strip()
    except (TypeError, IOError) as e:
        msg = "Cannot read file {path} named by {name} at {mark}".format(
            path=filepath, name=name, mark=node.start_mark
        )
        raise YAMLError(msg) from e


_safe_loader.add_constructor(TAG_ENV, _constructor_env_variables)
_safe_loader.add_constructor(TAG_ENVFILE, _constructor_envfile_variables)

__all__ = ["load", "YAMLError", "TAG_ENV", "TAG_ENVFILE"]
