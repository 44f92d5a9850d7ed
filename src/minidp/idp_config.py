"""
This module contains methods to load, verify and build configurations for the minidp server.
"""
import logging
import os
import os.path

from minidp.exception import MinIdPConfigurationError
from minidp.profile import StaticProfileProvider
from minidp.yaml import load as yaml_load
from minidp.yaml import YAMLError


logger = logging.getLogger(__name__)


class IdPConfig(object):
    """
    A configuration class for the minidp server. Fills in defaults and verifies
    the given config.
    """
    default_config = {
        "HOST": "0.0.0.0",
        "PORT": 3912,
        "PROFILE": {},
        "MINT_RESPONSE_ID": False,
        "PROPAGATE_RELAY_STATE": False,
    }
    env_dict_keys = ["HOST", "PORT"]
    bool_dict_keys = ["MINT_RESPONSE_ID", "PROPAGATE_RELAY_STATE"]

    def __init__(self, config=None):
        """
        Reads a given config and builds the IdPConfig.

        :type config: str | dict | None
        :rtype: minidp.idp_config.IdPConfig

        :param config: Can be a file path, a dictionary or None for the defaults
        :return: A verified IdPConfig
        """
        loaded = {}
        if config is not None:
            parsers = [self._load_dict, self._load_yaml]
            for parser in parsers:
                loaded = parser(config)
                if loaded is not None:
                    break
            if not isinstance(loaded, dict):
                raise MinIdPConfigurationError("Missing configuration or unknown format")

        self._config = dict(IdPConfig.default_config)
        self._config.update(loaded)

        # Load overrides from environment variables
        for key in IdPConfig.env_dict_keys:
            val = os.environ.get("MINIDP_{key}".format(key=key))
            if val:
                self._config[key] = val

        self._verify_dict(self._config)

    def _verify_dict(self, conf):
        """
        Check that the configuration values are usable, normalizing the port.

        :type conf: dict
        :rtype: None
        :raise MinIdPConfigurationError: if the configuration is incorrect

        :param conf: config to verify
        :return: None
        """
        try:
            port = int(conf["PORT"])
        except (TypeError, ValueError):
            raise MinIdPConfigurationError("PORT must be an integer, not '{}'".format(conf["PORT"]))
        if not 0 < port < 65536:
            raise MinIdPConfigurationError("PORT must be between 1 and 65535, not {}".format(port))
        conf["PORT"] = port

        for key in IdPConfig.bool_dict_keys:
            if not isinstance(conf[key], bool):
                raise MinIdPConfigurationError("'{}' must be true or false".format(key))

        if not isinstance(conf["PROFILE"], dict):
            raise MinIdPConfigurationError("PROFILE must be a mapping")
        # Fail on bad profile fields at startup rather than on the first request
        StaticProfileProvider.from_config(conf["PROFILE"])

    def __getitem__(self, item):
        """
        Returns data bound to the key 'item'.

        :type item: str
        :rtype object

        :param item: key to data
        :return: data bound to key 'item'
        """
        return self._config[item]

    def __setitem__(self, key, value):
        self._config[key] = value

    def __contains__(self, key):
        return key in self._config

    def get(self, item, default=None):
        return self._config.get(item, default)

    def _load_dict(self, config):
        """
        Load config from dict

        :type config: dict
        :rtype: dict

        :param config: config to load
        :return: Loaded config
        """
        if isinstance(config, dict):
            return config

        return None

    def _load_yaml(self, config_file):
        """
        Load config from yaml file

        :type config_file: str
        :rtype: dict

        :param config_file: path of the config file to load
        :return: Loaded config
        """

        try:
            with open(os.path.abspath(config_file)) as f:
                return yaml_load(f.read())
        except YAMLError as exc:
            logger.error("Could not parse config as YAML: {}".format(exc))
            if hasattr(exc, 'problem_mark'):
                mark = exc.problem_mark
                logger.error("Error position: ({line}:{column})".format(line=mark.line + 1, column=mark.column + 1))
        except IOError as e:
            logger.error("Could not open config file: {}".format(e))

        return None
