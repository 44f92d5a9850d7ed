import pytest

from minidp.exception import MinIdPConfigurationError
from minidp.idp_config import IdPConfig


class TestIdPConfig:
    def test_defaults(self):
        config = IdPConfig()

        assert config["HOST"] == "0.0.0.0"
        assert config["PORT"] == 3912
        assert config["PROFILE"] == {}
        assert config["MINT_RESPONSE_ID"] is False
        assert config["PROPAGATE_RELAY_STATE"] is False
        assert config.get("LOGGING") is None

    def test_dict_overrides_defaults(self, idp_config_dict):
        idp_config_dict["MINT_RESPONSE_ID"] = True
        idp_config_dict["PROFILE"] = {"ID": "U002"}
        config = IdPConfig(idp_config_dict)

        assert config["PORT"] == 8000
        assert config["MINT_RESPONSE_ID"] is True
        assert config["PROFILE"] == {"ID": "U002"}
        assert "LOGGING" in config

    def test_env_overrides_config(self, monkeypatch, idp_config_dict):
        monkeypatch.setenv("MINIDP_PORT", "9443")
        monkeypatch.setenv("MINIDP_HOST", "127.0.0.1")
        config = IdPConfig(idp_config_dict)

        assert config["PORT"] == 9443
        assert config["HOST"] == "127.0.0.1"

    def test_load_yaml_file(self, tmpdir):
        config_file = tmpdir.join("idp_conf.yaml")
        config_file.write(
            "PORT: 8080\n"
            "PROPAGATE_RELAY_STATE: true\n"
            "PROFILE:\n"
            "  ID: U100\n"
            "  Email: hundred@example.com\n"
        )
        config = IdPConfig(str(config_file))

        assert config["PORT"] == 8080
        assert config["PROPAGATE_RELAY_STATE"] is True
        assert config["PROFILE"] == {"ID": "U100", "Email": "hundred@example.com"}

    def test_yaml_env_tags(self, tmpdir, monkeypatch):
        id_file = tmpdir.join("subject_id")
        id_file.write("U777\n")
        monkeypatch.setenv("SUBJECT_ID_FILE", str(id_file))
        monkeypatch.setenv("SUBJECT_EMAIL", "seven@example.com")
        monkeypatch.delenv("SUBJECT_LOCALE", raising=False)

        config_file = tmpdir.join("idp_conf.yaml")
        config_file.write(
            "PROFILE:\n"
            "  ID: !ENVFILE SUBJECT_ID_FILE\n"
            "  Email: !ENV SUBJECT_EMAIL\n"
            "  Locale: !ENV SUBJECT_LOCALE:fi\n"
        )
        config = IdPConfig(str(config_file))

        assert config["PROFILE"] == {"ID": "U777", "Email": "seven@example.com", "Locale": "fi"}

    def test_yaml_unset_env_variable(self, tmpdir, monkeypatch):
        monkeypatch.delenv("SUBJECT_EMAIL", raising=False)
        config_file = tmpdir.join("idp_conf.yaml")
        config_file.write("PROFILE:\n  Email: !ENV SUBJECT_EMAIL\n")

        with pytest.raises(MinIdPConfigurationError):
            IdPConfig(str(config_file))

    def test_missing_file(self, tmpdir):
        with pytest.raises(MinIdPConfigurationError):
            IdPConfig(str(tmpdir.join("missing.yaml")))

    def test_malformed_yaml(self, tmpdir):
        config_file = tmpdir.join("idp_conf.yaml")
        config_file.write("PORT: [8080\n")

        with pytest.raises(MinIdPConfigurationError):
            IdPConfig(str(config_file))

    @pytest.mark.parametrize("key, value", [
        ("PORT", "http"),
        ("PORT", 0),
        ("PORT", 70000),
        ("MINT_RESPONSE_ID", "yes"),
        ("PROPAGATE_RELAY_STATE", 1),
        ("PROFILE", ["U001"]),
        ("PROFILE", {"DisplayName": "User One"}),
    ])
    def test_invalid_values(self, idp_config_dict, key, value):
        idp_config_dict[key] = value
        with pytest.raises(MinIdPConfigurationError):
            IdPConfig(idp_config_dict)

    def test_setitem(self, idp_config):
        idp_config["PORT"] = 1234
        assert idp_config["PORT"] == 1234
