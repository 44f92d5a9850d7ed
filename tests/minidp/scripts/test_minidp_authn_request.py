from urllib.parse import parse_qs, urlsplit

from click.testing import CliRunner

from minidp.authn_request import decode_request
from minidp.authn_request import parse_request
from minidp.scripts.minidp_authn_request import construct_authn_request
from minidp.scripts.minidp_authn_request import create_authn_request


class TestConstructAuthnRequest:
    def test_redirect_url(self):
        runner = CliRunner()
        result = runner.invoke(construct_authn_request, [
            "http://localhost:3912/sso",
            "--acs-url", "https://sp.example/acs",
            "--issuer", "https://sp.example/metadata",
            "--request-id", "_req42",
            "--relay-state", "back/to/page",
        ])
        assert result.exit_code == 0

        url = urlsplit(result.output.strip())
        assert url.netloc == "localhost:3912"
        assert url.path == "/sso"
        query = parse_qs(url.query)
        assert query["RelayState"] == ["back/to/page"]

        authn_request = parse_request(decode_request(url.query))
        assert authn_request.id == "_req42"
        assert authn_request.consumer_url == "https://sp.example/acs"
        assert authn_request.issuer == "https://sp.example/metadata"
        assert authn_request.issue_instant is not None

    def test_encoded_only(self):
        runner = CliRunner()
        result = runner.invoke(construct_authn_request, [
            "http://localhost:3912/sso", "--acs-url", "https://sp.example/acs", "--encoded-only",
        ])
        assert result.exit_code == 0

        authn_request = parse_request(decode_request({"SAMLRequest": result.output.strip()}))
        assert authn_request.consumer_url == "https://sp.example/acs"
        assert authn_request.id.startswith("_")
        assert authn_request.issuer is None

    def test_acs_url_is_required(self):
        runner = CliRunner()
        result = runner.invoke(construct_authn_request, ["http://localhost:3912/sso"])
        assert result.exit_code != 0

    def test_values_are_escaped(self):
        xml = create_authn_request('https://sp.example/acs?a=1&b="2"', "http://localhost/sso", issuer="<sp>")
        authn_request = parse_request(xml)

        assert authn_request.consumer_url == 'https://sp.example/acs?a=1&b="2"'
        assert authn_request.issuer == "<sp>"
