from minidp.response import BadRequest
from minidp.response import Response
from minidp.response import ServiceError


class TestResponse:
    def test_constructor_adding_content_type_header(self):
        resp = Response("foo", content="bar")
        headers = dict(resp.headers)
        assert headers["Content-Type"] == "bar"

    def test_default_content_type_is_html(self):
        resp = Response("<html/>")
        assert resp.headers == [("Content-Type", "text/html")]

    def test_given_content_type_header_is_kept(self):
        resp = Response("{}", headers=[("content-type", "application/json")])
        assert resp.headers == [("content-type", "application/json")]

    def test_wsgi_call(self):
        started = []
        body = Response("<html/>")({}, lambda status, headers: started.append((status, headers)))

        assert body == ["<html/>"]
        assert started == [("200 OK", [("Content-Type", "text/html")])]

    def test_error_responses_have_empty_body(self):
        for resp in [BadRequest(), ServiceError()]:
            assert resp.message == ""
        assert BadRequest().status == "400 Bad Request"
        assert ServiceError().status == "500 Internal Service Error"
