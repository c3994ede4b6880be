"""Tests for the Response type and its chainable transformations."""

from wicket.http.response import JSON_CONTENT_TYPE, Response


class TestResponse:
    def test_defaults(self) -> None:
        response = Response("hello")
        assert response.status == 200
        assert response.content_type == "text/plain; charset=utf-8"
        assert response.headers == ()

    def test_json_is_compact(self) -> None:
        response = Response.json({"status": "ok", "n": [1, 2]})
        assert response.body == '{"status":"ok","n":[1,2]}'
        assert response.content_type == JSON_CONTENT_TYPE

    def test_json_keeps_unicode(self) -> None:
        assert Response.json({"name": "café"}).text == '{"name":"café"}'

    def test_error_envelope(self) -> None:
        response = Response.error("Unknown route", 404)
        assert response.status == 404
        assert response.json_body() == {"error": "Unknown route"}

    def test_transformations_return_new_objects(self) -> None:
        original = Response("x")
        changed = original.with_status(201).with_header("X-One", "1")
        assert original.status == 200
        assert original.headers == ()
        assert changed.status == 201
        assert changed.headers == (("X-One", "1"),)

    def test_with_headers_appends(self) -> None:
        response = Response("x").with_header("Vary", "Origin").with_headers({"X-Two": "2"})
        assert response.headers == (("Vary", "Origin"), ("X-Two", "2"))

    def test_with_content_type(self) -> None:
        assert Response("x").with_content_type("text/csv").content_type == "text/csv"

    def test_header_lookup_is_case_insensitive(self) -> None:
        response = Response("x").with_header("Access-Control-Allow-Origin", "*")
        assert response.header("access-control-allow-origin") == "*"
        assert response.header("x-missing") is None

    def test_body_bytes_and_text(self) -> None:
        assert Response("é").body_bytes == "é".encode()
        assert Response(b"abc").text == "abc"
