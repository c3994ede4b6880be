"""Tests for wicket.routing.registry — the ordered, immutable route table."""

import pytest

from wicket.errors import ConfigurationError
from wicket.routing.matcher import PathMatcher
from wicket.routing.registry import Registry, register
from wicket.routing.route import Method, Route, RouteDeclaration


def _handler(request):
    return {"ok": True}


def _other(request):
    return {"other": True}


def _decl(path: str, method: str = "GET", handler=_handler) -> RouteDeclaration:
    return RouteDeclaration(path=path, method=method, handler=handler)


class TestRegister:
    def test_compiles_each_route_once(self) -> None:
        registry = register([_decl("/"), _decl("/users/{id}")])
        assert len(registry) == 2
        assert all(isinstance(r.matcher, PathMatcher) for r in registry)

    def test_matcher_is_derived_at_construction(self) -> None:
        route = Route(path="/users/{id}", method=Method.GET, handler=_handler)
        matcher = route.matcher
        route.matcher.test("/users/1")
        route.matcher.test("/users/2")
        assert route.matcher is matcher

    def test_preserves_declaration_order(self) -> None:
        registry = register([_decl("/b"), _decl("/a"), _decl("/c")])
        assert [r.path for r in registry.routes] == ["/b", "/a", "/c"]

    def test_method_strings_are_normalized(self) -> None:
        registry = register([_decl("/", "post")])
        assert registry.routes[0].method is Method.POST

    def test_unsupported_method_is_fatal(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            register([_decl("/", "PATCH")])
        assert "PATCH" in str(exc_info.value)

    def test_duplicate_path_and_method_is_fatal(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            register([_decl("/users"), _decl("/users", handler=_other)])
        assert "/users" in str(exc_info.value)

    def test_duplicate_after_normalization_is_fatal(self) -> None:
        with pytest.raises(ConfigurationError):
            register([_decl("/users", "GET"), _decl("/users", "get")])

    def test_same_path_different_methods_is_fine(self) -> None:
        registry = register([_decl("/users", "GET"), _decl("/users", "POST")])
        assert len(registry) == 2

    def test_malformed_pattern_is_fatal(self) -> None:
        with pytest.raises(ConfigurationError):
            register([_decl("/users/<id>")])

    def test_empty_table(self) -> None:
        assert len(register([])) == 0


class TestLookup:
    def test_static_match(self) -> None:
        registry = register([_decl("/")])
        match = registry.lookup("GET", "/")
        assert match is not None
        assert match.route.path == "/"
        assert match.path_params == {}

    def test_extracts_params(self) -> None:
        registry = register([_decl("/users/{id}")])
        match = registry.lookup("GET", "/users/42")
        assert match is not None
        assert match.path_params == {"id": "42"}

    def test_unknown_path(self) -> None:
        registry = register([_decl("/")])
        assert registry.lookup("GET", "/missing") is None

    def test_wrong_method_is_no_match(self) -> None:
        registry = register([_decl("/users", "GET")])
        assert registry.lookup("POST", "/users") is None

    def test_never_misroutes_to_other_method(self) -> None:
        registry = register([_decl("/users", "GET", _handler), _decl("/users", "POST", _other)])
        for method, handler in (("GET", _handler), ("POST", _other)):
            match = registry.lookup(method, "/users")
            assert match is not None
            assert match.route.handler is handler
        assert registry.lookup("PUT", "/users") is None
        assert registry.lookup("DELETE", "/users") is None

    def test_first_declared_match_wins(self) -> None:
        registry = register(
            [_decl("/users/{name}", handler=_handler), _decl("/users/me", handler=_other)]
        )
        match = registry.lookup("GET", "/users/me")
        assert match is not None
        assert match.route.handler is _handler

    def test_order_decides_not_specificity(self) -> None:
        registry = register(
            [_decl("/users/me", handler=_other), _decl("/users/{name}", handler=_handler)]
        )
        match = registry.lookup("GET", "/users/me")
        assert match is not None
        assert match.route.handler is _other

    def test_skips_routes_for_other_methods(self) -> None:
        registry = register(
            [_decl("/items/{id}", "DELETE", _other), _decl("/items/{id}", "GET", _handler)]
        )
        match = registry.lookup("GET", "/items/3")
        assert match is not None
        assert match.route.handler is _handler


class TestIndex:
    def test_get_by_pattern(self) -> None:
        registry = register([_decl("/users/{id}", "PUT")])
        route = registry.get("/users/{id}", "PUT")
        assert route is not None
        assert route.method is Method.PUT

    def test_get_missing(self) -> None:
        registry = register([_decl("/")])
        assert registry.get("/", "POST") is None
        assert registry.get("/nope", "GET") is None

    def test_get_unknown_method(self) -> None:
        registry = register([_decl("/")])
        assert registry.get("/", "TRACE") is None

    def test_index_is_read_only(self) -> None:
        registry = register([_decl("/")])
        with pytest.raises(TypeError):
            registry._index[("/x", Method.GET)] = registry.routes[0]  # type: ignore[index]

    def test_registry_from_routes_rejects_duplicates(self) -> None:
        route = Route(path="/", method=Method.GET, handler=_handler)
        with pytest.raises(ConfigurationError):
            Registry([route, route])
