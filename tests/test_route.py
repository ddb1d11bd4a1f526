"""Route tests."""

import pytest
from roadrouter_core.routing.grammar import ParseError
from roadrouter_core.routing.route import MissingParameterError, Route, SymlinkRoute
from roadrouter_core.routing.router import Router


def handler():
    return "ok"


class TestRouteMatching:
    """Test full-path matching."""

    @pytest.mark.parametrize("pattern", ["users", "users/active", "a/b/c", "v1.0/docs"])
    def test_literal_matches_itself(self, pattern):
        """Test literal pattern matches exactly its own text."""
        route = Route(pattern, handlers=[handler])
        assert route.match(pattern) is not None
        assert route.parse_parameters(pattern) == {}
        assert route.match(pattern + "/x") is None

    def test_parameter_extraction(self):
        """Test parameter capture."""
        route = Route("users/:id")
        assert route.parse_parameters("users/42") == {"id": "42"}
        assert route.match("users/42/x") is None

    def test_constraint_restricts_capture(self):
        """Test inline constraint."""
        route = Route("items/:id(\\d+)")
        assert route.match("items/17") is not None
        assert route.match("items/abc") is None

    def test_constraint_spanning_segments(self):
        """Test constraint allowing slashes."""
        route = Route("static/:path(.+)")
        assert route.parse_parameters("static/css/site.css") == {"path": "css/site.css"}

    def test_empty_pattern_matches_empty_path(self):
        """Test zero-segment route."""
        route = Route("/")
        assert route.path == ""
        assert route.match("") is not None
        assert route.match("x") is None

    def test_trailing_newline_rejected(self):
        """Test the end anchor does not accept a trailing newline."""
        assert Route("about").match("about\n") is None
        assert Route("users/:id").match("users/5\n") is None

        router = Router()
        router.get("about", handler)
        assert router.resolve("about\n", "about\n", "GET") is None

    def test_path_is_trimmed(self):
        """Test stored path has no stray slashes."""
        route = Route("/users/:id/")
        assert route.path == "users/:id"

    def test_method_upper_cased(self):
        """Test method normalization."""
        assert Route("x", method="get").method == "GET"

    def test_malformed_pattern_raises_on_construction(self):
        """Test ParseError is raised when the route is built."""
        with pytest.raises(ParseError):
            Route("users/:1")


class TestRouteCaching:
    """Test lazy matcher and parameter cache."""

    def test_matcher_compiled_once(self):
        """Test matcher is memoized."""
        route = Route("users/:id")
        assert route._matcher is None
        first = route.matcher
        assert route.matcher is first

    def test_parameters_memoized(self):
        """Test parameter cache per literal path."""
        route = Route("users/:id")
        route.parse_parameters("users/1")
        route.parse_parameters("users/2")
        assert set(route._cache) == {"users/1", "users/2"}

    def test_returned_parameters_are_copies(self):
        """Test mutating a result does not poison the cache."""
        route = Route("users/:id")
        params = route.parse_parameters("users/1")
        params["id"] = "changed"
        assert route.parse_parameters("users/1") == {"id": "1"}

    def test_non_matching_path_gives_empty_params(self):
        """Test parse on a path that does not match."""
        assert Route("users/:id").parse_parameters("other") == {}


class TestMakeUri:
    """Test reverse URI building."""

    def test_fill_parameter(self):
        """Test make_uri inverts matching."""
        route = Route("users/:id")
        uri = route.make_uri({"id": "42"})
        assert uri == "users/42"
        assert route.parse_parameters(uri) == {"id": "42"}

    def test_non_string_values(self):
        """Test values are stringified."""
        assert Route("posts/:year/:slug").make_uri({"year": 2024, "slug": "hi"}) == "posts/2024/hi"

    def test_missing_parameter(self):
        """Test missing parameter raises."""
        with pytest.raises(MissingParameterError) as exc:
            Route("users/:id").make_uri({})
        assert exc.value.name == "id"


class TestRouteClone:
    """Test route cloning."""

    def test_clone_shares_pattern_and_handlers(self):
        """Test clone shares immutable data."""
        route = Route("users/:id", method="GET", handlers=[handler], name="user")
        route.match("users/1")
        route.parse_parameters("users/1")

        copy = route.clone()

        assert copy is not route
        assert copy.segments is route.segments
        assert copy.handlers is route.handlers
        assert copy.name == "user"
        assert copy._matcher is None
        assert copy._cache == {}

    def test_join(self):
        """Test joining two routes."""
        joined = Route.join(Route("/api/"), Route("users/:id", method="POST", handlers=[handler]))
        assert joined.path == "api/users/:id"
        assert joined.method == "POST"
        assert joined.handlers == [handler]

    def test_named(self):
        """Test chainable naming."""
        route = Route("x").named("ex")
        assert route.name == "ex"


class TestSymlinkRoute:
    """Test mount routes."""

    def test_head_matches_prefix_only_at_segment_boundary(self):
        """Test prefix matcher."""
        symlink = SymlinkRoute("api", router=Router())
        assert symlink.match_head("api/users") is not None
        assert symlink.match_head("api") is not None
        assert symlink.match_head("apix") is None
        assert symlink.match("api/users") is None

    def test_head_rejects_trailing_newline(self):
        """Test the prefix boundary is the real end of the path."""
        symlink = SymlinkRoute("api", router=Router())
        assert symlink.match_head("api\n") is None

    def test_head_parameters(self):
        """Test parameters captured by the prefix."""
        symlink = SymlinkRoute("users/:id", router=Router())
        assert symlink.parse_parameters("users/5/posts") == {"id": "5"}

    def test_matches_any_method(self):
        """Test mounts default to '*'."""
        assert SymlinkRoute("api", router=Router()).method == "*"

    def test_clone_copies_child_router(self):
        """Test symlink clone gets its own child router."""
        child = Router()
        child.get("x", handler)
        symlink = SymlinkRoute("api", router=child)

        copy = symlink.clone()

        assert copy.router is not child
        assert len(copy.router.routes) == 1
        assert copy.router.routes[0] is not child.routes[0]
