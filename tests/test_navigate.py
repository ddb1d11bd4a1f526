"""Reverse routing tests."""

import pytest
from roadrouter_core.routing.route import MissingParameterError
from roadrouter_core.routing.router import Router, RoutingException


def handler():
    return "ok"


@pytest.fixture
def router():
    """Router with named routes and a nested group."""
    router = Router()
    router.get("/", handler).named("home")
    router.get("users/:id", handler).named("user")
    router.get("about/team", handler)
    router.group(
        "blog",
        lambda r: (
            r.get("posts/:slug", handler).named("post"),
            r.group("admin", lambda a: a.get("stats", handler).named("stats"), name="admin"),
        ),
        name="blog",
    )
    return router


class TestNavigate:
    """Test navigate()."""

    def test_path_prefix_with_params(self, router):
        """Test leading segments plus parameters."""
        assert router.navigate(["users", {"id": "7"}]) == "/users/7"

    def test_declared_path_with_params(self, router):
        """Test a path exactly as declared."""
        assert router.navigate(["users/:id", {"id": 1337}]) == "/users/1337"

    def test_by_name(self, router):
        """Test lookup by route name."""
        assert router.navigate(["user", {"id": "3"}]) == "/users/3"

    def test_literal_path(self, router):
        """Test lookup by concrete path."""
        assert router.navigate(["/about/team/"]) == "/about/team"

    def test_relative(self, router):
        """Test absolute=False omits the leading slash."""
        assert router.navigate(["about/team"], absolute=False) == "about/team"

    def test_root(self, router):
        """Test empty route."""
        assert router.navigate(["home"]) == "/"

    def test_nested_scope(self, router):
        """Test mount narrows the scope for following elements."""
        assert router.navigate(["blog", "post", {"slug": "hello"}]) == "/blog/posts/hello"

    def test_chained_groups(self, router):
        """Test several nested groups."""
        assert router.navigate(["blog", "admin", "stats"]) == "/blog/admin/stats"

    def test_route_reference(self, router):
        """Test Route objects are appended directly."""
        route = router.routes[1]
        assert router.navigate([route, {"id": "9"}]) == "/users/9"

    def test_unknown_name(self, router):
        """Test unresolvable strings raise."""
        with pytest.raises(RoutingException):
            router.navigate(["nowhere"])

    def test_nested_name_not_visible_at_root(self, router):
        """Test names inside a group need the group first."""
        with pytest.raises(RoutingException):
            router.navigate(["post", {"slug": "x"}])

    def test_map_without_route(self, router):
        """Test parameters must follow a route."""
        with pytest.raises(RoutingException):
            router.navigate([{"id": "1"}])

    def test_unsupported_element(self, router):
        """Test other element types raise."""
        with pytest.raises(RoutingException):
            router.navigate([42])

    def test_missing_parameter(self, router):
        """Test incomplete parameters raise MissingParameterError."""
        with pytest.raises(MissingParameterError):
            router.navigate(["user", {}])

    def test_parameterized_group(self):
        """Test parameters filled into a mount prefix."""
        router = Router()
        router.group("users/:id", lambda r: r.get("profile", handler))
        assert router.navigate(["users/:id", {"id": "1337"}, "profile"]) == "/users/1337/profile"
