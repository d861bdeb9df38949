"""Compiled router with trie-based path matching.

Each trie level holds literal children keyed by segment text and at most
one parameter edge. Literal children are tried first, so ``/versions/latest``
beats ``/versions/{version}`` when both are registered. Patterns that would
make a concrete path ambiguous are rejected by ``Router.add()``.
"""

from clickwrap.errors import ConfigurationError, MethodNotAllowed, RouteNotFound
from clickwrap.routing.route import PathSegment, Route, RouteMatch


def parse_path(path: str) -> list[PathSegment]:
    """Parse a route path string into segments.

    Examples::

        "/agree"               -> [PathSegment("agree")]
        "/versions/{version}"  -> [PathSegment("versions"),
                                   PathSegment("{version}", is_param=True, param_name="version")]
    """
    if not path.startswith("/"):
        msg = f"Route path must start with '/': {path!r}"
        raise ConfigurationError(msg)

    segments: list[PathSegment] = []
    for part in path.strip("/").split("/"):
        if not part:
            continue
        if part.startswith("{") and part.endswith("}"):
            name = part[1:-1]
            if not name.isidentifier():
                msg = f"Invalid parameter name {name!r} in route {path!r}"
                raise ConfigurationError(msg)
            segments.append(PathSegment(value=part, is_param=True, param_name=name))
        elif "{" in part or "}" in part or part.startswith(":"):
            msg = (
                f"Route {path!r} has an unsupported segment {part!r}. "
                "Parameters are whole segments written as {name}."
            )
            raise ConfigurationError(msg)
        else:
            segments.append(PathSegment(value=part))
    return segments


class _TrieNode:
    """A node in the route trie. Mutable during compilation only."""

    __slots__ = ("children", "param_child", "param_name", "routes", "routes_by_method")

    def __init__(self) -> None:
        self.children: dict[str, _TrieNode] = {}
        self.param_child: _TrieNode | None = None
        self.param_name: str | None = None
        self.routes: list[Route] = []
        self.routes_by_method: dict[str, Route] = {}


class Router:
    """Compiled router with trie-based path matching.

    Usage::

        router = Router()
        router.add(Route("/agree", serve_agree, frozenset({"GET", "POST"})))
        router.add(Route("/versions/{version}", serve_version, frozenset({"GET"})))
        router.compile()
        match = router.match("GET", "/versions/1.2.3")
        match.path_params  # {"version": "1.2.3"}
    """

    __slots__ = ("_compiled", "_root")

    def __init__(self) -> None:
        self._root = _TrieNode()
        self._compiled = False

    def add(self, route: Route) -> None:
        """Add a route. Must be called before ``compile()``.

        Raises ``ConfigurationError`` if the route would collide with one
        already registered: a different parameter name at the same depth,
        or the same method on the same pattern.
        """
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)
        if not route.methods:
            msg = f"Route {route.path!r} has no methods."
            raise ConfigurationError(msg)

        node = self._root
        for seg in parse_path(route.path):
            if seg.is_param:
                if node.param_child is None:
                    node.param_child = _TrieNode()
                    node.param_name = seg.param_name
                elif node.param_name != seg.param_name:
                    msg = (
                        f"Route {route.path!r} is ambiguous: parameter {{{seg.param_name}}} "
                        f"conflicts with {{{node.param_name}}} at the same position."
                    )
                    raise ConfigurationError(msg)
                node = node.param_child
            else:
                node = node.children.setdefault(seg.value, _TrieNode())

        for method in route.methods:
            existing = node.routes_by_method.get(method)
            if existing is not None:
                msg = (
                    f"Route {route.path!r} duplicates {method} on {existing.path!r}."
                )
                raise ConfigurationError(msg)
        for method in route.methods:
            node.routes_by_method[method] = route
        node.routes.append(route)

    @property
    def routes(self) -> list[Route]:
        """All registered routes, literal branches before parameter branches."""
        result: list[Route] = []
        stack = [self._root]
        while stack:
            node = stack.pop()
            result.extend(node.routes)
            if node.param_child is not None:
                stack.append(node.param_child)
            stack.extend(reversed(list(node.children.values())))
        return result

    def compile(self) -> None:
        """Freeze the router. No more routes can be added."""
        self._compiled = True

    def resolve(self, path: str) -> RouteMatch | None:
        """Match a path regardless of method.

        Returns ``None`` when no pattern matches; the caller provides the
        not-found path.
        """
        found = self._find(path)
        if found is None:
            return None
        node, params = found
        return RouteMatch(route=node.routes[0], path_params=params)

    def match(self, method: str, path: str) -> RouteMatch:
        """Match a request path and method.

        Raises ``RouteNotFound`` if no route matches the path.
        Raises ``MethodNotAllowed`` if the path matches but the method doesn't.
        """
        found = self._find(path)
        if found is None:
            raise RouteNotFound(f"No route matches {method} {path!r}")
        node, params = found
        route = node.routes_by_method.get(method)
        if route is None:
            raise MethodNotAllowed(frozenset(node.routes_by_method))
        return RouteMatch(route=route, path_params=params)

    def _find(self, path: str) -> tuple[_TrieNode, dict[str, str]] | None:
        parts = [p for p in path.strip("/").split("/") if p]
        return self._match_node(self._root, parts, 0, {})

    def _match_node(
        self,
        node: _TrieNode,
        parts: list[str],
        index: int,
        params: dict[str, str],
    ) -> tuple[_TrieNode, dict[str, str]] | None:
        """Depth-first match, literal edges before the parameter edge."""
        if index == len(parts):
            if node.routes:
                return node, params
            return None

        part = parts[index]

        child = node.children.get(part)
        if child is not None:
            result = self._match_node(child, parts, index + 1, params)
            if result is not None:
                return result

        if node.param_child is not None and node.param_name is not None:
            new_params = {**params, node.param_name: part}
            return self._match_node(node.param_child, parts, index + 1, new_params)

        return None
