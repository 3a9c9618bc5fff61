"""Compiled router with exact path matching.

Every route is a literal path. Lookup is a dict hit on the path and a
second on the method; anything else is ``NotFound``.
"""

from perch.errors import ConfigurationError, NotFound
from perch.routing.route import Route, RouteMatch


def validate_path(path: str) -> str:
    """Validate a literal route path and return it unchanged.

    Raises ``ConfigurationError`` for relative paths and for
    placeholder syntax, which this router does not support.
    """
    if not path.startswith("/"):
        msg = f"Route path {path!r} must start with '/'."
        raise ConfigurationError(msg)
    if any(ch in path for ch in "{}<>"):
        msg = f"Route path {path!r} contains a placeholder; only literal paths are supported."
        raise ConfigurationError(msg)
    return path


class Router:
    """Compiled exact-match router.

    Usage::

        router = Router()
        router.add(Route("/style.css", handler, frozenset({"GET"})))
        router.compile()
        match = router.match("GET", "/style.css")
    """

    __slots__ = ("_compiled", "_table")

    def __init__(self) -> None:
        self._table: dict[str, dict[str, Route]] = {}
        self._compiled = False

    def add(self, route: Route) -> None:
        """Add a route to the router. Must be called before compile()."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)

        by_method = self._table.setdefault(validate_path(route.path), {})
        for method in route.methods:
            if method in by_method:
                msg = f"Duplicate route: {method} {route.path}"
                raise ConfigurationError(msg)
            by_method[method] = route

    @property
    def routes(self) -> list[Route]:
        """Return all registered routes in registration order."""
        seen: set[int] = set()
        result: list[Route] = []
        for by_method in self._table.values():
            for route in by_method.values():
                if id(route) not in seen:
                    seen.add(id(route))
                    result.append(route)
        return result

    def compile(self) -> None:
        """Freeze the router. No more routes can be added."""
        self._compiled = True

    def match(self, method: str, path: str) -> RouteMatch:
        """Match a request method and path against compiled routes.

        Returns a ``RouteMatch`` on success. ``HEAD`` falls back to the
        ``GET`` route of the same path. Raises ``NotFound`` for every
        other miss, including a known path with an unregistered method.
        """
        by_method = self._table.get(path)
        if by_method is not None:
            route = by_method.get(method)
            if route is not None:
                return RouteMatch(route=route)
            if method == "HEAD" and "GET" in by_method:
                return RouteMatch(route=by_method["GET"])
        raise NotFound(f"No route matches {method} {path!r}")
