"""The static route table.

Each ``RouteEntry`` pairs a method and path with a bundled asset and an
explicit content type. Nothing is inferred from file extensions: the
table is the single source of truth for what a response looks like.

Route sets select which entries are registered. ``"full"`` serves
everything; ``"minimal"`` serves only the page and its stylesheet.
Unmatched requests always get the 404 page, whatever the selection.
"""

from dataclasses import dataclass

from perch.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class RouteEntry:
    """One (method, path) → (status, content type, body) mapping.

    ``asset`` names the body in the ``AssetBundle``; ``None`` means an
    empty body. ``diagnostic`` is a line printed to stdout on every hit.
    """

    method: str
    path: str
    asset: str | None = None
    content_type: str | None = None
    status: int = 200
    diagnostic: str | None = None


FULL_ROUTES: tuple[RouteEntry, ...] = (
    RouteEntry("GET", "/", "index.html", "text/html; charset=utf-8"),
    RouteEntry("GET", "/style.css", "style.css", "text/css"),
    RouteEntry("GET", "/htmx.min.js", "htmx.min.js", "text/plain; charset=utf-8"),
    RouteEntry("GET", "/sse.js", "sse.js", "text/plain; charset=utf-8"),
    RouteEntry("GET", "/ws.js", "ws.js", "text/plain; charset=utf-8"),
    RouteEntry("POST", "/test", diagnostic="TEST"),
    RouteEntry("GET", "/yipee.gif", "yipee.gif", "image/gif"),
)

# Fallback for every (method, path) not in the selected table
NOT_FOUND = RouteEntry("*", "*", "404.html", "text/html", status=404)

ROUTE_SETS: dict[str, tuple[str, ...]] = {
    "full": tuple(entry.path for entry in FULL_ROUTES),
    "minimal": ("/", "/style.css"),
}


def select_routes(selection: str | tuple[str, ...] = "full") -> tuple[RouteEntry, ...]:
    """Return the entries for a route set name or an explicit path tuple.

    Entries keep their order in ``FULL_ROUTES`` regardless of the order
    paths were given in.

    Raises:
        ConfigurationError: If the set name or any path is unknown.
    """
    if isinstance(selection, str):
        try:
            paths = ROUTE_SETS[selection]
        except KeyError:
            known = ", ".join(sorted(ROUTE_SETS))
            msg = f"Unknown route set {selection!r}. Known sets: {known}"
            raise ConfigurationError(msg) from None
    else:
        paths = selection

    known_paths = {entry.path for entry in FULL_ROUTES}
    unknown = [path for path in paths if path not in known_paths]
    if unknown:
        msg = f"Unknown route path(s): {', '.join(unknown)}"
        raise ConfigurationError(msg)

    wanted = set(paths)
    return tuple(entry for entry in FULL_ROUTES if entry.path in wanted)


def required_assets(entries: tuple[RouteEntry, ...]) -> tuple[str, ...]:
    """Asset names the given entries and the 404 fallback need loaded."""
    names = [entry.asset for entry in (*entries, NOT_FOUND) if entry.asset is not None]
    return tuple(dict.fromkeys(names))
