"""Route template and HTTP method extraction for controller actions."""

from collections.abc import Iterable, Iterator

from swagger_generator.parser.base import ActionDescriptor


class RouteParameterNames:
    """Case-insensitive set of the placeholder names found in a path."""

    def __init__(self, names: Iterable[str] = ()):
        self._names: dict[str, str] = {}
        for name in names:
            self.add(name)

    def add(self, name: str) -> None:
        self._names.setdefault(name.casefold(), name)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.casefold() in self._names

    def __iter__(self) -> Iterator[str]:
        return iter(self._names.values())

    def __len__(self) -> int:
        return len(self._names)

    def __repr__(self) -> str:
        return f"RouteParameterNames({list(self)!r})"


def resolve_path(action: ActionDescriptor) -> str:
    """Return the path template for an action.

    An explicit route template has its ``[controller]`` and ``[action]``
    tokens substituted and is otherwise used verbatim. Without one the
    conventional ``/{controller}/{action}`` path is used.
    """
    if action.route_template is not None:
        return action.route_template.replace("[controller]", action.controller).replace(
            "[action]", action.action
        )
    return f"/{action.controller}/{action.action}"


def get_route_parameter_names(path: str) -> RouteParameterNames:
    """Collect ``{name}`` placeholders from a path, left to right.

    An unmatched ``{`` ends the scan; names found before it are kept.
    """
    names = RouteParameterNames()
    i = 0
    while i < len(path):
        start = path.find("{", i)
        if start < 0:
            break
        end = path.find("}", start + 1)
        if end < 0:
            break
        name = path[start + 1:end].strip()
        if name:
            names.add(name)
        i = end + 1
    return names


def get_http_methods(action: ActionDescriptor) -> list[str]:
    """Return the upper-case HTTP methods an action responds to.

    An explicit method constraint wins over endpoint metadata. Neither
    present means no methods, and the action produces no operation.
    """
    if action.method_constraint is not None:
        methods = action.method_constraint
    elif action.endpoint_methods is not None:
        methods = action.endpoint_methods
    else:
        return []
    return [m.upper() for m in methods]
