"""Route aggregation: folds a document's paths into one Route per canonical path."""

from functools import reduce

from swagger_scaffold.generator.paths import VERBS, normalize
from swagger_scaffold.parser.base import Operation, Route


def _merge_parameters(shared: list[dict], own: list[dict]) -> list[dict]:
    """Path-item parameters followed by the operation's own.

    An operation parameter replaces a shared one with the same name and
    location.
    """
    overridden = {(p.get("name"), p.get("in")) for p in own}
    return [p for p in shared if (p.get("name"), p.get("in")) not in overridden] + own


def read_operations(raw_path: str, path_item: dict) -> list[Operation]:
    """Build the operations declared on one path item, in VERBS order.

    Keys that are not recognized verbs (`x-` extensions, ...) are
    ignored; a shared `parameters` list is merged into each operation.
    """
    shared = path_item.get("parameters") or []
    operations = []
    for verb in VERBS:
        if verb not in path_item:
            continue
        operation = path_item[verb] or {}
        operations.append(
            Operation(
                method=verb,
                path=raw_path,
                operation_id=operation.get("operationId") or "",
                summary=operation.get("summary") or "",
                description=operation.get("description") or "",
                parameters=_merge_parameters(shared, operation.get("parameters") or []),
                produces=operation.get("produces") or [],
                responses=operation.get("responses") or {},
            )
        )
    return operations


def _add_path(routes: dict[str, Route], entry: tuple[str, dict]) -> dict[str, Route]:
    raw_path, path_item = entry
    pathname = normalize(raw_path).pathname
    operations = read_operations(raw_path, path_item)

    existing = routes.get(pathname)
    if existing is None:
        route = Route(pathname=pathname, path=raw_path, methods=operations)
    else:
        # Same canonical path seen again: append, never dedupe.
        route = existing.model_copy(update={"methods": existing.methods + operations})

    return {**routes, pathname: route}


def aggregate(paths: dict[str, dict]) -> dict[str, Route]:
    """Merge every raw path into the Route for its canonical path.

    Routes keep the order in which canonical paths are first seen, and
    operations keep first-seen order across raw paths and verbs.
    """
    return reduce(_add_path, paths.items(), {})
