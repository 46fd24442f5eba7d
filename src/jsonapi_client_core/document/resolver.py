"""Relationship resolution against a document's included resources.

Each relationship's linkage is matched by `(type, id)` against the included
index and the matching resources, themselves resolved recursively, are
attached as `Relationship.resolved`.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import fields, is_dataclass, replace

from jsonapi_client_core.document.relationship import Relationship
from jsonapi_client_core.document.resource import Resource

logger = logging.getLogger(__name__)

IncludedIndex = Mapping[str, list[Resource]]


def index_included(resources: Iterable[Resource]) -> dict[str, list[Resource]]:
    """Group resources by type, keeping insertion order and duplicate ids."""
    index: dict[str, list[Resource]] = {}
    for resource in resources:
        index.setdefault(resource.type, []).append(resource)
    return index


def _find(index: IncludedIndex, type_name: str, resource_id: str) -> Resource | None:
    for candidate in index.get(type_name, ()):
        if candidate.id == resource_id:
            return candidate
    return None


def resolve_relationship(
    relationship: Relationship,
    index: IncludedIndex,
    _path: frozenset[tuple[str, str]] = frozenset(),
) -> Relationship:
    """Return `relationship` with `resolved` set from `index`.

    `resolved` holds the matched resources in linkage order. When none of the
    linkage entries match (or their type is absent from the index) `resolved`
    is None. Linkage and links are always preserved.
    """
    matched = []
    for linkage in relationship.linkage:
        included = _find(index, linkage.type, linkage.id)
        if included is not None:
            matched.append(resolve_resource(included, index, _path))

    return replace(relationship, resolved=matched or None)


def resolve_resource(
    resource: Resource,
    index: IncludedIndex,
    _path: frozenset[tuple[str, str]] = frozenset(),
) -> Resource:
    """Return `resource` with every resolvable relationship substituted.

    A resource already on the current resolution path is returned as is, so
    cyclic graphs terminate.
    """
    key = (resource.type, resource.id)
    if key in _path:
        logger.debug(f"Relationship cycle at {key}, not descending further")
        return resource
    if resource.relationships is None:
        return resource

    path = _path | {key}
    relationships = resource.relationships

    if is_dataclass(relationships):
        updates = {
            field.name: resolve_relationship(value, index, path)
            for field in fields(relationships)
            if isinstance(value := getattr(relationships, field.name), Relationship)
        }
        resolved = replace(relationships, **updates)
    else:
        resolved = {
            name: resolve_relationship(value, index, path) if isinstance(value, Relationship) else value
            for name, value in relationships.items()
        }

    return replace(resource, relationships=resolved)


def _relationship_values(resource: Resource) -> list[Relationship]:
    relationships = resource.relationships
    if relationships is None:
        return []
    if is_dataclass(relationships):
        values = [getattr(relationships, field.name) for field in fields(relationships)]
    else:
        values = list(relationships.values())
    return [value for value in values if isinstance(value, Relationship)]


def collect_resolved(resources: Iterable[Resource]) -> list[Resource]:
    """Every resource reachable through `Relationship.resolved`, deduplicated by `(type, id)`.

    Resources come out in first-seen order, depth first. The starting
    resources themselves are only listed when some relationship resolves to
    them.
    """
    seen: set[tuple[str, str]] = set()
    collected: list[Resource] = []

    def visit(resource: Resource) -> None:
        for relationship in _relationship_values(resource):
            for related in relationship.resolved or ():
                key = (related.type, related.id)
                if key in seen:
                    continue
                seen.add(key)
                collected.append(related)
                visit(related)

    for resource in resources:
        visit(resource)
    return collected
