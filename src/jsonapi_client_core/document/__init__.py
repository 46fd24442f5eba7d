"""JSON:API document model, type registry and relationship resolution."""

from jsonapi_client_core.document.document import Document, DocumentType, EmptyResponse, Links, Meta
from jsonapi_client_core.document.registry import ResourceRegistry, default_registry
from jsonapi_client_core.document.relationship import Linkage, Relationship, RelationshipLinks
from jsonapi_client_core.document.resolver import (
    collect_resolved,
    index_included,
    resolve_relationship,
    resolve_resource,
)
from jsonapi_client_core.document.resource import GenericResource, Resource, SelfLinks, registered

__all__ = [
    "Document",
    "DocumentType",
    "EmptyResponse",
    "GenericResource",
    "Linkage",
    "Links",
    "Meta",
    "Relationship",
    "RelationshipLinks",
    "Resource",
    "ResourceRegistry",
    "SelfLinks",
    "collect_resolved",
    "default_registry",
    "index_included",
    "registered",
    "resolve_relationship",
    "resolve_resource",
]
