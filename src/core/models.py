# src/core/models.py — v3
"""Shared Pydantic domain models used across modules.

No module redefines these types — all imports come from core.models.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Opaque node identity. 1 and "1" are distinct ids.
NodeId = Union[int, str]

_ENDPOINT_KEYS = ("source", "destination")


class CamelModel(BaseModel):
    """Base for records handed back to the host: camelCase keys on dump."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )

    def to_record(self) -> dict[str, Any]:
        """Plain nested mapping with camelCase keys, None fields omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)


class Edge(BaseModel):
    """Directed edge as reported by a traversal oracle.

    `source` and `destination` hold whatever the oracle returns for an
    endpoint (a node object, a mapping or a bare id). Either may be None in
    degraded oracles that only report the reachable endpoint.
    """

    source: Any = None
    destination: Any = None
    properties: dict[str, Any] = Field(default_factory=dict)
    id: Any = None

    @classmethod
    def from_raw(cls, raw: Any) -> Edge:
        """Coerce a host edge (Edge, mapping or attribute object) into an Edge.

        Mappings and attribute objects may carry attributes either under
        "properties" or flat next to the endpoints (public attributes only
        for objects).
        """
        if isinstance(raw, Edge):
            return raw
        if raw is None:
            return cls()
        if isinstance(raw, Mapping):
            props = raw.get("properties")
            if not isinstance(props, Mapping):
                props = {
                    k: v for k, v in raw.items()
                    if k not in _ENDPOINT_KEYS and k != "id"
                }
            return cls(
                source=raw.get("source"),
                destination=raw.get("destination"),
                properties=dict(props),
                id=raw.get("id"),
            )
        props = getattr(raw, "properties", None)
        if not isinstance(props, Mapping):
            attrs = getattr(raw, "__dict__", None) or {}
            props = {
                k: v for k, v in attrs.items()
                if not k.startswith("_") and k not in _ENDPOINT_KEYS
                and k not in ("id", "properties")
            }
        return cls(
            source=getattr(raw, "source", None),
            destination=getattr(raw, "destination", None),
            properties=dict(props),
            id=getattr(raw, "id", None),
        )


class ParentLink(CamelModel):
    """Predecessor entry of a traversal tree: how a node was first reached."""

    parent_id: Any
    edge: Edge
