# src/algorithms/context.py — v1
"""Algorithm context: the collaborators every entry point needs.

Constructed explicitly by the caller and passed to each call. Holds the
traversal capability, the node id extractor and the settings that seed
option defaults. Nothing here is process-wide.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable, TypeVar

from pydantic import BaseModel, ValidationError

from flexalgo.config.settings import Settings, load_settings
from flexalgo.core.errors import AlgorithmPreconditionError, InvalidOptionsError
from flexalgo.graph.identity import default_node_id
from flexalgo.graph.traversal.base_traverser import BaseTraverser
from flexalgo.graph.traversal.traverser_factory import create_traverser
from flexalgo.graph.weights import WeightFn, make_weight_fn

logger = logging.getLogger(__name__)

O = TypeVar("O", bound=BaseModel)


@dataclass
class AlgorithmContext:
    """Per-caller bundle of traverser, id extractor and settings."""

    traverser: BaseTraverser | None = None
    settings: Settings = field(default_factory=load_settings)
    get_node_id: Callable[[Any], Any] = default_node_id

    @classmethod
    def from_source(
        cls,
        source: Any,
        settings: Settings | None = None,
        get_node_id: Callable[[Any], Any] = default_node_id,
    ) -> AlgorithmContext:
        """Build a context around a traverser, networkx graph or host function."""
        return cls(
            traverser=create_traverser(source),
            settings=settings or load_settings(),
            get_node_id=get_node_id,
        )

    def require_traverser(self, caller: str) -> BaseTraverser:
        """Return the traverser or fail before any work starts."""
        if self.traverser is None:
            raise AlgorithmPreconditionError(
                f"{caller}: traversal capability is not available"
            )
        return self.traverser

    def node_id_fn(self, options: Any) -> Callable[[Any], Any]:
        """Per-call id extractor override, falling back to the context's."""
        return getattr(options, "get_node_id", None) or self.get_node_id

    def weight_fn(self, options: Any) -> WeightFn:
        """Per-call weight function, else one bound to the weight options."""
        custom = getattr(options, "get_weight", None)
        if custom is not None:
            return custom
        return make_weight_fn(
            keys=options.weight_attribute,
            default_value=options.default_weight,
            min_value=options.min_weight,
        )

    def parse_options(self, model: type[O], raw: O | Mapping[str, Any] | None) -> O:
        """Validate a configuration record into `model`.

        Settings provide defaults for the fields they know; keys in `raw`
        (camelCase aliases or field names) override them.

        Raises:
            InvalidOptionsError: If `raw` is not a mapping or fails validation.
        """
        if isinstance(raw, model):
            return raw
        if raw is None:
            raw = {}
        if not isinstance(raw, Mapping):
            raise InvalidOptionsError(
                f"{model.__name__}: configuration must be a mapping, "
                f"got {type(raw).__name__}"
            )

        alias_by_name = {
            name: (info.alias or name) for name, info in model.model_fields.items()
        }
        merged: dict[str, Any] = {}
        for name, value in self.settings.option_defaults().items():
            if name in alias_by_name:
                merged[alias_by_name[name]] = value
        for key, value in raw.items():
            merged[alias_by_name.get(key, key)] = value

        try:
            return model.model_validate(merged)
        except ValidationError as exc:
            raise InvalidOptionsError(f"{model.__name__}: {exc}") from exc
