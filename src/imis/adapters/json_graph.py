"""
Identity-preserving JSON encoding of entity graphs.

Entities are emitted in full the first time they are met and as their bare
identity every time after that, which also breaks back-reference cycles such
as Patient -> PatientEvent -> Patient. Encoding runs in two passes:

1. identity pass: walk the graph and register every entity under
   (type, identity), rejecting entities without identity and distinct
   objects that claim the same identity;
2. emit pass: produce plain dicts/lists, replacing repeated entities by
   their identity.
"""
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Sequence, Tuple, Type

from pydantic.alias_generators import to_camel


@dataclass(frozen=True)
class NodeSpec:
    """Which attributes of an entity type are emitted, and which one identifies it."""
    fields: Sequence[str]
    identity: str = "id"


class GraphEncoder:
    def __init__(self, specs: Dict[Type, NodeSpec], key: Callable[[str], str] = to_camel):
        self.specs = specs
        self.key = key

    def encode(self, root: Any) -> Any:
        return self.encode_many([root])[0]

    def encode_many(self, roots: Iterable[Any]) -> List[Any]:
        """Encode several roots sharing one identity scope."""
        roots = list(roots)
        identities = self._assign_identities(roots)
        emitted = set()
        return [self._emit(root, identities, emitted) for root in roots]

    # -- pass 1 ---------------------------------------------------------

    def _assign_identities(self, roots: List[Any]) -> Dict[int, Tuple[Type, Any]]:
        identities = {}  # id(obj) -> (type, identity)
        owners = {}      # (type, identity) -> obj
        stack = list(roots)
        while stack:
            value = stack.pop()
            if isinstance(value, (list, tuple)):
                stack.extend(value)
                continue
            spec = self.specs.get(type(value))
            if spec is None or id(value) in identities:
                continue

            ref = getattr(value, spec.identity)
            if ref is None:
                raise ValueError(f"{type(value).__name__} has no {spec.identity!r}; cannot reference it")
            key = (type(value), ref)
            if key in owners and owners[key] is not value:
                raise ValueError(f"Two distinct {type(value).__name__} objects share identity {ref!r}")
            owners[key] = value
            identities[id(value)] = key
            stack.extend(getattr(value, name) for name in spec.fields)
        return identities

    # -- pass 2 ---------------------------------------------------------

    def _emit(self, value: Any, identities, emitted: set) -> Any:
        if isinstance(value, (list, tuple)):
            return [self._emit(item, identities, emitted) for item in value]

        spec = self.specs.get(type(value))
        if spec is not None:
            key = identities[id(value)]
            if key in emitted:
                return key[1]
            emitted.add(key)
            return {
                self.key(name): self._emit(getattr(value, name), identities, emitted)
                for name in spec.fields
            }

        if isinstance(value, Enum):
            return value.value
        if isinstance(value, (date, datetime)):
            return value.isoformat()
        return value
