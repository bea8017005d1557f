"""Request body attributes carrying their parent path, merged into flat top-level objects."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from sdkmodel.brickmap import BrickMap, BrickMapConfig


@dataclass(frozen=True)
class ObjectWithoutLineage:
    """A value stored under a top-level key."""

    key: str
    value: Any


@dataclass(frozen=True)
class ObjectWithLineage(ObjectWithoutLineage):
    """A value whose dotted ``key`` sits below a dotted ``parent_key``."""

    parent_key: str = ""
    schema: Any = None


class ObjectWithLineageCollection:
    """Collects objects with lineage and merges them into top-level objects."""

    def __init__(
        self, stringified_paths: Iterable[str] = (), encoding: str = ""
    ) -> None:
        self.config = BrickMapConfig(
            stringified_paths=set(stringified_paths), encoding=encoding
        )
        self._inputs: list[ObjectWithLineage] = []
        self._outputs: list[ObjectWithoutLineage] = []

    @staticmethod
    def _split_path(prefix_path: str, path: str) -> list[str]:
        if prefix_path == "":
            return path.split(".")
        return prefix_path.split(".") + path.split(".")

    def push_back(self, item: ObjectWithLineage) -> None:
        """Queue ``item`` for the next merge."""
        self._inputs.append(item)

    def merge(self) -> None:
        """Nest every queued object by its path and emit the top-level results.

        Raises BrickMapError if the paths conflict.
        """
        brick_map = BrickMap(self.config)
        for item in self._inputs:
            brick_map.set(self._split_path(item.parent_key, item.key), item.value)
        self._outputs.extend(
            ObjectWithoutLineage(key, value)
            for key, value in brick_map.to_flat_map().items()
        )

    def flat_objects(self) -> list[ObjectWithoutLineage]:
        """Return the objects produced by merging so far."""
        return list(self._outputs)