from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator


@dataclass
class GetField:
    name: str
    values: list[Any]

    def getName(self) -> str:
        return self.name

    def getValue(self) -> Any:
        return self.values[0] if self.values else None


class GetResponse:
    def __init__(
        self,
        index: str,
        type: str,
        id: str,
        *,
        version: int = -1,
        exists: bool = False,
        source: dict[str, Any] | None = None,
        fields: dict[str, GetField] | None = None,
    ) -> None:
        self._index = index
        self._type = type
        self._id = id
        self._version = version
        self._exists = exists
        self._source = source
        self._fields = fields or {}

    def exists(self) -> bool:
        return self._exists

    def isExists(self) -> bool:
        return self._exists

    def getIndex(self) -> str:
        return self._index

    def getType(self) -> str:
        return self._type

    def getId(self) -> str:
        return self._id

    def getVersion(self) -> int:
        return self._version

    def isSourceEmpty(self) -> bool:
        return not self._source

    def sourceAsMap(self) -> dict[str, Any] | None:
        return self._source

    def getFields(self) -> dict[str, GetField]:
        return self._fields


class IndexResponse:
    def __init__(self, index: str, type: str, id: str, version: int) -> None:
        self._index = index
        self._type = type
        self._id = id
        self._version = version

    def getIndex(self) -> str:
        return self._index

    def getType(self) -> str:
        return self._type

    def getId(self) -> str:
        return self._id

    def getVersion(self) -> int:
        return self._version

    def getShardFailures(self) -> list[Any]:
        raise AssertionError("shard failures must never be read")

    def getClass(self) -> type:
        raise AssertionError("getClass must never be read")


@dataclass
class SearchHit:
    index: str
    id: str
    score: float
    source: dict[str, Any] | None = None


class SearchResponse:
    EMPTY_PARAMS = object()

    def __init__(self, took: int, hits: list[SearchHit]) -> None:
        self.took = took
        self.hits = hits
        self.seen_params: Any = None

    def to_xcontent(self, builder: Any, params: Any) -> Any:
        self.seen_params = params
        builder.field("took", self.took)
        builder.field("timed_out", False)
        builder.start_object("hits")
        builder.field("total", len(self.hits))
        builder.field("hits").start_array()
        for hit in self.hits:
            builder.start_object()
            builder.field("_index", hit.index)
            builder.field("_id", hit.id)
            builder.field("_score", hit.score)
            if hit.source is not None:
                builder.field("_source", hit.source)
            builder.end_object()
        builder.end_array()
        builder.end_object()
        return builder


class UnmarkedXContentResponse:
    def to_xcontent(self, builder: Any, params: Any) -> Any:
        return builder


@dataclass
class ShardState:
    id: int
    state: str


@dataclass
class ClusterHealthResponse:
    cluster_name: str
    status: str
    indices: dict[str, dict[str, Any]] = field(default_factory=dict)
    shards: list[ShardState] = field(default_factory=list)

    def getClusterName(self) -> str:
        return self.cluster_name

    def getStatus(self) -> str:
        return self.status

    def getIndices(self) -> dict[str, dict[str, Any]]:
        return self.indices

    def getNumberOfShards(self) -> int:
        return len(self.shards)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self.indices))


class CreateIndexResponse:
    def __init__(self, acknowledged: bool) -> None:
        self._acknowledged = acknowledged

    def getAcknowledged(self) -> bool:
        return self._acknowledged


class OpaqueResponse:
    def describe(self) -> str:
        return "opaque"


class IndexHealth:
    def __init__(self, index: str, status: str = "green", shards: int = 1) -> None:
        self._index = index
        self._status = status
        self._shards = shards

    def getIndex(self) -> str:
        return self._index

    def getStatus(self) -> str:
        return self._status

    def getNumberOfShards(self) -> int:
        return self._shards


class ShardRouting:
    def __init__(self, node: str) -> None:
        self.node = node

    def __str__(self) -> str:
        return f"[{self.node}]"


class IndicesHealthResponse:
    def __init__(self, indices: dict[str, IndexHealth], routing: list[ShardRouting] | None = None) -> None:
        self._indices = indices
        self._routing = routing or []

    def getIndices(self) -> dict[str, IndexHealth]:
        return self._indices

    def getRouting(self) -> list[ShardRouting]:
        return self._routing

    def __iter__(self) -> Iterator[IndexHealth]:
        return iter(self._indices.values())
