"""Descriptor tables for an Elasticsearch-style SDK.

Class paths are relative to the SDK package handed to
:func:`reflex_client.api.build_api`.
"""

from __future__ import annotations

from dataclasses import dataclass

from .categories import ClientCategory


@dataclass(frozen=True, slots=True)
class RequestDescriptor:
    name: str
    request_path: str
    constructor_keys: tuple[str, ...]
    category: ClientCategory


@dataclass(frozen=True, slots=True)
class ResponseDescriptor:
    response_path: str
    strategy: str


def _requests(category: ClientCategory, *rows: tuple[str, str, tuple[str, ...]]) -> tuple[RequestDescriptor, ...]:
    return tuple(RequestDescriptor(name, path, keys, category) for name, path, keys in rows)


CLIENT_PATHS: dict[ClientCategory, str] = {
    ClientCategory.CORE: ".client.Client",
    ClientCategory.INDICES: ".client.IndicesAdminClient",
    ClientCategory.CLUSTER: ".client.ClusterAdminClient",
}

CORE_REQUESTS = _requests(
    ClientCategory.CORE,
    ("index-doc", ".action.index.IndexRequest", ()),
    ("search", ".action.search.SearchRequest", ()),
    ("get-doc", ".action.get.GetRequest", ("index",)),
    ("count-docs", ".action.count.CountRequest", ("indices",)),
    ("delete-doc", ".action.delete.DeleteRequest", ()),
    ("delete-by-query", ".action.deletebyquery.DeleteByQueryRequest", ()),
    ("more-like-this", ".action.mlt.MoreLikeThisRequest", ("index",)),
    ("percolate", ".action.percolate.PercolateRequest", ()),
    ("scroll", ".action.search.SearchScrollRequest", ("scroll-id",)),
)

INDICES_REQUESTS = _requests(
    ClientCategory.INDICES,
    ("optimize-index", ".action.admin.indices.optimize.OptimizeRequest", ()),
    ("analyze-request", ".action.admin.indices.analyze.AnalyzeRequest", ("index", "text")),
    ("clear-index-cache", ".action.admin.indices.cache.clear.ClearIndicesCacheRequest", ("indices",)),
    ("close-index", ".action.admin.indices.close.CloseIndexRequest", ("index",)),
    ("create-index", ".action.admin.indices.create.CreateIndexRequest", ("index",)),
    ("delete-index", ".action.admin.indices.delete.DeleteIndexRequest", ("indices",)),
    ("delete-mapping", ".action.admin.indices.mapping.delete.DeleteMappingRequest", ("indices",)),
    ("delete-template", ".action.admin.indices.template.delete.DeleteIndexTemplateRequest", ("name",)),
    ("exists-index", ".action.admin.indices.exists.IndicesExistsRequest", ("indices",)),
    ("flush-index", ".action.admin.indices.flush.FlushRequest", ("indices",)),
    ("gateway-snapshot", ".action.admin.indices.gateway.snapshot.GatewaySnapshotRequest", ("indices",)),
    ("put-mapping", ".action.admin.indices.mapping.put.PutMappingRequest", ("indices",)),
    ("put-template", ".action.admin.indices.template.put.PutIndexTemplateRequest", ("name",)),
    ("refresh-index", ".action.admin.indices.refresh.RefreshRequest", ("indices",)),
    ("index-segments", ".action.admin.indices.segments.IndicesSegmentsRequest", ()),
    ("index-stats", ".action.admin.indices.stats.IndicesStatsRequest", ()),
    ("index-status", ".action.admin.indices.status.IndicesStatusRequest", ()),
    ("update-index-settings", ".action.admin.indices.settings.UpdateSettingsRequest", ("indices",)),
)

CLUSTER_REQUESTS = _requests(
    ClientCategory.CLUSTER,
    ("cluster-health", ".action.admin.cluster.health.ClusterHealthRequest", ("indices",)),
    ("node-info", ".action.admin.cluster.node.info.NodesInfoRequest", ()),
    ("node-restart", ".action.admin.cluster.node.restart.NodesRestartRequest", ("nodes-ids",)),
    ("node-shutdown", ".action.admin.cluster.node.shutdown.NodesShutdownRequest", ("nodes-ids",)),
    ("nodes-stats", ".action.admin.cluster.node.stats.NodesStatsRequest", ("nodes-ids",)),
    ("update-cluster-settings", ".action.admin.cluster.settings.ClusterUpdateSettingsRequest", ()),
)

REQUESTS: tuple[RequestDescriptor, ...] = CORE_REQUESTS + INDICES_REQUESTS + CLUSTER_REQUESTS

RESPONSES: tuple[ResponseDescriptor, ...] = (
    ResponseDescriptor(".action.admin.indices.status.IndicesStatusResponse", "xcontent"),
    ResponseDescriptor(".action.search.SearchResponse", "xcontent"),
    ResponseDescriptor(".action.get.GetResponse", "get"),
    ResponseDescriptor(".action.count.CountResponse", "object"),
    ResponseDescriptor(".action.delete.DeleteResponse", "object"),
    ResponseDescriptor(".action.deletebyquery.DeleteByQueryResponse", "object"),
    ResponseDescriptor(".action.index.IndexResponse", "object"),
    ResponseDescriptor(".action.percolate.PercolateResponse", "object"),
    ResponseDescriptor(".action.admin.indices.optimize.OptimizeResponse", "object"),
    ResponseDescriptor(".action.admin.indices.analyze.AnalyzeResponse", "object"),
    ResponseDescriptor(".action.admin.indices.cache.clear.ClearIndicesCacheResponse", "object"),
    ResponseDescriptor(".action.admin.indices.create.CreateIndexResponse", "object"),
    ResponseDescriptor(".action.admin.indices.delete.DeleteIndexResponse", "object"),
    ResponseDescriptor(".action.admin.indices.mapping.delete.DeleteMappingResponse", "object"),
    ResponseDescriptor(".action.admin.indices.exists.IndicesExistsResponse", "object"),
    ResponseDescriptor(".action.admin.indices.flush.FlushResponse", "object"),
    ResponseDescriptor(".action.admin.indices.gateway.snapshot.GatewaySnapshotResponse", "object"),
    ResponseDescriptor(".action.admin.indices.mapping.put.PutMappingResponse", "object"),
    ResponseDescriptor(".action.admin.indices.template.put.PutIndexTemplateResponse", "object"),
    ResponseDescriptor(".action.admin.indices.refresh.RefreshResponse", "object"),
    ResponseDescriptor(".action.admin.indices.settings.UpdateSettingsResponse", "object"),
    ResponseDescriptor(".action.admin.cluster.health.ClusterHealthResponse", "object"),
    ResponseDescriptor(".action.admin.cluster.node.info.NodesInfoResponse", "object"),
    ResponseDescriptor(".action.admin.cluster.node.restart.NodesRestartResponse", "object"),
    ResponseDescriptor(".action.admin.cluster.node.shutdown.NodesShutdownResponse", "object"),
    ResponseDescriptor(".action.admin.cluster.node.stats.NodesStatsResponse", "object"),
    ResponseDescriptor(".action.admin.cluster.settings.ClusterUpdateSettingsResponse", "object"),
)
