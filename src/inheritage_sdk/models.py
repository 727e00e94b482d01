"""Typed request and response models for the Inheritage API v1."""

from __future__ import annotations

from typing import Any, Literal, Mapping

from pydantic import BaseModel, ConfigDict, Field, model_validator

JsonValue = Any
MediaItemType = Literal["image", "model", "tour", "diagram", "video"]
MetadataPrefix = Literal["oai_dc", "lido"]
HeritageSort = Literal[
    "name",
    "-name",
    "period",
    "-period",
    "state",
    "-state",
    "completion_score",
    "-completion_score",
    "view_count",
    "-view_count",
    "country",
    "-country",
]


class InheritageModel(BaseModel):
    model_config = ConfigDict(extra="allow", protected_namespaces=())


class CitationEntry(InheritageModel):
    name: str | None = None
    url: str | None = None
    license: str | None = None
    required_display: str | None = None


class HeritageReference(InheritageModel):
    title: str | None = None
    url: str | None = None
    publisher: str | None = None
    author: str | None = None
    year: str | int | None = None
    citation_text: str | None = None


class HeritageMedia(InheritageModel):
    primary_image: str | None = None
    gallery: list[str] = Field(default_factory=list)
    panoramas: list[str] = Field(default_factory=list)
    orthos: list[str] = Field(default_factory=list)
    floor_plans: list[str] = Field(default_factory=list)
    sections: list[str] = Field(default_factory=list)
    site_plan: str | None = None
    point_cloud: str | None = None
    mesh_data: str | None = None
    cad_files: list[str] = Field(default_factory=list)
    videos: list[str] = Field(default_factory=list)
    documents: list[str] = Field(default_factory=list)


class HeritageTags(InheritageModel):
    category: str | None = None
    dynasty: str | None = None
    period: str | None = None
    states: list[str] = Field(default_factory=list)


class HeritageStatus(InheritageModel):
    completion_score: float | None = None
    completion_status: str | None = None
    is_featured: bool | None = None
    is_published: bool | None = None
    view_count: int | None = None


class GeoLocation(InheritageModel):
    lat: float
    lon: float


class Heritage(InheritageModel):
    id: str | None = None
    slug: str | None = None
    uuid: str | None = None
    name: str | None = None
    summary: str | None = None
    description: str | None = None
    category: str | None = None
    location: str | None = None
    state: str | None = None
    country: str | None = None
    dynasty: str | None = None
    period: str | None = None
    year_built: str | None = None
    built_by: str | None = None
    heritage_status: str | None = None
    preservation_status: str | None = None
    coordinates: tuple[float, float] | None = None
    geolocation: GeoLocation | None = None
    materials: list[str] = Field(default_factory=list)
    architecture: dict[str, Any] | None = None
    dimensions: dict[str, Any] | None = None
    visitor_info: dict[str, Any] | None = None
    cultural_context: dict[str, Any] | None = None
    tags: HeritageTags | None = None
    media: HeritageMedia | None = None
    status: HeritageStatus | None = None
    timeline: list[dict[str, Any]] = Field(default_factory=list)
    references: list[HeritageReference] = Field(default_factory=list)
    analytics: dict[str, Any] | None = None
    citations: list[CitationEntry] = Field(default_factory=list)
    official_url: str | None = None
    same_as: list[str] = Field(default_factory=list)


class PageMeta(InheritageModel):
    total: int | None = None
    limit: int | None = None
    offset: int | None = None
    page: int | None = None


class HeritageListResponse(InheritageModel):
    data: list[Heritage] = Field(default_factory=list)
    meta: PageMeta | None = None


class HeritageSearchResponse(InheritageModel):
    data: list[Heritage] = Field(default_factory=list)
    meta: PageMeta | None = None


class HeritageFacetOptions(InheritageModel):
    states: list[str] = Field(default_factory=list)
    countries: list[str] = Field(default_factory=list)
    dynasties: list[str] = Field(default_factory=list)
    styles: list[str] = Field(default_factory=list)
    materials: list[str] = Field(default_factory=list)
    periods: list[str] = Field(default_factory=list)
    categories: list[str] = Field(default_factory=list)


class HeritageFiltersResponse(InheritageModel):
    filters: HeritageFacetOptions | None = None
    generated_at: str | None = None


class GeoGeometry(InheritageModel):
    type: str | None = None
    coordinates: list[float] = Field(default_factory=list)


class GeoFeatureProperties(InheritageModel):
    slug: str | None = None
    name: str | None = None
    state: str | None = None
    country: str | None = None
    category: str | None = None
    view_count: int | None = None
    completion_score: float | None = None
    citation: CitationEntry | None = None


class GeoFeature(InheritageModel):
    type: str | None = None
    geometry: GeoGeometry | None = None
    properties: GeoFeatureProperties | None = None


class GeoFeatureCollection(InheritageModel):
    type: str | None = None
    features: list[GeoFeature] = Field(default_factory=list)


class MediaItem(InheritageModel):
    type: str | None = None
    url: str | None = None
    caption: str | None = None
    license: str | None = None
    citation: str | None = None
    metadata: dict[str, Any] | None = None


class MediaResponse(InheritageModel):
    heritage_id: str | None = None
    items: list[MediaItem] = Field(default_factory=list)
    citations: list[CitationEntry] = Field(default_factory=list)
    metadata: dict[str, Any] | None = None


class MediaSearchResponse(InheritageModel):
    data: list[MediaResponse] = Field(default_factory=list)
    meta: PageMeta | None = None


class CitationResponse(InheritageModel):
    entity: str | None = None
    citation_html: str | None = None
    citation_markdown: str | None = None
    citation_text: str | None = None
    license: str | None = None
    source_url: str | None = None


class CitationReportRequest(InheritageModel):
    """Payload for POST /citation/report."""

    entity: str
    app_name: str
    domain: str
    api_key: str | None = None
    display_count: int | None = None


class CitationReportResponse(InheritageModel):
    status: str | None = None
    message: str | None = None


class AISource(InheritageModel):
    type: str | None = None
    slug: str | None = None
    confidence: float | None = None
    retrieval_method: str | None = None


class AIContextResponse(InheritageModel):
    slug: str | None = None
    context: str | None = None
    embedding: list[float] = Field(default_factory=list)
    embedding_dimensions: int | None = None
    embedding_checksum: str | None = None
    model: str | None = None
    model_version: str | None = None
    prompt_template_version: str | None = None
    retrieval_policy: str | None = None
    sources: list[AISource] = Field(default_factory=list)
    citation: str | None = None


class AIEmbeddingResponse(InheritageModel):
    slug: str | None = None
    dimensions: int | None = None
    embedding: list[float] = Field(default_factory=list)
    embedding_checksum: str | None = None
    model: str | None = None
    model_version: str | None = None
    prompt_template_version: str | None = None
    retrieval_policy: str | None = None
    sources: list[AISource] = Field(default_factory=list)


class AISimilarResult(InheritageModel):
    score: float | None = None
    site: Heritage | None = None


class AISimilarMeta(InheritageModel):
    reference: str | None = None
    limit: int | None = None
    embedding_model: str | None = None
    model_version: str | None = None
    prompt_template_version: str | None = None


class AISimilarResponse(InheritageModel):
    data: list[AISimilarResult] = Field(default_factory=list)
    meta: AISimilarMeta | None = None


class AIMetadataLicense(InheritageModel):
    name: str | None = None
    citation_required: bool | None = None
    ai_use_allowed: bool | None = None
    ai_license_terms: str | None = None


class AIMetadataResponse(InheritageModel):
    slug: str | None = None
    name: str | None = None
    locale: str | None = None
    license: AIMetadataLicense | None = None
    model: str | None = None
    model_version: str | None = None
    prompt_template_version: str | None = None
    retrieval_policy: str | None = None
    embedding_dimensions: int | None = None
    embedding_checksum: str | None = None
    embeddings_last_updated: str | None = None
    context: str | None = None
    citations: list[CitationEntry] = Field(default_factory=list)
    same_as: list[str] = Field(default_factory=list)
    sources: list[AISource] = Field(default_factory=list)
    safety_annotations: list[str] = Field(default_factory=list)


class AIVisionRequest(InheritageModel):
    """Payload for POST /ai/vision/context; one image source is required."""

    image_url: str | None = None
    image_base64: str | None = None
    hint: str | None = None
    limit: int | None = None

    @model_validator(mode="after")
    def _require_image(self) -> "AIVisionRequest":
        if not self.image_url and not self.image_base64:
            raise ValueError("Provide either image_url or image_base64")
        return self


class AIVisionMatch(InheritageModel):
    score: float | None = None
    slug: str | None = None
    name: str | None = None
    state: str | None = None
    country: str | None = None
    architecture_style: str | None = None
    site: Heritage | None = None


class AIVisionResponse(InheritageModel):
    matches: list[AIVisionMatch] = Field(default_factory=list)
    caption: str | None = None
    architecture_style_prediction: str | None = None
    embedding_model: str | None = None
    embedding_model_version: str | None = None
    prompt_template_version: str | None = None
    retrieval_policy: str | None = None
    embedding_dimensions: int | None = None
    embedding_checksum: str | None = None
    license: str | None = None
    sources: list[AISource] = Field(default_factory=list)
    safety_annotations: list[str] = Field(default_factory=list)
    trace_id: str | None = None


class AIVectorRecord(InheritageModel):
    slug: str | None = None
    id: str | None = None
    name: str | None = None
    text: str | None = None
    vector: list[float] = Field(default_factory=list)
    embedding_checksum: str | None = None
    embedding_dimensions: int | None = None
    model: str | None = None
    model_version: str | None = None
    prompt_template_version: str | None = None
    retrieval_policy: str | None = None
    license: str | None = None
    license_url: str | None = None
    updated_at: str | None = None


class AILicenseResponse(InheritageModel):
    name: str | None = None
    version: str | None = None
    license: str | None = None
    human_summary: str | None = None
    url: str | None = None
    requirements: dict[str, Any] | None = None
    obligations: list[str] = Field(default_factory=list)
    allowances: list[str] = Field(default_factory=list)
    prohibitions: list[str] = Field(default_factory=list)
    enforcement: dict[str, Any] | None = None
    citation_examples: list[CitationEntry] = Field(default_factory=list)
    trace_id: str | None = None


class DatasetManifestLink(InheritageModel):
    rel: str | None = None
    href: str | None = None


class DatasetManifest(InheritageModel):
    dataset: JsonValue = None
    links: list[DatasetManifestLink] = Field(default_factory=list)


class TimelineLink(InheritageModel):
    name: str | None = None
    href: str | None = None


class TimelineFeaturedResponse(InheritageModel):
    timelines: list[TimelineLink] = Field(default_factory=list)


class StatsResponse(InheritageModel):
    counts: dict[str, float] | None = None
    breakdown: dict[str, dict[str, int]] | None = None
    generated_at: str | None = None


class ChangefeedEntry(InheritageModel):
    slug: str | None = None
    updated_at: str | None = None
    created_at: str | None = None
    published: bool | None = None
    operation: str | None = None
    checksum: str | None = None
    url: str | None = None


class ChangefeedMeta(InheritageModel):
    count: int | None = None
    limit: int | None = None
    since: str | None = None
    next_since: str | None = None
    has_more: bool | None = None
    dataset_hash: str | None = None
    last_updated: str | None = None


class ChangefeedResponse(InheritageModel):
    data: list[ChangefeedEntry] = Field(default_factory=list)
    meta: ChangefeedMeta | None = None


class AATStyle(InheritageModel):
    id: str | None = None
    style_id: str | None = None
    slug: str | None = None
    label: str | None = None
    uri: str | None = None
    description: str | None = None
    fragments: list[str] | None = None
    evidence: JsonValue = None
    metadata: dict[str, Any] | None = None
    created_at: str | None = None
    updated_at: str | None = None
    siteCount: int | None = None
    primarySiteCount: int | None = None
    relatedSites: list[dict[str, Any]] | None = None


class AATPagination(InheritageModel):
    page: int | None = None
    pageSize: int | None = None
    total: int | None = None
    totalPages: int | None = None


class AATStyleListResponse(InheritageModel):
    total: int | None = None
    data: list[AATStyle] = Field(default_factory=list)
    pagination: AATPagination | None = None


def coerce_model_payload(payload: Any) -> Any:
    """Dump pydantic models to plain JSON-ready data, leaving other values alone."""
    if isinstance(payload, BaseModel):
        return payload.model_dump(mode="json", exclude_none=True)
    if isinstance(payload, Mapping):
        return dict(payload)
    return payload
