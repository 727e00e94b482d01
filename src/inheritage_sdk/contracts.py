"""Map of API operations covered by the SDK, keyed as ``"METHOD /path"``."""

SDK_ENDPOINT_COVERAGE: dict[str, str] = {
    "GET /": "get_dataset_manifest",
    "GET /stats": "get_stats",
    "GET /heritage": "list_heritage",
    "GET /heritage/filters": "get_heritage_filters",
    "GET /heritage/{slug}": "get_heritage",
    "GET /heritage/search": "search_heritage",
    "GET /heritage/random": "get_random_heritage",
    "GET /timeline/featured": "get_timeline_featured",
    "GET /geo/heritage": "list_geo_heritage",
    "GET /geo/heritage/{slug}": "get_geo_feature",
    "GET /geo/nearby": "get_geo_nearby",
    "GET /dump/heritage.ndjson": "get_heritage_dump",
    "GET /dump/geo.geojson": "get_geo_dump",
    "GET /dump/ai-context.jsonl": "get_ai_context_dump",
    "GET /changes": "get_changefeed",
    "GET /media/{slug}": "get_media",
    "GET /media/search": "search_media",
    "GET /media/random": "get_random_media",
    "GET /citation/{entity_id}": "get_citation",
    "POST /citation/report": "report_citation",
    "GET /ai/context/{slug}": "get_ai_context",
    "GET /ai/embedding/{slug}": "get_ai_embedding",
    "POST /ai/similar": "find_similar",
    "GET /ai/meta/{slug}": "get_ai_metadata",
    "POST /ai/vision/context": "get_ai_vision_context",
    "GET /ai/vector-index.ndjson": "get_ai_vector_index",
    "GET /license/ai": "get_ai_license",
    "GET /cidoc/{slug}": "get_heritage_cidoc",
    "GET /lido/{slug}": "get_heritage_lido",
    "GET /lido/export": "export_heritage_lido",
    "GET /aat": "search_aat",
    "GET /aat/{id_or_slug}": "get_aat_term",
    "GET /oai-pmh": "oaipmh_identify",
}
