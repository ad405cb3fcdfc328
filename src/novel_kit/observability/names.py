# src/novel_kit/observability/names.py

"""Standard metric names for novel-kit observability.

Use these constants instead of hardcoded strings for consistency
across the codebase.

Note: All duration metrics are in milliseconds by convention.
Units are handled by the metrics backend (e.g., converted to seconds in Prometheus).
"""

# ============================================================================
# Parsing Metrics
# ============================================================================

# Duration
PARSING_DURATION = "parsing_duration"

# Counters
PARSING_CHAPTERS_CREATED = "parsing_chapters_created"
PARSING_SEGMENTS_CREATED = "parsing_segments_created"


# ============================================================================
# Layout Metrics
# ============================================================================

# Duration
LAYOUT_DURATION = "layout_duration"

# Counters
LAYOUT_ROWS_CREATED = "layout_rows_created"
LAYOUT_SMART_ROWS_CREATED = "layout_smart_rows_created"


# ============================================================================
# LLM Metrics
# ============================================================================

# Duration
LLM_COMPLETION_DURATION = "llm_completion_duration"

# Counters
LLM_REQUESTS_TOTAL = "llm_requests_total"
LLM_ERRORS_TOTAL = "llm_errors_total"

# Counters (token usage - monotonic over time for cost/rate tracking)
LLM_TOKENS_PROMPT = "llm_tokens_prompt"
LLM_TOKENS_COMPLETION = "llm_tokens_completion"
LLM_TOKENS_TOTAL = "llm_tokens_total"


# ============================================================================
# Pipeline Metrics
# ============================================================================

# Duration
TRANSLATION_DURATION = "translation_duration"
ANNOTATION_DURATION = "annotation_duration"

# Counters
TRANSLATION_SEGMENTS_TOTAL = "translation_segments_total"
TRANSLATION_ERRORS_TOTAL = "translation_errors_total"
ANNOTATION_SEGMENTS_SUCCEEDED = "annotation_segments_succeeded"
ANNOTATION_SEGMENTS_FAILED = "annotation_segments_failed"
ANNOTATION_ERRORS_TOTAL = "annotation_errors_total"

# Gauges
TRANSLATION_BATCH_SIZE = "translation_batch_size"
ANNOTATION_BATCH_SIZE = "annotation_batch_size"
