# src/openrouter_kit/observability/names.py

"""Standard metric names for openrouter-kit observability.

Use these constants instead of hardcoded strings for consistency
across the codebase.

Note: All duration metrics are in milliseconds by convention.
Units are handled by the metrics backend (e.g., converted to seconds in Prometheus).
"""

# ============================================================================
# Dispatch Metrics
# ============================================================================

# Duration (labels: endpoint)
REQUEST_DURATION = "openrouter_request_duration"

# Counters (labels: endpoint, status)
REQUESTS_TOTAL = "openrouter_requests_total"
# Counters (labels: endpoint, error)
ERRORS_TOTAL = "openrouter_errors_total"

# Counters (token usage - monotonic over time for cost/rate tracking)
TOKENS_PROMPT = "openrouter_tokens_prompt"
TOKENS_COMPLETION = "openrouter_tokens_completion"
TOKENS_TOTAL = "openrouter_tokens_total"


# ============================================================================
# Tool Metrics
# ============================================================================

# Duration
TOOL_CALL_DURATION = "tool_call_duration"

# Counters
TOOL_CALLS_TOTAL = "tool_calls_total"
TOOL_ERRORS_TOTAL = "tool_errors_total"
