"""Field names of the flat event produced for each span."""

TRACE_ID_FIELD = "trace.trace_id"
SPAN_ID_FIELD = "trace.span_id"
PARENT_ID_FIELD = "trace.parent_id"
TYPE_FIELD = "type"
SERVICE_NAME_FIELD = "service_name"
SPAN_NAME_FIELD = "name"
DURATION_FIELD = "duration_ms"
