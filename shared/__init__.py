# Dot IVR Shared Module
# Common functions used by the IVR log service

from .config import (
    ANTHROPIC_API_KEY,
    ANTHROPIC_MODEL,
    MAX_CONTENT_LENGTH,
    PORT
)

from .helpers import (
    ImagePayload,
    strip_model_text,
    is_channel_number,
    decode_image_payload
)

from .log_filter import (
    CHANNEL_NOT_FOUND,
    FilteredEntry,
    extract_timestamp,
    extract_bracket_tokens,
    detect_status,
    filter_channel_entries,
    extract_channel_history
)

from .analyzer import (
    UNKNOWN_CHANNEL,
    AnalysisResult,
    IvrLogAnalyzer,
    build_anthropic_client
)
