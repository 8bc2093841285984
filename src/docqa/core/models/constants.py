"""Interaction kind, status and media type constants."""

# ---------------------------------------------------------------------------
# Interaction kinds: the wire value of a history record's ``type``.
# ---------------------------------------------------------------------------

KIND_SUMMARY = "summary"
KIND_QA = "qa"

VALID_KINDS = frozenset({KIND_SUMMARY, KIND_QA})

# ---------------------------------------------------------------------------
# Q&A session lifecycle
# ---------------------------------------------------------------------------

STATUS_IDLE = "idle"
STATUS_SUBMITTING = "submitting"
STATUS_ANSWERED = "answered"
STATUS_FAILED = "failed"

VALID_STATUSES = frozenset(
    {
        STATUS_IDLE,
        STATUS_SUBMITTING,
        STATUS_ANSWERED,
        STATUS_FAILED,
    }
)

# History view lifecycle
HISTORY_LOADING = "loading"
HISTORY_READY = "ready"
HISTORY_ERROR = "error"

# ---------------------------------------------------------------------------
# Input surfaces
# ---------------------------------------------------------------------------

MODE_FILE = "file"
MODE_PASTE = "paste"

VALID_MODES = frozenset({MODE_FILE, MODE_PASTE})

# ---------------------------------------------------------------------------
# Accepted media types
# ---------------------------------------------------------------------------

PDF_MEDIA_TYPES = frozenset({"application/pdf", "application/x-pdf"})
TEXT_MEDIA_TYPES = frozenset({"text/plain"})

# ---------------------------------------------------------------------------
# User-facing strings
# ---------------------------------------------------------------------------

PROCESSING_PLACEHOLDER = "Analyzing document..."
EMPTY_ANSWER_HINT = "Ask a question to get started..."
EXPANDED_PENDING_HINT = "Processing your question..."

HISTORY_ERROR_NO_USER = "User not found"
HISTORY_ERROR_FETCH = "Failed to fetch history"
