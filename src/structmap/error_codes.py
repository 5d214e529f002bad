# src/structmap/error_codes.py
# Central mapping of error codes to default messages.
# Keep keys stable, callers match on them.
ERROR_CODES = {
    # ─── Arguments ─────────────────────────────────────────────────────────
    "invalid_argument": {
        "message": "A required argument was missing or invalid."
    },

    # ─── Types ─────────────────────────────────────────────────────────────
    "unsupported_type": {
        "message": "The requested type cannot be constructed without arguments."
    },

    # ─── Internal ──────────────────────────────────────────────────────────
    "mapping_error": {
        "message": "Object mapping failed."
    },
}
