from __future__ import annotations

from typing import Any, Dict, Optional

from structmap.error_codes import ERROR_CODES


# ───────────────────────── Base & Mapping Exceptions ─────────────────────────
class MappingError(Exception):
    """Base class for mapping errors. Field-level mismatches never raise these."""
    code: str = "mapping_error"
    message: str
    details: Optional[Dict[str, Any]]

    def __init__(
        self,
        message: str = "",
        *,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        if code is not None:
            self.code = code
        self.message = message or ERROR_CODES.get(self.code, {}).get("message") or self.__class__.__name__
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message, "details": self.details or {}}


class InvalidArgumentError(MappingError, ValueError):
    code = "invalid_argument"


class UnsupportedTypeError(MappingError, TypeError):
    code = "unsupported_type"


__all__ = ["MappingError", "InvalidArgumentError", "UnsupportedTypeError"]
