"""
Shapes validation outcomes into the dicts the form layer renders.
"""

from typing import Optional, Dict, Any, TYPE_CHECKING
from datetime import datetime, timezone

if TYPE_CHECKING:
    from ..validators.rules import ValidationResult


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class ResponseFormatter:
    """
    Common envelope for everything handed back to the form layer:
    ``status``, ``timestamp`` and either ``data`` or ``error``.
    """

    @staticmethod
    def success(
        data: Dict[str, Any],
        message: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Args:
            data: Payload for the form layer
            message: Optional human-readable summary
            metadata: Optional counters about the validation run
        """
        response: Dict[str, Any] = {"status": "success", "timestamp": _timestamp(), "data": data}
        if message:
            response["message"] = message
        if metadata:
            response["metadata"] = metadata
        return response

    @staticmethod
    def error(
        message: str,
        error_type: str,
        details: Optional[Dict[str, Any]] = None,
        code: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Args:
            message: Summary of what went wrong
            error_type: Machine-readable category, e.g. "validation_error"
            details: Optional structured detail, e.g. messages per field
            code: Optional reference code
            metadata: Optional counters about the validation run
        """
        error: Dict[str, Any] = {"type": error_type, "message": message}
        if details:
            error["details"] = details
        if code:
            error["code"] = code

        response: Dict[str, Any] = {"status": "error", "timestamp": _timestamp(), "error": error}
        if metadata:
            response["metadata"] = metadata
        return response


class ValidationResponseFormatter(ResponseFormatter):
    """
    Specialized formatter for applicant form validation results.
    Field errors are grouped by path so the UI can show them next to each input.
    """

    @staticmethod
    def format_result(result: "ValidationResult") -> Dict[str, Any]:
        grouped = result.as_dict()
        metadata = {"violation_count": len(result.violations), "field_count": len(grouped)}

        if result.is_valid:
            return ResponseFormatter.success(
                data={"valid": True},
                message="Application form is valid",
                metadata=metadata,
            )

        return ResponseFormatter.error(
            message=f"Application form has {len(result.violations)} error(s)",
            error_type="validation_error",
            details={"fields": grouped},
            metadata=metadata,
        )
