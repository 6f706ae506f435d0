"""Response shaping for dispatch and plugin routes."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import HTTPException
from fastapi.responses import JSONResponse

from ...base.errors import ErrorEnvelope
from ...base.models import CapabilityResult
from ...base.registry import ConflictError, NotFoundError, RegistryError

_REGISTRY_STATUS = {
    NotFoundError: 404,
    ConflictError: 409,
}


def success_response(result: CapabilityResult) -> Dict[str, Any]:
    return {"success": True, "data": result.to_dict()}


def error_response(envelope: ErrorEnvelope) -> JSONResponse:
    """HTTP status is taken from the envelope kind only."""
    return JSONResponse(
        status_code=envelope.suggested_status,
        content={"success": False, "error": envelope.to_dict()},
    )


def registry_http_error(exc: Exception) -> HTTPException:
    """Map registry errors to 404/409; everything else is a 400."""
    status = 400
    for error_type, code in _REGISTRY_STATUS.items():
        if isinstance(exc, error_type):
            status = code
            break
    error_code = exc.code if isinstance(exc, RegistryError) else "invalid_descriptor"
    return HTTPException(status_code=status, detail={"code": error_code, "message": str(exc)})


__all__ = ["error_response", "registry_http_error", "success_response"]
