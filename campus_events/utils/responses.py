"""
Standardized response utilities
"""

from typing import Any, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, Response

from campus_events.schemas.common import ErrorResponse, StandardResponse


def success_response(message: str, data: Any = None) -> dict:
    """Success envelope; the route decorator sets the status code"""
    response = StandardResponse(success=True, message=message, data=jsonable_encoder(data))
    return response.model_dump(mode="json")


def error_response(
    message: str,
    errors: Any = None,
    status_code: int = 400,
    headers: Optional[dict] = None,
) -> JSONResponse:
    """Create standardized error response"""
    response = ErrorResponse(message=message, errors=jsonable_encoder(errors))
    return JSONResponse(
        content=response.model_dump(mode="json"),
        status_code=status_code,
        headers=headers,
    )


XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def xlsx_response(content: bytes, filename: str) -> Response:
    """Workbook download"""
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
