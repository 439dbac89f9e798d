"""Pydantic models shared by the service and its client.

BuildInfo mirrors the JSON served at /__build-info; ErrorResponse is the body of
every error the service itself produces (unknown routes, wrong methods).
"""
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict

class BuildInfo(BaseModel):
    """
    Build metadata of the running service.

    version: release version, injected into the API description's info section.
    repository: source repository URL.
    revision: VCS revision the build was made from.
    builder: interpreter that runs the build.
    date_time: build timestamp, serialised as 'dateTime'.
    """
    version: str = Field("In development", description="Release version of the service.")
    repository: str = Field("In development", description="Source repository URL.")
    revision: str = Field("In development", description="VCS revision of the build.")
    builder: str = Field("In development", description="Interpreter the service runs on.")
    date_time: str = Field("In development", alias="dateTime", description="Build timestamp.")

    # Pydantic v2 model config: accept both field name and alias on input
    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True,
        json_schema_extra={
            "example": {
                "version": "0.0.7",
                "repository": "https://github.com/Financial-Times/publish-carousel.git",
                "revision": "7cdbdb18b4a518eef3ebb1b545fc124612f9d7cd",
                "builder": "CPython 3.12.4",
                "dateTime": "20161123122615",
            }
        }
    )

class ErrorResponse(BaseModel):
    """
    Error body returned for requests the service cannot route.

    error: short error summary.
    message: plain-language explanation.
    status_code: HTTP status code of the error.
    path: request path that failed, when known.
    """
    error: str = Field(..., description="Short, machine-readable error summary.")
    message: str = Field(..., description="Plain-language explanation of the error.")
    status_code: int = Field(..., description="HTTP status code returned by the operation.")
    path: Optional[str] = Field(None, description="Request path that produced the error.")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error": "Not found",
                "message": "No route is mounted at '/__apii'.",
                "status_code": 404,
                "path": "/__apii",
            }
        }
    )
