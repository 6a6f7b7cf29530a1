"""
Laundry API Backend: Shared Schemas
=====================================

Response envelopes, the write-result descriptor, and error/health bodies
used by every router.

Envelopes:
    DataResponse      {"status": "200 OK", "data": ...}            reads
    MutationResponse  {"message": ..., "result": ..., "data": ...} create/update
    DeleteResponse    {"message": ..., "result": ...}               delete
"""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from laundryapi.repositories.base import WriteResult

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base model serializing to camelCase and accepting both spellings."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class WriteResultOut(CamelModel):
    """
    What:  Store-level outcome of a write, echoed back to the client.
    Who:   The "result" member of every create/update/delete response.
    """

    last_insert_id: Optional[int] = Field(default=None, description="Id of the inserted row")
    rows_affected: int = Field(description="Rows matched by the statement")

    @classmethod
    def of(cls, result: WriteResult) -> "WriteResultOut":
        return cls(last_insert_id=result.last_insert_id, rows_affected=result.rows_affected)


class DataResponse(CamelModel, Generic[T]):
    status: str = Field(default="200 OK")
    data: T


class MutationResponse(CamelModel, Generic[T]):
    message: str
    result: WriteResultOut
    data: T


class DeleteResponse(CamelModel):
    message: str
    result: WriteResultOut


class ErrorResponse(BaseModel):
    """
    What:  Documented error body for OpenAPI.
    Why:   The API answers errors as {"error": ...} or {"message": ...};
           both members are optional here so either shape validates.
    """

    error: Optional[str] = Field(default=None, description="Error description")
    message: Optional[str] = Field(default=None, description="Error description")
    auth: Optional[bool] = Field(default=None, description="Present on authentication failures")


class HealthResponse(BaseModel):
    """Health check response showing service and store status."""

    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Store connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
