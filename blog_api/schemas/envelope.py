"""Response envelope shared by every endpoint."""

from typing import Any

from fastapi.responses import ORJSONResponse
from pydantic import BaseModel, ConfigDict, Field
from starlette.status import HTTP_200_OK


class SuccessEnvelope[T](BaseModel):
    """Successful response: `{statusCode, data, success: true}`."""

    model_config = ConfigDict(populate_by_name=True)

    status_code: int = Field(alias="statusCode")
    data: T
    success: bool = True


class ErrorEnvelope(BaseModel):
    """Failed response: `{statusCode, error, success: false}`."""

    model_config = ConfigDict(populate_by_name=True)

    status_code: int = Field(alias="statusCode")
    error: str
    success: bool = False


def success_response(data: Any, status_code: int = HTTP_200_OK) -> ORJSONResponse:
    """
    Wrap a payload in the success envelope.

    Pydantic models are dumped in JSON mode by alias so timestamps and
    UUIDs serialize the same way everywhere.
    """
    if isinstance(data, BaseModel):
        data = data.model_dump(mode="json", by_alias=True)
    return ORJSONResponse(
        content={"statusCode": status_code, "data": data, "success": True},
        status_code=status_code,
    )
