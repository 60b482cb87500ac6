"""Content Codec: decode request bodies into write payloads, encode records into responses.

Invariants:
    - Malformed JSON and schema violations both surface as RequestValidationError
    - Encoded output is JSON-safe (model_dump(mode="json"))
"""

import json
from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError


async def decode_body(request: Request, schema: type[BaseModel]) -> BaseModel:
    """Parse the JSON body and validate it against `schema`."""
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise RequestValidationError([{
            "type": "json_invalid",
            "loc": ("body",),
            "msg": "Request body is not valid JSON",
            "input": None,
        }])
    try:
        return schema.model_validate(payload)
    except ValidationError as exc:
        raise RequestValidationError([
            {**err, "loc": ("body", *err["loc"])}
            for err in exc.errors(include_url=False, include_context=False)
        ])


def encode(record: Any, schema: type[BaseModel]) -> dict:
    return schema.model_validate(record).model_dump(mode="json")


def encode_response(
    record: Any, schema: type[BaseModel], status_code: int = status.HTTP_200_OK,
) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=encode(record, schema))
