"""Validation of multipart form fields against a pydantic schema

Used by endpoints that take file uploads next to many form fields. File
parts are skipped (routes declare them with File()), empty strings count as
missing, and keys listed in list_fields keep every repeated value.
"""

from typing import Iterable, Type
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError
from starlette.datastructures import UploadFile


def form_model(schema: Type[BaseModel], list_fields: Iterable[str] = ()):
    list_fields = set(list_fields)

    async def parse(request: Request) -> BaseModel:
        form = await request.form()
        data = {}
        for key in form.keys():
            values = [
                value for value in form.getlist(key)
                if not isinstance(value, UploadFile) and value != ""
            ]
            if not values:
                continue
            data[key] = values if key in list_fields else values[-1]
        try:
            return schema.model_validate(data)
        except ValidationError as e:
            raise RequestValidationError(e.errors())

    return parse
