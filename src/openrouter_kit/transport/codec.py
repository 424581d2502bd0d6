# src/openrouter_kit/transport/codec.py

from typing import TypeVar

import pydantic
from pydantic import BaseModel

from openrouter_kit.errors import DecodeError

T = TypeVar("T", bound=BaseModel)


class JsonCodec:
    """JSON codec backed by pydantic models.

    Encoding drops ``None`` fields and uses wire aliases. Decoding is strict
    about shape: missing or mistyped fields fail instead of being defaulted.
    """

    def encode(self, value: BaseModel) -> bytes:
        return value.model_dump_json(by_alias=True, exclude_none=True).encode("utf-8")

    def decode(self, data: bytes, model: type[T]) -> T:
        if not data.strip():
            raise DecodeError(f"Empty response body for {model.__name__}", data)
        try:
            return model.model_validate_json(data)
        except pydantic.ValidationError as exc:
            raise DecodeError(
                f"Response does not match {model.__name__}: "
                f"{exc.error_count()} error(s), first: {_first_error(exc)}",
                data,
            ) from exc


def _first_error(exc: pydantic.ValidationError) -> str:
    error = exc.errors()[0]
    location = ".".join(str(part) for part in error["loc"]) or "<root>"
    return f"{location}: {error['msg']}"
