"""Shared helper functions for driver modules."""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from ..exceptions import ScmDecodeError, UnexpectedStatusError
from ..models.common import Response

M = TypeVar("M", bound=BaseModel)


def decode(model: type[M], data: Any) -> M:
    """Validate a vendor payload into its wire model."""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        msg = f"Unexpected {model.__name__} payload: {e}"
        raise ScmDecodeError(msg) from e


def decode_body(model: type[M], data: Any, res: Response) -> M:
    """Decode a response that must carry an entity; a body-less reply is an error."""
    if data is None:
        raise UnexpectedStatusError(res.status)
    return decode(model, data)


def decode_list(model: type[M], data: Any) -> list[M]:
    if data is None:
        return []
    if not isinstance(data, list):
        msg = f"Expected a list of {model.__name__}, got {type(data).__name__}"
        raise ScmDecodeError(msg)
    return [decode(model, item) for item in data]


def merge_events(native: list[str], mapped: list[str]) -> list[str]:
    """Union native and mapped event names, keeping first occurrence order."""
    return list(dict.fromkeys([*native, *mapped]))
