"""
JSON string in, JSON string out.

For hosts that hand over a serialized request instead of calling the
typed functions directly.
"""

from __future__ import annotations

from typing import Type, TypeVar

from pydantic import BaseModel, ValidationError

from .compare import compare
from .errors import MalformedInput
from .models import CompareInput, SplitInput
from .split import split

M = TypeVar("M", bound=BaseModel)


def decode_request(text: str, model: Type[M]) -> M:
    try:
        return model.model_validate_json(text)
    except ValidationError as exc:
        raise MalformedInput(
            f"Cannot decode {model.__name__}: {exc.error_count()} error(s)"
        ) from exc


def compare_json(text: str) -> str:
    return compare(decode_request(text, CompareInput)).model_dump_json()


def split_json(text: str) -> str:
    return split(decode_request(text, SplitInput)).model_dump_json()
