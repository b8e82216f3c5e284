from __future__ import annotations

from typing import List, Tuple
from pydantic import BaseModel, Field


class Table(BaseModel):
    headers: List[str] = Field(default_factory=list)
    rows: List[List[str]] = Field(default_factory=list)


class CompareOptions(BaseModel):
    trim: bool
    case_insensitive: bool


class CompareInput(BaseModel):
    left_headers: List[str]
    left_rows: List[List[str]]
    right_headers: List[str]
    right_rows: List[List[str]]
    key: str = Field(examples=["id"])
    options: CompareOptions


class CompareOutput(BaseModel):
    result: Table
    left_only: Table
    right_only: Table
    duplicates: Table
    log: List[Tuple[str, str]] = Field(default_factory=list)


class SplitInput(BaseModel):
    headers: List[str]
    rows: List[List[str]]
    key: str = Field(examples=["region"])


class SplitPart(BaseModel):
    key_value: str
    table: Table


class SplitOutput(BaseModel):
    parts: List[SplitPart] = Field(default_factory=list)


class CompareOnKeysRequest(BaseModel):
    left: Table
    right: Table
    keys: List[str] = Field(min_length=1)
    options: CompareOptions
    sort_by_keys: bool = False


class SplitOnKeysRequest(BaseModel):
    table: Table
    keys: List[str] = Field(min_length=1)


class HealthResponse(BaseModel):
    ok: bool = True
