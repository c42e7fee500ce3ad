"""Pydantic schemas for CSV bulk import requests and results."""
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ImportRowError(_CamelModel):
    row_number: int
    field: str | None = None  # None for row-level errors
    message: str


class ImportResult(_CamelModel):
    ok: bool
    total_rows: int
    success_rows: int
    failed_rows: int
    errors: list[ImportRowError] = []


class CsvEnvelope(BaseModel):
    """JSON alternative to posting the CSV as the raw request body."""

    csv: str = Field(..., description="CSV text, header line first")


class ForeignKeyOut(BaseModel):
    field: str
    table: str


class ImportTypeOut(BaseModel):
    entity_type: str
    fields: list[str]
    required_fields: list[str]
    foreign_keys: list[ForeignKeyOut]


class ImportTypeListResponse(BaseModel):
    items: list[ImportTypeOut]
    max_rows: int
    max_columns: int
