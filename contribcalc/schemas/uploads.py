"""Schemas for workbook upload responses."""
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel


class UploadSummary(BaseModel):
    type: Literal["cities", "salaries"]
    count: int
    message: str
