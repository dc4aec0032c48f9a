"""Printer label schemas."""

from pydantic import BaseModel


class LabelFormat(BaseModel):
    """Two text lines printed on a cup label."""

    line1: str
    line2: str
