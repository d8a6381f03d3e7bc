"""Report options shared by the generator, the templates and the HTTP layer."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class OutputFormat(str, Enum):
    SOAP = "soap"
    NARRATIVE = "narrative"
    STRUCTURED = "structured"

    @classmethod
    def resolve(cls, value: "str | OutputFormat | None") -> "OutputFormat":
        """Map a requested format to a known one; unknown or absent means SOAP."""
        if isinstance(value, OutputFormat):
            return value
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.SOAP


class GenerationOptions(BaseModel):
    """Report options. Accepts both snake_case and the upload form's camelCase names."""

    model_config = ConfigDict(populate_by_name=True)

    output_format: str = Field("soap", alias="outputFormat")
    detail_level: str = Field("standard", alias="detailLevel")
    include_icd10: bool = Field(False, alias="includeICD10")
    include_medications: bool = Field(False, alias="includeMedications")

    @property
    def resolved_format(self) -> OutputFormat:
        return OutputFormat.resolve(self.output_format)
