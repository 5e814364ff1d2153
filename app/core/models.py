# app/core/models.py
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import List, Literal, Optional


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FileChange(CamelModel):
    """One changed file of a pull request, as listed by the GitHub files API."""
    model_config = ConfigDict(frozen=True)

    filename: str = ""
    additions: int = Field(0, ge=0)
    deletions: int = Field(0, ge=0)
    changes: int = Field(0, ge=0)
    status: Optional[str] = None

    @field_validator("filename", mode="before")
    @classmethod
    def _filename_or_empty(cls, v):
        return "" if v is None else v

    @field_validator("additions", "deletions", "changes", mode="before")
    @classmethod
    def _zero_if_missing(cls, v):
        return 0 if v is None else v


class Metrics(CamelModel):
    total_files: int = 0
    additions: int = 0
    deletions: int = 0
    churn: int = 0


class Hotspot(CamelModel):
    dir: str
    churn: int


class RiskAssessment(CamelModel):
    level: Literal["low", "medium", "high"] = "low"
    score: int = Field(0, ge=0)
    reasons: List[str] = []


class Report(CamelModel):
    metrics: Metrics
    risk: RiskAssessment
    hotspots: List[Hotspot] = []
    biggest_files: List[FileChange] = []


class PRSummary(CamelModel):
    title: str = ""
    url: str = ""
    author: Optional[str] = None
    repo: Optional[str] = None
