# app/api/v1/schemas.py
from pydantic import BaseModel

from app.core.models import CamelModel, PRSummary, Report

class AnalyzePRRequest(CamelModel):
    pr_url: str

class AnalyzePRResponse(CamelModel):
    pr: PRSummary
    report: Report
    markdown: str

class ErrorResponse(BaseModel):
    error: str
