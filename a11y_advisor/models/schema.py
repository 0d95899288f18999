from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class AuditRequest(BaseModel):
    urls: list[str]
    api_key: str = Field(alias="apiKey")


class Issue(BaseModel):
    serial_number: int
    id: Optional[str] = None
    title: str
    description: str
    snippets: list[str] = []


class AuditResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    url: str
    score: int = Field(ge=0, le=100)
    issues_text: str = Field(alias="issuesText")
    ai_fixes: str = Field(alias="aiFixes")


class AuditBatchResponse(BaseModel):
    results: list[AuditResult]
