from __future__ import annotations
from typing import List
from pydantic import BaseModel, Field

class TeamMemberIn(BaseModel):
    name: str = Field(min_length=1, max_length=255)

class TeamMemberOut(TeamMemberIn):
    id: str
    created_at: str | None = None

class BulkDeleteIn(BaseModel):
    ids: List[str] = Field(min_length=1)
