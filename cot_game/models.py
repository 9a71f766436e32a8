"""Pydantic models for type safety."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Question(BaseModel):
    """Catalog entry. The statement and answer never leave the server."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int = Field(ge=1)
    level: int = Field(ge=1, le=5)
    tags: List[str] = []
    created_at: datetime

    @field_validator("tags", mode="before")
    @classmethod
    def null_tags_to_empty(cls, v):
        return [] if v is None else v


class SolveRequest(BaseModel):
    question_id: int
    prompt: str
    model: Optional[str] = None  # None = server default


class Evaluation(BaseModel):
    """Evaluation details. Only `mode` is known, the rest is passed through."""
    model_config = ConfigDict(frozen=True, extra="allow")

    mode: Optional[str] = None


class SolveResponse(BaseModel):
    model_config = ConfigDict(frozen=True, protected_namespaces=())

    question_id: int
    prompt: str
    model_vendor: str
    model_name: str
    ai_output: str
    answer_number: Optional[float] = None  # None when no number was extracted
    score: int = Field(ge=0, le=100)
    evaluation: Evaluation = Evaluation()
    elapsed_ms: int = Field(ge=0)
    saved: bool = False

    @field_validator("evaluation", mode="before")
    @classmethod
    def null_evaluation_to_empty(cls, v):
        return {} if v is None else v


class User(BaseModel):
    id: int
    username: str
    email: str


class LoginResponse(BaseModel):
    token: str
    user: User


class Tag(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    icon: str
    description: str
    prompt_tips: str
    color: str
