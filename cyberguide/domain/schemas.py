"""Pydantic schemas for recap requests, results and responses."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

Role = Literal["user", "assistant", "system"]
RecapErrorType = Literal["no_ai_provider", "dirty_format", "ai_timeout", "ai_error"]


class ConversationMessage(BaseModel):
    """Single chat turn supplied by the caller."""

    model_config = ConfigDict(frozen=True)

    role: Role
    content: str = ""


class Recap(BaseModel):
    """Bounded recap card: one summary, 1-2 blockers, 1-3 actions, one encouragement."""

    summary: str
    blockers: List[str]
    actions: List[str]
    encouragement: str


class RecapPrompt(BaseModel):
    """Prompt handed to the text generator."""

    model_config = ConfigDict(frozen=True)

    system_prompt: str
    conversation: str


class PipelineResult(BaseModel):
    """Outcome of one recap pipeline run, including diagnostics."""

    message: str
    recap: Recap
    used_fallback: bool
    error_type: Optional[RecapErrorType] = None
    latency_ms: int = 0


class RecapReq(BaseModel):
    """Request payload for recap generation."""

    messages: List[ConversationMessage] = Field(default_factory=list)
    mode: str = "generate_recap"


class RecapData(BaseModel):
    message: str
    recap: Recap


class ErrorPayload(BaseModel):
    code: str
    message: str


class RecapEnvelope(BaseModel):
    """Uniform response envelope shared by success and failure responses."""

    success: bool
    data: Optional[RecapData] = None
    error: Optional[ErrorPayload] = None
