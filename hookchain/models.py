"""Pydantic read models describing registered hooks."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class RegisteredCallback(BaseModel):
    model_config = ConfigDict(extra="forbid")

    key: str
    priority: int
    arity: int = Field(ge=0)
    name: str = ""


class HookSummary(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    callbacks: list[RegisteredCallback] = Field(default_factory=list)
    action_count: int = 0
    dispatching: bool = False

    @property
    def priorities(self) -> list[int]:
        seen: list[int] = []
        for callback in self.callbacks:
            if callback.priority not in seen:
                seen.append(callback.priority)
        return seen
