"""Agent (staff member) records and the request viewer."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from mission_control.core.config import settings


class AgentData(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Optional[str] = None
    first_name: str = Field(default="", alias="firstName")
    last_name: str = Field(default="", alias="lastName")
    role: str = ""

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class Viewer(BaseModel):
    """The agent making the current request."""

    id: str
    role: str = ""

    @property
    def is_admin(self) -> bool:
        return self.role == settings.admin_role


__all__ = ["AgentData", "Viewer"]
