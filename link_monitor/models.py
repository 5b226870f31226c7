from __future__ import annotations

from typing import Annotated, List, Optional
from pydantic import BaseModel, Field

Target = Annotated[str, Field(min_length=1)]


class Defaults(BaseModel):
    delay_s: Optional[float] = Field(default=None, ge=0)
    timeout_s: Optional[float] = Field(default=None, gt=0)
    connect_timeout_s: Optional[float] = Field(default=None, gt=0)


class Registry(BaseModel):
    defaults: Defaults = Defaults()
    targets: List[Target] = Field(default_factory=list)


class EffectiveDefaults(BaseModel):
    delay_s: float = Field(default=5.0, ge=0)
    timeout_s: Optional[float] = None
    connect_timeout_s: Optional[float] = None
