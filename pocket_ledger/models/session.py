"""
Session and Feature Gating Models

The signed-in user carries a single capability flag (is_pro).
Premium features check it once, at their boundary, and get back a
tagged result instead of raising.
"""

from enum import Enum
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class PremiumFeature(str, Enum):
    """Features that require a pro account."""
    EXPORT = "export"
    SYNC = "sync"


class User(BaseModel):
    """The (mock) signed-in user."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str
    email: str
    avatar: Optional[str] = None
    is_pro: bool = False


class Allowed(BaseModel):
    """The gated operation may run."""
    model_config = ConfigDict(frozen=True)

    allowed: Literal[True] = True
    feature: PremiumFeature


class Denied(BaseModel):
    """The gated operation was refused; the UI shows an upgrade prompt."""
    model_config = ConfigDict(frozen=True)

    allowed: Literal[False] = False
    feature: PremiumFeature
    reason: str = "upgrade required"


GateResult = Union[Allowed, Denied]
