"""
VIP Schemas

Pydantic models for VIP priority policies and the weight derived from them.
"""

from typing import Optional

from pydantic import BaseModel, Field, ConfigDict


class VipPolicy(BaseModel):
    """
    Standing priority override for one participant (investor, board member, ...).

    Owned by the policy store; read-only to the engine.
    """
    participant_hash: str = Field(..., description="Hashed participant identifier")
    display_name: str = Field(..., description="Name shown in explanations")
    priority_weight: float = Field(1.0, description="Priority multiplier", gt=0)

    model_config = ConfigDict(frozen=True, extra="allow")


class VipWeightResult(BaseModel):
    """Output of apply_vip_weight()."""
    weight: float = Field(..., description="VIP multiplier", ge=1.0)
    explanation: Optional[str] = Field(None, description="VIP note, None when no VIP applies")

    model_config = ConfigDict(frozen=True)
