"""
Base Schemas

Core Pydantic models and helpers shared by all scoring schemas.
"""

from typing import Any, Iterable, List, Optional, Type, TypeVar

from pydantic import BaseModel, Field, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from fairsched.core.errors import from_pydantic_error

ModelT = TypeVar("ModelT", bound=BaseModel)


class Proofs(BaseModel):
    """
    Audit information attached to a ranking run.

    - trace_id: Scheduling session id used as log trace id
    - algorithm: Algorithm identifier
    - candidate_count: Number of candidates scored
    - fairness_enabled / vip_enabled: Feature flags in effect
    - latency_ms: Scoring time
    """
    trace_id: Optional[str] = Field(None, description="Trace ID (scheduling session)")
    algorithm: Optional[str] = Field(None, description="Algorithm identifier")
    candidate_count: Optional[int] = Field(None, description="Candidates scored", ge=0)
    fairness_enabled: Optional[bool] = Field(None, description="Fairness adjustment applied")
    vip_enabled: Optional[bool] = Field(None, description="VIP weighting applied")
    latency_ms: Optional[float] = Field(None, description="Scoring time in milliseconds")

    model_config = ConfigDict(extra="allow")


def ensure_model(model_cls: Type[ModelT], value: Any) -> ModelT:
    """
    Return value as an instance of model_cls.

    Model instances pass through untouched; mappings are validated.
    Validation failures are raised as fairsched.core.errors.ValidationError.
    """
    if isinstance(value, model_cls):
        return value
    try:
        return model_cls.model_validate(value)
    except PydanticValidationError as e:
        raise from_pydantic_error(e, model_cls.__name__) from e


def ensure_models(model_cls: Type[ModelT], values: Optional[Iterable[Any]]) -> List[ModelT]:
    """Validate every item of values; None is treated as empty."""
    if values is None:
        return []
    return [ensure_model(model_cls, v) for v in values]
