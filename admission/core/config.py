"""
Rule configuration models.

Each rule type has its own pydantic model; the `type` field selects it.
Raw configs (parsed JSON) go through parse_rule_config(), which turns every
validation problem into a ConfigurationError.
"""
from decimal import Decimal
from typing import Any, Callable, Dict, Literal, Mapping, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from admission.core.errors import ConfigurationError
from admission.core.rounding import NO_ROUNDING, ROUNDING_TYPES, Rounder, rounding_method

Percent = float

RULE_CONFIGS: Dict[str, Type["RuleConfig"]] = {}

C = TypeVar("C", bound=Type["RuleConfig"])


def register_config(rule_type: str) -> Callable[[C], C]:
    def deco(cls: C) -> C:
        if rule_type in RULE_CONFIGS:
            raise ValueError(f"Duplicate rule config type: {rule_type}")
        RULE_CONFIGS[rule_type] = cls
        return cls
    return deco


class RoundingPolicy(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    type: str
    decimals: int = Field(default=0, ge=0)

    @field_validator("type")
    @classmethod
    def _known_type(cls, v: str) -> str:
        v = (v or "").lower()
        if v != NO_ROUNDING and v not in ROUNDING_TYPES:
            raise ValueError(f"unknown rounding type {v!r}")
        return v

    def rounder(self) -> Rounder:
        return rounding_method(self.type, self.decimals)


class RuleConfig(BaseModel):
    """Fields shared by every rule type."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    type: str
    assignment_type: str = Field(min_length=1)
    # What to do when the course has no assignment of assignment_type:
    # "error" rejects the rule, "pass" lets every participant pass it.
    when_no_assignments: Literal["error", "pass"] = "error"


@register_config("passed_x_percent_with_at_least_y_percent")
class PassedXPercentWithAtLeastYPercentConfig(RuleConfig):
    type: Literal["passed_x_percent_with_at_least_y_percent"] = "passed_x_percent_with_at_least_y_percent"
    passed_assignments_percent: Percent = Field(ge=0, le=100)
    passed_assignments_rounding: RoundingPolicy
    required_percent: Percent = Field(ge=0, le=100)
    achieved_percent_rounding: RoundingPolicy

    @property
    def passed_assignments_fraction(self) -> float:
        return float(Decimal(repr(self.passed_assignments_percent)) / 100)


@register_config("required_percent_overall")
class RequiredPercentOverallConfig(RuleConfig):
    type: Literal["required_percent_overall"] = "required_percent_overall"
    required_percent: Percent = Field(ge=0, le=100)
    achieved_percent_rounding: RoundingPolicy


def _describe(err: ValidationError) -> str:
    parts = []
    for e in err.errors():
        loc = ".".join(str(x) for x in e["loc"]) or "<root>"
        parts.append(f"{loc}: {e['msg']}")
    return "; ".join(parts)


def parse_rule_config(raw: Mapping[str, Any]) -> RuleConfig:
    if isinstance(raw, RuleConfig):
        return raw
    if not isinstance(raw, Mapping):
        raise ConfigurationError(f"Rule config must be a mapping, got {type(raw).__name__}")

    if not isinstance(raw.get("type"), str):
        raise ConfigurationError(
            f"Rule type must be a string, got {raw.get('type')!r}",
            {"allowed": sorted(RULE_CONFIGS)},
        )
    rtype = raw["type"].lower()
    cls = RULE_CONFIGS.get(rtype)
    if cls is None:
        raise ConfigurationError(
            f"Unknown rule type: {raw.get('type')!r}",
            {"allowed": sorted(RULE_CONFIGS)},
        )
    try:
        return cls.model_validate({**raw, "type": rtype})
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid {rtype} rule: {_describe(e)}",
            {"errors": e.errors(include_url=False)},
        ) from e
