from typing import Any, Callable, Dict, Iterable, Mapping, Type, TypeVar

from admission.core.config import RuleConfig, parse_rule_config
from admission.core.errors import ConfigurationError
from admission.core.models import Assignment
from admission.core.rules import (
    AdmissionRule,
    AssignmentTypeRule,
    PassedXPercentWithAtLeastYPercentRule,
    RequiredPercentOverallRule,
)

RULES: Dict[str, Type[AssignmentTypeRule]] = {}

R = TypeVar("R", bound=Type[AssignmentTypeRule])


def register_rule(rule_type: str) -> Callable[[R], R]:
    """Register the evaluator class for a rule type (see config.register_config)."""
    def deco(cls: R) -> R:
        if rule_type in RULES:
            raise ValueError(f"Duplicate rule type: {rule_type}")
        RULES[rule_type] = cls
        return cls
    return deco


register_rule("passed_x_percent_with_at_least_y_percent")(PassedXPercentWithAtLeastYPercentRule)
register_rule("required_percent_overall")(RequiredPercentOverallRule)


def list_rule_types() -> list[str]:
    return sorted(RULES)


class RuleFactory:
    """
    Build rules for one course from JSON rule configs.
    The repository calls: factory.from_json(rule_cfg)
    """

    def __init__(self, assignments: Iterable[Assignment]) -> None:
        self.assignments = tuple(assignments)

    def from_json(self, rule_cfg: Mapping[str, Any]) -> AdmissionRule:
        return self.from_config(parse_rule_config(rule_cfg))

    def from_config(self, config: RuleConfig) -> AdmissionRule:
        cls = RULES.get(config.type)
        if cls is None:
            raise ConfigurationError(f"No evaluator registered for rule type {config.type!r}")
        return cls(config, self.assignments)
