from typing import Any, List, Mapping, Protocol

from admission.core.errors import ConfigurationError
from admission.core.rule_factory import RuleFactory
from admission.core.rules import AdmissionRule


class PolicyRepository(Protocol):
    def list_rules(self) -> List[AdmissionRule]:
        ...


class JsonPolicyRepository:
    """Admission policy of one course: {"rules": [rule config, ...]}."""

    def __init__(self, policy_json: Mapping[str, Any], factory: RuleFactory):
        self.policy_json = policy_json
        self.factory = factory

    def list_rules(self) -> List[AdmissionRule]:
        if not isinstance(self.policy_json, Mapping) or not isinstance(self.policy_json.get("rules"), list):
            raise ConfigurationError("Admission policy must contain a top-level 'rules' list.")

        rules: List[AdmissionRule] = []
        for idx, cfg in enumerate(self.policy_json["rules"]):
            try:
                rules.append(self.factory.from_json(cfg))
            except ConfigurationError as e:
                raise ConfigurationError(f"rules[{idx}]: {e.message}", {"index": idx, **e.details}) from e
        return rules
