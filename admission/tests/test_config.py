import pytest
from pydantic import ValidationError

from admission.core.config import (
    PassedXPercentWithAtLeastYPercentConfig,
    RequiredPercentOverallConfig,
    RoundingPolicy,
    parse_rule_config,
)
from admission.core.errors import ConfigurationError


def test_parse_passed_x_config(passed_x_cfg):
    cfg = parse_rule_config(passed_x_cfg(passed_assignments_percent=75))
    assert isinstance(cfg, PassedXPercentWithAtLeastYPercentConfig)
    assert cfg.passed_assignments_fraction == 0.75
    assert cfg.passed_assignments_rounding == RoundingPolicy(type="normal", decimals=0)
    assert cfg.when_no_assignments == "error"


def test_rule_type_is_case_insensitive(passed_x_cfg):
    cfg = parse_rule_config(passed_x_cfg(type="PASSED_X_PERCENT_WITH_AT_LEAST_Y_PERCENT"))
    assert cfg.type == "passed_x_percent_with_at_least_y_percent"


def test_parse_required_percent_overall():
    cfg = parse_rule_config({
        "type": "required_percent_overall",
        "assignment_type": "TESTAT",
        "required_percent": 50,
        "achieved_percent_rounding": {"type": "down", "decimals": 1},
    })
    assert isinstance(cfg, RequiredPercentOverallConfig)
    assert cfg.achieved_percent_rounding.decimals == 1


def test_already_parsed_config_is_returned(passed_x_cfg):
    cfg = parse_rule_config(passed_x_cfg())
    assert parse_rule_config(cfg) is cfg


@pytest.mark.parametrize("field, value", [
    ("passed_assignments_percent", 101),
    ("passed_assignments_percent", -1),
    ("required_percent", 150),
])
def test_percent_out_of_range(passed_x_cfg, field, value):
    with pytest.raises(ConfigurationError) as exc:
        parse_rule_config(passed_x_cfg(**{field: value}))
    assert field in exc.value.message


def test_missing_rounding_policy(passed_x_cfg):
    raw = passed_x_cfg()
    del raw["achieved_percent_rounding"]
    with pytest.raises(ConfigurationError):
        parse_rule_config(raw)


def test_unknown_rounding_type(passed_x_cfg):
    with pytest.raises(ConfigurationError):
        parse_rule_config(passed_x_cfg(passed_assignments_rounding={"type": "bankers", "decimals": 0}))


def test_negative_rounding_decimals(passed_x_cfg):
    with pytest.raises(ConfigurationError):
        parse_rule_config(passed_x_cfg(achieved_percent_rounding={"type": "normal", "decimals": -2}))


def test_unknown_rule_type():
    with pytest.raises(ConfigurationError) as exc:
        parse_rule_config({"type": "attended_x_lectures", "assignment_type": "HOMEWORK"})
    assert "passed_x_percent_with_at_least_y_percent" in exc.value.details["allowed"]


def test_unknown_field_is_rejected(passed_x_cfg):
    with pytest.raises(ConfigurationError):
        parse_rule_config(passed_x_cfg(passed_percent=50))


def test_invalid_when_no_assignments(passed_x_cfg):
    with pytest.raises(ConfigurationError):
        parse_rule_config(passed_x_cfg(when_no_assignments="ignore"))


def test_config_must_be_mapping():
    with pytest.raises(ConfigurationError):
        parse_rule_config(["passed_x_percent_with_at_least_y_percent"])


def test_config_is_frozen(passed_x_cfg):
    cfg = parse_rule_config(passed_x_cfg())
    with pytest.raises(ValidationError):
        cfg.required_percent = 10


@pytest.mark.parametrize("rtype", [5, ["x"], None])
def test_rule_type_must_be_a_string(passed_x_cfg, rtype):
    with pytest.raises(ConfigurationError):
        parse_rule_config(passed_x_cfg(type=rtype))


def test_passed_assignments_fraction_is_exact(passed_x_cfg):
    assert parse_rule_config(passed_x_cfg(passed_assignments_percent=7)).passed_assignments_fraction == 0.07
