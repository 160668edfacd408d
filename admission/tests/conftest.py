import pytest

from admission.core.models import Assessment, Assignment


@pytest.fixture
def make_assignments():
    def _make(points, type_="HOMEWORK", prefix="a"):
        return [Assignment(id=f"{prefix}{i}", course_id="java-wise1920", type=type_, points=p)
                for i, p in enumerate(points, start=1)]
    return _make


@pytest.fixture
def make_assessments():
    def _make(achieved, user_id="u1", prefix="a"):
        return [Assessment(id=f"{user_id}-{prefix}{i}", assignment_id=f"{prefix}{i}", user_id=user_id,
                           achieved_points=p)
                for i, p in enumerate(achieved, start=1)]
    return _make


@pytest.fixture
def passed_x_cfg():
    def _cfg(**overrides):
        cfg = {
            "type": "passed_x_percent_with_at_least_y_percent",
            "assignment_type": "HOMEWORK",
            "passed_assignments_percent": 50,
            "passed_assignments_rounding": {"type": "normal", "decimals": 0},
            "required_percent": 50,
            "achieved_percent_rounding": {"type": "normal", "decimals": 0},
        }
        cfg.update(overrides)
        return cfg
    return _cfg
