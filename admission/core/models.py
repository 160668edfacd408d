from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


def _pick(data: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    for k in keys:
        if k in data:
            return data[k]
    return default


@dataclass(frozen=True)
class Assignment:
    id: str
    course_id: str
    type: str
    points: float

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "Assignment":
        return cls(
            id=str(data["id"]),
            course_id=str(_pick(data, "course_id", "courseId", default="")),
            type=str(data["type"]),
            points=float(_pick(data, "points", default=0)),
        )


@dataclass(frozen=True)
class Assessment:
    id: str
    assignment_id: str
    user_id: Optional[str] = None
    group_id: Optional[str] = None
    achieved_points: Optional[float] = None  # None = not graded yet
    is_draft: bool = False

    @property
    def participant_id(self) -> Optional[str]:
        return self.user_id if self.user_id is not None else self.group_id

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "Assessment":
        achieved = _pick(data, "achieved_points", "achievedPoints")
        user_id = _pick(data, "user_id", "userId")
        group_id = _pick(data, "group_id", "groupId")
        assignment_id = _pick(data, "assignment_id", "assignmentId")
        if assignment_id is None:
            raise KeyError("assignment_id")
        return cls(
            id=str(data["id"]),
            assignment_id=str(assignment_id),
            user_id=None if user_id is None else str(user_id),
            group_id=None if group_id is None else str(group_id),
            achieved_points=None if achieved is None else float(achieved),
            is_draft=bool(_pick(data, "is_draft", "isDraft", default=False)),
        )


@dataclass(frozen=True)
class RuleCheckResult:
    """
    Uniform outcome of a single rule check.

    The meaning of the numbers depends on the rule type:

    passed_x_percent_with_at_least_y_percent
        achieved_points  -> number of PASSED ASSIGNMENTS (not points)
        achieved_percent -> passed assignments relative to the required
                            count (100 = quota met exactly)
    required_percent_overall
        achieved_points  -> sum of achieved points
        achieved_percent -> achieved points relative to all reachable points

    rule_type / assignment_type identify the rule for reporting.
    """
    achieved_points: float
    achieved_percent: float
    passed: bool
    rule_type: str
    assignment_type: str


@dataclass
class AdmissionStatus:
    has_admission: bool
    results: List[RuleCheckResult] = field(default_factory=list)

    def failed_rules(self) -> List[RuleCheckResult]:
        return [r for r in self.results if not r.passed]
