import warnings
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Protocol, Sequence, Tuple

import structlog

from admission.core.config import (
    PassedXPercentWithAtLeastYPercentConfig,
    RequiredPercentOverallConfig,
    RuleConfig,
)
from admission.core.errors import ConfigurationError, MissingDataWarning
from admission.core.models import Assessment, Assignment, RuleCheckResult
from admission.core.rounding import count_from_percent, percent_of

logger = structlog.get_logger(__name__)


class AdmissionRule(Protocol):
    def check(self, assessments: Sequence[Assessment]) -> RuleCheckResult: ...


class AssignmentTypeRule:
    """
    Base for rules that look at the assignments of one assignment type.

    Built once per (config, course assignments) and reused for every
    participant; nothing here is modified after __init__.
    """

    def __init__(self, config: RuleConfig, assignments: Iterable[Assignment]):
        assignments = list(assignments)
        self.config = config
        self.rule_type = config.type
        self.assignment_type = config.assignment_type

        self._known_ids = frozenset(a.id for a in assignments)
        relevant = tuple(a for a in assignments if a.type == config.assignment_type)

        if not relevant and config.when_no_assignments == "error":
            raise ConfigurationError(
                f"No assignments of type {config.assignment_type!r} in course",
                {"rule": config.type, "assignment_type": config.assignment_type},
            )
        zero = [a.id for a in relevant if a.points <= 0]
        if zero:
            raise ConfigurationError(
                f"Assignments without points cannot be evaluated in percent: {zero}",
                {"rule": config.type, "assignments": zero},
            )

        self.relevant_assignments: Tuple[Assignment, ...] = relevant
        # [assignment id -> max points]
        self.required_points: Mapping[str, float] = MappingProxyType(
            {a.id: a.points for a in relevant}
        )

    def _relevant_assessments(self, assessments: Sequence[Assessment]) -> List[Assessment]:
        out: List[Assessment] = []
        for a in assessments:
            if a.is_draft:
                continue
            if a.assignment_id not in self._known_ids:
                logger.warning(
                    "assessment_for_unknown_assignment",
                    assessment_id=a.id,
                    assignment_id=a.assignment_id,
                    rule=self.rule_type,
                )
                warnings.warn(
                    f"Assessment {a.id!r} references unknown assignment {a.assignment_id!r}; excluded",
                    MissingDataWarning,
                    stacklevel=3,
                )
                continue
            if a.assignment_id in self.required_points:
                out.append(a)
        return out

    @staticmethod
    def _achieved_by_assignment(assessments: Sequence[Assessment]) -> Dict[str, float]:
        # Later assessments for the same assignment replace earlier ones.
        achieved: Dict[str, float] = {}
        for a in assessments:
            achieved[a.assignment_id] = a.achieved_points or 0.0
        return achieved

    def _result(self, achieved_points: float, achieved_percent: float, passed: bool) -> RuleCheckResult:
        return RuleCheckResult(
            achieved_points=achieved_points,
            achieved_percent=achieved_percent,
            passed=passed,
            rule_type=self.rule_type,
            assignment_type=self.assignment_type,
        )


class PassedXPercentWithAtLeastYPercentRule(AssignmentTypeRule):
    """
    Passed if the participant reached at least `required_percent` on at least
    `passed_assignments_percent` of the relevant assignments.
    """

    def __init__(self, config: PassedXPercentWithAtLeastYPercentConfig, assignments: Iterable[Assignment]):
        self._round_required_assignments = config.passed_assignments_rounding.rounder()
        self._round_achieved_percent = config.achieved_percent_rounding.rounder()
        super().__init__(config, assignments)

        self.required_percent = config.required_percent
        self.required_pass_count = self._round_required_assignments(
            count_from_percent(len(self.relevant_assignments), config.passed_assignments_fraction)
        )
        logger.debug(
            "rule_built",
            rule=self.rule_type,
            assignment_type=self.assignment_type,
            relevant=len(self.relevant_assignments),
            required_pass_count=self.required_pass_count,
        )

    def check(self, assessments: Sequence[Assessment]) -> RuleCheckResult:
        achieved = self._achieved_by_assignment(self._relevant_assessments(assessments))
        passed_count = self.count_passed_assignments(achieved)

        if self.required_pass_count == 0:
            achieved_percent = 100.0
        else:
            achieved_percent = percent_of(passed_count, self.required_pass_count)

        return self._result(
            achieved_points=passed_count,
            achieved_percent=achieved_percent,
            passed=passed_count >= self.required_pass_count,
        )

    def count_passed_assignments(self, achieved: Mapping[str, float]) -> int:
        return sum(1 for aid in self.required_points if self.passed_assignment(achieved, aid))

    def passed_assignment(self, achieved: Mapping[str, float], assignment_id: str) -> bool:
        pct = percent_of(achieved.get(assignment_id, 0.0), self.required_points[assignment_id])
        return self._round_achieved_percent(pct) >= self.required_percent


class RequiredPercentOverallRule(AssignmentTypeRule):
    """Passed if the summed points reach `required_percent` of all reachable points."""

    def __init__(self, config: RequiredPercentOverallConfig, assignments: Iterable[Assignment]):
        self._round_achieved_percent = config.achieved_percent_rounding.rounder()
        super().__init__(config, assignments)

        self.required_percent = config.required_percent
        self.total_points = sum(self.required_points.values())
        logger.debug(
            "rule_built",
            rule=self.rule_type,
            assignment_type=self.assignment_type,
            relevant=len(self.relevant_assignments),
            total_points=self.total_points,
        )

    def check(self, assessments: Sequence[Assessment]) -> RuleCheckResult:
        achieved = self._achieved_by_assignment(self._relevant_assessments(assessments))
        achieved_points = sum(achieved.values())

        if self.total_points == 0:
            achieved_percent = 100.0
        else:
            achieved_percent = self._round_achieved_percent(percent_of(achieved_points, self.total_points))

        return self._result(
            achieved_points=achieved_points,
            achieved_percent=achieved_percent,
            passed=achieved_percent >= self.required_percent,
        )
