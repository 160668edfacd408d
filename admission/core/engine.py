from typing import Dict, Iterable, List, Mapping, Optional, Sequence

import structlog

from admission.core.models import Assessment, AdmissionStatus, Assignment, RuleCheckResult
from admission.core.repositories import JsonPolicyRepository, PolicyRepository
from admission.core.rule_factory import RuleFactory
from admission.core.rules import AdmissionRule

logger = structlog.get_logger(__name__)


class AdmissionStatusEngine:
    """
    Checks participants against all rules of one course's admission policy.
    Rules are built once in __init__; a participant is admitted when every
    rule passes (a policy without rules admits everyone).
    """

    def __init__(self, repo: PolicyRepository):
        self.repo = repo
        self.rules: List[AdmissionRule] = repo.list_rules()

    @classmethod
    def from_policy(cls, policy_json: Mapping, assignments: Iterable[Assignment]) -> "AdmissionStatusEngine":
        return cls(JsonPolicyRepository(policy_json, RuleFactory(assignments)))

    def evaluate(self, assessments: Sequence[Assessment]) -> AdmissionStatus:
        results: List[RuleCheckResult] = [rule.check(assessments) for rule in self.rules]
        return AdmissionStatus(
            has_admission=all(r.passed for r in results),
            results=results,
        )

    def evaluate_many(
        self, assessments_by_participant: Mapping[str, Sequence[Assessment]]
    ) -> Dict[str, AdmissionStatus]:
        out: Dict[str, AdmissionStatus] = {}
        for participant_id, assessments in assessments_by_participant.items():
            out[participant_id] = self.evaluate(assessments)
        logger.info(
            "admission_status_computed",
            participants=len(out),
            admitted=sum(1 for s in out.values() if s.has_admission),
            rules=len(self.rules),
        )
        return out


def group_by_participant(
    assessments: Iterable[Assessment], participant_ids: Optional[Iterable[str]] = None
) -> Dict[str, List[Assessment]]:
    """
    Split a course's assessments per user/group, keeping input order.
    Ids listed in participant_ids get an entry even without any assessment.
    """
    grouped: Dict[str, List[Assessment]] = {pid: [] for pid in (participant_ids or [])}
    for a in assessments:
        pid = a.participant_id
        if pid is None:
            logger.warning("assessment_without_participant", assessment_id=a.id)
            continue
        grouped.setdefault(pid, []).append(a)
    return grouped
