# admission/course/loaders.py
import json
import os
from typing import Any, Dict, List

from admission.core.models import Assessment, Assignment


def _read_json(path: str) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def load_policy(root: str) -> Dict[str, Any]:
    return _read_json(os.path.join(root, "policy.json"))


def load_assignments(root: str) -> List[Assignment]:
    return [Assignment.from_json(a) for a in _read_json(os.path.join(root, "assignments.json"))]


def load_assessments(root: str) -> List[Assessment]:
    return [Assessment.from_json(a) for a in _read_json(os.path.join(root, "assessments.json"))]
