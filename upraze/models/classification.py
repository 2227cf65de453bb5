"""
Task classification contract.

Classifying free-text goals into a domain and task type is done by an
external service; the momentum core only depends on this interface.
"""

from dataclasses import dataclass
from typing import Protocol

from upraze.models.momentum import TaskType


@dataclass(frozen=True)
class TaskClassification:
    domain: str
    task_type: TaskType
    confidence: float  # 0..1


class TaskClassifier(Protocol):
    def classify(self, text: str) -> TaskClassification:
        ...
