"""
Run Report

Per-step outcomes collected by one orchestrator run.
"""

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Dict, List, Optional


class StepStatus(str, Enum):
    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class StepOutcome:
    """Outcome of a single step."""
    name: str
    title: str
    status: StepStatus
    reason: str = ""
    duration: Optional[float] = None

    def to_dict(self) -> dict:
        data = asdict(self)
        data["status"] = self.status.value
        return data


@dataclass
class RunReport:
    """Ordered collection of step outcomes."""
    outcomes: List[StepOutcome] = field(default_factory=list)

    def add(self, outcome: StepOutcome):
        self.outcomes.append(outcome)

    def get(self, name: str) -> Optional[StepOutcome]:
        for outcome in self.outcomes:
            if outcome.name == name:
                return outcome
        return None

    def status_of(self, name: str) -> Optional[StepStatus]:
        outcome = self.get(name)
        return outcome.status if outcome else None

    def _with_status(self, status: StepStatus) -> List[StepOutcome]:
        return [o for o in self.outcomes if o.status == status]

    @property
    def succeeded(self) -> List[StepOutcome]:
        return self._with_status(StepStatus.SUCCESS)

    @property
    def skipped(self) -> List[StepOutcome]:
        return self._with_status(StepStatus.SKIPPED)

    @property
    def failed(self) -> List[StepOutcome]:
        return self._with_status(StepStatus.FAILED)

    @property
    def ok(self) -> bool:
        """True if no step failed."""
        return not self.failed

    def counts(self) -> Dict[str, int]:
        return {status.value: len(self._with_status(status)) for status in StepStatus}

    def to_dict(self) -> dict:
        return {
            "steps": [o.to_dict() for o in self.outcomes],
            "counts": self.counts(),
        }
