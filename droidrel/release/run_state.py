"""Progress record of a release run.

A failed run does not roll anything back, so the operator needs to know
which steps already happened (version bumped, release created, assets
uploaded) before retrying by hand.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class Step(StrEnum):
    SYNC = "git pull"
    PROJECT_BUILD = "project build"
    VERSION_BUMP = "version bump"
    VARIANT_BUILD = "variant build"
    GITHUB_RELEASE = "GitHub release"
    UPLOAD = "upload"
    CHANGELOG = "changelog"


@dataclass(frozen=True, slots=True)
class StepRecord:
    step: Step
    detail: str


def _empty_records() -> list[StepRecord]:
    return []


@dataclass
class RunState:
    completed: list[StepRecord] = field(default_factory=_empty_records)

    def done(self, step: Step, detail: str = "") -> None:
        self.completed.append(StepRecord(step=step, detail=detail))

    def has(self, step: Step) -> bool:
        return any(r.step == step for r in self.completed)

    def summary(self) -> list[str]:
        out: list[str] = []
        for record in self.completed:
            out.append(f"{record.step}: {record.detail}" if record.detail else str(record.step))
        return out
