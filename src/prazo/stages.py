"""Typed stage kinds and human-readable status labels.

Stages are user-editable records, so their identity is resolved once per
stage into a ``StageKind`` (by fixed id, then title keywords)
instead of substring-matching stage ids on every render.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum

from .models import Project, ProjectStatus, Stage


class StageKind(str, Enum):
    """The kinds of stage a project can be in."""

    ONBOARDING = "onboarding"
    DEVELOPMENT = "development"
    REVIEW = "review"
    ADJUSTMENTS = "adjustments"
    MAINTENANCE = "maintenance"
    COMPLETED = "completed"
    FINISHED = "finished"


STAGE_LABELS: dict[StageKind, str] = {
    StageKind.ONBOARDING: "On boarding",
    StageKind.DEVELOPMENT: "Em Desenvolvimento",
    StageKind.REVIEW: "Em Revisão",
    StageKind.ADJUSTMENTS: "Ajustes",
    StageKind.MAINTENANCE: "Manutenção",
    StageKind.COMPLETED: "Concluído",
    StageKind.FINISHED: "Finalizado",
}

# Built-in stage ids shipped with every workspace
FIXED_STAGE_IDS: dict[str, StageKind] = {
    "onboarding": StageKind.ONBOARDING,
    "development": StageKind.DEVELOPMENT,
    "review": StageKind.REVIEW,
    "adjustments": StageKind.ADJUSTMENTS,
    "completed": StageKind.COMPLETED,
    "adjustments-recurring": StageKind.ADJUSTMENTS,
    "maintenance-recurring": StageKind.MAINTENANCE,
    "finished-recurring": StageKind.FINISHED,
}

# Checked in order; adjustments before review so "Ajustes" titles never read as review
TITLE_KEYWORDS: tuple[tuple[StageKind, tuple[str, ...]], ...] = (
    (StageKind.ONBOARDING, ("onboarding",)),
    (StageKind.DEVELOPMENT, ("desenvolvimento", "development")),
    (StageKind.ADJUSTMENTS, ("ajuste", "adjustment")),
    (StageKind.MAINTENANCE, ("manutenção", "manutencao", "maintenance")),
    (StageKind.REVIEW, ("revisão", "revisao", "review")),
    (StageKind.COMPLETED, ("concluído", "concluido", "completed")),
    (StageKind.FINISHED, ("finalizado", "finished")),
)

STATUS_KINDS: dict[ProjectStatus, StageKind] = {
    ProjectStatus.LEAD: StageKind.ONBOARDING,
    ProjectStatus.ACTIVE: StageKind.DEVELOPMENT,
    ProjectStatus.REVIEW: StageKind.REVIEW,
    ProjectStatus.COMPLETED: StageKind.COMPLETED,
    ProjectStatus.FINISHED: StageKind.FINISHED,
}


def kind_from_text(text: str) -> StageKind | None:
    """Match a stage id or title against the known keywords."""
    normalized = "".join(text.lower().split())
    if normalized in FIXED_STAGE_IDS:
        return FIXED_STAGE_IDS[normalized]
    for kind, keywords in TITLE_KEYWORDS:
        if any(keyword in normalized for keyword in keywords):
            return kind
    return None


def resolve_stage_kind(stage: Stage) -> StageKind | None:
    """Resolve a stage to its kind by fixed id, then title keywords.

    Custom stages whose title names no known kind resolve to None so their own
    title is used as the label.
    """
    if stage.id in FIXED_STAGE_IDS:
        return FIXED_STAGE_IDS[stage.id]
    return kind_from_text(stage.title)


class StageIndex:
    """Stage kinds resolved once per stage list, looked up per project."""

    def __init__(self, stages: Sequence[Stage]) -> None:
        self._stages = sorted(stages, key=lambda s: s.order)
        self._by_id = {stage.id: stage for stage in self._stages}
        self._kinds = {stage.id: resolve_stage_kind(stage) for stage in self._stages}

    def kind_of(self, stage_id: str) -> StageKind | None:
        """Kind of a stage id, including built-in ids not present in the list."""
        if stage_id in self._kinds:
            return self._kinds[stage_id]
        return kind_from_text(stage_id)

    def label_for(self, project: Project) -> str:
        """Human-readable label for the stage or status a project is in.

        Prefers the kind of the project's own stage, then that stage's title,
        then the title of the first stage (by order) sharing the project's
        status, then the status default.
        """
        if project.stage_id:
            kind = self.kind_of(project.stage_id)
            if kind is not None:
                return STAGE_LABELS[kind]
            own_stage = self._by_id.get(project.stage_id)
            if own_stage is not None:
                return own_stage.title

        for stage in self._stages:
            if stage.status == project.status:
                return stage.title

        return STAGE_LABELS[STATUS_KINDS[project.status]]
