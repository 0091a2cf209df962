## Plan generation engine
#
# Pure functions that scale a plan template to a user's expertise. Nothing here
# touches the database; plans.service persists what these return.
from datetime import datetime, timedelta
from typing import Any, Iterable, List, Literal, Optional

from pydantic import BaseModel

from goalpath.db.enums import LEVEL_ORDER, ExpertiseLevel, level_rank

DEFAULT_TOTAL_HOURS = 80
DEFAULT_SUCCESS_RATE = 0.7

LEVEL_HOUR_MULTIPLIER = {
    ExpertiseLevel.BEGINNER: 1.5,
    ExpertiseLevel.NOVICE: 1.3,
    ExpertiseLevel.INTERMEDIATE: 1.0,
    ExpertiseLevel.ADVANCED: 0.9,
    ExpertiseLevel.EXPERT: 0.8,
}

LEVEL_SUCCESS_FACTOR = {
    ExpertiseLevel.BEGINNER: 0.8,
    ExpertiseLevel.NOVICE: 0.9,
    ExpertiseLevel.INTERMEDIATE: 1.0,
    ExpertiseLevel.ADVANCED: 1.1,
    ExpertiseLevel.EXPERT: 1.2,
}

PHASE_TYPES = ["foundation", "practice", "implementation", "optimization"]

WEAK_LEVELS = (ExpertiseLevel.BEGINNER, ExpertiseLevel.NOVICE)


class PlanAdaptation(BaseModel):
    reason: str
    original_value: Any = None
    adapted_value: Any = None
    impact: Literal["low", "medium", "high"]


class RiskFactor(BaseModel):
    type: str
    description: str
    probability: float
    impact: float
    mitigation: str


class PlanItemDraft(BaseModel):
    type: Literal["sprint", "issue"]
    name: str
    description: Optional[str] = None
    phase: int
    order: int
    estimated_hours: float
    difficulty: ExpertiseLevel
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    metadata: dict = {}
    dependencies: List[str] = []
    # index of the sprint draft this issue belongs to
    parent_index: Optional[int] = None


def _weak_domains(domain_scores: Iterable[Any]) -> list:
    return [ds.domain for ds in domain_scores if ExpertiseLevel(ds.level) in WEAK_LEVELS]


def calculate_total_hours(activities: list | None, level: ExpertiseLevel) -> int:
    if not activities:
        return DEFAULT_TOTAL_HOURS
    base = sum(a.estimated_hours for a in activities)
    return round(base * LEVEL_HOUR_MULTIPLIER[ExpertiseLevel(level)])


def calculate_phase_hours(activities: Iterable[Any], phase: int, level: ExpertiseLevel) -> int:
    base = sum(a.estimated_hours for a in activities if a.phase == phase)
    return round(base * LEVEL_HOUR_MULTIPLIER[ExpertiseLevel(level)])


def calculate_adaptations(template, level: ExpertiseLevel, domain_scores: Iterable[Any], timebox_days: int) -> list[PlanAdaptation]:
    adaptations = []
    level = ExpertiseLevel(level)

    if timebox_days != template.typical_duration:
        adaptations.append(
            PlanAdaptation(
                reason="Timeline adjustment",
                original_value=template.typical_duration,
                adapted_value=timebox_days,
                impact="high" if abs(timebox_days - template.typical_duration) > 7 else "medium",
            )
        )

    if level != ExpertiseLevel(template.min_expertise):
        adaptations.append(
            PlanAdaptation(
                reason="User expertise level",
                original_value=ExpertiseLevel(template.min_expertise).value,
                adapted_value=level.value,
                impact="high",
            )
        )

    weak = _weak_domains(domain_scores)
    if weak:
        adaptations.append(
            PlanAdaptation(
                reason="Additional support for weak domains",
                original_value="Standard activities",
                adapted_value=f"Added {len(weak)} supplementary learning activities",
                impact="medium",
            )
        )

    return adaptations


def identify_risk_factors(template, level: ExpertiseLevel, confidence: float | None, timebox_days: int) -> list[RiskFactor]:
    risks = []

    if timebox_days < template.typical_duration * 0.8:
        risks.append(
            RiskFactor(
                type="time_constraint",
                description="Compressed timeline may impact quality",
                probability=0.7,
                impact=0.6,
                mitigation="Focus on core activities and skip optional ones",
            )
        )

    if ExpertiseLevel(level) == ExpertiseLevel.BEGINNER:
        risks.append(
            RiskFactor(
                type="expertise_gap",
                description="Steep learning curve for beginner",
                probability=0.6,
                impact=0.7,
                mitigation="Additional learning resources and extended practice time",
            )
        )

    if confidence is not None and confidence < 0.5:
        risks.append(
            RiskFactor(
                type="low_confidence",
                description="Low self-confidence may affect progress",
                probability=0.5,
                impact=0.5,
                mitigation="Start with easy wins and gradual difficulty increase",
            )
        )

    return risks


def calculate_success_probability(
    template, level: ExpertiseLevel, confidence: float | None, risks: Iterable[RiskFactor]
) -> float:
    probability = template.success_rate or DEFAULT_SUCCESS_RATE
    probability *= LEVEL_SUCCESS_FACTOR[ExpertiseLevel(level)]

    for risk in risks:
        probability *= 1 - risk.probability * risk.impact * 0.2

    if confidence is not None:
        probability *= 0.8 + confidence * 0.4

    return min(max(probability, 0.1), 0.95)


def phase_difficulty(phase_index: int, level: ExpertiseLevel) -> ExpertiseLevel:
    """First phase matches the user; each later phase steps up one level."""
    level = ExpertiseLevel(level)
    if phase_index == 0:
        return level
    target = min(level_rank(level) + phase_index, len(LEVEL_ORDER) - 1)
    return LEVEL_ORDER[target]


def phase_type(phase_index: int) -> str:
    return PHASE_TYPES[min(phase_index, len(PHASE_TYPES) - 1)]


def phase_focus_areas(domain_scores: Iterable[Any]) -> list[str]:
    return [getattr(d, "value", d) for d in _weak_domains(domain_scores)[:3]]


def adjust_activity_for_user(activity, level: ExpertiseLevel, domain_scores: Iterable[Any]) -> dict:
    level = ExpertiseLevel(level)
    hours = activity.estimated_hours
    adjustments = []

    if level == ExpertiseLevel.BEGINNER:
        hours *= 1.5
        adjustments.append("Extended time for beginners")
    elif level == ExpertiseLevel.EXPERT:
        hours *= 0.8
        adjustments.append("Reduced time for experts")

    domain = (activity.meta or {}).get("domain")
    if domain:
        for ds in domain_scores:
            if getattr(ds.domain, "value", ds.domain) == domain and ExpertiseLevel(ds.level) == ExpertiseLevel.BEGINNER:
                hours *= 1.3
                adjustments.append("Additional time for weak domain")
                break

    return {"estimated_hours": round(hours), "adjustments": adjustments}


def build_plan_items(
    template,
    activities: list,
    level: ExpertiseLevel,
    domain_scores: list,
    timebox_days: int,
    start: datetime,
) -> list[PlanItemDraft]:
    phases = (template.structure or {}).get("phases") or []
    if not phases:
        return []

    level = ExpertiseLevel(level)
    days_per_phase = timebox_days // len(phases)
    focus = phase_focus_areas(domain_scores)
    items: list[PlanItemDraft] = []

    for index, phase in enumerate(phases):
        number = index + 1
        phase_start = start + timedelta(days=index * days_per_phase)

        items.append(
            PlanItemDraft(
                type="sprint",
                name=phase.get("name") or f"Phase {number}",
                description=phase.get("focus"),
                phase=number,
                order=1,
                estimated_hours=calculate_phase_hours(activities, number, level),
                difficulty=phase_difficulty(index, level),
                start_date=phase_start,
                end_date=phase_start + timedelta(days=days_per_phase),
                metadata={"phase_type": phase_type(index), "focus_areas": focus},
            )
        )
        sprint_index = len(items) - 1

        for activity in (a for a in activities if a.phase == number):
            adjusted = adjust_activity_for_user(activity, level, domain_scores)
            items.append(
                PlanItemDraft(
                    type="issue",
                    name=activity.name,
                    description=activity.description,
                    phase=number,
                    order=activity.order,
                    estimated_hours=adjusted["estimated_hours"],
                    difficulty=activity.difficulty,
                    metadata={
                        "activity_type": activity.type,
                        "resources": activity.resources,
                        "success_criteria": activity.success_criteria,
                        "adjustments": adjusted["adjustments"],
                    },
                    dependencies=list(activity.dependencies or []),
                    parent_index=sprint_index,
                )
            )

    return items


def plan_description(template_name: str, sprint_count: int, level: ExpertiseLevel) -> str:
    return (
        f"This personalized plan is adapted for your {ExpertiseLevel(level).value.lower()} expertise level. "
        f"Based on your assessment, we've tailored the {template_name} to focus on your specific needs and goals. "
        f"The plan includes {sprint_count} phases designed to progressively build your skills."
    )


# Fallback generation, used when the requested template does not exist

BASE_PHASES = [
    {"name": "Foundation", "description": "Build core understanding and fundamental concepts"},
    {"name": "Practice", "description": "Apply knowledge through guided exercises and examples"},
    {"name": "Application", "description": "Work on real-world scenarios and projects"},
]


def fallback_phases(level: ExpertiseLevel) -> list[dict]:
    level = ExpertiseLevel(level)
    if level == ExpertiseLevel.BEGINNER:
        return [
            {"name": "Prerequisites", "description": "Review essential background knowledge and setup"},
            *BASE_PHASES,
            {"name": "Review", "description": "Consolidate learning and address knowledge gaps"},
        ]
    if level == ExpertiseLevel.ADVANCED:
        return [
            *BASE_PHASES,
            {"name": "Advanced Topics", "description": "Explore complex scenarios and edge cases"},
            {"name": "Mastery", "description": "Achieve expert-level proficiency and teach others"},
        ]
    return list(BASE_PHASES)


def fallback_estimated_hours(level: ExpertiseLevel, days: int) -> int:
    level = ExpertiseLevel(level)
    if level == ExpertiseLevel.BEGINNER:
        per_day = 2
    elif level == ExpertiseLevel.INTERMEDIATE:
        per_day = 3
    else:
        per_day = 4
    return min(per_day * days, days * 8)


def basic_risk_factors(level: ExpertiseLevel) -> dict:
    beginner = ExpertiseLevel(level) == ExpertiseLevel.BEGINNER
    return {
        "time_constraints": "high" if beginner else "medium",
        "complexity_risk": "high" if beginner else "low",
        "prerequisite_gaps": "medium" if beginner else "low",
    }


def basic_adaptations(level: ExpertiseLevel, constraints: Any) -> dict:
    beginner = ExpertiseLevel(level) == ExpertiseLevel.BEGINNER
    return {
        "pacing": "slower" if beginner else "normal",
        "support_level": "high" if beginner else "medium",
        "practice_emphasis": "high" if beginner else "normal",
        "constraints": constraints,
    }


def build_fallback_items(level: ExpertiseLevel, timebox_days: int) -> list[PlanItemDraft]:
    level = ExpertiseLevel(level)
    phases = fallback_phases(level)
    per_phase = max(2, timebox_days // len(phases) // 7)
    hours = 8 if level == ExpertiseLevel.BEGINNER else 6
    items: list[PlanItemDraft] = []

    for index, phase in enumerate(phases):
        sprint_index = len(items)
        for n in range(per_phase):
            is_sprint = n == 0
            items.append(
                PlanItemDraft(
                    type="sprint" if is_sprint else "issue",
                    name=f"{phase['name']} - {'Sprint' if is_sprint else f'Task {n}'}",
                    description=phase["description"],
                    phase=index + 1,
                    order=n,
                    estimated_hours=hours,
                    difficulty=level,
                    metadata={
                        "phase": phase["name"],
                        "type": "sprint" if is_sprint else "task",
                        "fallback_generated": True,
                    },
                    parent_index=None if is_sprint else sprint_index,
                )
            )

    return items
