## Plan lifecycle: generate, approve, abandon, execute, delete
import logging
import uuid
from datetime import timedelta
from typing import Any

from sqlalchemy import func
from sqlalchemy.orm import Session

from goalpath.db.enums import AssessmentStatus, PlanStatus
from goalpath.db.models.generated_plan import GeneratedPlan, GeneratedPlanItem
from goalpath.db.models.goal import Goal
from goalpath.db.models.knowledge_assessment import KnowledgeAssessment
from goalpath.db.models.plan_template import PlanTemplate
from goalpath.db.models.roadmap import Issue, Sprint
from goalpath.errors import BadRequest
from goalpath.plans import engine
from goalpath.plans.engine import PlanItemDraft
from goalpath.utils import utcnow

logger = logging.getLogger(__name__)


def _persist_items(plan: GeneratedPlan, drafts: list[PlanItemDraft]) -> None:
    rows: list[GeneratedPlanItem] = []
    for draft in drafts:
        row = GeneratedPlanItem(
            id=uuid.uuid4(),
            type=draft.type,
            name=draft.name,
            description=draft.description,
            phase=draft.phase,
            order=draft.order,
            estimated_hours=draft.estimated_hours,
            difficulty=draft.difficulty,
            status="pending",
            start_date=draft.start_date,
            end_date=draft.end_date,
            meta=draft.model_dump(mode="json")["metadata"],
            dependencies=draft.dependencies,
        )
        if draft.parent_index is not None:
            row.parent_id = rows[draft.parent_index].id
        rows.append(row)
    plan.items.extend(rows)


def generate_plan(
    db: Session,
    assessment: KnowledgeAssessment,
    goal: Goal,
    template_id: str,
    timebox_days: int,
    constraints: Any = None,
) -> GeneratedPlan:
    if assessment.status != AssessmentStatus.COMPLETED:
        raise BadRequest("Assessment must be completed before generating a plan")

    template = db.query(PlanTemplate).filter(PlanTemplate.id == template_id).first()
    if not template:
        logger.warning("Plan template %s not found, generating fallback plan", template_id)
        return generate_fallback_plan(db, assessment, goal, timebox_days, constraints)

    level = assessment.overall_level
    domain_scores = list(assessment.domain_scores)
    activities = list(template.activities)
    start = utcnow()

    risks = engine.identify_risk_factors(template, level, assessment.confidence, timebox_days)
    adaptations = engine.calculate_adaptations(template, level, domain_scores, timebox_days)

    plan = GeneratedPlan(
        assessment_id=assessment.id,
        template_id=template.id,
        goal_id=goal.id,
        name=f"{template.name} - Personalized",
        description=engine.plan_description(template.name, template.sprint_count, level),
        status=PlanStatus.DRAFT,
        adjusted_for_user=True,
        estimated_hours=engine.calculate_total_hours(activities, level),
        success_probability=engine.calculate_success_probability(template, level, assessment.confidence, risks),
        risk_factors=[r.model_dump() for r in risks],
        adaptations=[a.model_dump(mode="json") for a in adaptations],
        start_date=start,
        end_date=start + timedelta(days=timebox_days),
    )
    _persist_items(plan, engine.build_plan_items(template, activities, level, domain_scores, timebox_days, start))

    db.add(plan)
    db.commit()
    db.refresh(plan)
    logger.info("Generated plan %s from template %s (%d items)", plan.id, template.id, len(plan.items))
    return plan


def generate_fallback_plan(
    db: Session,
    assessment: KnowledgeAssessment,
    goal: Goal,
    timebox_days: int,
    constraints: Any = None,
) -> GeneratedPlan:
    level = assessment.overall_level
    start = utcnow()

    plan = GeneratedPlan(
        assessment_id=assessment.id,
        template_id=None,
        goal_id=goal.id,
        name=f"{goal.title or 'Learning'} Plan - {level.value}",
        description=f"A personalized learning plan generated for {level.value} level learner",
        status=PlanStatus.DRAFT,
        adjusted_for_user=True,
        estimated_hours=engine.fallback_estimated_hours(level, timebox_days),
        risk_factors=engine.basic_risk_factors(level),
        adaptations=engine.basic_adaptations(level, constraints),
        start_date=start,
        end_date=start + timedelta(days=timebox_days),
    )
    _persist_items(plan, engine.build_fallback_items(level, timebox_days))

    db.add(plan)
    db.commit()
    db.refresh(plan)
    logger.info("Generated fallback plan %s for level %s", plan.id, level.value)
    return plan


def approve_plan(db: Session, plan: GeneratedPlan, user_id: uuid.UUID) -> GeneratedPlan:
    if plan.status != PlanStatus.DRAFT:
        raise BadRequest("Only draft plans can be approved")
    plan.status = PlanStatus.APPROVED
    plan.approved_at = utcnow()
    plan.approved_by = user_id
    db.commit()
    db.refresh(plan)
    return plan


def abandon_plan(db: Session, plan: GeneratedPlan) -> GeneratedPlan:
    plan.status = PlanStatus.ABANDONED
    plan.completed_at = utcnow()
    db.commit()
    db.refresh(plan)
    return plan


def execute_plan(db: Session, plan: GeneratedPlan, goal: Goal, user_id: uuid.UUID) -> dict:
    """Turn an approved plan's items into real sprints and issues."""
    if plan.status != PlanStatus.APPROVED:
        raise BadRequest("Plan must be approved before execution")

    roadmap_id = goal.roadmap.id if goal.roadmap else None
    issue_count = db.query(func.count(Issue.id)).filter(Issue.creator_id == user_id).scalar() or 0

    sprints: dict[uuid.UUID, Sprint] = {}
    created_issues: list[Issue] = []
    # sprints first so every issue can find its parent
    for item in plan.items:
        if item.type == "sprint":
            sprint = Sprint(
                id=uuid.uuid4(),
                roadmap_id=roadmap_id,
                creator_id=user_id,
                name=item.name,
                description=item.description,
                status="PENDING",
                start_date=item.start_date,
                end_date=item.end_date,
            )
            db.add(sprint)
            sprints[item.id] = sprint

    for item in plan.items:
        if item.type == "issue":
            issue_count += 1
            parent = sprints.get(item.parent_id) if item.parent_id else None
            issue = Issue(
                id=uuid.uuid4(),
                key=f"TASK-{issue_count}",
                name=item.name,
                description=item.description,
                type="TASK",
                status="TODO",
                sprint_id=parent.id if parent else None,
                sprint_position=item.order,
                board_position=-1,
                creator_id=user_id,
                reporter_id=user_id,
            )
            db.add(issue)
            created_issues.append(issue)

    plan.status = PlanStatus.EXECUTING
    plan.executed_at = utcnow()
    goal.active_plan_id = plan.id
    db.commit()

    logger.info("Executed plan %s: %d sprints, %d issues", plan.id, len(sprints), len(created_issues))
    return {
        "sprints": [str(s.id) for s in sprints.values()],
        "issues": [str(i.id) for i in created_issues],
    }


def delete_plan(db: Session, plan: GeneratedPlan) -> None:
    if plan.status in (PlanStatus.EXECUTING, PlanStatus.COMPLETED):
        raise BadRequest("Cannot delete a plan that is executing or completed")

    goal = db.query(Goal).filter(Goal.id == plan.goal_id).first()
    if goal and goal.active_plan_id == plan.id:
        goal.active_plan_id = None
    db.delete(plan)
    db.commit()
