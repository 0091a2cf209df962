## Render a goal template's prompt for a goal
import json

from jinja2 import TemplateError
from jinja2.sandbox import SandboxedEnvironment

from goalpath.db.models.goal import Goal
from goalpath.db.models.goal_template import GoalTemplate
from goalpath.errors import BadRequest

# Prompt text is user-editable, so it only ever runs sandboxed
_env = SandboxedEnvironment(autoescape=False, trim_blocks=True, lstrip_blocks=True)


def goal_context(goal: Goal) -> dict:
    return {
        "title": goal.title,
        "niche": goal.niche or "",
        "channel": goal.channel.value,
        "description": goal.description or "",
        "timebox_days": goal.timebox_days,
        "budget_usd": goal.budget_usd,
        "success_metric": goal.success_metric,
        "constraints": list(goal.constraints or []),
        "revenue": list(goal.revenue or []),
        "deliverables": list(goal.deliverables or []),
        "audience_json": goal.audience_json or {},
        "profile_json": goal.profile_json or {},
    }


def render_goal_prompt(template: GoalTemplate, goal: Goal, summary: str = "", sources: list | None = None) -> str:
    try:
        compiled = _env.from_string(template.prompt_text)
        return compiled.render(
            goal=goal_context(goal),
            template={"name": template.name, "output_schema": json.dumps(template.output_schema or {}, indent=2)},
            snapshot={"summary": summary},
            sources=sources or [],
        )
    except TemplateError as e:
        raise BadRequest("Goal template could not be rendered", details=str(e))
