## Assessment scoring: answers -> question scores -> domain levels -> recommendations
import math
import re
from typing import Any, Iterable, List, Literal, Optional

from pydantic import BaseModel, Field

from goalpath.db.enums import ExpertiseLevel, GoalChannel, KnowledgeDomain, QuestionType


# Inclusive upper bound of each level; anything above the last bound is EXPERT
EXPERTISE_SCORES = {
    ExpertiseLevel.BEGINNER: (0, 20),
    ExpertiseLevel.NOVICE: (21, 40),
    ExpertiseLevel.INTERMEDIATE: (41, 60),
    ExpertiseLevel.ADVANCED: (61, 80),
    ExpertiseLevel.EXPERT: (81, 100),
}

EXPERTISE_DESCRIPTIONS = {
    ExpertiseLevel.BEGINNER: "No prior experience in this domain",
    ExpertiseLevel.NOVICE: "Basic understanding with limited practical experience",
    ExpertiseLevel.INTERMEDIATE: "Solid foundation and can work independently",
    ExpertiseLevel.ADVANCED: "Extensive experience and can mentor others",
    ExpertiseLevel.EXPERT: "Industry-level expertise with proven track record",
}

CHANNEL_DOMAINS = {
    GoalChannel.TRADING: [
        KnowledgeDomain.MARKET_ANALYSIS,
        KnowledgeDomain.RISK_MANAGEMENT,
        KnowledgeDomain.TECHNICAL_ANALYSIS,
        KnowledgeDomain.FUNDAMENTAL_ANALYSIS,
        KnowledgeDomain.TRADING_PSYCHOLOGY,
        KnowledgeDomain.PLATFORM_USAGE,
    ],
    GoalChannel.YOUTUBE: [
        KnowledgeDomain.CONTENT_CREATION,
        KnowledgeDomain.VIDEO_EDITING,
        KnowledgeDomain.AUDIENCE_BUILDING,
        KnowledgeDomain.MONETIZATION,
        KnowledgeDomain.SEO_OPTIMIZATION,
        KnowledgeDomain.ANALYTICS,
    ],
    GoalChannel.NEWSLETTER: [
        KnowledgeDomain.WRITING,
        KnowledgeDomain.EMAIL_MARKETING,
        KnowledgeDomain.SUBSCRIBER_GROWTH,
        KnowledgeDomain.CONTENT_CURATION,
        KnowledgeDomain.AUTOMATION,
    ],
    GoalChannel.MICROSAAS: [
        KnowledgeDomain.PROGRAMMING,
        KnowledgeDomain.SYSTEM_DESIGN,
        KnowledgeDomain.DEPLOYMENT,
        KnowledgeDomain.MARKETING,
        KnowledgeDomain.CUSTOMER_SUPPORT,
        KnowledgeDomain.PRICING_STRATEGY,
    ],
    GoalChannel.NOTION_TEMPLATE: [
        KnowledgeDomain.SYSTEM_DESIGN,
        KnowledgeDomain.MARKETING,
        KnowledgeDomain.PRICING_STRATEGY,
    ],
    GoalChannel.CLI: [
        KnowledgeDomain.PROGRAMMING,
        KnowledgeDomain.SYSTEM_DESIGN,
        KnowledgeDomain.DEPLOYMENT,
    ],
    GoalChannel.EXTENSION: [
        KnowledgeDomain.PROGRAMMING,
        KnowledgeDomain.SYSTEM_DESIGN,
        KnowledgeDomain.MARKETING,
    ],
    GoalChannel.SEO: [
        KnowledgeDomain.SEO_OPTIMIZATION,
        KnowledgeDomain.CONTENT_CREATION,
        KnowledgeDomain.ANALYTICS,
        KnowledgeDomain.MARKETING,
    ],
}

ScoringMethod = Literal["exact", "range", "partial", "custom"]

QUESTION_TYPE_CONFIG = {
    QuestionType.SINGLE_CHOICE: {"input_type": "radio", "scoring_method": "exact", "default_validation": None},
    QuestionType.MULTIPLE_CHOICE: {"input_type": "checkbox", "scoring_method": "partial", "default_validation": None},
    QuestionType.SCALE: {"input_type": "range", "scoring_method": "range", "default_validation": {"min": 1, "max": 10}},
    QuestionType.TEXT: {
        "input_type": "text",
        "scoring_method": "custom",
        "default_validation": {"min_length": 1, "max_length": 500},
    },
    QuestionType.BOOLEAN: {"input_type": "radio", "scoring_method": "exact", "default_validation": None},
    QuestionType.NUMERIC: {"input_type": "number", "scoring_method": "range", "default_validation": {"min": 0}},
}

# Free-text answers have no automatic grader yet
CUSTOM_SCORE = 50


class InvalidAnswer(ValueError):
    pass


class DomainScore(BaseModel):
    domain: KnowledgeDomain
    level: ExpertiseLevel
    score: float
    confidence: float
    details: Optional[dict] = None


class Recommendation(BaseModel):
    domain: KnowledgeDomain
    type: Literal["learning", "tool", "resource", "practice"]
    title: str
    description: str
    priority: int = Field(ge=1)
    url: Optional[str] = None
    estimated_time: Optional[int] = None
    metadata: Optional[dict] = None


class AssessmentResult(BaseModel):
    overall_level: ExpertiseLevel
    score: float
    confidence: float
    domain_scores: List[DomainScore] = []
    recommendations: List[Recommendation] = []
    time_spent: int = 0


def calculate_expertise_level(score: float) -> ExpertiseLevel:
    for level, (_, upper) in EXPERTISE_SCORES.items():
        if score <= upper:
            return level
    return ExpertiseLevel.EXPERT


def get_required_domains(channel: GoalChannel) -> list[KnowledgeDomain]:
    return list(CHANNEL_DOMAINS.get(GoalChannel(channel), []))


def _to_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return None if math.isnan(number) else number


def validate_answer(answer: Any, question_type: QuestionType, rules: dict | None = None) -> None:
    """Raise InvalidAnswer when the answer breaks the question's rules.

    Explicit rules replace the type's defaults rather than merging with them.
    Types without rules accept any answer.
    """
    question_type = QuestionType(question_type)
    rules = rules or QUESTION_TYPE_CONFIG[question_type]["default_validation"]
    if not rules:
        return

    if question_type in (QuestionType.NUMERIC, QuestionType.SCALE):
        number = _to_number(answer)
        if number is None:
            raise InvalidAnswer("Invalid number")
        if rules.get("min") is not None and number < rules["min"]:
            raise InvalidAnswer(f"Minimum value is {rules['min']}")
        if rules.get("max") is not None and number > rules["max"]:
            raise InvalidAnswer(f"Maximum value is {rules['max']}")

    elif question_type == QuestionType.TEXT:
        text = "" if answer is None else str(answer)
        if rules.get("min_length") and len(text) < rules["min_length"]:
            raise InvalidAnswer(f"Minimum length is {rules['min_length']}")
        if rules.get("max_length") and len(text) > rules["max_length"]:
            raise InvalidAnswer(f"Maximum length is {rules['max_length']}")
        if rules.get("pattern") and not re.search(rules["pattern"], text):
            raise InvalidAnswer("Invalid format")

    elif question_type == QuestionType.MULTIPLE_CHOICE:
        if not isinstance(answer, list):
            raise InvalidAnswer("Multiple selection required")
        if rules.get("required") and len(answer) == 0:
            raise InvalidAnswer("At least one option must be selected")

    elif question_type in (QuestionType.SINGLE_CHOICE, QuestionType.BOOLEAN):
        if rules.get("required") and not answer:
            raise InvalidAnswer("Selection required")


def _rule_parts(rule: Any) -> tuple[dict, float]:
    # Accepts ORM rows as well as plain {"condition": ..., "score": ...} dicts
    if isinstance(rule, dict):
        return rule.get("condition") or {}, float(rule.get("score") or 0)
    return rule.condition or {}, float(rule.score or 0)


def calculate_question_score(answer: Any, question_type: QuestionType, rules: Iterable[Any] | None = None) -> float:
    rules = [_rule_parts(r) for r in (rules or [])]
    if not rules:
        return 0

    method = QUESTION_TYPE_CONFIG[QuestionType(question_type)]["scoring_method"]

    if method == "exact":
        for condition, score in rules:
            if condition.get("value") == answer:
                return score
        return 0

    if method == "range":
        number = _to_number(answer)
        if number is None:
            return 0
        for condition, score in rules:
            bounds = condition.get("value")
            if not isinstance(bounds, dict):
                continue
            low = bounds.get("min")
            high = bounds.get("max")
            low = -math.inf if low is None else low
            high = math.inf if high is None else high
            if low <= number <= high:
                return score
        return 0

    if method == "partial":
        if not isinstance(answer, list):
            return 0
        total = 0.0
        cap = 0.0
        for condition, score in rules:
            cap = max(cap, score)
            if condition.get("value") in answer:
                total += score
        return min(total, cap)

    return CUSTOM_SCORE


def calculate_domain_score(responses: Iterable[Any], questions: Iterable[Any], domain: KnowledgeDomain) -> DomainScore:
    """Weighted average of response scores over one domain's questions.

    `responses` need `question_id`, `score` and `confidence`; `questions` need
    `id`, `domain` and `weight`. ORM rows work as-is.
    """
    domain = KnowledgeDomain(domain)
    domain_questions = {q.id: q for q in questions if KnowledgeDomain(q.domain) == domain}
    if not domain_questions:
        return DomainScore(domain=domain, level=ExpertiseLevel.BEGINNER, score=0, confidence=0)

    weighted_sum = 0.0
    total_weight = 0.0
    confidences = []
    answered = 0
    for response in responses:
        question = domain_questions.get(response.question_id)
        if question is None:
            continue
        answered += 1
        weighted_sum += (response.score or 0) * question.weight
        total_weight += question.weight
        if response.confidence is not None:
            confidences.append(response.confidence)

    score = weighted_sum / total_weight if total_weight > 0 else 0
    confidence = sum(confidences) / len(confidences) if confidences else 0.5

    return DomainScore(
        domain=domain,
        level=calculate_expertise_level(score),
        score=score,
        confidence=confidence,
        details={
            "answered": answered,
            "total_questions": len(domain_questions),
            "total_weight": total_weight,
        },
    )


def generate_recommendations(domain_scores: Iterable[DomainScore], channel: GoalChannel) -> list[Recommendation]:
    recommendations = []
    for ds in domain_scores:
        if ds.level not in (ExpertiseLevel.BEGINNER, ExpertiseLevel.NOVICE):
            continue
        beginner = ds.level == ExpertiseLevel.BEGINNER
        recommendations.append(
            Recommendation(
                domain=ds.domain,
                type="learning",
                title=f"Improve your {ds.domain.value.lower().replace('_', ' ')} skills",
                description=f"Your current level is {ds.level.value}. We recommend focusing on foundational concepts.",
                priority=1 if beginner else 2,
                estimated_time=20 if beginner else 10,
                metadata={"channel": GoalChannel(channel).value},
            )
        )
    return sorted(recommendations, key=lambda r: r.priority)


def calculate_overall_assessment(
    domain_scores: list[DomainScore], time_spent: int, channel: GoalChannel
) -> AssessmentResult:
    if not domain_scores:
        return AssessmentResult(overall_level=ExpertiseLevel.BEGINNER, score=0, confidence=0, time_spent=time_spent)

    score = sum(ds.score for ds in domain_scores) / len(domain_scores)
    confidence = sum(ds.confidence for ds in domain_scores) / len(domain_scores)

    return AssessmentResult(
        overall_level=calculate_expertise_level(score),
        score=score,
        confidence=confidence,
        domain_scores=domain_scores,
        recommendations=generate_recommendations(domain_scores, channel),
        time_spent=time_spent,
    )
