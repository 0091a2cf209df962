"""
Unit tests for the assessment scoring functions.
"""

from types import SimpleNamespace

import pytest

from goalpath.assessment.scoring import (
    CUSTOM_SCORE,
    DomainScore,
    InvalidAnswer,
    calculate_domain_score,
    calculate_expertise_level,
    calculate_overall_assessment,
    calculate_question_score,
    generate_recommendations,
    get_required_domains,
    validate_answer,
)
from goalpath.db.enums import ExpertiseLevel, GoalChannel, KnowledgeDomain, QuestionType


def rule(value, score, kind="choice"):
    return {"condition": {"type": kind, "value": value}, "score": score}


def question(qid, domain, weight=1.0):
    return SimpleNamespace(id=qid, domain=domain, weight=weight)


def response(qid, score, confidence=None):
    return SimpleNamespace(question_id=qid, score=score, confidence=confidence)


class TestExpertiseLevel:
    @pytest.mark.parametrize(
        "score,level",
        [
            (-5, ExpertiseLevel.BEGINNER),
            (0, ExpertiseLevel.BEGINNER),
            (20, ExpertiseLevel.BEGINNER),
            (20.5, ExpertiseLevel.NOVICE),
            (40, ExpertiseLevel.NOVICE),
            (40.5, ExpertiseLevel.INTERMEDIATE),
            (41, ExpertiseLevel.INTERMEDIATE),
            (60, ExpertiseLevel.INTERMEDIATE),
            (75, ExpertiseLevel.ADVANCED),
            (80.5, ExpertiseLevel.EXPERT),
            (100, ExpertiseLevel.EXPERT),
            (100.5, ExpertiseLevel.EXPERT),
            (140, ExpertiseLevel.EXPERT),
        ],
    )
    def test_bands(self, score, level):
        assert calculate_expertise_level(score) == level

    def test_required_domains_for_trading(self):
        domains = get_required_domains(GoalChannel.TRADING)
        assert domains[0] == KnowledgeDomain.MARKET_ANALYSIS
        assert KnowledgeDomain.PLATFORM_USAGE in domains
        assert len(domains) == 6

    def test_required_domains_accepts_raw_value(self):
        assert get_required_domains("CLI") == [
            KnowledgeDomain.PROGRAMMING,
            KnowledgeDomain.SYSTEM_DESIGN,
            KnowledgeDomain.DEPLOYMENT,
        ]


class TestValidateAnswer:
    def test_scale_uses_default_bounds(self):
        validate_answer(5, QuestionType.SCALE)
        with pytest.raises(InvalidAnswer, match="Maximum value is 10"):
            validate_answer(11, QuestionType.SCALE)
        with pytest.raises(InvalidAnswer, match="Minimum value is 1"):
            validate_answer(0, QuestionType.SCALE)

    def test_numeric_accepts_numeric_strings(self):
        validate_answer("3.5", QuestionType.NUMERIC, {"min": 0, "max": 50})

    def test_numeric_rejects_garbage(self):
        with pytest.raises(InvalidAnswer, match="Invalid number"):
            validate_answer("lots", QuestionType.NUMERIC)

    def test_explicit_rules_replace_defaults(self):
        # default for NUMERIC is min 0; an explicit rule set without min allows negatives
        validate_answer(-5, QuestionType.NUMERIC, {"max": 10})

    def test_text_length_and_pattern(self):
        validate_answer("MetaTrader", QuestionType.TEXT)
        with pytest.raises(InvalidAnswer, match="Minimum length is 1"):
            validate_answer("", QuestionType.TEXT)
        with pytest.raises(InvalidAnswer, match="Maximum length is 5"):
            validate_answer("toolong", QuestionType.TEXT, {"max_length": 5})
        with pytest.raises(InvalidAnswer, match="Invalid format"):
            validate_answer("abc", QuestionType.TEXT, {"pattern": r"^\d+$"})

    def test_multiple_choice_needs_list_when_rules_exist(self):
        with pytest.raises(InvalidAnswer, match="Multiple selection required"):
            validate_answer("Python", QuestionType.MULTIPLE_CHOICE, {"required": True})
        with pytest.raises(InvalidAnswer, match="At least one option"):
            validate_answer([], QuestionType.MULTIPLE_CHOICE, {"required": True})

    def test_types_without_rules_accept_anything(self):
        validate_answer("anything", QuestionType.MULTIPLE_CHOICE)
        validate_answer(None, QuestionType.SINGLE_CHOICE)
        validate_answer(None, QuestionType.BOOLEAN)


class TestQuestionScore:
    def test_no_rules_scores_zero(self):
        assert calculate_question_score("x", QuestionType.SINGLE_CHOICE, []) == 0
        assert calculate_question_score("x", QuestionType.TEXT, None) == 0

    def test_exact_match(self):
        rules = [rule("Yes", 70), rule("No", 10)]
        assert calculate_question_score("No", QuestionType.SINGLE_CHOICE, rules) == 10
        assert calculate_question_score("Maybe", QuestionType.SINGLE_CHOICE, rules) == 0

    def test_boolean_matches_exact_value(self):
        rules = [rule(True, 70, "boolean"), rule(False, 10, "boolean")]
        assert calculate_question_score(True, QuestionType.BOOLEAN, rules) == 70
        assert calculate_question_score(False, QuestionType.BOOLEAN, rules) == 10

    def test_range_first_matching_band_wins(self):
        rules = [
            rule({"min": 1, "max": 3}, 30, "scale"),
            rule({"min": 4, "max": 6}, 60, "scale"),
            rule({"min": 7, "max": 10}, 90, "scale"),
        ]
        assert calculate_question_score(2, QuestionType.SCALE, rules) == 30
        assert calculate_question_score("6", QuestionType.SCALE, rules) == 60
        assert calculate_question_score(10, QuestionType.SCALE, rules) == 90
        assert calculate_question_score(3.5, QuestionType.SCALE, rules) == 0

    def test_range_open_upper_bound(self):
        rules = [rule({"min": 0, "max": 0}, 0, "scale"), rule({"min": 5.01, "max": None}, 95, "scale")]
        assert calculate_question_score(42, QuestionType.NUMERIC, rules) == 95

    def test_range_ignores_non_numeric_answers(self):
        rules = [rule({"min": 0, "max": 10}, 50, "scale")]
        assert calculate_question_score("ten", QuestionType.NUMERIC, rules) == 0

    def test_partial_sums_and_caps_at_best_rule(self):
        rules = [rule("A", 20), rule("B", 30), rule("C", 100)]
        assert calculate_question_score(["A", "B"], QuestionType.MULTIPLE_CHOICE, rules) == 50
        assert calculate_question_score(["A", "B", "C"], QuestionType.MULTIPLE_CHOICE, rules) == 100
        assert calculate_question_score("A", QuestionType.MULTIPLE_CHOICE, rules) == 0

    def test_text_gets_flat_score(self):
        rules = [rule("anything", 99)]
        assert calculate_question_score("free text", QuestionType.TEXT, rules) == CUSTOM_SCORE

    def test_accepts_orm_like_rules(self):
        rows = [SimpleNamespace(condition={"type": "choice", "value": "Go"}, score=80)]
        assert calculate_question_score("Go", QuestionType.SINGLE_CHOICE, rows) == 80


class TestDomainScore:
    def test_weighted_average(self):
        questions = [
            question("q1", KnowledgeDomain.PROGRAMMING, weight=2.0),
            question("q2", KnowledgeDomain.PROGRAMMING, weight=1.0),
            question("q3", KnowledgeDomain.MARKETING),
        ]
        responses = [response("q1", 90, 0.8), response("q2", 30, 0.4), response("q3", 100)]

        ds = calculate_domain_score(responses, questions, KnowledgeDomain.PROGRAMMING)

        assert ds.score == pytest.approx(70.0)
        assert ds.level == ExpertiseLevel.ADVANCED
        assert ds.confidence == pytest.approx(0.6)
        assert ds.details == {"answered": 2, "total_questions": 2, "total_weight": 3.0}

    def test_default_confidence_when_none_given(self):
        questions = [question("q1", KnowledgeDomain.WRITING)]
        ds = calculate_domain_score([response("q1", 10)], questions, KnowledgeDomain.WRITING)
        assert ds.confidence == 0.5
        assert ds.level == ExpertiseLevel.BEGINNER

    def test_unanswered_domain_scores_zero(self):
        questions = [question("q1", KnowledgeDomain.WRITING)]
        ds = calculate_domain_score([], questions, KnowledgeDomain.WRITING)
        assert ds.score == 0
        assert ds.details["answered"] == 0

    def test_domain_without_questions(self):
        ds = calculate_domain_score([], [], KnowledgeDomain.ANALYTICS)
        assert ds.score == 0
        assert ds.confidence == 0
        assert ds.level == ExpertiseLevel.BEGINNER


class TestRecommendationsAndOverall:
    def scores(self):
        return [
            DomainScore(domain=KnowledgeDomain.MARKET_ANALYSIS, level=ExpertiseLevel.NOVICE, score=30, confidence=0.5),
            DomainScore(domain=KnowledgeDomain.RISK_MANAGEMENT, level=ExpertiseLevel.BEGINNER, score=0, confidence=0.5),
            DomainScore(domain=KnowledgeDomain.TECHNICAL_ANALYSIS, level=ExpertiseLevel.EXPERT, score=95, confidence=1.0),
        ]

    def test_only_weak_domains_get_recommendations(self):
        recs = generate_recommendations(self.scores(), GoalChannel.TRADING)

        assert [r.domain for r in recs] == [KnowledgeDomain.RISK_MANAGEMENT, KnowledgeDomain.MARKET_ANALYSIS]
        beginner, novice = recs
        assert (beginner.priority, beginner.estimated_time) == (1, 20)
        assert (novice.priority, novice.estimated_time) == (2, 10)
        assert beginner.title == "Improve your risk management skills"
        assert beginner.type == "learning"
        assert beginner.metadata == {"channel": "TRADING"}

    def test_overall_is_unweighted_mean_of_domains(self):
        result = calculate_overall_assessment(self.scores(), 120, GoalChannel.TRADING)

        assert result.score == pytest.approx(125 / 3)
        assert result.overall_level == ExpertiseLevel.INTERMEDIATE
        assert result.confidence == pytest.approx(2 / 3)
        assert result.time_spent == 120
        assert len(result.recommendations) == 2

    def test_overall_with_no_domains(self):
        result = calculate_overall_assessment([], 0, GoalChannel.SEO)
        assert result.overall_level == ExpertiseLevel.BEGINNER
        assert result.score == 0
        assert result.recommendations == []
