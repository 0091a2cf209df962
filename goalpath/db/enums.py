## Enumerations shared by models, schemas and the scoring engine
import enum


class GoalChannel(str, enum.Enum):
    TRADING = "TRADING"
    YOUTUBE = "YOUTUBE"
    NEWSLETTER = "NEWSLETTER"
    MICROSAAS = "MICROSAAS"
    NOTION_TEMPLATE = "NOTION_TEMPLATE"
    CLI = "CLI"
    EXTENSION = "EXTENSION"
    SEO = "SEO"


class ExpertiseLevel(str, enum.Enum):
    BEGINNER = "BEGINNER"
    NOVICE = "NOVICE"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"
    EXPERT = "EXPERT"


# Declaration order is the ordering used for min/max expertise comparisons
LEVEL_ORDER: list[ExpertiseLevel] = list(ExpertiseLevel)


def level_rank(level: ExpertiseLevel) -> int:
    return LEVEL_ORDER.index(ExpertiseLevel(level))


class KnowledgeDomain(str, enum.Enum):
    MARKET_ANALYSIS = "MARKET_ANALYSIS"
    RISK_MANAGEMENT = "RISK_MANAGEMENT"
    TECHNICAL_ANALYSIS = "TECHNICAL_ANALYSIS"
    FUNDAMENTAL_ANALYSIS = "FUNDAMENTAL_ANALYSIS"
    TRADING_PSYCHOLOGY = "TRADING_PSYCHOLOGY"
    PLATFORM_USAGE = "PLATFORM_USAGE"
    CONTENT_CREATION = "CONTENT_CREATION"
    VIDEO_EDITING = "VIDEO_EDITING"
    AUDIENCE_BUILDING = "AUDIENCE_BUILDING"
    MONETIZATION = "MONETIZATION"
    SEO_OPTIMIZATION = "SEO_OPTIMIZATION"
    ANALYTICS = "ANALYTICS"
    WRITING = "WRITING"
    EMAIL_MARKETING = "EMAIL_MARKETING"
    SUBSCRIBER_GROWTH = "SUBSCRIBER_GROWTH"
    CONTENT_CURATION = "CONTENT_CURATION"
    AUTOMATION = "AUTOMATION"
    PROGRAMMING = "PROGRAMMING"
    SYSTEM_DESIGN = "SYSTEM_DESIGN"
    DEPLOYMENT = "DEPLOYMENT"
    MARKETING = "MARKETING"
    CUSTOMER_SUPPORT = "CUSTOMER_SUPPORT"
    PRICING_STRATEGY = "PRICING_STRATEGY"


class QuestionType(str, enum.Enum):
    SINGLE_CHOICE = "SINGLE_CHOICE"
    MULTIPLE_CHOICE = "MULTIPLE_CHOICE"
    SCALE = "SCALE"
    TEXT = "TEXT"
    BOOLEAN = "BOOLEAN"
    NUMERIC = "NUMERIC"


class AssessmentStatus(str, enum.Enum):
    NOT_STARTED = "NOT_STARTED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


class PlanStatus(str, enum.Enum):
    DRAFT = "DRAFT"
    APPROVED = "APPROVED"
    EXECUTING = "EXECUTING"
    COMPLETED = "COMPLETED"
    ABANDONED = "ABANDONED"
