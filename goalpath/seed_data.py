## Catalogue seeded into a fresh database: assessments, scoring rules, plan and goal templates
from goalpath.db.enums import ExpertiseLevel, GoalChannel, KnowledgeDomain, QuestionType

ASSESSMENT_TEMPLATES = [
    {
        "id": "trading-assessment-v1",
        "name": "Trading Knowledge Assessment",
        "channel": GoalChannel.TRADING,
        "description": "Comprehensive assessment to evaluate trading knowledge and experience",
        "version": "1.0.0",
        "is_active": True,
        "min_questions": 8,
        "max_questions": 15,
        "time_limit": 30,
        "passing_score": 60,
    },
    {
        "id": "youtube-assessment-v1",
        "name": "YouTube Creator Assessment",
        "channel": GoalChannel.YOUTUBE,
        "description": "Evaluate content creation skills and YouTube platform knowledge",
        "version": "1.0.0",
        "is_active": True,
        "min_questions": 7,
        "max_questions": 12,
        "time_limit": 25,
        "passing_score": 55,
    },
    {
        "id": "newsletter-assessment-v1",
        "name": "Newsletter Publisher Assessment",
        "channel": GoalChannel.NEWSLETTER,
        "description": "Assess writing skills and email marketing knowledge",
        "version": "1.0.0",
        "is_active": True,
        "min_questions": 6,
        "max_questions": 10,
        "time_limit": 20,
        "passing_score": 60,
    },
    {
        "id": "microsaas-assessment-v1",
        "name": "MicroSaaS Builder Assessment",
        "channel": GoalChannel.MICROSAAS,
        "description": "Evaluate technical and business skills for SaaS development",
        "version": "1.0.0",
        "is_active": True,
        "min_questions": 10,
        "max_questions": 18,
        "time_limit": 35,
        "passing_score": 65,
    },
]

QUESTIONS = [
    # Trading
    {
        "id": "tq-1",
        "template_id": "trading-assessment-v1",
        "domain": KnowledgeDomain.MARKET_ANALYSIS,
        "question_text": "How would you rate your understanding of financial markets and trading instruments?",
        "question_type": QuestionType.SCALE,
        "order": 1,
        "weight": 1.5,
        "help_text": "Consider your knowledge of stocks, bonds, forex, commodities, and derivatives",
        "validation_rules": {"min": 1, "max": 10},
    },
    {
        "id": "tq-2",
        "template_id": "trading-assessment-v1",
        "domain": KnowledgeDomain.RISK_MANAGEMENT,
        "question_text": "Which risk management techniques are you familiar with?",
        "question_type": QuestionType.MULTIPLE_CHOICE,
        "order": 2,
        "weight": 2.0,
        "options": [
            "Stop-loss orders",
            "Position sizing",
            "Risk-reward ratios",
            "Portfolio diversification",
            "Hedging strategies",
            "Value at Risk (VaR)",
            "None of the above",
        ],
        "help_text": "Select all that apply",
    },
    {
        "id": "tq-3",
        "template_id": "trading-assessment-v1",
        "domain": KnowledgeDomain.TRADING_PSYCHOLOGY,
        "question_text": "Have you experienced significant trading losses that affected your emotional state?",
        "question_type": QuestionType.SINGLE_CHOICE,
        "order": 3,
        "weight": 1.2,
        "options": [
            "Yes, and I learned from them",
            "Yes, and I'm still recovering",
            "No, I've been consistently profitable",
            "No, I haven't started trading yet",
        ],
    },
    {
        "id": "tq-4",
        "template_id": "trading-assessment-v1",
        "domain": KnowledgeDomain.TECHNICAL_ANALYSIS,
        "question_text": "How many years of experience do you have with technical analysis?",
        "question_type": QuestionType.NUMERIC,
        "order": 4,
        "weight": 1.3,
        "validation_rules": {"min": 0, "max": 50},
        "help_text": "Enter 0 if you have no experience",
    },
    {
        "id": "tq-5",
        "template_id": "trading-assessment-v1",
        "domain": KnowledgeDomain.PLATFORM_USAGE,
        "question_text": "Which trading platforms have you used?",
        "question_type": QuestionType.TEXT,
        "is_required": False,
        "order": 5,
        "weight": 0.8,
        "help_text": "List the platforms separated by commas",
    },
    # YouTube
    {
        "id": "yq-1",
        "template_id": "youtube-assessment-v1",
        "domain": KnowledgeDomain.CONTENT_CREATION,
        "question_text": "How many videos have you created and published (on any platform)?",
        "question_type": QuestionType.SINGLE_CHOICE,
        "order": 1,
        "weight": 1.5,
        "options": ["None", "1-5 videos", "6-20 videos", "21-50 videos", "50+ videos"],
    },
    {
        "id": "yq-2",
        "template_id": "youtube-assessment-v1",
        "domain": KnowledgeDomain.VIDEO_EDITING,
        "question_text": "What is your video editing skill level?",
        "question_type": QuestionType.SCALE,
        "order": 2,
        "weight": 1.3,
        "help_text": "1 = No experience, 10 = Professional level",
        "validation_rules": {"min": 1, "max": 10},
    },
    {
        "id": "yq-3",
        "template_id": "youtube-assessment-v1",
        "domain": KnowledgeDomain.AUDIENCE_BUILDING,
        "question_text": "Do you have experience growing an audience on social media?",
        "question_type": QuestionType.BOOLEAN,
        "order": 3,
        "weight": 1.2,
    },
    {
        "id": "yq-4",
        "template_id": "youtube-assessment-v1",
        "domain": KnowledgeDomain.SEO_OPTIMIZATION,
        "question_text": "Which YouTube SEO techniques are you familiar with?",
        "question_type": QuestionType.MULTIPLE_CHOICE,
        "order": 4,
        "weight": 1.4,
        "options": [
            "Keyword research",
            "Thumbnail optimization",
            "Title optimization",
            "Description writing",
            "Tags usage",
            "Closed captions",
            "End screens and cards",
            "None of the above",
        ],
    },
    # Newsletter
    {
        "id": "nq-1",
        "template_id": "newsletter-assessment-v1",
        "domain": KnowledgeDomain.WRITING,
        "question_text": "How would you describe your writing experience?",
        "question_type": QuestionType.SINGLE_CHOICE,
        "order": 1,
        "weight": 2.0,
        "options": [
            "No formal writing experience",
            "Personal blog or journal",
            "Academic writing",
            "Professional content writing",
            "Published author",
        ],
    },
    {
        "id": "nq-2",
        "template_id": "newsletter-assessment-v1",
        "domain": KnowledgeDomain.EMAIL_MARKETING,
        "question_text": "Have you used any email marketing platforms?",
        "question_type": QuestionType.MULTIPLE_CHOICE,
        "order": 2,
        "weight": 1.3,
        "options": ["Mailchimp", "ConvertKit", "Substack", "Ghost", "MailerLite", "ActiveCampaign", "Other", "None"],
    },
    {
        "id": "nq-3",
        "template_id": "newsletter-assessment-v1",
        "domain": KnowledgeDomain.SUBSCRIBER_GROWTH,
        "question_text": "What's the largest email list you've managed?",
        "question_type": QuestionType.SINGLE_CHOICE,
        "order": 3,
        "weight": 1.1,
        "options": [
            "Never managed an email list",
            "1-100 subscribers",
            "101-500 subscribers",
            "501-1000 subscribers",
            "1000+ subscribers",
        ],
    },
    # MicroSaaS
    {
        "id": "sq-1",
        "template_id": "microsaas-assessment-v1",
        "domain": KnowledgeDomain.PROGRAMMING,
        "question_text": "Which programming languages are you proficient in?",
        "question_type": QuestionType.MULTIPLE_CHOICE,
        "order": 1,
        "weight": 2.0,
        "options": [
            "JavaScript/TypeScript",
            "Python",
            "Java",
            "C#",
            "Ruby",
            "Go",
            "PHP",
            "None - I'm not a programmer",
        ],
    },
    {
        "id": "sq-2",
        "template_id": "microsaas-assessment-v1",
        "domain": KnowledgeDomain.SYSTEM_DESIGN,
        "question_text": "Rate your understanding of software architecture and system design",
        "question_type": QuestionType.SCALE,
        "order": 2,
        "weight": 1.5,
        "help_text": "1 = Beginner, 10 = Expert architect",
        "validation_rules": {"min": 1, "max": 10},
    },
    {
        "id": "sq-3",
        "template_id": "microsaas-assessment-v1",
        "domain": KnowledgeDomain.DEPLOYMENT,
        "question_text": "Have you deployed a web application to production?",
        "question_type": QuestionType.BOOLEAN,
        "order": 3,
        "weight": 1.3,
    },
    {
        "id": "sq-4",
        "template_id": "microsaas-assessment-v1",
        "domain": KnowledgeDomain.MARKETING,
        "question_text": "What's your experience with product marketing?",
        "question_type": QuestionType.TEXT,
        "is_required": False,
        "order": 4,
        "weight": 1.0,
        "help_text": "Briefly describe your marketing experience",
    },
]


def _scale(question_id, bands):
    return [
        {"question_id": question_id, "condition": {"type": "scale", "value": {"min": lo, "max": hi}}, "score": score,
         "feedback": feedback}
        for lo, hi, score, feedback in bands
    ]


def _choices(question_id, kind, scores):
    return [
        {"question_id": question_id, "condition": {"type": kind, "value": value}, "score": score}
        for value, score in scores
    ]


SCORING_RULES = [
    *_scale("tq-1", [
        (1, 3, 30, "You're at the beginning of your trading journey. Focus on fundamentals."),
        (4, 6, 60, "You have moderate understanding. Time to deepen your knowledge."),
        (7, 10, 90, "Strong foundation in markets. Ready for advanced strategies."),
    ]),
    *_choices("tq-2", "choice", [
        ("Stop-loss orders", 20),
        ("Position sizing", 30),
        ("Risk-reward ratios", 30),
        ("Portfolio diversification", 20),
        ("Hedging strategies", 60),
        ("Value at Risk (VaR)", 100),
        ("None of the above", 0),
    ]),
    *_choices("tq-3", "choice", [
        ("Yes, and I learned from them", 70),
        ("Yes, and I'm still recovering", 35),
        ("No, I've been consistently profitable", 90),
        ("No, I haven't started trading yet", 10),
    ]),
    *_scale("tq-4", [
        (0, 0, 0, "No technical analysis experience yet."),
        (0.01, 2, 40, "Some exposure to chart reading."),
        (2.01, 5, 70, "Solid hands-on experience."),
        (5.01, None, 95, "Seasoned technical analyst."),
    ]),
    {
        "question_id": "yq-1",
        "condition": {"type": "choice", "value": "None"},
        "score": 0,
        "feedback": "No experience yet - we'll start from the basics.",
    },
    *_choices("yq-1", "choice", [("1-5 videos", 30), ("6-20 videos", 55), ("21-50 videos", 80)]),
    {
        "question_id": "yq-1",
        "condition": {"type": "choice", "value": "50+ videos"},
        "score": 100,
        "feedback": "Experienced creator - let's focus on optimization and growth.",
    },
    *_scale("yq-2", [
        (1, 3, 20, "Editing will need dedicated practice time."),
        (4, 7, 55, "Comfortable with the basics of editing."),
        (8, 10, 90, "Editing is a strength."),
    ]),
    *_choices("yq-3", "boolean", [(True, 70), (False, 10)]),
    *_choices("yq-4", "choice", [
        ("Keyword research", 80),
        ("Thumbnail optimization", 50),
        ("Title optimization", 40),
        ("Description writing", 30),
        ("Tags usage", 20),
        ("Closed captions", 30),
        ("End screens and cards", 30),
        ("None of the above", 0),
    ]),
    *_choices("nq-1", "choice", [
        ("No formal writing experience", 10),
        ("Personal blog or journal", 35),
        ("Academic writing", 55),
        ("Professional content writing", 80),
        ("Published author", 95),
    ]),
    *_choices("nq-2", "choice", [
        ("Mailchimp", 50),
        ("ConvertKit", 60),
        ("Substack", 50),
        ("Ghost", 50),
        ("MailerLite", 50),
        ("ActiveCampaign", 80),
        ("Other", 40),
        ("None", 0),
    ]),
    *_choices("nq-3", "choice", [
        ("Never managed an email list", 5),
        ("1-100 subscribers", 30),
        ("101-500 subscribers", 55),
        ("501-1000 subscribers", 75),
        ("1000+ subscribers", 95),
    ]),
    *_choices("sq-1", "choice", [
        ("JavaScript/TypeScript", 90),
        ("Python", 90),
        ("Java", 70),
        ("C#", 70),
        ("Ruby", 70),
        ("Go", 80),
        ("PHP", 60),
        ("None - I'm not a programmer", 0),
    ]),
    *_scale("sq-2", [
        (1, 3, 20, "Start with the architecture fundamentals."),
        (4, 7, 55, "Good working knowledge of system design."),
        (8, 10, 90, "Strong architecture background."),
    ]),
    *_choices("sq-3", "boolean", [(True, 80), (False, 10)]),
]

PLAN_TEMPLATES = [
    {
        "id": "trading-beginner-plan",
        "name": "Trading Beginner's Journey",
        "channel": GoalChannel.TRADING,
        "template_id": "trading-assessment-v1",
        "description": "Complete roadmap for trading beginners to reach profitability",
        "min_expertise": ExpertiseLevel.BEGINNER,
        "max_expertise": ExpertiseLevel.NOVICE,
        "typical_duration": 30,
        "sprint_count": 4,
        "success_rate": 0.65,
        "version": "1.0.0",
        "is_active": True,
        "structure": {
            "phases": [
                {"name": "Foundation", "duration": 7, "focus": "Learn market basics and terminology"},
                {"name": "Practice", "duration": 7, "focus": "Paper trading and strategy development"},
                {"name": "Implementation", "duration": 10, "focus": "Start with small real trades"},
                {"name": "Optimization", "duration": 6, "focus": "Refine strategy and scale"},
            ]
        },
        "prerequisites": {
            "min_capital": 500,
            "time_commitment": "2-3 hours daily",
            "tools": ["Trading platform account", "Charting software"],
        },
        "deliverables": {
            "primary": "Profitable trading system",
            "secondary": ["Trading journal", "Risk management rules", "Personal trading plan"],
        },
        "milestones": [
            {"day": 7, "checkpoint": "Complete market fundamentals"},
            {"day": 14, "checkpoint": "First paper trades executed"},
            {"day": 21, "checkpoint": "Trading strategy defined"},
            {"day": 30, "checkpoint": "First profitable week"},
        ],
    },
    {
        "id": "youtube-beginner-plan",
        "name": "YouTube Channel Launch",
        "channel": GoalChannel.YOUTUBE,
        "template_id": "youtube-assessment-v1",
        "description": "Launch and grow a YouTube channel from zero",
        "min_expertise": ExpertiseLevel.BEGINNER,
        "max_expertise": ExpertiseLevel.INTERMEDIATE,
        "typical_duration": 30,
        "sprint_count": 4,
        "success_rate": 0.70,
        "version": "1.0.0",
        "is_active": True,
        "structure": {
            "phases": [
                {"name": "Setup & Planning", "duration": 5, "focus": "Channel setup and content strategy"},
                {"name": "Content Creation", "duration": 10, "focus": "Create first 5 videos"},
                {"name": "Optimization", "duration": 8, "focus": "SEO and thumbnail optimization"},
                {"name": "Growth", "duration": 7, "focus": "Audience building and engagement"},
            ]
        },
        "prerequisites": {
            "equipment": ["Camera or smartphone", "Basic microphone"],
            "software": ["Video editing software"],
            "time_commitment": "10-15 hours weekly",
        },
        "deliverables": {
            "primary": "Active YouTube channel with 10+ videos",
            "secondary": ["Content calendar", "Channel branding", "100+ subscribers"],
        },
        "milestones": [
            {"day": 5, "checkpoint": "Channel created and branded"},
            {"day": 15, "checkpoint": "First 5 videos published"},
            {"day": 23, "checkpoint": "50+ subscribers"},
            {"day": 30, "checkpoint": "Monetization eligible"},
        ],
    },
]

PLAN_ACTIVITIES = [
    {
        "template_id": "trading-beginner-plan",
        "name": "Learn Market Basics",
        "description": "Understand how financial markets work, types of assets, and trading mechanisms",
        "type": "learning",
        "phase": 1,
        "order": 1,
        "estimated_hours": 8,
        "difficulty": ExpertiseLevel.BEGINNER,
        "dependencies": [],
        "resources": {"courses": ["Investopedia Trading Course"], "tools": ["TradingView free account"]},
        "success_criteria": {"quiz": "Pass market basics quiz with 80%", "practical": "Identify 5 different asset classes"},
        "meta": {"domain": KnowledgeDomain.MARKET_ANALYSIS.value},
    },
    {
        "template_id": "trading-beginner-plan",
        "name": "Set Up Trading Platform",
        "description": "Open brokerage account and familiarize with platform interface",
        "type": "setup",
        "phase": 1,
        "order": 2,
        "estimated_hours": 3,
        "difficulty": ExpertiseLevel.BEGINNER,
        "dependencies": [],
        "resources": {
            "platforms": ["TD Ameritrade", "Interactive Brokers", "Robinhood"],
            "guides": ["Platform setup guide"],
        },
        "success_criteria": {"account": "Verified trading account", "demo": "Execute 5 practice trades"},
        "meta": {"domain": KnowledgeDomain.PLATFORM_USAGE.value},
    },
    {
        "template_id": "trading-beginner-plan",
        "name": "Develop Trading Strategy",
        "description": "Create and document your first trading strategy with clear rules",
        "type": "execution",
        "phase": 2,
        "order": 1,
        "estimated_hours": 10,
        "difficulty": ExpertiseLevel.NOVICE,
        "dependencies": ["Learn Market Basics"],
        "resources": {"templates": ["Trading strategy template"], "examples": ["Sample strategies"]},
        "success_criteria": {"document": "Written trading plan", "backtest": "Strategy tested on historical data"},
        "meta": {"domain": KnowledgeDomain.TECHNICAL_ANALYSIS.value},
    },
    {
        "template_id": "youtube-beginner-plan",
        "name": "Channel Setup",
        "description": "Create YouTube channel, design banner, and write channel description",
        "type": "setup",
        "phase": 1,
        "order": 1,
        "estimated_hours": 4,
        "difficulty": ExpertiseLevel.BEGINNER,
        "dependencies": [],
        "resources": {"tools": ["Canva for banner design"], "guides": ["YouTube channel setup guide"]},
        "success_criteria": {"channel": "Channel created with branding", "about": "Channel description written"},
        "meta": {"domain": KnowledgeDomain.CONTENT_CREATION.value},
    },
    {
        "template_id": "youtube-beginner-plan",
        "name": "Create First Video",
        "description": "Plan, record, edit, and publish your first YouTube video",
        "type": "execution",
        "phase": 2,
        "order": 1,
        "estimated_hours": 8,
        "difficulty": ExpertiseLevel.NOVICE,
        "dependencies": ["Channel Setup"],
        "resources": {"software": ["DaVinci Resolve", "OBS Studio"], "tutorials": ["Basic video editing course"]},
        "success_criteria": {"video": "First video published", "quality": "HD quality with clear audio"},
        "meta": {"domain": KnowledgeDomain.VIDEO_EDITING.value},
    },
]

GENERIC_PROMPT = """You are an expert planner. Using the parameters and context below, output ONLY JSON matching the provided schema. No comments.

PARAMETERS:
- Title: {{ goal.title }}
- Channel: {{ goal.channel }} | Niche: {{ goal.niche }}
- Timebox: {{ goal.timebox_days }} days | Budget: ${{ goal.budget_usd }}
- Revenue modes: {{ goal.revenue | join(", ") }}
- Constraints: {{ goal.constraints | join(", ") }}
- Deliverables: {{ goal.deliverables | join(", ") }}
- Channel profile (typed): {{ goal.profile_json | tojson }}

CONTEXT (summarized):
{{ snapshot.summary }}

CITED SOURCES (top {{ sources | length }}):
{% for source in sources %}
- {{ source.title }} ({{ source.url }})
{% endfor %}

OUTPUT_SCHEMA (JSON):
{{ template.output_schema }}

Return strictly valid JSON."""

TRADING_PROMPT = """You are a trading strategy expert. Create a detailed plan for achieving the specified trading goal.

GOAL DETAILS:
- Title: {{ goal.title }}
- Capital: ${{ goal.profile_json.capital }}
- Risk Tolerance: {{ goal.profile_json.risk_tolerance }}
- Markets: {{ goal.profile_json.markets }}
- Paper Trading Only: {{ goal.profile_json.paper_trade_only }}
- Timebox: {{ goal.timebox_days }} days
- Success Metric: {{ goal.success_metric }}

CONTEXT:
{{ snapshot.summary }}

Return a structured plan with specific trading strategies, risk management rules, and daily/weekly milestones."""

YOUTUBE_PROMPT = """You are a YouTube content strategy expert. Create a plan for achieving the specified content goal.

GOAL DETAILS:
- Title: {{ goal.title }}
- Video Count: {{ goal.profile_json.video_count }}
- Length: {{ goal.profile_json.length }}
- Style: {{ goal.profile_json.style }}
- Publishing Cadence: {{ goal.profile_json.publishing_cadence }}
- Timebox: {{ goal.timebox_days }} days
- Success Metric: {{ goal.success_metric }}

CONTEXT:
{{ snapshot.summary }}

Create a content calendar with specific video topics, production schedule, and optimization strategies."""

GOAL_TEMPLATES = [
    {
        "name": "Generic $50 Goal",
        "prompt_text": GENERIC_PROMPT,
        "output_schema": {
            "type": "object",
            "properties": {
                "epics": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "title": {"type": "string"},
                            "tickets": {
                                "type": "array",
                                "items": {
                                    "type": "object",
                                    "properties": {
                                        "title": {"type": "string"},
                                        "description": {"type": "string"},
                                        "useful_context": {"type": "string"},
                                        "conditions_of_acceptance": {"type": "string"},
                                        "eta_hours": {"type": "number"},
                                        "depends_on": {"type": "array", "items": {"type": "string"}},
                                    },
                                    "required": ["title", "description", "useful_context", "conditions_of_acceptance"],
                                },
                            },
                        },
                        "required": ["title", "tickets"],
                    },
                },
                "risks": {"type": "array", "items": {"type": "string"}},
            },
            "required": ["epics"],
        },
        "system_msg": (
            "You are a professional project planner. Focus on actionable, specific tasks with clear acceptance "
            "criteria. Prioritize tasks by dependencies and effort."
        ),
    },
    {
        "name": "Trading Goal Template",
        "prompt_text": TRADING_PROMPT,
        "output_schema": {
            "type": "object",
            "properties": {
                "strategy": {"type": "string"},
                "risk_rules": {"type": "array", "items": {"type": "string"}},
                "milestones": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "week": {"type": "number"},
                            "goal": {"type": "string"},
                            "actions": {"type": "array", "items": {"type": "string"}},
                        },
                    },
                },
                "daily_routine": {"type": "array", "items": {"type": "string"}},
            },
            "required": ["strategy", "risk_rules", "milestones"],
        },
        "system_msg": "Focus on risk management and realistic expectations. Emphasize paper trading for beginners.",
    },
    {
        "name": "YouTube Content Goal Template",
        "prompt_text": YOUTUBE_PROMPT,
        "output_schema": {
            "type": "object",
            "properties": {
                "content_strategy": {"type": "string"},
                "video_topics": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "title": {"type": "string"},
                            "description": {"type": "string"},
                            "publish_date": {"type": "string"},
                            "keywords": {"type": "array", "items": {"type": "string"}},
                        },
                    },
                },
                "production_schedule": {"type": "array", "items": {"type": "string"}},
                "optimization_tips": {"type": "array", "items": {"type": "string"}},
            },
            "required": ["content_strategy", "video_topics", "production_schedule"],
        },
        "system_msg": (
            "Focus on consistent publishing schedule and SEO optimization. "
            "Consider audience engagement and retention."
        ),
    },
]
