"""
Symptom impact assessment.

Three questionnaires share one recommendation builder:

- simple: pain level, duration and relief preference plus symptom and
  location checklists
- detailed: the simple questions plus cycle, pattern, timing, history,
  lifestyle and functional impact
- workplace: concentration, absenteeism and communication

The medical version blends the detailed score (70%) with the workplace
score (30%).
"""

from typing import Optional

from ..exceptions import InvalidAnswers
from ..models.assessment import (
    ImpactResult,
    RecommendationBuckets,
    SymptomAnswers,
    WorkplaceAnswers,
)
from ..utils.i18n import Locale, pick
from ..utils.numbers import clamp, round_half_up

PAIN_LEVELS = ("mild", "moderate", "severe", "very_severe")
DURATIONS = ("short", "medium", "long", "variable")
RELIEF_PREFERENCES = ("instant", "natural", "long_term", "medical")

SIMPLE_SCORES = {
    "pain_level": {"mild": 15, "moderate": 30, "severe": 45, "very_severe": 60},
    "pain_duration": {"short": 10, "medium": 20, "long": 30, "variable": 25},
    "relief_preference": {"instant": 5, "natural": 3, "long_term": 5, "medical": 10},
}

DETAILED_SCORES = {
    "pain_level": {"mild": 10, "moderate": 20, "severe": 30, "very_severe": 40},
    "pain_duration": {"short": 5, "medium": 10, "long": 15, "variable": 12},
    "functional_impact": {"minimal": 5, "moderate": 10, "significant": 15, "severe": 20},
    "cycle_pattern": {"regular": 1, "irregular": 3, "heavy": 4, "light": 2},
    "pain_pattern": {"cramping": 2, "constant": 3, "sharp": 4, "throbbing": 3},
    "pain_timing": {"before_period": 2, "first_day": 3, "during_period": 2, "after_period": 1},
}

SERIOUS_CONDITIONS = {"endometriosis", "fibroids", "adenomyosis", "pelvic_inflammatory"}

WORKPLACE_SCORES = {
    "concentration": {"none": 33, "slight": 20, "difficult": 10, "impossible": 0},
    "absenteeism": {"never": 33, "rarely": 20, "sometimes": 10, "frequently": 0},
    "communication": {"comfortable": 34, "hesitant": 15, "uncomfortable": 5, "na": 15},
}

WORKPLACE_PROFILES = {
    "en": {
        "supportive": ("Supportive Environment", [
            "Your ability to work seems largely unaffected, and you feel comfortable communicating your needs. This is a great foundation.",
        ]),
        "adaptive": ("Moderately Adaptive Environment", [
            "Your work is moderately impacted. Identifying key support measures could significantly improve your experience.",
            "Consider having an informal chat with a trusted manager or HR representative about the challenges faced.",
        ]),
        "challenging": ("Challenging Environment", [
            "Your symptoms significantly impact your work. It is important to find support.",
            "Start by documenting the impact on your work. Use our full report as a personal tool.",
            "Research your company's existing sick leave and flexible work policies.",
        ]),
    },
    "zh": {
        "supportive": ("支持性环境", [
            "您的工作能力似乎基本未受影响，并且您能自在地沟通需求。这是一个很好的基础。",
        ]),
        "adaptive": ("中度适应性环境", [
            "您的工作受到中等程度的影响。确定关键的支持措施可以显著改善您的体验。",
            "考虑与信任的经理或人力资源代表进行非正式的交谈，讨论所面临的挑战。",
        ]),
        "challenging": ("挑战性环境", [
            "您的症状严重影响了您的工作。寻求支持非常重要。",
            "首先记录症状对工作的影响。将我们的完整报告作为个人工具。",
            "研究您公司现有的病假和弹性工作政策。",
        ]),
    },
}

RECOMMENDATION_TEXTS = {
    "en": {
        "mild": {
            "immediate": ["Gentle stretching or short walks"],
            "long_term": ["Regular yoga or Pilates for light exercise"],
        },
        "moderate": {
            "immediate": [
                "Apply heating pad to abdomen or lower back",
                "Consider over-the-counter pain relievers (consult doctor first)",
            ],
            "long_term": [
                "Track your cycle to anticipate pain",
                "Explore dietary changes (like reducing caffeine and salt)",
            ],
        },
        "severe": {
            "immediate": [
                "Use heating pad and rest in comfortable position",
                "Use deep breathing or meditation techniques for acute pain",
            ],
            "long_term": [
                "Consult healthcare professional for diagnosis",
                "Discuss long-term pain management strategies with doctor",
            ],
        },
        "very_severe": {
            "immediate": [
                "Rest immediately and use heating pad for pain relief",
                "Try deep breathing or meditation for severe pain",
                "Seek immediate medical attention if pain worsens or unusual symptoms occur",
            ],
            "long_term": [
                "Schedule comprehensive gynecological examination as soon as possible",
                "Discuss prescription medications or other medical interventions",
            ],
        },
        "natural": {
            "immediate": ["Drink ginger or chamomile tea"],
            "long_term": ["Incorporate anti-inflammatory foods (like turmeric, leafy greens) into diet"],
        },
        "medical": {
            "long_term": [
                "Schedule visit with gynecologist to rule out underlying conditions like endometriosis or fibroids",
            ],
        },
        "duration": {
            "long": {
                "immediate": ["Consider continuous heat therapy or TENS device"],
                "long_term": ["Track pain duration patterns and share with doctor for long-term management plan"],
            },
            "variable": {
                "long_term": ["Keep detailed log of pain triggers and relief methods to identify patterns"],
            },
        },
        "symptoms": {
            "nausea": ["Avoid greasy foods, eat small frequent meals, consider ginger or peppermint tea"],
            "headache": ["Stay hydrated, rest in quiet dark environment"],
            "fatigue": ["Prioritize adequate sleep, supplement iron and vitamin B"],
            "back_pain": ["Use lumbar support, try gentle lower back stretches"],
            "leg_pain": ["Elevate legs while resting, gently massage leg muscles"],
            "dizziness": ["Avoid sudden standing, maintain stable blood sugar, stay hydrated"],
        },
        "location": {
            "lower_abdomen": ["Focus heat on lower abdomen, try child's pose yoga position"],
            "lower_back": ["Use lumbar heating pad, try cat-cow yoga movements"],
            "thighs": ["Gently massage inner thighs, avoid prolonged standing"],
            "pelvic": ["Try pelvic tilt exercises, consider physical therapy"],
        },
    },
    "zh": {
        "mild": {
            "immediate": ["温和的伸展运动或短途散步"],
            "long_term": ["定期进行瑜伽或普拉提等轻度运动"],
        },
        "moderate": {
            "immediate": ["在腹部或下背部加热敷垫", "考虑使用非处方止痛药（请先咨询医生）"],
            "long_term": ["追踪您的周期以预测疼痛", "探索饮食调整（如减少咖啡因和盐分）"],
        },
        "severe": {
            "immediate": ["使用热敷垫并在舒适的位置休息", "使用深呼吸或冥想技巧应对急性疼痛"],
            "long_term": ["咨询医疗保健专业人员进行诊断", "与医生讨论长期疼痛管理策略"],
        },
        "very_severe": {
            "immediate": [
                "立即休息，使用热敷垫缓解疼痛",
                "尝试深呼吸或冥想技巧应对剧烈疼痛",
                "如果疼痛持续加剧或伴有异常症状，请立即就医",
            ],
            "long_term": ["尽快咨询妇科医生进行全面检查", "讨论处方药物或其他医疗干预措施"],
        },
        "natural": {
            "immediate": ["饮用姜茶或甘菊茶"],
            "long_term": ["将抗炎食物（如姜黄、绿叶蔬菜）纳入饮食"],
        },
        "medical": {
            "long_term": ["预约妇科医生，以排除子宫内膜异位症或肌瘤等潜在疾病"],
        },
        "duration": {
            "long": {
                "immediate": ["考虑使用持续性热敷或TENS设备"],
                "long_term": ["记录疼痛持续时间模式，与医生分享以制定长期管理计划"],
            },
            "variable": {
                "long_term": ["详细记录每次疼痛的触发因素和缓解方法，寻找规律"],
            },
        },
        "symptoms": {
            "nausea": ["避免油腻食物，少量多餐，考虑姜片或薄荷茶"],
            "headache": ["保持充足水分，在安静昏暗的环境中休息"],
            "fatigue": ["优先保证充足睡眠，适当补充铁质和维生素B"],
            "back_pain": ["使用腰部支撑垫，尝试针对下背部的温和拉伸"],
            "leg_pain": ["抬高双腿休息，轻柔按摩腿部肌肉"],
            "dizziness": ["避免突然站立，保持血糖稳定，及时补充水分"],
        },
        "location": {
            "lower_abdomen": ["重点在下腹部使用热敷，尝试胎儿式瑜伽姿势"],
            "lower_back": ["使用腰部热敷垫，尝试猫牛式瑜伽动作"],
            "thighs": ["轻柔按摩大腿内侧，避免长时间站立"],
            "pelvic": ["尝试骨盆倾斜运动，考虑物理治疗"],
        },
    },
}

PAIN_LEVEL_LABELS = {
    "en": {
        "mild": "Mild (1-3/10): It's noticeable but doesn't stop me from my daily activities.",
        "moderate": "Moderate (4-6/10): It's disruptive and affects my focus and productivity. I might need over-the-counter pain relief.",
        "severe": "Severe (7-8/10): The pain is strong enough that I need to lie down or stop what I'm doing. It's difficult to function.",
        "very_severe": "Very Severe (9-10/10): The pain is debilitating and overwhelming. I'm often bedridden and may experience other symptoms like nausea or fainting.",
    },
    "zh": {
        "mild": "轻度 (1-3/10): 能感觉到，但不影响我的日常活动。",
        "moderate": "中度 (4-6/10): 疼痛会干扰我，影响我的注意力和工作效率。可能需要非处方止痛药。",
        "severe": "重度 (7-8/10): 疼痛很强烈，我需要躺下或停止正在做的事情，难以正常活动。",
        "very_severe": "极重度 (9-10/10): 疼痛使人衰弱，难以忍受。我经常卧床不起，并可能伴有恶心或昏厥等其他症状。",
    },
}

DURATION_LABELS = {
    "en": {
        "short": "A few hours on the first day.",
        "medium": "It's significant for the first 1-2 days of my period.",
        "long": "It persists for 3 or more days.",
        "variable": "It's unpredictable and varies greatly from cycle to cycle.",
    },
    "zh": {
        "short": "在第一天持续几个小时。",
        "medium": "在经期的前1-2天内疼痛比较严重。",
        "long": "持续3天或更长时间。",
        "variable": "疼痛不可预测，每个周期的差异很大。",
    },
}

SUMMARY_PREFIXES = {
    "en": ("Pain Level", "Duration", "Workplace Impact Score"),
    "zh": ("疼痛程度", "持续时间", "职场影响评分"),
}


def _locale_key(locale: Locale | str) -> str:
    return "en" if str(getattr(locale, "value", locale)) == "en" else "zh"


def _dedupe(items: list[str]) -> list[str]:
    return list(dict.fromkeys(items))


def is_severe(answers: SymptomAnswers) -> bool:
    return answers.pain_level in ("severe", "very_severe")


def build_recommendations(
    answers: SymptomAnswers,
    score: int,
    locale: Locale | str = Locale.ZH,
) -> ImpactResult:
    """Turn questionnaire answers into summary lines and recommendation buckets."""
    loc = _locale_key(locale)
    texts = RECOMMENDATION_TEXTS[loc]
    pain_prefix, duration_prefix, _ = SUMMARY_PREFIXES[loc]

    summary = []
    if answers.pain_level in PAIN_LEVEL_LABELS[loc]:
        summary.append(f"{pain_prefix}: {PAIN_LEVEL_LABELS[loc][answers.pain_level]}")
    if answers.pain_duration in DURATION_LABELS[loc]:
        summary.append(f"{duration_prefix}: {DURATION_LABELS[loc][answers.pain_duration]}")

    immediate: list[str] = []
    long_term: list[str] = []

    bucket = texts.get(answers.pain_level) if answers.pain_level in PAIN_LEVELS else None
    if bucket:
        immediate.extend(bucket["immediate"])
        long_term.extend(bucket["long_term"])

    duration_texts = texts["duration"]
    if answers.pain_duration == "long":
        immediate.extend(duration_texts["long"]["immediate"])
        long_term.extend(duration_texts["long"]["long_term"])
    elif answers.pain_duration == "variable":
        long_term.extend(duration_texts["variable"]["long_term"])

    for symptom in answers.accompanying_symptoms:
        immediate.extend(texts["symptoms"].get(symptom, []))

    for location in answers.pain_location:
        immediate.extend(texts["location"].get(location, []))

    if answers.relief_preference == "natural":
        immediate = texts["natural"]["immediate"] + immediate
        long_term.extend(texts["natural"]["long_term"])
    if answers.relief_preference == "medical":
        long_term = texts["medical"]["long_term"] + long_term

    return ImpactResult(
        score=score,
        is_severe=is_severe(answers),
        summary=summary,
        recommendations=RecommendationBuckets(
            immediate=_dedupe(immediate),
            long_term=_dedupe(long_term),
        ),
    )


def calculate_simple_impact(answers: SymptomAnswers, locale: Locale | str = Locale.ZH) -> ImpactResult:
    """Score the three-question symptom assessment, 0-100."""
    if answers.relief_preference is None:
        raise InvalidAnswers("Relief preference is required")
    score = 0.0
    for field_name, table in SIMPLE_SCORES.items():
        score += table[getattr(answers, field_name)]
    score += min(len(answers.accompanying_symptoms) * 2, 10)
    score += min(len(answers.pain_location), 5)

    score = clamp(round_half_up(score), 0, 100)
    return build_recommendations(answers, int(score), locale)


def calculate_detailed_impact(answers: SymptomAnswers, locale: Locale | str = Locale.ZH) -> ImpactResult:
    """Score the detailed symptom assessment, 0-100."""
    score = 0.0
    for field_name, table in DETAILED_SCORES.items():
        score += table.get(getattr(answers, field_name) or "", 0)

    history = answers.medical_history
    if SERIOUS_CONDITIONS.intersection(history):
        score += 5
    elif history and "none" not in history:
        score += 2

    score += min(len(answers.accompanying_symptoms) * 0.5, 3)
    score += min(len(answers.pain_location) * 0.5, 2)
    if "none" not in answers.lifestyle_factors:
        score += min(len(answers.lifestyle_factors) * 0.4, 2)

    score = clamp(round_half_up(score), 0, 100)
    return build_recommendations(answers, int(score), locale)


def workplace_profile(score: int) -> str:
    if score > 75:
        return "supportive"
    if score > 40:
        return "adaptive"
    return "challenging"


def calculate_workplace_impact(answers: WorkplaceAnswers, locale: Locale | str = Locale.ZH) -> ImpactResult:
    """Score how well the workplace accommodates symptoms; higher is better."""
    score = sum(
        table[getattr(answers, field_name)]
        for field_name, table in WORKPLACE_SCORES.items()
    )
    profile, suggestions = WORKPLACE_PROFILES[_locale_key(locale)][workplace_profile(score)]
    return ImpactResult(score=score, profile=profile, suggestions=list(suggestions))


def calculate_medical_impact(
    answers: SymptomAnswers,
    workplace: WorkplaceAnswers,
    locale: Locale | str = Locale.ZH,
) -> ImpactResult:
    """Blend the detailed symptom score (70%) with the workplace score (30%)."""
    symptom_result = calculate_detailed_impact(answers, locale)
    workplace_result = calculate_workplace_impact(workplace, locale)

    total = round_half_up(symptom_result.score * 0.7 + workplace_result.score * 0.3)
    _, _, workplace_prefix = SUMMARY_PREFIXES[_locale_key(locale)]

    return ImpactResult(
        score=total,
        is_severe=symptom_result.is_severe,
        summary=symptom_result.summary + [f"{workplace_prefix}: {workplace_result.score}/100"],
        recommendations=RecommendationBuckets(
            immediate=_dedupe(symptom_result.recommendations.immediate),
            long_term=_dedupe(symptom_result.recommendations.long_term + workplace_result.suggestions),
        ),
        profile=workplace_result.profile,
        suggestions=workplace_result.suggestions,
    )


def option_labels(locale: Locale | str) -> dict[str, dict[str, str]]:
    """Labels for the questionnaire select options."""
    loc = _locale_key(locale)
    return {
        "pain_level": PAIN_LEVEL_LABELS[loc],
        "pain_duration": DURATION_LABELS[loc],
        "relief_preference": pick({
            "en": {"instant": "Fast relief", "natural": "Natural remedies",
                   "long_term": "Long-term management", "medical": "Medical treatment"},
            "zh": {"instant": "快速缓解", "natural": "自然疗法",
                   "long_term": "长期管理", "medical": "医疗方案"},
        }, loc),
    }


ACCOMPANYING_SYMPTOMS = ("nausea", "headache", "fatigue", "back_pain", "leg_pain", "dizziness")
PAIN_LOCATIONS = ("lower_abdomen", "lower_back", "thighs", "pelvic")
MEDICAL_HISTORY = ("none", "endometriosis", "fibroids", "adenomyosis", "pelvic_inflammatory", "other")
LIFESTYLE_FACTORS = ("none", "high_stress", "poor_sleep", "low_activity", "high_caffeine", "smoking")

DETAILED_CHOICES = {
    "functional_impact": tuple(DETAILED_SCORES["functional_impact"]),
    "cycle_pattern": tuple(DETAILED_SCORES["cycle_pattern"]),
    "pain_pattern": tuple(DETAILED_SCORES["pain_pattern"]),
    "pain_timing": tuple(DETAILED_SCORES["pain_timing"]),
}

WORKPLACE_CHOICES = {name: tuple(table) for name, table in WORKPLACE_SCORES.items()}

MODES = ("simple", "detailed", "workplace", "medical")


def assess(
    mode: str,
    answers: Optional[SymptomAnswers],
    workplace: Optional[WorkplaceAnswers],
    locale: Locale | str = Locale.ZH,
) -> ImpactResult:
    """
    Run the questionnaire variant named by ``mode``.

    Raises InvalidAnswers when the answers that mode scores are missing.
    """
    if mode not in MODES:
        raise InvalidAnswers(f"Unknown assessment mode: {mode}")
    if mode != "workplace" and answers is None:
        raise InvalidAnswers("Symptom answers are required")
    if mode in ("workplace", "medical") and workplace is None:
        raise InvalidAnswers("Workplace answers are required")

    if mode == "simple":
        return calculate_simple_impact(answers, locale)
    if mode == "detailed":
        return calculate_detailed_impact(answers, locale)
    if mode == "workplace":
        return calculate_workplace_impact(workplace, locale)
    return calculate_medical_impact(answers, workplace, locale)
