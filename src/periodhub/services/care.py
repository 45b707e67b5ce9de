"""When to seek medical care: pain scale, red-flag checklist and decision tree."""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, Optional

from ..exceptions import InvalidAnswers
from ..models.assessment import CareAssessment, PainAssessment, SymptomRiskAnalysis
from ..utils.i18n import Locale

logger = logging.getLogger(__name__)

RISK_ORDER = ["low", "medium", "high", "emergency"]
RISK_WEIGHTS = {"emergency": 10, "high": 5, "medium": 2}


def _loc(locale: Locale | str) -> int:
    return 0 if str(getattr(locale, "value", locale)) == "en" else 1


# Pain scale

PAIN_RECOMMENDATIONS = {
    "none": [
        ("Continue monitoring your symptoms", "继续观察您的症状"),
        ("Maintain healthy lifestyle habits", "保持健康的生活习惯"),
    ],
    "mild": [
        ("Try gentle heat therapy or warm baths", "尝试温和的热敷或温水浴"),
        ("Consider light exercise or stretching", "可以做些轻度运动或拉伸"),
        ("Monitor if pain increases", "留意疼痛是否加重"),
    ],
    "moderate": [
        ("Consider over-the-counter pain relief", "可考虑使用非处方止痛药"),
        ("Apply heat or cold therapy", "使用热敷或冷敷"),
        ("Rest and avoid strenuous activities", "注意休息，避免剧烈活动"),
        ("Track your symptoms", "记录您的症状"),
    ],
    "severe": [
        ("Consider seeing a healthcare provider", "建议就诊咨询医生"),
        ("Use prescribed or stronger pain medication", "在医生指导下使用处方或更强效的止痛药"),
        ("Apply heat therapy", "使用热敷"),
        ("Rest and limit activities", "休息并减少活动"),
    ],
    "extreme": [
        ("Seek immediate medical attention", "立即就医"),
        ("Consider emergency care if pain is sudden", "如疼痛突然发作，请考虑急诊"),
        ("Do not delay medical consultation", "不要延误就医"),
        ("Have someone accompany you to medical care", "请他人陪同就医"),
    ],
}


def pain_severity(pain_level: int) -> str:
    if pain_level == 0:
        return "none"
    if pain_level <= 3:
        return "mild"
    if pain_level <= 6:
        return "moderate"
    if pain_level <= 8:
        return "severe"
    return "extreme"


def pain_urgency(pain_level: int) -> str:
    if pain_level >= 9:
        return "immediate"
    if pain_level >= 7:
        return "within_week"
    if pain_level >= 4:
        return "routine"
    return "monitor"


def assess_pain(pain_level: int, locale: Locale | str = Locale.ZH) -> PainAssessment:
    """Assess a 0-10 pain scale reading."""
    if not 0 <= pain_level <= 10:
        raise InvalidAnswers("Pain level must be between 0 and 10")
    severity = pain_severity(pain_level)
    lang = _loc(locale)
    return PainAssessment(
        pain_level=pain_level,
        severity=severity,
        should_see_doctor=pain_level >= 7,
        urgency=pain_urgency(pain_level),
        recommendations=[texts[lang] for texts in PAIN_RECOMMENDATIONS[severity]],
    )


# Red-flag checklist

@dataclass(frozen=True)
class RedFlag:
    id: str
    risk: str
    category: str
    text: tuple[str, str]


RED_FLAGS = [
    RedFlag("s1", "emergency", "pain", (
        "Sudden, severe pelvic pain unlike any period pain before",
        "突发的、与以往经痛完全不同的剧烈盆腔疼痛",
    )),
    RedFlag("s2", "emergency", "bleeding", (
        "Soaking through a pad or tampon every hour for several hours",
        "连续数小时每小时浸透一片卫生巾或卫生棉条",
    )),
    RedFlag("s3", "emergency", "systemic", (
        "Fever, fainting or dizziness together with pelvic pain",
        "盆腔疼痛伴随发烧、晕厥或头晕",
    )),
    RedFlag("s4", "high", "pain", (
        "Pain that painkillers no longer relieve",
        "止痛药已无法缓解的疼痛",
    )),
    RedFlag("s5", "high", "pattern", (
        "Period pain that has become worse over the last few cycles",
        "近几个周期经痛明显加重",
    )),
    RedFlag("s6", "high", "pattern", (
        "Pain outside your period, during sex or when using the toilet",
        "非经期、性生活或排便排尿时出现疼痛",
    )),
    RedFlag("s7", "medium", "pain", (
        "Pain that makes you miss school or work every month",
        "每个月都因疼痛缺课或缺勤",
    )),
]

RED_FLAGS_BY_ID = {flag.id: flag for flag in RED_FLAGS}

CATEGORY_RECOMMENDATIONS = {
    "pain": [
        ("Track pain intensity and patterns", "记录疼痛强度和规律"),
        ("Try heat therapy for pain relief", "尝试热敷缓解疼痛"),
        ("Consider gentle exercise when possible", "条件允许时进行温和运动"),
    ],
    "bleeding": [
        ("Monitor bleeding patterns and flow", "观察出血规律和经量"),
        ("Keep track of cycle changes", "记录周期变化"),
        ("Maintain iron-rich diet", "保持富含铁的饮食"),
    ],
    "systemic": [
        ("Monitor overall health symptoms", "关注全身健康状况"),
        ("Ensure adequate rest and hydration", "保证充足休息和水分"),
        ("Consider stress management techniques", "尝试压力管理技巧"),
    ],
    "pattern": [
        ("Keep detailed menstrual cycle diary", "详细记录月经周期日记"),
        ("Track symptom patterns over time", "长期追踪症状规律"),
        ("Note any triggers or patterns", "留意诱因和规律"),
    ],
}

GENERAL_ADVICE = {
    "emergency": [
        ("Seek immediate medical attention", "立即就医"),
        ("Do not delay emergency care", "不要延误急诊"),
    ],
    "high": [
        ("Schedule urgent medical consultation", "尽快预约就诊"),
        ("Monitor symptoms closely", "密切观察症状"),
    ],
    "other": [
        ("Continue regular health monitoring", "继续定期关注健康状况"),
        ("Maintain healthy lifestyle habits", "保持健康的生活习惯"),
    ],
}


def _selected_flags(symptom_ids: Iterable[str]) -> list[RedFlag]:
    ids = list(dict.fromkeys(symptom_ids))
    unknown = [s for s in ids if s not in RED_FLAGS_BY_ID]
    if unknown:
        raise InvalidAnswers(f"Unknown symptom ids: {', '.join(unknown)}")
    return [RED_FLAGS_BY_ID[s] for s in ids]


def risk_score(symptom_ids: Iterable[str]) -> int:
    return sum(RISK_WEIGHTS.get(flag.risk, 1) for flag in _selected_flags(symptom_ids))


def risk_level_from_score(score: int) -> str:
    if score >= 10:
        return "emergency"
    if score >= 8:
        return "high"
    if score >= 4:
        return "medium"
    return "low"


def checklist_risk_level(flags: list[RedFlag]) -> str:
    """Risk level by counting the checked red flags of each weight."""
    counts = Counter(flag.risk for flag in flags)
    if counts["emergency"] > 0:
        return "emergency"
    if counts["high"] >= 2 or (counts["high"] >= 1 and counts["medium"] >= 2):
        return "high"
    if counts["high"] == 1 or counts["medium"] >= 2:
        return "medium"
    return "low"


def symptom_recommendations(flags: list[RedFlag], locale: Locale | str = Locale.ZH) -> tuple[list[str], list[str]]:
    """Category recommendations plus general advice for the checked flags."""
    lang = _loc(locale)
    category_recs: list[str] = []
    for flag in flags:
        category_recs.extend(texts[lang] for texts in CATEGORY_RECOMMENDATIONS[flag.category])

    if any(f.risk == "emergency" for f in flags):
        general_key = "emergency"
    elif any(f.risk == "high" for f in flags):
        general_key = "high"
    else:
        general_key = "other"
    general = [texts[lang] for texts in GENERAL_ADVICE[general_key]]
    return list(dict.fromkeys(category_recs)), general


def analyze_symptoms(symptom_ids: Iterable[str], locale: Locale | str = Locale.ZH) -> SymptomRiskAnalysis:
    """Analyze a red-flag checklist."""
    flags = _selected_flags(symptom_ids)
    recommendations, general = symptom_recommendations(flags, locale)
    return SymptomRiskAnalysis(
        risk_level=checklist_risk_level(flags),
        risk_score=sum(RISK_WEIGHTS.get(f.risk, 1) for f in flags),
        selected=[f.id for f in flags],
        recommendations=recommendations,
        general_advice=general,
    )


# Decision tree

@dataclass
class DecisionNode:
    """A yes/no question, or a result leaf when ``result`` is set."""
    id: str
    question: Optional[tuple[str, str]] = None
    yes: Optional["DecisionNode"] = None
    no: Optional["DecisionNode"] = None
    result: Optional[dict] = None

    @property
    def is_leaf(self) -> bool:
        return self.result is not None


def _result(node_id: str, urgency: str, title: tuple[str, str], text: tuple[str, str]) -> DecisionNode:
    return DecisionNode(id=node_id, result={"urgency": urgency, "title": title, "text": text})


def _routine_result() -> DecisionNode:
    return _result(
        "routine_result", "routine",
        ("Book a routine appointment", "预约常规门诊"),
        ("Mention your symptoms at your next gynecology visit and keep a pain diary until then.",
         "在下次妇科就诊时说明症状，在此之前坚持记录疼痛日记。"),
    )


def build_decision_tree() -> DecisionNode:
    return DecisionNode(
        id="start",
        question=("Is your period pain stopping you from doing normal daily activities?",
                  "经期疼痛是否影响您进行正常的日常活动？"),
        yes=DecisionNode(
            id="severe_pain",
            question=("Is the pain sudden and severe, or accompanied by fever, fainting or heavy bleeding?",
                      "疼痛是否突然剧烈，或伴有发烧、晕厥或大量出血？"),
            yes=_result(
                "emergency_result", "immediate",
                ("Seek emergency care now", "请立即就医"),
                ("These symptoms can indicate a condition that needs urgent treatment. Go to an emergency department.",
                 "这些症状可能提示需要紧急处理的情况，请前往急诊。"),
            ),
            no=DecisionNode(
                id="duration_check",
                question=("Has the pain lasted more than 3 days or been getting worse over several cycles?",
                          "疼痛是否持续超过3天，或在几个周期内逐渐加重？"),
                yes=_result(
                    "urgent_result", "within_week",
                    ("See a doctor within a week", "一周内就诊"),
                    ("Persistent or worsening pain should be checked for conditions such as endometriosis.",
                     "持续或加重的疼痛需要排查子宫内膜异位症等疾病。"),
                ),
                no=_routine_result(),
            ),
        ),
        no=DecisionNode(
            id="pattern_check",
            question=("Has your pain pattern changed recently, or does it occur outside your period?",
                      "您的疼痛规律最近是否有变化，或在非经期出现？"),
            yes=_routine_result(),
            no=_result(
                "observe_result", "monitor",
                ("Self-care and observation", "自我护理并观察"),
                ("Your pain sounds manageable with self-care. Keep tracking it and revisit if anything changes.",
                 "您的疼痛可以通过自我护理来管理。请继续记录，如有变化再评估。"),
            ),
        ),
    )


DECISION_TREE = build_decision_tree()


def find_node(node_id: str, tree: DecisionNode = DECISION_TREE) -> Optional[DecisionNode]:
    """Depth-first search for a node, checking the yes branch first."""
    if tree.id == node_id:
        return tree
    for child in (tree.yes, tree.no):
        if child is not None:
            found = find_node(node_id, child)
            if found is not None:
                return found
    return None


def all_results(tree: DecisionNode = DECISION_TREE) -> list[DecisionNode]:
    """Every result leaf, in yes-first order."""
    if tree.is_leaf:
        return [tree]
    results = []
    for child in (tree.yes, tree.no):
        if child is not None:
            results.extend(all_results(child))
    return results


def tree_depth(tree: DecisionNode = DECISION_TREE) -> int:
    if tree.is_leaf:
        return 0
    return 1 + max(tree_depth(child) for child in (tree.yes, tree.no) if child is not None)


def validate_tree(tree: DecisionNode = DECISION_TREE) -> list[str]:
    """Structural problems in the tree; an empty list means valid."""
    errors: list[str] = []

    def _check(node: DecisionNode) -> None:
        if not node.id:
            errors.append("Node without id")
        if node.is_leaf:
            if not node.result.get("title") or not node.result.get("urgency"):
                errors.append(f"Result node {node.id} is missing title or urgency")
            if node.yes or node.no:
                errors.append(f"Result node {node.id} has children")
            return
        if not node.question:
            errors.append(f"Question node {node.id} has no question")
        if node.yes is None or node.no is None:
            errors.append(f"Question node {node.id} needs both yes and no branches")
            return
        _check(node.yes)
        _check(node.no)

    _check(tree)
    return errors


def walk_tree(answers: list[bool], tree: DecisionNode = DECISION_TREE) -> tuple[DecisionNode, list[str]]:
    """
    Follow yes/no answers from the root.

    Returns the node reached and the ids visited along the way. Answers
    beyond a leaf are rejected.
    """
    node = tree
    path = [node.id]
    for answer in answers:
        if node.is_leaf:
            raise InvalidAnswers("Too many answers for the decision tree")
        node = node.yes if answer else node.no
        path.append(node.id)
    return node, path


# Comprehensive assessment

SUMMARY_TITLES = {
    "emergency": (("Emergency Situation - Seek Immediate Care", "紧急情况：请立即就医"), "critical"),
    "high": (("High Risk - Schedule Urgent Appointment", "高风险：请尽快预约就诊"), "high"),
    "medium": (("Moderate Concern - Consider Medical Consultation", "中度关注：建议咨询医生"), "medium"),
    "low": (("Low Risk - Continue Monitoring", "低风险：继续观察"), "low"),
}

FINAL_URGENCY = {"emergency": "immediate", "high": "within_week", "medium": "routine"}


def pain_risk_index(pain_level: int) -> int:
    if pain_level >= 8:
        return 3
    if pain_level >= 6:
        return 2
    if pain_level >= 4:
        return 1
    return 0


def comprehensive_assessment(
    pain_level: int,
    symptom_ids: Iterable[str],
    locale: Locale | str = Locale.ZH,
) -> CareAssessment:
    """Combine the pain scale with the red-flag score, taking the higher risk."""
    pain = assess_pain(pain_level, locale)
    flags = _selected_flags(symptom_ids)
    score = sum(RISK_WEIGHTS.get(f.risk, 1) for f in flags)
    symptom_level = risk_level_from_score(score)
    recommendations, general = symptom_recommendations(flags, locale)

    final_risk = RISK_ORDER[max(pain_risk_index(pain_level), RISK_ORDER.index(symptom_level))]
    urgency = FINAL_URGENCY.get(final_risk, pain.urgency)
    (title, priority) = SUMMARY_TITLES[final_risk]

    logger.debug(f"Care assessment: pain={pain_level} score={score} final={final_risk}")

    return CareAssessment(
        pain=pain,
        symptoms=SymptomRiskAnalysis(
            risk_level=symptom_level,
            risk_score=score,
            selected=[f.id for f in flags],
            recommendations=recommendations,
            general_advice=general,
        ),
        final_risk=final_risk,
        urgency=urgency,
        title=title[_loc(locale)],
        priority=priority,
    )


@dataclass
class AssessmentStatistics:
    total: int = 0
    average_pain: Optional[float] = None
    most_common_risk: Optional[str] = None
    risk_counts: dict[str, int] = field(default_factory=dict)


def assessment_statistics(assessments: list[CareAssessment]) -> AssessmentStatistics:
    """Summary of stored care assessments."""
    if not assessments:
        return AssessmentStatistics()
    counts = Counter(a.final_risk for a in assessments)
    average = sum(a.pain.pain_level for a in assessments) / len(assessments)
    return AssessmentStatistics(
        total=len(assessments),
        average_pain=round(average, 1),
        most_common_risk=counts.most_common(1)[0][0],
        risk_counts=dict(counts),
    )
