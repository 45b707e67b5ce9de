"""PHQ-9 depression screening."""

from dataclasses import dataclass
from typing import Iterable

from ..exceptions import InvalidAnswers
from ..models.assessment import PHQ9Answer, PHQ9Result
from ..utils.i18n import Locale


@dataclass(frozen=True)
class PHQ9Question:
    id: int
    text: str
    text_zh: str

    def label(self, locale: Locale | str) -> str:
        return self.text_zh if str(getattr(locale, "value", locale)) == "zh" else self.text


QUESTIONS = [
    PHQ9Question(1, "Little interest or pleasure in doing things", "做事时提不起劲或没有兴趣"),
    PHQ9Question(2, "Feeling down, depressed, or hopeless", "感到心情低落、沮丧或绝望"),
    PHQ9Question(3, "Trouble falling or staying asleep, or sleeping too much", "入睡困难、睡不安稳或睡眠过多"),
    PHQ9Question(4, "Feeling tired or having little energy", "感觉疲倦或没有活力"),
    PHQ9Question(5, "Poor appetite or overeating", "食欲不振或吃太多"),
    PHQ9Question(6, "Feeling bad about yourself or that you are a failure", "觉得自己很糟或觉得自己很失败"),
    PHQ9Question(7, "Trouble concentrating on things", "对事物专注有困难"),
    PHQ9Question(8, "Moving or speaking slowly, or being fidgety or restless", "动作或说话速度缓慢，或坐立不安"),
    PHQ9Question(9, "Thoughts that you would be better off dead", "有不如死掉或伤害自己的念头"),
]

OPTIONS = [
    (0, "Not at all", "完全没有"),
    (1, "Several days", "有几天"),
    (2, "More than half the days", "超过一半的日子"),
    (3, "Nearly every day", "几乎每天"),
]

SEVERITY_LABELS = {
    "none": ("No depression symptoms", "无抑郁症状"),
    "minimal": ("Minimal depression symptoms", "轻微抑郁症状"),
    "mild": ("Mild depression", "轻度抑郁"),
    "moderate": ("Moderate depression", "中度抑郁"),
    "moderately-severe": ("Moderately severe depression", "中重度抑郁"),
    "severe": ("Severe depression", "重度抑郁"),
}

RECOMMENDATIONS = {
    "none": {
        "en": "No depression symptoms detected. Continue maintaining good mental health habits.",
        "zh": "未检测到抑郁症状。继续保持良好的心理健康习惯。",
    },
    "minimal": {
        "en": "Minimal depression symptoms. Consider stress management techniques and regular exercise.",
        "zh": "轻微抑郁症状。建议采用压力管理技巧和定期运动。",
    },
    "mild": {
        "en": "Mild depression. Consider talking to a mental health professional for support.",
        "zh": "轻度抑郁。建议咨询心理健康专业人士寻求支持。",
    },
    "moderate": {
        "en": "Moderate depression. We recommend consulting with a mental health professional.",
        "zh": "中度抑郁。我们建议咨询心理健康专业人士。",
    },
    "moderately-severe": {
        "en": "Moderately severe depression. Please seek professional help as soon as possible.",
        "zh": "中重度抑郁。请尽快寻求专业帮助。",
    },
    "severe": {
        "en": "Severe depression. Please seek immediate professional help. If you have thoughts of self-harm, contact emergency services.",
        "zh": "重度抑郁。请立即寻求专业帮助。如果有自我伤害的念头，请联系紧急服务。",
    },
}

PROFESSIONAL_HELP = {
    "en": "We recommend consulting a mental health professional",
    "zh": "建议咨询心理健康专业人士",
}
SELF_HARM_HELP = {
    "en": "If you have thoughts of self-harm, please seek professional help immediately",
    "zh": "如有自我伤害想法，请立即寻求专业帮助",
}

PROFESSIONAL_HELP_SEVERITIES = {"moderate", "moderately-severe", "severe"}


def severity(total_score: int) -> str:
    """Map a total score (0-27) to its severity band."""
    if total_score <= 4:
        return "none"
    if total_score <= 9:
        return "minimal"
    if total_score <= 14:
        return "mild"
    if total_score <= 19:
        return "moderate"
    if total_score <= 24:
        return "moderately-severe"
    return "severe"


def risk_level(severity_key: str) -> str:
    if severity_key in ("none", "minimal"):
        return "low"
    if severity_key == "mild":
        return "moderate"
    if severity_key in ("moderate", "moderately-severe"):
        return "high"
    return "severe"


def validate_answers(answers: Iterable[PHQ9Answer]) -> bool:
    """Exactly one answer per question, each scored 0-3."""
    answers = list(answers)
    if len(answers) != len(QUESTIONS):
        return False
    ids = sorted(a.question_id for a in answers)
    return ids == [q.id for q in QUESTIONS] and all(0 <= a.score <= 3 for a in answers)


def parse_answers(raw: dict) -> list[PHQ9Answer]:
    """Build answers from a ``{"q1": "2", ...}`` style mapping."""
    answers = []
    for question in QUESTIONS:
        value = raw.get(f"q{question.id}")
        if value in (None, ""):
            continue
        try:
            answers.append(PHQ9Answer(question_id=question.id, score=int(value)))
        except ValueError as e:
            raise InvalidAnswers(f"Answer to question {question.id} must be a number") from e
    return answers


def evaluate(answers: list[PHQ9Answer], locale: Locale | str = Locale.ZH) -> PHQ9Result:
    """Score a complete set of answers."""
    if not validate_answers(answers):
        raise InvalidAnswers("All 9 questions must be answered with a score from 0 to 3")

    loc = str(getattr(locale, "value", locale))
    lang = 0 if loc == "en" else 1

    total = sum(a.score for a in answers)
    level = severity(total)
    q9 = next(a for a in answers if a.question_id == 9)
    self_harm = q9.score >= 2
    needs_help = level in PROFESSIONAL_HELP_SEVERITIES

    recommendations = []
    if level != "none":
        recommendations.append(RECOMMENDATIONS[level][loc if loc in ("en", "zh") else "zh"])
    if needs_help:
        recommendations.append(PROFESSIONAL_HELP["en" if lang == 0 else "zh"])
    if self_harm:
        recommendations.append(SELF_HARM_HELP["en" if lang == 0 else "zh"])

    return PHQ9Result(
        total_score=total,
        severity=level,
        severity_label=SEVERITY_LABELS[level][lang],
        risk_level=risk_level(level),
        requires_professional_help=needs_help,
        has_thoughts_of_self_harm=self_harm,
        recommendations=recommendations,
        answers=sorted(answers, key=lambda a: a.question_id),
    )
