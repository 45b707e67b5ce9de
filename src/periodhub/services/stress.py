"""Stress assessment scoring and recommendations."""

from dataclasses import dataclass

from ..exceptions import InvalidAnswers
from ..models.assessment import StressResult
from ..utils.i18n import Locale, pick
from ..utils.numbers import round_half_up


@dataclass(frozen=True)
class StressQuestion:
    id: str
    category: str  # 'work', 'emotion' or 'pain'
    text: dict[str, str]


QUESTIONS = [
    StressQuestion("q1", "work", {
        "en": "How often do you feel overwhelmed by your workload?",
        "zh": "您多久会感到工作量让您不堪重负？",
    }),
    StressQuestion("q2", "work", {
        "en": "How often does work pressure keep you awake at night?",
        "zh": "工作压力多久会让您夜不能寐？",
    }),
    StressQuestion("q3", "work", {
        "en": "How hard is it to take a break when your period pain starts at work?",
        "zh": "工作中经期疼痛开始时，您休息一下有多困难？",
    }),
    StressQuestion("q4", "emotion", {
        "en": "How often do you feel irritable or anxious before your period?",
        "zh": "经期前您多久会感到烦躁或焦虑？",
    }),
    StressQuestion("q5", "emotion", {
        "en": "How often do you feel you have no one to talk to about how you feel?",
        "zh": "您多久会觉得没有人可以倾诉自己的感受？",
    }),
    StressQuestion("q6", "emotion", {
        "en": "How often do small setbacks upset you for the rest of the day?",
        "zh": "小挫折多久会影响您一整天的心情？",
    }),
    StressQuestion("q7", "pain", {
        "en": "How often does pain or discomfort disturb your sleep?",
        "zh": "疼痛或不适多久会影响您的睡眠？",
    }),
    StressQuestion("q8", "pain", {
        "en": "How often do you cancel plans with friends because of period symptoms?",
        "zh": "您多久会因经期症状取消与朋友的约会？",
    }),
    StressQuestion("q9", "pain", {
        "en": "How often does pain make it hard to concentrate?",
        "zh": "疼痛多久会让您难以集中注意力？",
    }),
    StressQuestion("q10", "pain", {
        "en": "How often do you worry about the next period before it arrives?",
        "zh": "您多久会在经期来临前就开始担心？",
    }),
]

OPTIONS = [
    (0, "Never", "从不"),
    (1, "Sometimes", "有时"),
    (2, "Often", "经常"),
    (3, "Always", "总是"),
]

RECOMMENDATIONS = {
    "low": {
        "en": [
            "Maintain your current habits: your stress level is well managed.",
            "Keep tracking your mood and stress so you notice changes early.",
        ],
        "zh": [
            "保持现有习惯：您的压力管理得很好。",
            "继续记录情绪和压力，以便及早发现变化。",
        ],
    },
    "moderate": {
        "en": [
            "Set aside 10 minutes a day for breathing exercises or meditation.",
            "Protect your sleep: a regular bedtime helps your body recover.",
        ],
        "zh": [
            "每天留出10分钟进行呼吸练习或冥想。",
            "保证睡眠：规律的作息有助于身体恢复。",
        ],
    },
    "high": {
        "en": [
            "Consider talking to a counselor or doctor about how you feel.",
            "Reach out to friends, family or a support group. You don't have to manage this alone.",
        ],
        "zh": [
            "建议与心理咨询师或医生谈谈您的感受。",
            "向朋友、家人或支持小组寻求帮助，您不必独自面对。",
        ],
    },
}

ACTION_STEPS = {
    "en": [
        ("Establish Sleep Routine",
         "Go to bed and wake up at consistent times. Create a relaxing bedtime routine to improve sleep quality."),
        ("Practice Stress Relief Techniques",
         "Try deep breathing exercises, meditation, or gentle yoga for 10-15 minutes daily to manage stress."),
        ("Improve Work-Life Balance",
         "Set clear boundaries between work and personal time. Take regular breaks during work hours."),
        ("Build Emotional Support Network",
         "Connect with friends, family, or support groups. Consider talking to a mental health professional if needed."),
    ],
    "zh": [
        ("建立睡眠规律", "固定时间入睡和起床，建立放松的睡前习惯以改善睡眠质量。"),
        ("练习减压技巧", "每天尝试10-15分钟的深呼吸、冥想或温和瑜伽来管理压力。"),
        ("改善工作与生活平衡", "明确工作与个人时间的界限，工作期间定时休息。"),
        ("建立情感支持网络", "与朋友、家人或支持小组保持联系，必要时咨询心理健康专业人士。"),
    ],
}

# (question index, step index, replacement text) applied when that answer is 2 or more
ACTION_STEP_ADJUSTMENTS = {
    "en": [
        (1, 0, "Focus on improving sleep hygiene - avoid screens 1 hour before bed, keep bedroom cool and dark."),
        (0, 2, "Break large tasks into smaller ones, delegate when possible, and practice saying no to additional responsibilities."),
        (3, 1, "Practice mindfulness and emotional regulation techniques. Consider journaling your feelings."),
        (4, 3, "Join support groups or community activities that align with your interests and values."),
    ],
    "zh": [
        (1, 0, "重点改善睡眠卫生：睡前1小时远离屏幕，保持卧室凉爽和黑暗。"),
        (0, 2, "把大任务拆分成小任务，尽可能委派工作，学会拒绝额外的责任。"),
        (3, 1, "练习正念和情绪调节技巧，可以尝试把感受写成日记。"),
        (4, 3, "加入与您兴趣和价值观相符的支持小组或社区活动。"),
    ],
}


def validate_answers(answers: list[int]) -> None:
    if len(answers) != len(QUESTIONS):
        raise InvalidAnswers(f"All {len(QUESTIONS)} questions must be answered")
    if any(not 0 <= a <= 3 for a in answers):
        raise InvalidAnswers("Answers must be between 0 and 3")


def calculate_score(answers: list[int]) -> int:
    """Percentage of the maximum possible total, 0-100."""
    if not answers:
        return 0
    return round_half_up(sum(answers) / (len(answers) * 3) * 100)


def stress_level(score: int) -> str:
    if score < 25:
        return "low"
    if score < 50:
        return "moderate"
    if score < 75:
        return "high"
    return "severe"


def primary_pain_point(answers: list[int]) -> str:
    """Category with the highest per-question average; ties go to work, then emotion."""
    work = sum(answers[0:3]) / 3
    emotion = sum(answers[3:6]) / 3
    pain = sum(answers[6:10]) / 4

    if work >= emotion and work >= pain:
        return "work"
    if emotion >= pain:
        return "emotion"
    return "pain"


def radar_scores(answers: list[int]) -> dict[str, int]:
    """Five radar-chart axes on a 0-3 scale."""
    padded = list(answers) + [0] * (10 - len(answers))
    raw = {
        "work": sum(padded[0:3]) / 9 * 100,
        "sleep": padded[6] * 33.33,
        "emotion": sum(padded[3:6]) / 9 * 100,
        "physical": sum(padded[6:10]) / 12 * 100,
        "social": padded[7] * 33.33,
    }
    return {axis: min(3, round_half_up(value / 33.33)) for axis, value in raw.items()}


def recommendation_bucket(score: int) -> str:
    avg = score / 25
    if avg <= 1:
        return "low"
    if avg <= 2:
        return "moderate"
    return "high"


def action_steps(answers: list[int], locale: Locale | str = Locale.ZH) -> list[dict[str, str]]:
    steps = [list(step) for step in pick(ACTION_STEPS, locale)]
    for question_index, step_index, text in pick(ACTION_STEP_ADJUSTMENTS, locale):
        if len(answers) > question_index and answers[question_index] >= 2:
            steps[step_index][1] = text
    return [{"title": title, "description": description} for title, description in steps]


def evaluate(answers: list[int], locale: Locale | str = Locale.ZH) -> StressResult:
    """Score a complete stress assessment."""
    validate_answers(answers)
    score = calculate_score(answers)

    return StressResult(
        score=score,
        level=stress_level(score),
        primary_pain_point=primary_pain_point(answers),
        radar=radar_scores(answers),
        recommendations=pick(RECOMMENDATIONS[recommendation_bucket(score)], locale),
        action_steps=action_steps(answers, locale),
    )
