"""Professional advice keyed on an impact score."""

from dataclasses import dataclass, field

from ..utils.i18n import Locale

SIMPLIFIED_LIMIT = 5

LEVEL_LABELS = {
    "mild": ("Mild Impact", "轻度影响"),
    "moderate": ("Moderate Impact", "中度影响"),
    "severe": ("Severe Impact", "重度影响"),
    "critical": ("Critical Impact", "严重影响"),
}

LEVEL_COLORS = {
    "mild": "green",
    "moderate": "yellow",
    "severe": "orange",
    "critical": "red",
}

ADVICE = {
    "mild": {
        "en": {
            "workplace": [
                "Maintain regular work schedule and avoid overwork",
                "Adjust work intensity before and during menstruation",
                "Keep emergency medication and heating pads at office",
                "Communicate with colleagues and seek understanding when needed",
            ],
            "health": [
                "Maintain moderate exercise like yoga and walking",
                "Balance diet, reduce caffeine and salt intake",
                "Ensure adequate sleep, 7-8 hours per night",
                "Learn relaxation techniques like deep breathing and meditation",
            ],
            "medical": [
                "Over-the-counter pain relievers (like ibuprofen) may help",
                "Try heat therapy for pain relief",
                "Consult doctor if symptoms worsen",
                "Keep symptom diary to help with diagnosis",
            ],
        },
        "zh": {
            "workplace": [
                "保持规律的工作作息，避免过度劳累",
                "在经期前后适当调整工作强度",
                "准备应急药物和热敷包在办公室",
                "与同事建立良好沟通，必要时寻求理解",
            ],
            "health": [
                "保持适度运动，如瑜伽、散步等",
                "注意饮食均衡，减少咖啡因和盐分摄入",
                "保证充足睡眠，每晚7-8小时",
                "学习放松技巧，如深呼吸、冥想",
            ],
            "medical": [
                "可以使用非处方止痛药（如布洛芬）",
                "尝试热敷缓解疼痛",
                "如症状持续加重，建议咨询医生",
                "记录症状日记，帮助医生诊断",
            ],
        },
    },
    "moderate": {
        "en": {
            "workplace": [
                "Consider flexible work hours or remote work options",
                "Take sick leave when symptoms are severe",
                "Adjust work schedule to avoid important meetings during menstruation",
                "Communicate with supervisor for work arrangement support",
                "Prepare comprehensive emergency kit (medication, heating pads, spare clothes)",
            ],
            "health": [
                "Establish regular exercise routine, 3-4 times per week",
                "Adopt anti-inflammatory diet, increase omega-3 intake",
                "Consider vitamin B and magnesium supplements",
                "Learn stress management techniques to reduce anxiety",
                "Maintain healthy weight, avoid obesity or being underweight",
            ],
            "medical": [
                "Consult gynecologist for comprehensive examination",
                "Prescription medication may be needed",
                "Consider Holistic Health therapy or acupuncture",
                "Regular follow-ups to monitor symptom changes",
                "Rule out conditions like endometriosis",
            ],
        },
        "zh": {
            "workplace": [
                "考虑申请弹性工作时间或远程办公",
                "在症状严重时适当请假休息",
                "调整工作计划，避免在经期安排重要会议",
                "与上级沟通，寻求工作安排上的支持",
                "准备完善的应急包（药物、热敷包、备用衣物）",
            ],
            "health": [
                "建立规律的运动习惯，每周3-4次",
                "采用抗炎饮食，增加omega-3脂肪酸摄入",
                "考虑补充维生素B、镁等营养素",
                "学习压力管理技巧，减少焦虑",
                "保持健康体重，避免过度肥胖或消瘦",
            ],
            "medical": [
                "建议咨询妇科医生，进行全面检查",
                "可能需要处方药物治疗",
                "考虑整体健康调理或针灸治疗",
                "定期复查，监测症状变化",
                "排除子宫内膜异位症等疾病",
            ],
        },
    },
    "severe": {
        "en": {
            "workplace": [
                "Strongly recommend applying for medical or sick leave",
                "Communicate with HR about policy support",
                "Consider short-term work adjustments or position changes",
                "Seek occupational health service support",
                "Consider long-term work arrangement adjustments if necessary",
                "Keep medical certificates and diagnostic reports",
            ],
            "health": [
                "Establish comprehensive health management plan immediately",
                "Strictly follow doctor's treatment plan",
                "Consider physical therapy or rehabilitation",
                "Seek psychological counseling for emotional stress",
                "Adjust lifestyle with health as priority",
                "Join support groups for emotional support",
            ],
            "medical": [
                "Seek immediate medical attention for comprehensive gynecological examination",
                "Hormone therapy or surgery may be required",
                "Regular ultrasound and blood tests",
                "Consider specialist hospital or expert consultation",
                "Develop long-term treatment and management plan",
                "Understand all treatment options and risks",
            ],
        },
        "zh": {
            "workplace": [
                "强烈建议申请医疗假或病假",
                "与人力资源部门沟通，了解相关政策支持",
                "考虑短期工作调整或岗位调整",
                "寻求职业健康服务的支持",
                "必要时考虑长期工作安排调整",
                "保留医疗证明和诊断报告",
            ],
            "health": [
                "立即建立全面的健康管理计划",
                "严格遵循医生的治疗方案",
                "考虑物理治疗或康复训练",
                "寻求心理咨询支持，应对情绪压力",
                "调整生活方式，优先考虑健康",
                "加入支持小组，获得情感支持",
            ],
            "medical": [
                "立即就医，进行全面妇科检查",
                "可能需要激素治疗或手术治疗",
                "定期进行超声检查和血液检查",
                "考虑专科医院或专家会诊",
                "制定长期治疗和管理计划",
                "了解所有治疗选项和风险",
            ],
        },
    },
    "critical": {
        "en": {
            "workplace": [
                "Urgent: Apply for sick leave immediately, prioritize health",
                "Negotiate long-term medical leave or work adjustments with employer",
                "Understand disability and medical insurance benefits",
                "Consider work capacity assessment",
                "Seek legal consultation for labor rights protection",
                "Consider career change or early retirement if necessary",
            ],
            "health": [
                "Seek emergency medical care, this is top priority",
                "Hospitalization or intensive medical intervention may be needed",
                "Comprehensive assessment of quality of life and functional status",
                "Seek multidisciplinary team support (gynecology, pain management, psychology)",
                "Consider participating in clinical trials or new therapies",
                "Build strong social support network",
            ],
            "medical": [
                "Go to hospital emergency or specialist clinic immediately",
                "Expert team needed for comprehensive treatment plan",
                "Surgery may be required (such as laparoscopy)",
                "Consider pain management specialist treatment",
                "Regular follow-ups and long-term monitoring essential",
                "Understand all treatment options including experimental treatments",
            ],
        },
        "zh": {
            "workplace": [
                "紧急建议：立即申请病假，优先处理健康问题",
                "与雇主协商长期医疗假或工作调整",
                "了解残疾保险和医疗保险权益",
                "考虑申请工作能力评估",
                "寻求法律咨询，了解劳动权益保护",
                "必要时考虑职业转换或提前退休",
            ],
            "health": [
                "紧急就医，这是最优先事项",
                "可能需要住院治疗或密集医疗干预",
                "全面评估生活质量和功能状态",
                "寻求多学科团队支持（妇科、疼痛科、心理科）",
                "考虑参与临床试验或新疗法",
                "建立强大的社会支持网络",
            ],
            "medical": [
                "立即前往医院急诊或专科门诊",
                "需要专家团队制定综合治疗方案",
                "可能需要手术治疗（如腹腔镜手术）",
                "考虑疼痛管理专科治疗",
                "定期随访和长期监测必不可少",
                "了解所有治疗选项，包括实验性治疗",
            ],
        },
    },
}


@dataclass
class ProfessionalAdvice:
    """Advice lists for one impact level."""
    score: int
    level: str
    label: str
    color: str
    workplace: list[str] = field(default_factory=list)
    health: list[str] = field(default_factory=list)
    medical: list[str] = field(default_factory=list)


def impact_level(score: int) -> str:
    """Impact band for a 0-100 score."""
    if score <= 30:
        return "mild"
    if score <= 60:
        return "moderate"
    if score <= 80:
        return "severe"
    return "critical"


def professional_advice(
    score: int,
    locale: Locale | str = Locale.ZH,
    mode: str = "simplified",
) -> ProfessionalAdvice:
    """
    Advice for an impact score.

    ``simplified`` mode shows at most five items per list; ``detailed`` and
    ``medical`` show everything.
    """
    loc = "en" if str(getattr(locale, "value", locale)) == "en" else "zh"
    level = impact_level(score)
    lists = ADVICE[level][loc]

    def _filter(items: list[str]) -> list[str]:
        if mode == "simplified":
            return items[:SIMPLIFIED_LIMIT]
        return list(items)

    return ProfessionalAdvice(
        score=score,
        level=level,
        label=LEVEL_LABELS[level][0 if loc == "en" else 1],
        color=LEVEL_COLORS[level],
        workplace=_filter(lists["workplace"]),
        health=_filter(lists["health"]),
        medical=_filter(lists["medical"]),
    )
