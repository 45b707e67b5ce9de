"""Educational articles and the interactive tool directory."""

from dataclasses import dataclass, field
from typing import Optional

from ..utils.i18n import Locale


@dataclass(frozen=True)
class Article:
    slug: str
    category: str
    title: dict[str, str]
    summary: dict[str, str]
    body: dict[str, list[str]]
    keywords: tuple[str, ...] = ()
    published: str = "2024-01-01"

    def localized(self, locale: Locale) -> dict:
        loc = locale.value
        return {
            "slug": self.slug,
            "category": self.category,
            "title": self.title[loc],
            "summary": self.summary[loc],
            "body": self.body[loc],
            "published": self.published,
        }


@dataclass(frozen=True)
class Tool:
    slug: str
    path: str
    name: dict[str, str]
    description: dict[str, str]
    features: dict[str, list[str]] = field(default_factory=dict)


ARTICLES = [
    Article(
        slug="understanding-dysmenorrhea",
        category="pain-management",
        title={
            "en": "Understanding Dysmenorrhea: Why Periods Hurt",
            "zh": "认识痛经：月经为什么会痛",
        },
        summary={
            "en": "What causes period pain, how primary and secondary dysmenorrhea differ, and when pain is not normal.",
            "zh": "痛经的成因、原发性与继发性痛经的区别，以及哪些疼痛并不正常。",
        },
        body={
            "en": [
                "Period pain is caused mainly by prostaglandins, which make the uterine muscle contract to shed its lining.",
                "Primary dysmenorrhea has no underlying disease and usually starts within a few years of the first period.",
                "Secondary dysmenorrhea is caused by conditions such as endometriosis, adenomyosis or fibroids and often worsens over time.",
                "Pain that stops you from working or studying every month deserves a conversation with a doctor.",
            ],
            "zh": [
                "痛经主要由前列腺素引起，它会促使子宫肌肉收缩以排出内膜。",
                "原发性痛经没有器质性疾病，通常在初潮后几年内出现。",
                "继发性痛经由子宫内膜异位症、子宫腺肌病或肌瘤等疾病引起，往往随时间加重。",
                "如果每个月的疼痛都影响工作或学习，值得与医生聊一聊。",
            ],
        },
        keywords=("dysmenorrhea", "period pain", "痛经"),
        published="2024-03-12",
    ),
    Article(
        slug="when-to-seek-medical-care",
        category="medical-care",
        title={
            "en": "When to Seek Medical Care for Period Pain",
            "zh": "经期疼痛何时需要就医",
        },
        summary={
            "en": "Red-flag symptoms, a simple decision guide and what to tell your doctor.",
            "zh": "危险信号症状、简单的就医判断指南，以及就诊时应告诉医生什么。",
        },
        body={
            "en": [
                "Sudden severe pain, heavy bleeding that soaks a pad every hour, or fever with pelvic pain need urgent care.",
                "Pain that painkillers no longer help, or that grows worse cycle after cycle, should be checked within weeks.",
                "Bring a pain diary to the appointment: dates, pain levels, what you tried and how well it worked.",
            ],
            "zh": [
                "突发剧痛、每小时浸透一片卫生巾的大量出血，或盆腔疼痛伴发烧，都需要紧急就医。",
                "止痛药不再有效，或一个周期比一个周期更痛，应在几周内就诊检查。",
                "就诊时带上疼痛日记：日期、疼痛程度、尝试过的方法及其效果。",
            ],
        },
        keywords=("medical care", "red flags", "就医"),
        published="2024-05-02",
    ),
    Article(
        slug="natural-relief-methods",
        category="relief",
        title={
            "en": "Natural Relief Methods That Actually Help",
            "zh": "真正有效的自然缓解方法",
        },
        summary={
            "en": "Heat, movement, diet and sleep: the evidence behind everyday period pain relief.",
            "zh": "热敷、运动、饮食与睡眠：日常缓解经痛方法背后的证据。",
        },
        body={
            "en": [
                "A heating pad at around 40°C can relieve cramps about as well as over-the-counter pain relievers.",
                "Gentle movement such as walking or yoga improves blood flow and releases endorphins.",
                "Reducing caffeine and salt in the days before your period may ease bloating and tension.",
            ],
            "zh": [
                "约40°C的热敷垫缓解痉挛的效果可与非处方止痛药相当。",
                "散步或瑜伽等温和运动能促进血液循环并释放内啡肽。",
                "经期前几天减少咖啡因和盐分，可能有助于缓解腹胀和紧张。",
            ],
        },
        keywords=("heat therapy", "yoga", "自然疗法"),
        published="2024-06-18",
    ),
    Article(
        slug="stress-and-period-pain",
        category="lifestyle",
        title={
            "en": "Stress and Period Pain: Breaking the Cycle",
            "zh": "压力与经痛：打破恶性循环",
        },
        summary={
            "en": "How stress amplifies pain and the techniques that calm both.",
            "zh": "压力如何放大疼痛，以及同时缓解两者的技巧。",
        },
        body={
            "en": [
                "Stress hormones heighten pain sensitivity, and pain in turn raises stress.",
                "Ten minutes of slow breathing a day lowers perceived stress within a few weeks.",
                "Tracking stress alongside pain helps you see which techniques work for you.",
            ],
            "zh": [
                "压力激素会提高对疼痛的敏感度，而疼痛又会反过来加重压力。",
                "每天十分钟的慢呼吸练习，几周内即可降低主观压力感。",
                "同时记录压力和疼痛，能帮助您发现哪些方法最适合自己。",
            ],
        },
        keywords=("stress", "breathing", "压力管理"),
        published="2024-08-09",
    ),
]

TOOLS = [
    Tool(
        slug="symptom-assessment",
        path="/assessment",
        name={"en": "Symptom Assessment", "zh": "症状评估工具"},
        description={
            "en": "Score how much period symptoms affect your life and get personalised recommendations.",
            "zh": "评估经期症状对生活的影响程度，获取个性化建议。",
        },
        features={
            "en": ["Impact score 0-100", "Immediate and long-term recommendations", "Workplace assessment"],
            "zh": ["0-100影响评分", "即时与长期建议", "职场影响评估"],
        },
    ),
    Tool(
        slug="pain-tracker",
        path="/pain",
        name={"en": "Pain Tracker", "zh": "疼痛追踪器"},
        description={
            "en": "Record pain, symptoms and treatments, then see patterns and what works.",
            "zh": "记录疼痛、症状和治疗，发现规律和有效方法。",
        },
        features={
            "en": ["Daily pain log", "Treatment effectiveness", "Trend analysis", "CSV export"],
            "zh": ["每日疼痛记录", "治疗效果分析", "趋势分析", "CSV导出"],
        },
    ),
    Tool(
        slug="stress-management",
        path="/stress",
        name={"en": "Stress Management", "zh": "压力管理工具"},
        description={
            "en": "Assess your stress and log the techniques that help.",
            "zh": "评估压力水平并记录有效的减压方法。",
        },
        features={
            "en": ["Stress assessment", "Progress journal", "Technique statistics"],
            "zh": ["压力评估", "进度日志", "方法统计"],
        },
    ),
    Tool(
        slug="phq9",
        path="/phq9",
        name={"en": "PHQ-9 Depression Screening", "zh": "PHQ-9 抑郁筛查"},
        description={
            "en": "The standard nine-question mood screening with guidance on next steps.",
            "zh": "标准九题情绪筛查量表，并提供后续建议。",
        },
        features={
            "en": ["Validated questionnaire", "Severity bands", "Support guidance"],
            "zh": ["标准化量表", "严重程度分级", "求助指引"],
        },
    ),
    Tool(
        slug="medical-care-guide",
        path="/care",
        name={"en": "When to See a Doctor", "zh": "就医指南"},
        description={
            "en": "Check red-flag symptoms and find out how urgently to seek care.",
            "zh": "检查危险信号症状，判断就医的紧急程度。",
        },
        features={
            "en": ["Pain scale", "Red-flag checklist", "Decision tree"],
            "zh": ["疼痛量表", "危险信号清单", "决策树"],
        },
    ),
    Tool(
        slug="symptom-journal",
        path="/symptoms",
        name={"en": "Symptom Journal", "zh": "症状日记"},
        description={
            "en": "A quick daily log of pain, mood, flow and medication.",
            "zh": "快速记录每日疼痛、情绪、经量和用药。",
        },
        features={
            "en": ["Daily entries", "Mood and flow", "Trend summary"],
            "zh": ["每日记录", "情绪与经量", "趋势总结"],
        },
    ),
]

ARTICLES_BY_SLUG = {a.slug: a for a in ARTICLES}
TOOLS_BY_SLUG = {t.slug: t for t in TOOLS}


def get_article(slug: str) -> Optional[Article]:
    return ARTICLES_BY_SLUG.get(slug)


def get_tool(slug: str) -> Optional[Tool]:
    return TOOLS_BY_SLUG.get(slug)


def list_articles(locale: Locale, category: Optional[str] = None) -> list[dict]:
    """Localized article cards, newest first."""
    articles = [a for a in ARTICLES if category is None or a.category == category]
    articles.sort(key=lambda a: a.published, reverse=True)
    return [a.localized(locale) for a in articles]
