"""Tests for the medical care guide."""

import pytest

from periodhub.exceptions import InvalidAnswers
from periodhub.services import care
from periodhub.services.care import RED_FLAGS_BY_ID


def _flags(*ids):
    return [RED_FLAGS_BY_ID[i] for i in ids]


class TestPainScale:
    """Tests for the 0-10 pain assessment."""

    @pytest.mark.parametrize("level,severity,urgency", [
        (0, "none", "monitor"),
        (3, "mild", "monitor"),
        (4, "moderate", "routine"),
        (6, "moderate", "routine"),
        (7, "severe", "within_week"),
        (8, "severe", "within_week"),
        (9, "extreme", "immediate"),
        (10, "extreme", "immediate"),
    ])
    def test_severity_and_urgency(self, level, severity, urgency):
        """Test the pain bands."""
        result = care.assess_pain(level, "en")
        assert result.severity == severity
        assert result.urgency == urgency
        assert result.should_see_doctor is (level >= 7)
        assert result.recommendations

    @pytest.mark.parametrize("level", [-1, 11])
    def test_out_of_range(self, level):
        """Test that readings outside 0-10 are rejected."""
        with pytest.raises(InvalidAnswers):
            care.assess_pain(level)


class TestRedFlags:
    """Tests for the red-flag checklist."""

    def test_score_weights(self):
        """Test emergency, high and medium weights."""
        assert care.risk_score(["s1"]) == 10
        assert care.risk_score(["s4", "s7"]) == 7
        assert care.risk_score([]) == 0

    @pytest.mark.parametrize("score,level", [
        (0, "low"), (3, "low"), (4, "medium"), (7, "medium"),
        (8, "high"), (9, "high"), (10, "emergency"),
    ])
    def test_score_levels(self, score, level):
        """Test the score thresholds."""
        assert care.risk_level_from_score(score) == level

    def test_checklist_counting(self):
        """Test the counting rule for the checklist page."""
        assert care.checklist_risk_level(_flags("s2")) == "emergency"
        assert care.checklist_risk_level(_flags("s4", "s5")) == "high"
        assert care.checklist_risk_level(_flags("s4")) == "medium"
        assert care.checklist_risk_level(_flags("s7")) == "low"
        assert care.checklist_risk_level([]) == "low"

    def test_analyze_symptoms(self):
        """Test checklist analysis output."""
        result = care.analyze_symptoms(["s4", "s6"], "en")
        assert result.risk_level == "high"
        assert result.risk_score == 10
        assert result.selected == ["s4", "s6"]
        assert result.recommendations
        assert result.general_advice

    def test_recommendations_deduplicated(self):
        """Test that two flags in one category give its recommendations once."""
        single = care.analyze_symptoms(["s5"], "en")
        double = care.analyze_symptoms(["s5", "s6"], "en")
        assert double.recommendations == single.recommendations

    def test_unknown_symptom(self):
        """Test that unknown ids are rejected."""
        with pytest.raises(InvalidAnswers):
            care.analyze_symptoms(["s99"])


class TestDecisionTree:
    """Tests for the yes/no decision tree."""

    def test_tree_is_valid(self):
        """Test the built-in tree passes validation."""
        assert care.validate_tree() == []

    def test_depth(self):
        """Test the longest path."""
        assert care.tree_depth() == 3

    def test_walk_to_emergency(self):
        """Test the yes-yes path."""
        node, path = care.walk_tree([True, True])
        assert node.is_leaf
        assert node.result["urgency"] == "immediate"
        assert path == ["start", "severe_pain", "emergency_result"]

    def test_walk_partial(self):
        """Test stopping at a question."""
        node, path = care.walk_tree([False])
        assert node.id == "pattern_check"
        assert not node.is_leaf
        assert path == ["start", "pattern_check"]

    def test_walk_too_far(self):
        """Test that answers past a leaf are rejected."""
        with pytest.raises(InvalidAnswers):
            care.walk_tree([True, True, True])

    def test_find_node(self):
        """Test finding a node by id."""
        assert care.find_node("duration_check").question is not None
        assert care.find_node("missing") is None

    def test_all_results(self):
        """Test every leaf is reached."""
        ids = [node.id for node in care.all_results()]
        assert ids == ["emergency_result", "urgent_result", "routine_result", "routine_result", "observe_result"]

    def test_invalid_tree(self):
        """Test validation of a broken tree."""
        broken = care.DecisionNode(id="root", question=("?", "?"), yes=care.DecisionNode(id="leaf", result={}))
        errors = care.validate_tree(broken)
        assert any("both yes and no" in e for e in errors)


class TestComprehensiveAssessment:
    """Tests for the combined pain and red-flag assessment."""

    def test_low(self):
        """Test mild pain with no flags."""
        result = care.comprehensive_assessment(2, [], "en")
        assert result.final_risk == "low"
        assert result.urgency == "monitor"
        assert result.priority == "low"
        assert result.title == "Low Risk - Continue Monitoring"

    def test_pain_raises_risk(self):
        """Test that strong pain alone raises the final risk."""
        result = care.comprehensive_assessment(8, [], "en")
        assert result.final_risk == "emergency"
        assert result.urgency == "immediate"

    def test_symptoms_raise_risk(self):
        """Test that flags raise the risk above the pain level."""
        result = care.comprehensive_assessment(3, ["s4", "s5"], "zh")
        assert result.symptoms.risk_score == 10
        assert result.symptoms.risk_level == "emergency"
        assert result.final_risk == "emergency"
        assert result.title == "紧急情况：请立即就医"

    def test_moderate(self):
        """Test a moderate combination."""
        result = care.comprehensive_assessment(5, ["s7"], "en")
        assert result.final_risk == "medium"
        assert result.urgency == "routine"


class TestStatistics:
    """Tests for care assessment statistics."""

    def test_empty(self):
        """Test statistics with no assessments."""
        stats = care.assessment_statistics([])
        assert stats.total == 0
        assert stats.average_pain is None

    def test_summary(self):
        """Test totals and the most common risk."""
        assessments = [
            care.comprehensive_assessment(2, [], "en"),
            care.comprehensive_assessment(3, [], "en"),
            care.comprehensive_assessment(9, [], "en"),
        ]
        stats = care.assessment_statistics(assessments)
        assert stats.total == 3
        assert stats.average_pain == 4.7
        assert stats.most_common_risk == "low"
        assert stats.risk_counts == {"low": 2, "emergency": 1}
