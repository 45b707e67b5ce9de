"""Tests for questionnaire scoring: PHQ-9, stress, symptom impact and advice."""

import pytest
from pydantic import ValidationError

from periodhub.exceptions import InvalidAnswers
from periodhub.models import PHQ9Answer, SymptomAnswers, WorkplaceAnswers
from periodhub.services import advice, phq9, stress, symptom


BASELINE = {"pain_level": "mild", "pain_duration": "short", "relief_preference": "instant"}
SUPPORTIVE = {"concentration": "none", "absenteeism": "never", "communication": "comfortable"}


def _phq9(scores: list[int]) -> list[PHQ9Answer]:
    return [PHQ9Answer(question_id=i + 1, score=s) for i, s in enumerate(scores)]


class TestPHQ9:
    """Tests for the PHQ-9 screening."""

    @pytest.mark.parametrize("total,expected", [
        (0, "none"),
        (4, "none"),
        (5, "minimal"),
        (9, "minimal"),
        (14, "mild"),
        (19, "moderate"),
        (24, "moderately-severe"),
        (25, "severe"),
        (27, "severe"),
    ])
    def test_severity_bands(self, total, expected):
        """Test the boundaries of each severity band."""
        assert phq9.severity(total) == expected

    def test_evaluate_moderate(self):
        """Test a moderate result recommends professional help."""
        result = phq9.evaluate(_phq9([2, 2, 2, 2, 2, 2, 2, 1, 0]), "en")
        assert result.total_score == 15
        assert result.severity == "moderate"
        assert result.risk_level == "high"
        assert result.requires_professional_help is True
        assert result.has_thoughts_of_self_harm is False
        assert result.severity_label == "Moderate depression"
        assert len(result.recommendations) == 2

    def test_self_harm_flag(self):
        """Test that question 9 at 2 or more raises the flag regardless of total."""
        result = phq9.evaluate(_phq9([0, 0, 0, 0, 0, 0, 0, 0, 2]), "zh")
        assert result.severity == "none"
        assert result.has_thoughts_of_self_harm is True
        assert result.recommendations == [phq9.SELF_HARM_HELP["zh"]]

    def test_no_symptoms(self):
        """Test that a zero score has no recommendations."""
        result = phq9.evaluate(_phq9([0] * 9), "en")
        assert result.recommendations == []
        assert result.risk_level == "low"

    def test_incomplete_rejected(self):
        """Test that missing answers are rejected."""
        with pytest.raises(InvalidAnswers):
            phq9.evaluate(_phq9([1] * 8), "en")

    def test_out_of_range_rejected(self):
        """Test that a score of 4 is rejected."""
        with pytest.raises(InvalidAnswers):
            phq9.evaluate(_phq9([1] * 8 + [4]), "en")

    def test_duplicate_question_rejected(self):
        """Test that answering one question twice does not count as complete."""
        answers = _phq9([1] * 8) + [PHQ9Answer(question_id=1, score=1)]
        with pytest.raises(InvalidAnswers):
            phq9.evaluate(answers, "en")

    def test_parse_answers(self):
        """Test building answers from form fields."""
        answers = phq9.parse_answers({"q1": "2", "q2": "", "q3": "1"})
        assert [(a.question_id, a.score) for a in answers] == [(1, 2), (3, 1)]

    def test_parse_answers_not_a_number(self):
        """Test that non-numeric answers are rejected."""
        with pytest.raises(InvalidAnswers):
            phq9.parse_answers({"q1": "often"})


class TestStress:
    """Tests for the stress assessment."""

    def test_score_rounding(self):
        """Test the percentage score."""
        assert stress.calculate_score([1] * 10) == 33
        assert stress.calculate_score([3] * 10) == 100
        assert stress.calculate_score([]) == 0

    @pytest.mark.parametrize("score,expected", [
        (0, "low"), (24, "low"), (25, "moderate"), (49, "moderate"),
        (50, "high"), (74, "high"), (75, "severe"), (100, "severe"),
    ])
    def test_levels(self, score, expected):
        """Test stress level boundaries."""
        assert stress.stress_level(score) == expected

    def test_primary_pain_point(self):
        """Test the category with the highest average wins."""
        assert stress.primary_pain_point([0, 0, 0, 3, 3, 3, 0, 0, 0, 0]) == "emotion"
        assert stress.primary_pain_point([0] * 6 + [3] * 4) == "pain"

    def test_primary_pain_point_ties(self):
        """Test that ties prefer work, then emotion."""
        assert stress.primary_pain_point([0] * 10) == "work"
        assert stress.primary_pain_point([1] * 6 + [0] * 4) == "work"
        assert stress.primary_pain_point([0, 0, 0, 2, 2, 2, 2, 2, 2, 2]) == "emotion"

    def test_radar(self):
        """Test radar axes stay on the 0-3 scale."""
        assert stress.radar_scores([3] * 10) == {"work": 3, "sleep": 3, "emotion": 3, "physical": 3, "social": 3}
        assert stress.radar_scores([0] * 10) == {"work": 0, "sleep": 0, "emotion": 0, "physical": 0, "social": 0}

    def test_evaluate(self):
        """Test a full evaluation."""
        result = stress.evaluate([1] * 10, "en")
        assert result.score == 33
        assert result.level == "moderate"
        assert result.recommendations == stress.RECOMMENDATIONS["moderate"]["en"]
        assert len(result.action_steps) == 4

    def test_severe_uses_high_recommendations(self):
        """Test that the highest bucket covers severe scores."""
        result = stress.evaluate([3] * 10, "zh")
        assert result.level == "severe"
        assert result.recommendations == stress.RECOMMENDATIONS["high"]["zh"]

    def test_action_step_adjustment(self):
        """Test that a high sleep answer swaps the sleep step description."""
        answers = [0, 2, 0, 0, 0, 0, 0, 0, 0, 0]
        steps = stress.action_steps(answers, "en")
        assert steps[0]["title"] == "Establish Sleep Routine"
        assert steps[0]["description"].startswith("Focus on improving sleep hygiene")
        assert steps[2]["description"] == stress.ACTION_STEPS["en"][2][1]

    def test_invalid_answers(self):
        """Test incomplete and out-of-range answers."""
        with pytest.raises(InvalidAnswers):
            stress.evaluate([1] * 9)
        with pytest.raises(InvalidAnswers):
            stress.evaluate([1] * 9 + [5])


class TestSymptomImpact:
    """Tests for the symptom impact questionnaires."""

    def test_simple_defaults(self):
        """Test the score of an untouched simple questionnaire."""
        result = symptom.calculate_simple_impact(SymptomAnswers(**BASELINE), "en")
        assert result.score == 30
        assert result.is_severe is False

    def test_simple_score(self):
        """Test a severe simple questionnaire."""
        answers = SymptomAnswers(
            pain_level="severe",
            pain_duration="long",
            relief_preference="medical",
            accompanying_symptoms=["nausea", "headache"],
            pain_location=["lower_back"],
        )
        result = symptom.calculate_simple_impact(answers, "en")
        assert result.score == 90
        assert result.is_severe is True
        assert result.recommendations.immediate
        assert result.recommendations.long_term

    def test_simple_symptom_cap(self):
        """Test that accompanying symptoms add at most ten points."""
        answers = SymptomAnswers(**BASELINE, accompanying_symptoms=list(symptom.ACCOMPANYING_SYMPTOMS))
        assert symptom.calculate_simple_impact(answers).score == 40

    def test_detailed_score(self):
        """Test the detailed weighting."""
        answers = SymptomAnswers(
            pain_level="moderate",
            pain_duration="medium",
            functional_impact="significant",
            cycle_pattern="irregular",
            pain_pattern="sharp",
            pain_timing="first_day",
            medical_history=["endometriosis"],
            accompanying_symptoms=["nausea"],
            pain_location=["lower_abdomen", "lower_back"],
            lifestyle_factors=["high_stress", "poor_sleep"],
        )
        assert symptom.calculate_detailed_impact(answers, "en").score == 62

    def test_no_duplicate_recommendations(self):
        """Test that recommendation lists are de-duplicated."""
        answers = SymptomAnswers(pain_level="very_severe", pain_duration="long", relief_preference="natural")
        result = symptom.calculate_simple_impact(answers, "zh")
        assert len(result.recommendations.immediate) == len(set(result.recommendations.immediate))

    @pytest.mark.parametrize("answers,score,profile", [
        (WorkplaceAnswers(**SUPPORTIVE), 100, "Supportive Environment"),
        (WorkplaceAnswers(concentration="slight", absenteeism="rarely", communication="hesitant"),
         55, "Moderately Adaptive Environment"),
        (WorkplaceAnswers(concentration="impossible", absenteeism="frequently", communication="uncomfortable"),
         5, "Challenging Environment"),
    ])
    def test_workplace_profiles(self, answers, score, profile):
        """Test workplace scores and profiles."""
        result = symptom.calculate_workplace_impact(answers, "en")
        assert result.score == score
        assert result.profile == profile
        assert result.suggestions

    def test_medical_blend(self):
        """Test the 70/30 blend of detailed and workplace scores."""
        answers = SymptomAnswers(
            pain_level="moderate",
            pain_duration="medium",
            functional_impact="significant",
            cycle_pattern="irregular",
            pain_pattern="sharp",
            pain_timing="first_day",
            medical_history=["endometriosis"],
            accompanying_symptoms=["nausea"],
            pain_location=["lower_abdomen", "lower_back"],
            lifestyle_factors=["high_stress", "poor_sleep"],
        )
        result = symptom.calculate_medical_impact(answers, WorkplaceAnswers(**SUPPORTIVE), "en")
        assert result.score == 73
        assert result.profile == "Supportive Environment"
        assert result.summary[-1].endswith("100/100")

    def test_assess_unknown_mode(self):
        """Test that an unknown mode is rejected."""
        with pytest.raises(InvalidAnswers):
            symptom.assess("quick", SymptomAnswers(**BASELINE), WorkplaceAnswers(**SUPPORTIVE))

    def test_assess_dispatch(self):
        """Test that each mode reaches its calculator."""
        assert symptom.assess("simple", SymptomAnswers(**BASELINE), WorkplaceAnswers(**SUPPORTIVE)).score == 30
        assert symptom.assess("workplace", SymptomAnswers(**BASELINE), WorkplaceAnswers(**SUPPORTIVE)).score == 100

    def test_assess_missing_answers(self):
        """Test that a mode without the answers it scores is rejected."""
        with pytest.raises(InvalidAnswers):
            symptom.assess("simple", None, None)
        with pytest.raises(InvalidAnswers):
            symptom.assess("medical", SymptomAnswers(**BASELINE), None)
        assert symptom.assess("workplace", None, WorkplaceAnswers(**SUPPORTIVE)).score == 100

    def test_simple_needs_relief_preference(self):
        """Test that the simple questionnaire requires a relief preference."""
        answers = SymptomAnswers(pain_level="mild", pain_duration="short")
        with pytest.raises(InvalidAnswers):
            symptom.calculate_simple_impact(answers)

    @pytest.mark.parametrize("values", [
        {},
        {"pain_duration": "short"},
        {"pain_level": "banana", "pain_duration": "short"},
        {"pain_level": "mild", "pain_duration": "short", "relief_preference": "prayer"},
    ])
    def test_answers_restricted_to_options(self, values):
        """Test that missing or unknown core answers fail validation."""
        with pytest.raises(ValidationError):
            SymptomAnswers(**values)

    def test_workplace_answers_required(self):
        """Test that workplace answers have no silent defaults."""
        with pytest.raises(ValidationError):
            WorkplaceAnswers()


class TestProfessionalAdvice:
    """Tests for score-based professional advice."""

    @pytest.mark.parametrize("score,level", [
        (0, "mild"), (30, "mild"), (31, "moderate"), (60, "moderate"),
        (61, "severe"), (80, "severe"), (81, "critical"), (100, "critical"),
    ])
    def test_levels(self, score, level):
        """Test the impact bands."""
        assert advice.impact_level(score) == level
        assert advice.professional_advice(score, "en").level == level

    def test_labels_and_colors(self):
        """Test localized labels and colors."""
        result = advice.professional_advice(85, "zh")
        assert result.label == "严重影响"
        assert result.color == "red"
        assert advice.professional_advice(10, "en").label == "Mild Impact"

    def test_simplified_truncates(self):
        """Test that simplified mode shows at most five items per list."""
        simplified = advice.professional_advice(70, "en", mode="simplified")
        detailed = advice.professional_advice(70, "en", mode="detailed")
        assert len(simplified.workplace) == 5
        assert len(detailed.workplace) > 5
        assert detailed.workplace[:5] == simplified.workplace

    def test_medical_mode_is_complete(self):
        """Test that medical mode keeps every item."""
        full = advice.ADVICE["critical"]["en"]
        result = advice.professional_advice(95, "en", mode="medical")
        assert result.health == full["health"]
        assert result.medical == full["medical"]
