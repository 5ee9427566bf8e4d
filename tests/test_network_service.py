"""
Tests for the assessment boundary: assess_network_geometry, rank_treatments,
NetworkService and AssessmentComposer

Covers:
    - Geometry assessment of triangle, star and disconnected networks
    - Mapping input coercion and InvalidInput on malformed requests
    - Ranking order, best/worst treatment and interpretation thresholds
    - Ranking warnings and confidence
    - SUCRA / P-score divergence reporting
    - JSON-serializable to_dict() output
"""

import json

import pytest

from treatment_network import (
    EngineConfig,
    InvalidInput,
    NetworkService,
    TreatmentEffect,
    assess_network_geometry,
    rank_treatments,
)
from treatment_network.assessment.composer import AssessmentComposer, divergent_rankings
from treatment_network.ranking.models import TreatmentRanking


def make_ranking(treatment, sucra, p_score, prob_best=0.5, mean_rank=1.5):
    return TreatmentRanking(
        treatment=treatment,
        sucra=sucra,
        p_score=p_score,
        prob_best=prob_best,
        mean_rank=mean_rank,
        median_rank=1,
        rank_probabilities=[prob_best, 1 - prob_best],
    )


# =============================================================================
# Geometry
# =============================================================================

class TestGeometryAssessment:

    def test_triangle(self, triangle_comparisons):
        result = assess_network_geometry(triangle_comparisons)
        assert result.n_treatments == 3
        assert result.n_studies == 3
        assert result.n_comparisons == 3
        assert len(result.edges) == 3
        assert result.connectivity.is_connected
        assert not result.characteristics.is_star_shaped
        assert result.characteristics.completeness == pytest.approx(1.0)
        assert result.multi_arm_trials == []
        assert result.confidence == pytest.approx(0.6)

    def test_star(self, star_comparisons):
        result = assess_network_geometry(star_comparisons)
        assert result.characteristics.is_star_shaped
        assert result.characteristics.completeness == pytest.approx(0.5)
        assert result.issues.isolated_treatments == ["B", "C", "D"]
        assert result.get_node("A").n_comparisons == 3
        assert "Network is star-shaped - high risk of inconsistency" in result.warnings

    def test_disconnected(self, disconnected_comparisons):
        result = assess_network_geometry(disconnected_comparisons)
        assert not result.connectivity.is_connected
        assert result.connectivity.n_components == 2
        assert result.issues.disconnected

    def test_accepts_mappings(self):
        result = assess_network_geometry([
            {"study_id": "S1", "treatment_a": "A", "treatment_b": "B", "n_a": 20, "n_b": 25},
            {"study_id": "S2", "treatment_a": "B", "treatment_b": "C"},
        ])
        assert result.get_node("B").total_participants == 25
        assert result.edges[0].total_participants == 45

    def test_multi_arm_reported(self):
        result = assess_network_geometry([
            {"study_id": "S1", "treatment_a": "A", "treatment_b": "B"},
            {"study_id": "S1", "treatment_a": "A", "treatment_b": "C"},
        ])
        assert [t.study_id for t in result.multi_arm_trials] == ["S1"]
        assert result.to_dict()["n_multi_arm_trials"] == 1
        assert "1 multi-arm trial(s) detected - ensure proper handling of correlation" in result.recommendations

    def test_to_dict_is_json_serializable(self, star_comparisons):
        data = json.loads(json.dumps(assess_network_geometry(star_comparisons).to_dict()))
        assert data["characteristics"]["central_treatment"] == "A"
        assert data["characteristics"]["bridge_comparisons"][0] == ["A", "B"]
        assert data["detected_issues"][0]["code"] == "STAR_SHAPED"
        assert data["nodes"][0]["connected_to"] == ["B", "C", "D"]

    def test_get_node_unknown(self, triangle_comparisons):
        with pytest.raises(KeyError):
            assess_network_geometry(triangle_comparisons).get_node("Z")

    @pytest.mark.parametrize("payload", [None, [], "A,B", {"study_id": "S1"}])
    def test_invalid_payload(self, payload):
        with pytest.raises(InvalidInput):
            assess_network_geometry(payload)

    def test_missing_field(self):
        with pytest.raises(InvalidInput):
            assess_network_geometry([{"study_id": "S1", "treatment_a": "A"}])

    def test_unsupported_entry(self):
        with pytest.raises(InvalidInput):
            assess_network_geometry([("S1", "A", "B")])

    def test_config_threshold(self, triangle_comparisons):
        config = EngineConfig.from_dict({"geometry": {"min_studies_per_comparison": 1}})
        result = NetworkService(config).assess_geometry(triangle_comparisons)
        assert result.warnings == []
        assert result.confidence == pytest.approx(0.7)


# =============================================================================
# Ranking
# =============================================================================

class TestRankingAssessment:

    def test_clear_winner(self, clear_winner_effects):
        result = rank_treatments(clear_winner_effects, n_simulations=2000, seed=1)

        assert [r.treatment for r in result.rankings] == ["Drug A", "Placebo"]
        assert result.best_treatment.treatment == "Drug A"
        assert result.worst_treatment.treatment == "Placebo"
        assert result.best_treatment.prob_best == pytest.approx(1.0)
        assert result.interpretation.startswith(
            "Based on 2,000 simulations, Drug A ranks highest (SUCRA = 100.0%, "
            "100.0% probability of being best). "
        )
        assert "There is strong evidence that Drug A is the best treatment." in result.interpretation
        assert result.warnings == ["Only 2 treatments - ranking is trivial"]
        # 0.7 + 0.1 (strong) - 0.2 (two treatments)
        assert result.confidence == pytest.approx(0.6)

    def test_lower_is_better_flips_order(self, clear_winner_effects):
        result = rank_treatments(clear_winner_effects, n_simulations=2000, higher_is_better=False, seed=1)
        assert result.best_treatment.treatment == "Placebo"
        assert result.higher_is_better is False

    @pytest.mark.slow
    def test_likely_best(self):
        effects = [TreatmentEffect("A", 1.0, 0.5), TreatmentEffect("B", 0.5, 0.5)]
        result = rank_treatments(effects, n_simulations=20000, seed=4)
        assert 0.7 < result.best_treatment.prob_best < 0.82
        assert "A is likely the best treatment, but uncertainty remains." in result.interpretation
        # 0.7 - 0.2 (two treatments)
        assert result.confidence == pytest.approx(0.5)

    @pytest.mark.slow
    def test_uncertain_ranking(self, indistinguishable_effects):
        result = rank_treatments(indistinguishable_effects, n_simulations=20000, seed=0)

        assert result.interpretation.endswith(
            "Ranking is uncertain; multiple treatments have similar performance."
        )
        assert result.warnings == [
            "No clear best treatment - rankings are uncertain",
            "Small difference between best and worst treatments",
            "Many treatments have uncertain rankings",
            "High uncertainty in effect estimates",
        ]
        assert "Consider additional studies to reduce uncertainty" in result.recommendations
        # 0.7 - 0.2 (no clear best) - 0.1 (high SE)
        assert result.confidence == pytest.approx(0.4)

    def test_rankings_sorted_by_sucra(self, overlapping_effects):
        result = rank_treatments(overlapping_effects, n_simulations=3000, seed=8)
        sucras = [r.sucra for r in result.rankings]
        assert sucras == sorted(sucras, reverse=True)
        assert result.best_treatment.treatment == result.rankings[0].treatment
        assert result.get_ranking("Placebo").is_reference

    def test_accepts_mappings(self):
        result = rank_treatments(
            [
                {"treatment": "A", "effect_size": 2.0, "standard_error": 0.1},
                {"treatment": "B", "effect_size": 0.0, "standard_error": 0.1, "is_reference": True},
            ],
            n_simulations=500,
            seed=2,
        )
        assert result.best_treatment.treatment == "A"
        assert result.n_simulations == 500

    def test_default_simulation_count(self, clear_winner_effects):
        config = EngineConfig.from_dict({"ranking": {"n_simulations": 300, "seed": 5}})
        assert NetworkService(config).rank(clear_winner_effects).n_simulations == 300

    def test_to_dict_is_json_serializable(self, overlapping_effects):
        data = json.loads(json.dumps(rank_treatments(overlapping_effects, n_simulations=1000, seed=3).to_dict()))
        assert len(data["rankings"]) == 4
        assert len(data["rankings"][0]["rank_probabilities"]) == 4
        assert data["rankings"][0]["cumulative_probabilities"][-1] == pytest.approx(1.0)
        assert isinstance(data["rankings"][0]["median_rank"], int)

    @pytest.mark.parametrize("effects", [
        [],
        [{"treatment": "A", "effect_size": 0.0, "standard_error": 0.1}],
        [{"treatment": "A", "effect_size": 0.0, "standard_error": -1.0},
         {"treatment": "B", "effect_size": 0.0, "standard_error": 0.1}],
        [{"treatment": "A", "effect_size": 0.0}, {"treatment": "B", "effect_size": 0.0}],
    ])
    def test_invalid_effects(self, effects):
        with pytest.raises(InvalidInput):
            rank_treatments(effects, n_simulations=100)


# =============================================================================
# Composer
# =============================================================================

class TestComposer:

    def test_interpretation_thresholds(self):
        composer = AssessmentComposer()
        strong = composer.interpret(make_ranking("A", 90.0, 0.9, prob_best=0.85), 10000)
        likely = composer.interpret(make_ranking("A", 70.0, 0.7, prob_best=0.6), 10000)
        unclear = composer.interpret(make_ranking("A", 50.0, 0.5, prob_best=0.5), 10000)

        assert strong.startswith("Based on 10,000 simulations, A ranks highest")
        assert "strong evidence" in strong
        assert "likely the best treatment" in likely
        assert "Ranking is uncertain" in unclear

    def test_divergent_rankings(self):
        rankings = [make_ranking("A", 80.0, 0.80), make_ranking("B", 60.0, 0.40)]
        divergent = divergent_rankings(rankings, tolerance=0.05)
        assert [r.treatment for r in divergent] == ["B"]
        assert divergent[0].sucra_p_score_gap == pytest.approx(0.2)
