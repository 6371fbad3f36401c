"""Tests for the task-family builder."""

import pytest

from flowjob.adapters.mock import MockAnalysisManager
from flowjob.core import defaults
from flowjob.core.task_family import (
    FAMILY_ORDER,
    FamilyOptions,
    ManagerSetupError,
    add_task_family,
    build_base_task,
    build_task_family,
    build_variant,
    task_name,
)
from flowjob.models.enums import CentralityEstimator, EventQuantity, TrackQuantity, VariantKind
from flowjob.models.task import Binning, CutRange

OUTPUT_FILE = "AnalysisResults.root:OutputAR"


class TestTaskName:
    def test_format(self):
        assert task_name("SC", VariantKind.QVECTOR, 0, 100) == "SCQvector_0.0-100.0"
        assert task_name("SC", VariantKind.NESTED_LOOPS_WITH_WEIGHTS, 5, 12.5) == \
            "SCNestedLoopsWithWeights_5.0-12.5"


class TestBuildBaseTask:
    def test_default_configuration(self):
        base = build_base_task("SC", 0, 100)
        assert base.name == "SCQvector_0.0-100.0"
        assert base.correlators == ((-2, 2),)
        assert base.filter_bit == 128
        assert base.fixed_multiplicity == 30
        assert base.centrality_estimator == CentralityEstimator.V0M
        assert base.use_nested_loops is False
        assert base.weight_histograms == ()

    def test_every_quantity_configured(self):
        base = build_base_task("SC", 0, 100)
        assert set(base.track_binning) == set(TrackQuantity)
        assert set(base.track_cuts) == set(TrackQuantity)
        assert set(base.event_binning) == set(EventQuantity)
        assert set(base.event_cuts) == set(EventQuantity)

    def test_pt_and_eta_use_edge_binning(self):
        base = build_base_task("SC", 0, 100)
        assert base.track_binning[TrackQuantity.PT].edges == defaults.PT_EDGES
        assert base.track_binning[TrackQuantity.ETA].edges == defaults.ETA_EDGES
        # untouched quantities keep the table binning
        assert base.track_binning[TrackQuantity.PHI] == Binning.uniform(360, 0.0, defaults.TWO_PI)

    def test_cuts_may_be_tighter_than_binning(self):
        base = build_base_task("SC", 0, 100)
        binning = base.track_binning[TrackQuantity.TPC_CLUSTERS]
        cut = base.track_cuts[TrackQuantity.TPC_CLUSTERS]
        assert (binning.lower, binning.upper) == (0.0, 160.0)
        assert (cut.min, cut.max) == (70.0, 160.0)

    def test_centrality_cut_follows_bin(self):
        base = build_base_task("SC", 10, 30)
        assert base.event_cuts[EventQuantity.CENTRALITY] == CutRange(min=10, max=30)

    def test_options_override_defaults(self):
        options = FamilyOptions(
            correlators=((-2, 2), (-3, 3)),
            filter_bit=768,
            centrality_estimator=CentralityEstimator.CL1,
            fixed_multiplicity=None,
            track_cuts={TrackQuantity.PT: CutRange(min=0.5, max=3.0)},
        )
        base = build_base_task("SC", 0, 10, options)
        assert base.correlators == ((-2, 2), (-3, 3))
        assert base.filter_bit == 768
        assert base.centrality_estimator == CentralityEstimator.CL1
        assert base.fixed_multiplicity is None
        assert base.track_cuts[TrackQuantity.PT] == CutRange(min=0.5, max=3.0)

    def test_unbalanced_correlator_rejected(self):
        with pytest.raises(ValueError, match="net harmonic"):
            build_base_task("SC", 0, 10, FamilyOptions(correlators=((2, 2),)))

    def test_empty_interval_rejected(self):
        with pytest.raises(ValueError, match="empty"):
            build_base_task("SC", 10, 10)


class TestBuildTaskFamily:
    @pytest.mark.parametrize("low,high", [(0, 100), (0, 10), (10, 100), (2.5, 7.5), (99, 100)])
    def test_four_distinct_named_variants(self, low, high):
        family = build_task_family("SC", low, high)
        assert len(family) == 4
        names = [t.name for t in family]
        assert len(set(names)) == 4
        for name in names:
            assert f"{low:.1f}" in name and f"{high:.1f}" in name
            assert name.endswith(f"_{low:.1f}-{high:.1f}")

    def test_variant_order_and_flags(self):
        family = build_task_family("SC", 0, 100)
        assert [t.variant_kind for t in family] == list(FAMILY_ORDER)
        assert [t.use_nested_loops for t in family] == [False, True, False, True]
        assert [t.has_weights for t in family] == [False, False, True, True]

    def test_names_for_full_range(self):
        family = build_task_family("SC", 0, 100)
        assert [t.name for t in family] == [
            "SCQvector_0.0-100.0",
            "SCNestedLoops_0.0-100.0",
            "SCQVectorWithWeights_0.0-100.0",
            "SCNestedLoopsWithWeights_0.0-100.0",
        ]

    def test_default_correlator_on_every_variant(self):
        for task in build_task_family("SC", 0, 100):
            assert task.correlators == ((-2, 2),)

    def test_variants_share_configuration(self):
        base, *variants = build_task_family("SC", 0, 100)
        for variant in variants:
            assert variant.configuration_fields() == base.configuration_fields()

    def test_weighted_variants_share_histograms(self, weights):
        family = build_task_family("SC", 0, 100, weights=weights)
        with_weights, nested_with_weights = family[2], family[3]
        assert with_weights.weight_histograms is nested_with_weights.weight_histograms
        for quantity in (TrackQuantity.PHI, TrackQuantity.PT, TrackQuantity.ETA):
            a = with_weights.weight_histogram(quantity)
            b = nested_with_weights.weight_histogram(quantity)
            assert a.contents == b.contents

    def test_unweighted_variants_have_no_histograms(self):
        family = build_task_family("SC", 0, 100)
        assert family[0].weight_histograms == ()
        assert family[1].weight_histograms == ()
        assert family[0].weight_histogram(TrackQuantity.PHI) is None


class TestBuildVariant:
    def test_copy_is_independent(self):
        base = build_base_task("SC", 0, 100)
        variant = build_variant(base, VariantKind.NESTED_LOOPS, "SC")
        assert variant.track_cuts is not base.track_cuts
        assert variant.track_cuts == base.track_cuts

    def test_base_untouched(self, weights):
        base = build_base_task("SC", 0, 100)
        build_variant(base, VariantKind.NESTED_LOOPS_WITH_WEIGHTS, "SC", weights)
        assert base.use_nested_loops is False
        assert base.weight_histograms == ()
        assert base.name == "SCQvector_0.0-100.0"

    def test_weights_ignored_for_unweighted_kind(self, weights):
        base = build_base_task("SC", 0, 100)
        variant = build_variant(base, VariantKind.NESTED_LOOPS, "SC", weights)
        assert variant.weight_histograms == ()

    def test_weighted_kind_requires_histograms(self):
        base = build_base_task("SC", 0, 100)
        with pytest.raises(ValueError, match="needs weight histograms"):
            build_variant(base, VariantKind.QVECTOR_WITH_WEIGHTS, "SC")


class TestAddTaskFamily:
    def test_registration_and_bindings(self, mock_manager):
        family = build_task_family("SC", 0, 100)
        bindings = add_task_family(mock_manager, family, OUTPUT_FILE)

        assert [t.name for t in mock_manager.tasks] == [t.name for t in family]
        assert [b.task_name for b in bindings] == [t.name for t in family]
        for binding in bindings:
            assert binding.input_container == "cAUTO_INPUT"
            assert binding.output_container == binding.task_name
            assert binding.output_file == OUTPUT_FILE
            assert mock_manager.inputs[(binding.task_name, 0)] == "cAUTO_INPUT"
            assert mock_manager.outputs[(binding.task_name, 1)] == binding.task_name
        assert set(mock_manager.containers.values()) == {OUTPUT_FILE}

    def test_call_order_per_task(self, mock_manager):
        add_task_family(mock_manager, build_task_family("SC", 0, 100), OUTPUT_FILE)
        assert mock_manager.call_names()[:5] == [
            "add_task",
            "get_common_input_container",
            "create_container",
            "connect_input",
            "connect_output",
        ]

    def test_missing_manager(self, caplog):
        with pytest.raises(ManagerSetupError, match="No analysis manager"):
            add_task_family(None, build_task_family("SC", 0, 100), OUTPUT_FILE)
        assert "No analysis manager" in caplog.text

    def test_missing_input_handler_registers_nothing(self):
        manager = MockAnalysisManager(input_handler=None)
        with pytest.raises(ManagerSetupError, match="input event handler"):
            add_task_family(manager, build_task_family("SC", 0, 100), OUTPUT_FILE)
        assert manager.tasks == []
        assert manager.calls == []

    def test_two_bins_do_not_collide(self, mock_manager):
        add_task_family(mock_manager, build_task_family("SC", 0, 10), OUTPUT_FILE)
        add_task_family(mock_manager, build_task_family("SC", 10, 100), OUTPUT_FILE)
        assert len(mock_manager.tasks) == 8
        assert len(mock_manager.containers) == 8

    def test_same_bin_twice_rejected(self, mock_manager):
        add_task_family(mock_manager, build_task_family("SC", 0, 10), OUTPUT_FILE)
        with pytest.raises(ValueError, match="already registered"):
            add_task_family(mock_manager, build_task_family("SC", 0, 10), OUTPUT_FILE)
