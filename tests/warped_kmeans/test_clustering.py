"""
Tests for clustering module.
"""
import numpy as np
import pandas as pd
import pytest

from wkmeans.warped_kmeans.core.clustering import (
    WarpedKMeans,
    WarpedKMeansConfig,
    WarpedKMeansResult,
    compute_warped_kmeans,
)
from wkmeans.warped_kmeans.core.energy import EnergyModel
from wkmeans.warped_kmeans.core.initializers import InitMethod
from wkmeans.warped_kmeans.core.partition import EmptyClusterError
from wkmeans.warped_kmeans.core.vector_math import NumpyVectorMath


def _sample_trajectory(length=120, dim=2, seed=42):
    """Generate a piecewise-drifting trajectory with noisy plateaus."""
    np.random.seed(seed)
    levels = np.repeat(np.arange(4) * 5.0, length // 4)
    levels = np.concatenate([levels, np.full(length - len(levels), levels[-1])])
    return levels[:, None] + np.random.randn(length, dim)


def _plateaus():
    """Three well separated plateaus of 30 samples each."""
    np.random.seed(42)
    return np.concatenate([
        np.random.randn(30, 2) * 0.1,
        np.random.randn(30, 2) * 0.1 + 10.0,
        np.random.randn(30, 2) * 0.1 - 10.0,
    ])


def _assert_partition(result, samples):
    boundaries = result.boundaries
    assert boundaries[0] == 0
    assert all(a < b for a, b in zip(boundaries, boundaries[1:]))
    sizes = [len(points) for points in result.segments]
    assert all(size > 0 for size in sizes)
    assert sum(sizes) == len(samples)
    np.testing.assert_array_equal(np.concatenate(result.segments), samples)


class _AlwaysImprovingMath(NumpyVectorMath):
    """Reports every candidate move as an improvement.

    Distances alternate 0, 1, 0, 1... so the insertion term of each
    evaluation is 0 and the removal term positive.
    """

    def __init__(self):
        self.calls = 0

    def squared_distance(self, u, v):
        value = float(self.calls % 2)
        self.calls += 1
        return value


def test_config_defaults():
    """Test WarpedKMeansConfig default values."""
    config = WarpedKMeansConfig()

    assert config.max_iterations == 100
    assert config.init_method is InitMethod.DEFAULT
    assert config.trace_default is False
    assert config.verbose is False


def test_config_parses_method_string():
    """Test that string methods are converted to InitMethod."""
    assert WarpedKMeansConfig(init_method="ts").init_method is InitMethod.TRACE_SEGMENTATION


def test_config_invalid_max_iterations():
    """Test that a non-positive sweep cap is rejected."""
    with pytest.raises(ValueError, match="max_iterations"):
        WarpedKMeansConfig(max_iterations=0)


def test_init_clamps_num_clusters():
    """Test clamping of the segment count."""
    samples = [[0.0], [1.0], [2.0]]

    assert WarpedKMeans(samples, 0).num_clusters == 1
    assert WarpedKMeans(samples, -4).num_clusters == 1
    assert WarpedKMeans(samples, 10).num_clusters == 3


def test_init_clamps_threshold():
    """Test clamping of the threshold."""
    samples = [[0.0], [1.0], [2.0]]

    assert WarpedKMeans(samples, 2, -1).threshold == 0.0
    assert WarpedKMeans(samples, 2, 5).threshold == 1.0
    assert WarpedKMeans(samples, 2, None).threshold == 0.0
    assert WarpedKMeans(samples, 2, 0.25).threshold == 0.25


def test_clamped_num_clusters_behaves_like_bounds():
    """Test that out-of-range segment counts fit like their clamped values."""
    samples = [0.0, 1.0, 2.0, 10.0, 11.0]

    low = WarpedKMeans(samples, 0).fit()
    one = WarpedKMeans(samples, 1).fit()
    high = WarpedKMeans(samples, 9).fit()
    full = WarpedKMeans(samples, 5).fit()

    assert low.boundaries == one.boundaries == [0]
    assert high.boundaries == full.boundaries == [0, 1, 2, 3, 4]


def test_clamped_threshold_behaves_like_bounds():
    """Test that out-of-range thresholds fit like their clamped values."""
    samples = _sample_trajectory(80)

    assert WarpedKMeans(samples, 4, -1).fit().boundaries == WarpedKMeans(samples, 4, 0).fit().boundaries
    assert WarpedKMeans(samples, 4, 5).fit().boundaries == WarpedKMeans(samples, 4, 1).fit().boundaries


def test_init_rejects_empty_samples():
    """Test that an empty sequence is rejected."""
    with pytest.raises(ValueError, match="empty"):
        WarpedKMeans([], 2)


def test_init_promotes_scalars():
    """Test that scalar samples become 1D vectors."""
    clustering = WarpedKMeans([0, 1, 2], 2)

    assert clustering.samples.shape == (3, 1)
    assert clustering.dimensions == 1


def test_reset_state():
    """Test the state after construction and reset."""
    clustering = WarpedKMeans(_sample_trajectory(20), 3)

    assert clustering.initialized is False
    assert clustering.boundaries == [0, 0, 0]
    assert clustering.total_energy == 0.0
    assert clustering.iterations == 0
    assert clustering.num_transfers == 0
    assert clustering.cost == 0


def test_initialize_sets_boundaries():
    """Test that initialize marks the instance initialized."""
    clustering = WarpedKMeans(np.arange(6.0), 2)

    boundaries = clustering.initialize("eq")

    assert boundaries == [0, 3]
    assert clustering.boundaries == [0, 3]
    assert clustering.initialized is True


def test_fit_already_optimal():
    """Test a sequence whose initial split is already optimal."""
    clustering = WarpedKMeans([0, 1, 2, 10, 11, 12], 2, 0)

    result = clustering.fit()

    assert isinstance(result, WarpedKMeansResult)
    assert result.boundaries == [0, 3]
    np.testing.assert_array_equal(result.segments[0].ravel(), [0, 1, 2])
    np.testing.assert_array_equal(result.segments[1].ravel(), [10, 11, 12])
    assert result.num_transfers == 0
    assert result.iterations == 1
    assert result.cost == 2
    assert result.converged is True
    np.testing.assert_allclose(result.centroids[0], [1.0])
    np.testing.assert_allclose(result.centroids[1], [11.0])
    assert result.local_energy == pytest.approx([2.0, 2.0])
    assert result.total_energy == pytest.approx(4.0)


def test_fit_two_groups():
    """Test convergence on a short two-group sequence."""
    result = WarpedKMeans([0, 1, 9, 10], 2).fit()

    assert result.boundaries == [0, 2]


@pytest.mark.parametrize("partition", [
    [[0], [1, 9, 10]],
    [[0, 1, 9], [10]],
])
def test_fit_moves_boundary_to_optimum(partition):
    """Test that a misplaced boundary moves to the gap."""
    clustering = WarpedKMeans([0, 1, 9, 10], 2)

    result = clustering.fit(partition)

    assert result.boundaries == [0, 2]
    assert result.num_transfers == 1
    assert result.total_energy == pytest.approx(1.0)
    assert result.initial_energy > result.total_energy


def test_fit_explicit_partition_count_mismatch():
    """Test that an explicit partition must match the segment count."""
    clustering = WarpedKMeans([0, 1, 9, 10], 2)

    with pytest.raises(ValueError, match="expected 2"):
        clustering.fit([[0], [1], [9, 10]])


def test_fit_explicit_partition_empty_segment():
    """Test that an empty explicit segment raises EmptyClusterError."""
    clustering = WarpedKMeans([0, 1, 9, 10], 2)

    with pytest.raises(EmptyClusterError) as exc_info:
        clustering.fit([[0, 1, 9, 10], []])
    assert exc_info.value.index == 1


def test_fit_empty_cluster_from_boundaries():
    """Test that corrupted boundaries surface as EmptyClusterError."""
    clustering = WarpedKMeans(np.arange(5.0), 3)
    clustering.initialize()
    clustering.boundaries[2] = clustering.boundaries[1]

    with pytest.raises(EmptyClusterError):
        clustering.fit()


def test_fit_single_cluster_skips_optimization():
    """Test that one segment is returned as-is."""
    samples = _sample_trajectory(30)

    result = WarpedKMeans(samples, 1).fit()

    assert result.boundaries == [0]
    assert result.iterations == 0
    assert result.cost == 0
    np.testing.assert_allclose(result.centroids[0], samples.mean(axis=0))
    assert result.total_energy == pytest.approx(((samples - samples.mean(axis=0)) ** 2).sum())


def test_fit_singleton_segments():
    """Test M == N where no move can keep segments non-empty."""
    result = WarpedKMeans([3.0, 1.0, 4.0, 1.5], 4).fit()

    assert result.boundaries == [0, 1, 2, 3]
    assert result.num_transfers == 0
    assert result.total_energy == pytest.approx(0.0)


@pytest.mark.parametrize("method", [None, "ts", "eq"])
@pytest.mark.parametrize("threshold", [0.0, 0.5, 1.0])
def test_fit_partition_invariants(method, threshold):
    """Test that the result always partitions the sequence in order."""
    samples = _sample_trajectory(120)

    result = compute_warped_kmeans(samples, 4, threshold, method=method)

    _assert_partition(result, samples)
    assert result.num_clusters == 4


@pytest.mark.parametrize("num_clusters", [2, 3, 4, 6, 10])
def test_fit_energy_does_not_increase(num_clusters):
    """Test that fitting never increases the total energy."""
    samples = _sample_trajectory(120)

    result = WarpedKMeans(samples, num_clusters).fit()

    assert result.total_energy <= result.initial_energy + 1e-9


def test_fit_energy_matches_recompute():
    """Test the reported energies against a from-scratch computation."""
    samples = _sample_trajectory(120, dim=3)

    result = WarpedKMeans(samples, 5).fit()

    reference = EnergyModel()
    reference.recompute_all(result.segments)
    assert result.total_energy == pytest.approx(reference.total_energy)
    assert result.local_energy == pytest.approx(reference.local_energy)
    assert result.total_energy == pytest.approx(sum(result.local_energy))


def test_incremental_bookkeeping_matches_recompute():
    """Test that incremental energy tracking agrees with the final recompute."""
    samples = _plateaus()
    partition = [samples[:5], samples[5:80], samples[80:]]
    clustering = WarpedKMeans(samples, 3)
    clustering.fit(partition)
    assert clustering.num_transfers > 0

    tracked = []
    recompute = clustering._energy.recompute_all

    def _capture(segments):
        tracked.append(clustering._energy.total_energy)
        return recompute(segments)

    clustering._energy.recompute_all = _capture
    clustering.fit(partition)

    assert len(tracked) == 2
    assert tracked[1] == pytest.approx(clustering.total_energy, rel=1e-6, abs=1e-9)


def test_centroids_match_recompute_after_every_move(monkeypatch):
    """Test that incremental centroids equal a full recompute after each accepted move."""
    samples = _plateaus()
    clustering = WarpedKMeans(samples, 3)
    pending = []
    checked = []

    apply_move = clustering._energy.apply_incremental_move
    derive = clustering._partition.derive_partition

    def _record_move(*args, **kwargs):
        apply_move(*args, **kwargs)
        pending.append(True)

    def _derive_and_check():
        segments = derive()
        if pending:
            pending.clear()
            reference = EnergyModel()
            reference.recompute_all(segments)
            for tracked, expected in zip(clustering._energy.centroids, reference.centroids):
                np.testing.assert_allclose(tracked, expected, atol=1e-9)
            checked.append(True)
        return segments

    monkeypatch.setattr(clustering._energy, "apply_incremental_move", _record_move)
    monkeypatch.setattr(clustering._partition, "derive_partition", _derive_and_check)

    result = clustering.fit([samples[:5], samples[5:80], samples[80:]])

    assert result.num_transfers > 5
    assert len(checked) == result.num_transfers


def test_fit_rejects_partition_of_other_data():
    """Test that an explicit partition must hold the instance's own samples."""
    clustering = WarpedKMeans([0, 1, 2, 10, 11, 12], 2)

    with pytest.raises(ValueError, match="do not match the sequence"):
        clustering.fit([[50, 51, 52], [-7, -8, -9]])


def test_fit_finds_plateaus():
    """Test that well separated plateaus are recovered."""
    samples = _plateaus()
    clustering = WarpedKMeans(samples, 3)

    result = clustering.fit([samples[:5], samples[5:80], samples[80:]])

    assert result.boundaries == [0, 30, 60]
    assert result.converged is True


def test_refit_is_idempotent():
    """Test that fitting a converged instance again changes nothing."""
    samples = _sample_trajectory(120)
    clustering = WarpedKMeans(samples, 4)
    first = clustering.fit()

    second = clustering.fit()

    assert second.num_transfers == 0
    assert second.iterations == 1
    assert second.boundaries == first.boundaries
    assert second.total_energy == pytest.approx(first.total_energy)


def test_fit_is_deterministic():
    """Test that identical inputs give identical results."""
    samples = _sample_trajectory(120)

    first = WarpedKMeans(samples, 5, 0.3).fit()
    second = WarpedKMeans(samples, 5, 0.3).fit()

    assert first.boundaries == second.boundaries
    assert first.cost == second.cost


def test_threshold_limits_search():
    """Test that threshold 1 evaluates a single candidate per scan."""
    samples = _plateaus()
    partition = [samples[:5], samples[5:80], samples[80:]]

    shallow = WarpedKMeans(samples, 3, 1.0).fit(partition)
    deep = WarpedKMeans(samples, 3, 0.0).fit(partition)

    # Two scans per adjacent pair, one candidate each
    assert shallow.cost <= 4 * shallow.iterations
    assert shallow.iterations > deep.iterations
    assert shallow.boundaries == deep.boundaries == [0, 30, 60]


def test_cost_counts_every_evaluation():
    """Test that evaluations include rejected candidates."""
    result = WarpedKMeans([0, 1, 9, 10], 2).fit([[0], [1, 9, 10]])

    # Sweep 1: right scan of segment 0 skipped (one member), left scan of
    # segment 1 accepts sample 1 then rejects sample 9.
    # Sweep 2: one rejection from each side.
    assert result.iterations == 2
    assert result.cost == 4
    assert result.num_transfers == 1


def test_iteration_cap_stops_oscillation():
    """Test that a never-converging run halts after exactly 100 sweeps."""
    samples = np.arange(10.0)
    clustering = WarpedKMeans(samples, 2, vector_math=_AlwaysImprovingMath())

    result = clustering.fit()

    assert result.iterations == 100
    assert result.converged is False
    assert result.num_transfers > 100
    _assert_partition(result, samples.reshape(-1, 1))


def test_iteration_cap_configurable():
    """Test a custom sweep cap."""
    config = WarpedKMeansConfig(max_iterations=3)
    clustering = WarpedKMeans(np.arange(10.0), 2, config=config, vector_math=_AlwaysImprovingMath())

    result = clustering.fit()

    assert result.iterations == 3
    assert result.converged is False


def test_verbose_logs_progress(capsys):
    """Test that verbose mode reports sweeps."""
    config = WarpedKMeansConfig(verbose=True)

    WarpedKMeans([0, 1, 9, 10], 2, config=config).fit()

    captured = capsys.readouterr()
    assert "Sweep 1" in captured.out


def test_result_labels():
    """Test per-sample labels."""
    result = WarpedKMeans([0, 1, 2, 10, 11, 12], 2).fit()

    labels = result.labels

    assert isinstance(labels, pd.Series)
    assert labels.name == "segment"
    assert labels.tolist() == [0, 0, 0, 1, 1, 1]


def test_result_summary():
    """Test the per-segment summary table."""
    samples = np.array([[0.0, 0.0], [0.0, 2.0], [10.0, 10.0], [10.0, 12.0]])

    summary = WarpedKMeans(samples, 2).fit().summary()

    assert isinstance(summary, pd.DataFrame)
    assert summary["start"].tolist() == [0, 2]
    assert summary["end"].tolist() == [2, 4]
    assert summary["size"].tolist() == [2, 2]
    assert summary["local_energy"].tolist() == pytest.approx([2.0, 2.0])
    assert summary["centroid_0"].tolist() == pytest.approx([0.0, 10.0])
    assert summary["centroid_1"].tolist() == pytest.approx([1.0, 11.0])


def test_result_is_a_snapshot():
    """Test that results do not change when the instance is refit."""
    samples = _sample_trajectory(40)
    clustering = WarpedKMeans(samples, 3)
    result = clustering.fit()
    boundaries = list(result.boundaries)

    clustering.initialize("ts")
    clustering.fit([samples[:1], samples[1:2], samples[2:]])

    assert result.boundaries == boundaries


def test_compute_warped_kmeans():
    """Test the convenience function."""
    result = compute_warped_kmeans([0, 1, 2, 10, 11, 12], num_clusters=2, method="eq")

    assert result.boundaries == [0, 3]
    assert result.converged is True
