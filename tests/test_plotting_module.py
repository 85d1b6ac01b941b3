import pytest

matplotlib = pytest.importorskip("matplotlib")
matplotlib.use("Agg")

from adt_filter.evaluation.plotting import plot_fixations  # noqa: E402
from adt_filter.processing import run_detection  # noqa: E402


def test_plot_fixations_draws_samples_and_centroids(config, two_cluster_samples, tmp_path):
    import matplotlib.pyplot as plt

    fixations = run_detection(two_cluster_samples, config).fixations
    ax = plot_fixations(two_cluster_samples, fixations, title="two clusters")

    labels = ax.get_legend_handles_labels()[1]
    assert "gaze" in labels
    assert "fixation (rel_threshold)" in labels
    assert "fixation (time_difference)" in labels
    assert ax.get_title() == "two clusters"

    path = tmp_path / "fixations.png"
    ax.figure.savefig(path)
    assert path.exists()
    plt.close(ax.figure)


def test_plot_without_fixations(two_cluster_samples):
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots()
    returned = plot_fixations(two_cluster_samples[:3], [], ax=ax)
    assert returned is ax
    assert ax.get_legend_handles_labels()[1] == ["gaze"]
    plt.close(fig)
