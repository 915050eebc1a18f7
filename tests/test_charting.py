from __future__ import annotations

import pytest
from matplotlib.figure import Figure

from savingsestimator.charting import plot_trajectory
from savingsestimator.finance import series_np
from savingsestimator.themes import THEMES, get_theme


@pytest.mark.parametrize("name", sorted(THEMES))
def test_plot_annotates_label_years(name):
    fig = Figure()
    ax = fig.add_subplot(111)
    points = series_np(0, 500, 7, 30)

    plot_trajectory(ax, points, get_theme(name), title="Growth")

    labels = [t.get_text() for t in ax.texts]
    assert len(labels) == 5
    assert labels[0] == "$0"
    assert labels[-1].startswith("$609,98")
    assert ax.get_title() == "Growth"


def test_plot_empty_trajectory_hides_axes():
    fig = Figure()
    ax = fig.add_subplot(111)
    plot_trajectory(ax, [], get_theme("dark"))
    assert not ax.axison


def test_unknown_theme():
    with pytest.raises(ValueError):
        get_theme("sepia")


def test_plot_overflowed_trajectory_hides_axes():
    fig = Figure()
    ax = fig.add_subplot(111)
    points = series_np(1e300, 0, 100, 100, "Annually")
    plot_trajectory(ax, points, get_theme("dark"))
    assert not ax.axison
