"""Tests for the read tracking plots.

Copyright © 2023 Pixelgen Technologies AB.
"""

import matplotlib.pyplot as plt
import pytest

from readtrack.plot import plot_read_tracking


@pytest.mark.parametrize("log_scale", [False, True])
def test_plot_read_tracking(tracking_table, log_scale):
    fig, ax = plot_read_tracking(tracking_table, log_scale=log_scale)

    assert [t.get_text() for t in ax.get_xticklabels()] == [
        "input",
        "filtered",
        "denoisedF",
        "denoisedR",
        "merged",
        "nonchim",
    ]
    assert ax.get_yscale() == ("log" if log_scale else "linear")
    assert ax.get_legend().get_title().get_text() == "Sample"
    assert len(ax.get_lines()) >= 2
    plt.close(fig)


def test_plot_read_tracking_on_given_axes(tracking_table):
    fig, ax = plt.subplots()

    result_fig, result_ax = plot_read_tracking(tracking_table, ax=ax)

    assert result_ax is ax
    assert result_fig is fig
    plt.close(fig)
