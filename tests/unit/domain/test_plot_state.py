"""Unit tests for the plot state machine

Every transition checks the whole batch before changing any plot.
"""

import pytest
from datetime import datetime
from decimal import Decimal

from src.domain.plot import Plot, PlotStatus
from src.domain import plot_state
from src.domain.plot_state import PlotTransitionError

NOW = datetime(2024, 3, 1, 12, 0, 0)


def make_plot(plot_id, number, status=PlotStatus.AVAILABLE, owner=None):
    return Plot(id=plot_id, number=number, status=status, owner=owner, price=Decimal("1000"))


class TestReserve:

    def test_reserves_all_available_plots(self):
        plots = [make_plot(1, "A-1"), make_plot(2, "A-2")]

        plot_state.reserve(plots, "Amina", subscription_id=7, now=NOW)

        for plot in plots:
            assert plot.status == PlotStatus.RESERVED
            assert plot.owner == "Amina"
            assert plot.reserved_by == 7
            assert plot.reserved_at == NOW

    def test_one_unavailable_plot_fails_whole_batch(self):
        plots = [make_plot(1, "A-1"), make_plot(2, "A-2", PlotStatus.SOLD, "Bola")]

        with pytest.raises(PlotTransitionError) as exc_info:
            plot_state.reserve(plots, "Amina", subscription_id=7, now=NOW)

        assert exc_info.value.plot_number == "A-2"
        assert "sold" in exc_info.value.reason
        assert plots[0].status == PlotStatus.AVAILABLE
        assert plots[0].owner is None


class TestApproveReject:

    def test_approve_sells_reserved_plots(self):
        plots = [make_plot(1, "A-1", PlotStatus.RESERVED, "Amina")]

        plot_state.approve(plots, now=NOW)

        assert plots[0].status == PlotStatus.SOLD
        assert plots[0].sold_at == NOW
        assert plots[0].owner == "Amina"

    def test_approve_rejects_available_plot(self):
        with pytest.raises(PlotTransitionError):
            plot_state.approve([make_plot(1, "A-1")], now=NOW)

    def test_reject_returns_reserved_and_sold_plots(self):
        plots = [
            make_plot(1, "A-1", PlotStatus.RESERVED, "Amina"),
            make_plot(2, "A-2", PlotStatus.SOLD, "Amina"),
        ]

        plot_state.reject(plots, now=NOW)

        for plot in plots:
            assert plot.status == PlotStatus.AVAILABLE
            assert plot.owner is None
            assert plot.reserved_at is None
            assert plot.sold_at is None

    def test_reject_fails_on_available_plot(self):
        plots = [make_plot(1, "A-1", PlotStatus.RESERVED, "Amina"), make_plot(2, "A-2")]

        with pytest.raises(PlotTransitionError):
            plot_state.reject(plots, now=NOW)

        assert plots[0].status == PlotStatus.RESERVED


class TestDirectSellAndReassign:

    def test_direct_sell(self):
        plots = [make_plot(1, "A-1")]

        plot_state.direct_sell(plots, "Amina", now=NOW)

        assert plots[0].status == PlotStatus.SOLD
        assert plots[0].owner == "Amina"
        assert plots[0].reserved_at == NOW

    def test_reassign_releases_previous_before_selling_new(self):
        old = make_plot(1, "A-1", PlotStatus.SOLD, "Amina")
        kept = make_plot(2, "A-2", PlotStatus.SOLD, "Amina")
        new = make_plot(3, "A-3")

        plot_state.reassign([old, kept], [kept, new], "Amina", now=NOW)

        assert old.status == PlotStatus.AVAILABLE
        assert old.owner is None
        assert kept.status == PlotStatus.SOLD
        assert new.status == PlotStatus.SOLD
        assert new.owner == "Amina"

    def test_reassign_to_foreign_plot_changes_nothing(self):
        old = make_plot(1, "A-1", PlotStatus.SOLD, "Amina")
        foreign = make_plot(3, "A-3", PlotStatus.SOLD, "Bola")

        with pytest.raises(PlotTransitionError):
            plot_state.reassign([old], [foreign], "Amina", now=NOW)

        assert old.status == PlotStatus.SOLD
        assert old.owner == "Amina"
        assert foreign.owner == "Bola"
