"""Tests for signal classification."""

from datetime import date

import pytest

from kumotracker.ichimoku import compute
from kumotracker.models.ichimoku import IchimokuSnapshot
from kumotracker.models.signal import Signal
from kumotracker.signals import classify


def _snap(tenkan: float, kijun: float, a: float, b: float, price: float) -> IchimokuSnapshot:
    return IchimokuSnapshot(
        tenkan=tenkan, kijun=kijun, senkou_a=a, senkou_b=b,
        price=price, date=date(2024, 1, 5),
    )


class TestClassify:
    def test_buy(self):
        assert classify(_snap(11, 10, 95, 100, 101)) is Signal.BUY

    def test_sell(self):
        assert classify(_snap(9, 10, 95, 100, 94)) is Signal.SELL

    def test_price_inside_cloud(self):
        assert classify(_snap(11, 10, 95, 100, 97)) is Signal.NEUTRAL
        assert classify(_snap(9, 10, 95, 100, 97)) is Signal.NEUTRAL

    def test_price_on_upper_edge_is_neutral(self):
        assert classify(_snap(11, 10, 100, 95, 100)) is Signal.NEUTRAL

    def test_price_on_lower_edge_is_neutral(self):
        assert classify(_snap(9, 10, 100, 95, 95)) is Signal.NEUTRAL

    def test_price_on_near_edge_is_neutral(self):
        # equal to the lower span while above kijun: not above the cloud
        assert classify(_snap(11, 10, 95, 100, 95)) is Signal.NEUTRAL

    @pytest.mark.parametrize("price", [50.0, 150.0])
    def test_tenkan_equal_kijun_is_neutral(self, price):
        assert classify(_snap(10, 10, 95, 100, price)) is Signal.NEUTRAL

    def test_crossover_disagrees_with_cloud(self):
        assert classify(_snap(9, 10, 95, 100, 150)) is Signal.NEUTRAL
        assert classify(_snap(11, 10, 95, 100, 50)) is Signal.NEUTRAL

    def test_pure(self):
        snap = _snap(11, 10, 95, 100, 101)
        assert classify(snap) is classify(snap)


class TestClassifyComputed:
    def test_flat_is_neutral(self, flat_series):
        assert classify(compute(flat_series)) is Signal.NEUTRAL

    def test_rising_is_buy(self, buy_series):
        assert classify(compute(buy_series)) is Signal.BUY

    def test_falling_is_sell(self, sell_series):
        assert classify(compute(sell_series)) is Signal.SELL
