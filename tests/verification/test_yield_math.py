import json

import pytest

from constants import EIGHTEEN_DECIMALS
from scripts.utils import json_file
from scripts.utils.errors import NoProfitError, VerificationError
from scripts.utils.yield_math import (
    HarvestCycle,
    SharePriceSample,
    annualize,
    compute_yield_report,
)


##############
# Yield Math #
##############


def test_report_matches_reference_scenario():
    """1000 ETH for 10 half days, facility price 1.000 -> 1.002"""
    principal = 1000 * EIGHTEEN_DECIMALS
    start = 5000 * EIGHTEEN_DECIMALS
    end = start + 2 * EIGHTEEN_DECIMALS

    report = compute_yield_report(principal, start, end, 10, 12)

    assert report.profit == 2 * EIGHTEEN_DECIMALS
    assert report.duration_hours == 120
    assert report.profit_percent == pytest.approx(0.002)
    assert report.daily_yield == pytest.approx(0.0004)
    assert report.apr == pytest.approx(0.146)
    assert report.apy == pytest.approx(0.157, abs=1e-3)

    # exact formula, semi daily compounding
    assert report.apr == report.daily_yield * 365
    assert report.apy == (1 + report.daily_yield / 2) ** 730 - 1


def test_profit_is_end_minus_start():
    report = compute_yield_report(100, 1_000, 1_013, 1, 24)

    assert report.profit == 13
    assert report.profit == report.end_balance - report.start_balance
    assert report.profit_percent == 13 / 100
    assert report.daily_yield == pytest.approx(report.profit_percent)


def test_zero_profit_fails():
    with pytest.raises(NoProfitError) as e:
        compute_yield_report(1000, 5000, 5000, 10, 12)

    assert e.value.profit == 0
    assert e.value.stage == "report"
    assert isinstance(e.value, VerificationError)


def test_loss_fails():
    with pytest.raises(NoProfitError) as e:
        compute_yield_report(1000, 5000, 4990, 10, 12)

    assert e.value.profit == -10
    assert "-10 wei" in str(e.value)
    assert str(e.value).endswith("Failed during stage: report")


def test_annualize_zero_yield():
    assert annualize(0) == (0, 0)


def test_apy_saturates_on_huge_yield():
    start = 5000 * EIGHTEEN_DECIMALS
    # 400% in a day
    report = compute_yield_report(EIGHTEEN_DECIMALS, start, start + 4 * EIGHTEEN_DECIMALS, 1, 24)

    assert report.daily_yield == 4
    assert report.apr == 4 * 365
    assert report.apy == float("inf")


def test_annualize_largest_finite_yield():
    apr, apy = annualize(3)

    assert apr == 3 * 365
    assert apy == 2.5 ** 730 - 1
    assert apy != float("inf")


def test_apy_beats_apr_for_positive_yield():
    apr, apy = annualize(0.001)

    assert apr == pytest.approx(0.365)
    assert apy > apr


##################
# Harvest Cycles #
##################


def test_harvest_cycle_derived_price():
    before = SharePriceSample(100, EIGHTEEN_DECIMALS)
    after = SharePriceSample(100, EIGHTEEN_DECIMALS)

    cycle = HarvestCycle(0, before, after, 1_002 * 10 ** 15)

    assert cycle.derived_price == 1_002 * 10 ** 15
    assert cycle.growth == pytest.approx(1.002)


def test_harvest_cycle_derived_price_scales_vault_price():
    before = SharePriceSample(5, 2 * EIGHTEEN_DECIMALS)
    after = SharePriceSample(5, 2 * EIGHTEEN_DECIMALS)

    # 2.0 vault price * 1.5 facility price
    cycle = HarvestCycle(3, before, after, 15 * 10 ** 17)

    assert cycle.derived_price == 3 * EIGHTEEN_DECIMALS
    assert cycle.growth == 1.5


def test_harvest_cycle_zero_price_has_no_growth():
    sample = SharePriceSample(1, 0)
    cycle = HarvestCycle(0, sample, sample, EIGHTEEN_DECIMALS)

    assert cycle.derived_price == 0
    assert cycle.growth == 0.0


def test_share_price_samples_compare_by_value():
    assert SharePriceSample(7, 10) == SharePriceSample(7, 10)
    assert SharePriceSample(7, 10) != SharePriceSample(8, 10)
    assert SharePriceSample(7, 10) != SharePriceSample(7, 11)


##########
# Output #
##########


def test_report_saved_as_json(tmp_path):
    sample = SharePriceSample(3272, EIGHTEEN_DECIMALS)
    cycle = HarvestCycle(0, sample, sample, 1_001 * 10 ** 15)
    report = compute_yield_report(
        1000 * EIGHTEEN_DECIMALS,
        0,
        EIGHTEEN_DECIMALS,
        1,
        12,
        [cycle],
    )

    filename = json_file.save(str(tmp_path / "history" / "latest-report.json"), report.to_dict())
    loaded = json_file.load(filename)

    assert loaded["principal"] == 1000 * EIGHTEEN_DECIMALS
    assert loaded["finalBalance"] == EIGHTEEN_DECIMALS
    assert loaded["profit"] == EIGHTEEN_DECIMALS
    assert loaded["durationHours"] == 12
    assert loaded["apy"] == report.apy
    assert loaded["cycles"][0]["before"] == {"block": 3272, "price": EIGHTEEN_DECIMALS}
    assert loaded["cycles"][0]["derivedPrice"] == 1_001 * 10 ** 15

    # plain json all the way down
    json.dumps(loaded)


def test_json_file_save_defaults_to_empty(tmp_path):
    filename = json_file.save(str(tmp_path / "empty.json"))

    assert json_file.load(filename) == {}
