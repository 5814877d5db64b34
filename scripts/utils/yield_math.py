"""
Yield figures for a finished verification run.

Formula:
    profit        = end balance - start balance
    profit %      = profit / principal
    daily yield   = profit % / test duration (hours) * 24
    APR           = daily yield * 365
    APY           = (1 + daily yield / 2) ^ (365 * 2) - 1

APY assumes compounding twice a day, the cadence hard work is called at in
production. It is an approximation, not the facility's real compounding.
"""

from scripts.utils import log
from scripts.utils.errors import NoProfitError

from config.BluePrint import DAY_IN_HOURS, YEAR_IN_DAYS

COMPOUNDS_PER_DAY = 2
EIGHTEEN_DECIMALS = 10 ** 18


class SharePriceSample:
    __slots__ = ("block", "price")

    def __init__(self, block, price):
        self.block = block
        self.price = price

    def __eq__(self, other):
        if not isinstance(other, SharePriceSample):
            return NotImplemented
        return self.block == other.block and self.price == other.price

    def __repr__(self):
        return f"SharePriceSample(block={self.block}, price={self.price})"

    def to_dict(self):
        return {"block": self.block, "price": self.price}


class HarvestCycle:
    """One wait + harvest round: the share price around the harvest call and
    the vault price expressed in facility terms afterwards."""

    def __init__(self, index, before: SharePriceSample, after: SharePriceSample, facility_price, scale=EIGHTEEN_DECIMALS):
        self.index = index
        self.before = before
        self.after = after
        self.facility_price = facility_price
        self.derived_price = after.price * facility_price // scale

    @property
    def growth(self):
        if self.before.price == 0:
            return 0.0
        return self.derived_price / self.before.price

    def to_dict(self):
        return {
            "index": self.index,
            "before": self.before.to_dict(),
            "after": self.after.to_dict(),
            "facilityPrice": self.facility_price,
            "derivedPrice": self.derived_price,
            "growth": self.growth,
        }


class YieldReport:
    def __init__(
        self,
        principal,
        start_balance,
        end_balance,
        duration_hours,
        profit_percent,
        daily_yield,
        apr,
        apy,
        cycles=(),
    ):
        self.principal = principal
        self.start_balance = start_balance
        self.end_balance = end_balance
        self.duration_hours = duration_hours
        self.profit_percent = profit_percent
        self.daily_yield = daily_yield
        self.apr = apr
        self.apy = apy
        self.cycles = tuple(cycles)

    @property
    def profit(self):
        return self.end_balance - self.start_balance

    def to_dict(self):
        return {
            "principal": self.principal,
            "startBalance": self.start_balance,
            "finalBalance": self.end_balance,
            "profit": self.profit,
            "profitPercent": self.profit_percent,
            "durationHours": self.duration_hours,
            "dailyYield": self.daily_yield,
            "apr": self.apr,
            "apy": self.apy,
            "cycles": [c.to_dict() for c in self.cycles],
        }


def annualize(daily_yield):
    """Returns `(apr, apy)` for a daily yield expressed as a ratio."""
    apr = daily_yield * YEAR_IN_DAYS
    try:
        apy = (1 + daily_yield / COMPOUNDS_PER_DAY) ** (YEAR_IN_DAYS * COMPOUNDS_PER_DAY) - 1
    except OverflowError:
        # compounding runs past float range on very large daily yields
        apy = float("inf")
    return apr, apy


def compute_yield_report(principal, start_balance, end_balance, num_cycles, wait_hours, cycles=()):
    profit = end_balance - start_balance
    if profit <= 0:
        raise NoProfitError("report", profit)

    duration_hours = num_cycles * wait_hours
    profit_percent = profit / principal
    daily_yield = profit_percent / duration_hours * DAY_IN_HOURS
    apr, apy = annualize(daily_yield)

    return YieldReport(
        principal,
        start_balance,
        end_balance,
        duration_hours,
        profit_percent,
        daily_yield,
        apr,
        apy,
        cycles,
    )


def fmt(wei, decimals=18):
    return wei / (10 ** decimals)


def log_report(report: YieldReport, symbol="ETH"):
    log.h2("Yield report")
    log.metric("start balance", fmt(report.start_balance), symbol)
    log.metric("end balance", fmt(report.end_balance), symbol)
    log.metric("principal", fmt(report.principal), symbol)
    log.metric("profit", fmt(report.profit), symbol)
    log.metric("test duration", report.duration_hours, "hours")
    log.metric("profit percent", f"{report.profit_percent:.6%}")
    log.metric("daily percent yield", f"{report.daily_yield:.6%}")
    log.metric("APR", f"{report.apr:.4%}")
    log.metric("APY", f"{report.apy:.4%}")
