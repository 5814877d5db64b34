import contextlib

from scripts.utils import log
from scripts.utils.errors import VerificationError, PreconditionError, InvariantError
from scripts.utils.harness import SimulatedClock
from scripts.utils.verify_args import VerifyArgs
from scripts.utils.yield_math import (
    EIGHTEEN_DECIMALS,
    HarvestCycle,
    SharePriceSample,
    YieldReport,
    compute_yield_report,
    fmt,
    log_report,
)


class YieldVerification:
    """
    Runs a farmer through the facility and the vault, lets the controller
    harvest for `num_cycles` rounds of `wait_hours` simulated hours, unwinds
    the position and reports the realised yield.

    Every check is a hard stop: the first failure raises and nothing is
    retried or cleaned up, the simulated chain is thrown away afterwards.
    """

    def __init__(
        self,
        chain,
        facility,
        vault,
        controller,
        farmer,
        governance,
        principal,
        num_cycles,
        wait_hours,
        avg_block_seconds,
        facility_scale=EIGHTEEN_DECIMALS,
        strategy=None,
    ):
        self.chain = chain
        self.clock = SimulatedClock(chain, avg_block_seconds)
        self.facility = facility
        self.vault = vault
        self.controller = controller
        self.strategy = strategy
        self.farmer = farmer
        self.governance = governance
        self.principal = principal
        self.num_cycles = num_cycles
        self.wait_hours = wait_hours
        self.facility_scale = facility_scale
        self.stage = None
        self.cycles = []
        self.shares_minted = 0

    @classmethod
    def from_args(cls, args: VerifyArgs, chain, facility, vault, controller, strategy=None):
        return cls(
            chain,
            facility,
            vault,
            controller,
            farmer=args.farmer,
            governance=args.address("GOVERNANCE"),
            principal=args.principal,
            num_cycles=args.num_cycles,
            wait_hours=args.wait_hours,
            avg_block_seconds=args.avg_block_seconds,
            facility_scale=args.facility_scale,
            strategy=strategy,
        )

    @contextlib.contextmanager
    def _stage(self, name):
        self.stage = name
        try:
            yield
        except VerificationError:
            raise
        except Exception as exception:
            raise VerificationError(name) from exception

    def run(self) -> YieldReport:
        log.h1(f"Verifying {fmt(self.principal)} ETH over {self.num_cycles} x {self.wait_hours}h harvest cycles")
        log.info(f"On block number {self.chain.current_height()}.")

        with self.chain.impersonating(self.farmer, self.governance):
            start_balance = self.chain.native_balance(self.farmer)

            with self._stage("precondition"):
                self._check_capacity()

            with self._stage("facility deposit"):
                log.h2(f"Farmer enters the facility with {fmt(self.principal)} ETH")
                position_units = self.facility.deposit(self.principal, self.farmer)

            with self._stage("vault deposit"):
                log.h2("Farmer deposits facility LP into the vault")
                self.facility.approve(self.vault, position_units, self.farmer)
                self.shares_minted = self.vault.deposit(position_units, self.farmer)
                self._check_shares("vault deposit")
                lp_held = self.facility.balance_of(self.farmer)

            for i in range(self.num_cycles):
                with self._stage(f"harvest cycle {i}"):
                    self._harvest_cycle(i)

            with self._stage("vault withdraw"):
                self._check_shares("vault withdraw")
                log.h2("Farmer withdraws from the vault")
                self.vault.withdraw(self.shares_minted, self.farmer)
                recovered = self.facility.balance_of(self.farmer) - lp_held
                if recovered != self.shares_minted:
                    raise InvariantError(
                        "vault withdraw", "Vault redemption is not 1:1", self.shares_minted, recovered
                    )

            with self._stage("facility withdraw"):
                log.h2("Farmer exits the facility")
                self.facility.withdraw_all(self.farmer)

            end_balance = self.chain.native_balance(self.farmer)
            self.stage = "report"
            report = compute_yield_report(
                self.principal,
                start_balance,
                end_balance,
                self.num_cycles,
                self.wait_hours,
                self.cycles,
            )
            log_report(report)
            log.h3("Earned!")

            if self.strategy is not None:
                with self._stage("strategy exit"):
                    # the position must be movable for a future strategy switch
                    self.strategy.withdraw_all_to_vault(self.governance)

        return report

    def _check_capacity(self):
        capacity = self.facility.available_capacity()
        log.h3(f"Available capacity: {fmt(capacity)} ETH")
        if not self.principal < capacity:
            raise PreconditionError(
                "precondition",
                f"Principal {self.principal} does not fit in the facility capacity {capacity}",
            )

    def _check_shares(self, stage):
        balance = self.vault.balance_of(self.farmer)
        log.h3(f"Vault balance: {fmt(balance)}")
        if balance != self.shares_minted:
            raise InvariantError(stage, "Vault share count changed", self.shares_minted, balance)

    def _sample(self):
        return SharePriceSample(self.chain.current_height(), self.vault.price_per_full_share())

    def _harvest_cycle(self, index):
        log.h2(f"Loop {index}")
        self.clock.advance(self.wait_hours)

        before = self._sample()
        self.controller.trigger_harvest(self.vault, self.governance)
        after = self._sample()

        # 1:1 facility LP to vault share, the harvest itself must not move the price
        if after.price != before.price:
            raise InvariantError(
                f"harvest cycle {index}", "Share price moved during harvest", before.price, after.price
            )

        cycle = HarvestCycle(index, before, after, self.facility.price_per_share(), self.facility_scale)
        self.cycles.append(cycle)

        log.h3(f"old share price: {before.price}")
        log.h3(f"new share price: {cycle.derived_price}")
        log.h3(f"growth: {cycle.growth}")
        return cycle
