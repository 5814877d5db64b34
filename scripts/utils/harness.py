import contextlib

import boa

from scripts.utils import log
from config.BluePrint import HOUR_IN_SECONDS


class BoaChain:
    """
    Simulation controls over a titanoboa environment: scoped impersonation,
    block/time advancement and native balances. Works the same on a local
    `Env()` and on a `boa.fork(...)` environment.
    """

    def __init__(self, env=None):
        self._env = env
        self.impersonated = []

    @property
    def env(self):
        return self._env if self._env is not None else boa.env

    @contextlib.contextmanager
    def impersonating(self, *identities):
        """
        Act as `identities` while the scope is open. A forked pyevm accepts any
        sender, so the first identity simply becomes the default sender; the
        others are used by passing them explicitly as `sender`.
        """
        if not identities:
            raise ValueError("at least one identity is required")

        self.impersonated.extend(identities)
        log.h3(f"Impersonating {', '.join(str(i) for i in identities)}")
        try:
            with self.env.prank(identities[0]):
                yield identities[0]
        finally:
            for identity in identities:
                self.impersonated.remove(identity)

    def advance(self, blocks, seconds=None):
        """
        Moves the chain `blocks` blocks ahead. `seconds` sets the timestamp
        move on its own, otherwise the runtime's default block time is used.
        """
        if seconds is None:
            self.env.time_travel(blocks=blocks)
            return
        # time_travel takes either blocks or seconds, never both
        self.env.time_travel(blocks=blocks, block_delta=0)
        self.env.evm.patch.timestamp += seconds

    def current_height(self):
        return self.env.evm.patch.block_number

    def native_balance(self, identity):
        return self.env.get_balance(str(identity))

    def set_native_balance(self, identity, amount):
        self.env.set_balance(str(identity), amount)


class SimulatedClock:
    """Hour based clock over a chain harness, decoupled from wall clock time."""

    def __init__(self, chain, avg_block_seconds):
        if avg_block_seconds <= 0:
            raise ValueError("average block time must be positive")
        self.chain = chain
        self.avg_block_seconds = avg_block_seconds
        self.elapsed_hours = 0

    @property
    def blocks_per_hour(self):
        return HOUR_IN_SECONDS / self.avg_block_seconds

    def blocks_for(self, hours):
        return int(self.blocks_per_hour * hours)

    def advance(self, hours):
        blocks = self.blocks_for(hours)
        self.chain.advance(blocks, seconds=int(hours * HOUR_IN_SECONDS))
        self.elapsed_hours += hours
        return blocks
