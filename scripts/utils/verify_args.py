from eth_utils import is_hex_address, to_checksum_address
from mergedeep import merge

from config.BluePrint import PARAMS, INTEGRATION_ADDYS, TOKENS, WHALES, FORK_BLOCKS
from scripts.utils.errors import ConfigError


class VerifyArgs:
    """
    Explicit configuration of a verification run: blueprint values for the
    chain with caller overrides merged on top.
    """

    def __init__(self, chain, farmer=None, params=None, addys=None, rpc=None, block=None):
        if chain not in PARAMS:
            raise ConfigError(f"Unknown chain `{chain}`, expected one of {sorted(PARAMS)}")

        self.chain = chain
        self.rpc = rpc
        self.block = block if block is not None else FORK_BLOCKS.get(chain)
        self.farmer = farmer
        self.params = merge({}, PARAMS[chain], params or {})
        self.addys = merge({}, INTEGRATION_ADDYS.get(chain, {}), {k: v for k, v in (addys or {}).items() if v})
        self.tokens = TOKENS.get(chain, {})
        self.whales = WHALES.get(chain, {})
        self._validate_params()

    def _validate_params(self):
        if not isinstance(self.num_cycles, int) or self.num_cycles < 1:
            raise ConfigError(f"NUM_CYCLES must be a positive integer, got {self.num_cycles}")
        if self.wait_hours <= 0:
            raise ConfigError(f"WAIT_HOURS must be positive, got {self.wait_hours}")
        if self.principal <= 0:
            raise ConfigError(f"PRINCIPAL must be positive, got {self.principal}")
        if self.avg_block_seconds <= 0:
            raise ConfigError(f"AVG_BLOCK_SECONDS must be positive, got {self.avg_block_seconds}")

    @property
    def principal(self):
        return self.params["PRINCIPAL"]

    @property
    def num_cycles(self):
        return self.params["NUM_CYCLES"]

    @property
    def wait_hours(self):
        return self.params["WAIT_HOURS"]

    @property
    def avg_block_seconds(self):
        return self.params["AVG_BLOCK_SECONDS"]

    @property
    def facility_scale(self):
        return self.params["FACILITY_SCALE"]

    @property
    def seed_amount(self):
        return self.params["SEED_AMOUNT"]

    @property
    def farmer_gas_buffer(self):
        return self.params["FARMER_GAS_BUFFER"]

    def address(self, name):
        """Checksummed address for `name`, looked up in integrations, then tokens."""
        for source in (self.addys, self.tokens):
            if name in source and source[name]:
                value = source[name]
                if not is_hex_address(value):
                    raise ConfigError(f"`{name}` is not a valid address: {value}")
                return to_checksum_address(value)
        raise ConfigError(f"No address configured for `{name}` on `{self.chain}`")

    def whale(self, token):
        """Checksummed holder used as the funding source for `token`."""
        value = self.whales.get(token)
        if not value:
            raise ConfigError(f"No whale configured for `{token}` on `{self.chain}`")
        if not is_hex_address(value):
            raise ConfigError(f"Whale for `{token}` is not a valid address: {value}")
        return to_checksum_address(value)

    def __repr__(self):
        return (
            f"VerifyArgs(chain={self.chain}, principal={self.principal}, "
            f"cycles={self.num_cycles}, wait_hours={self.wait_hours}, block={self.block})"
        )
