# time
AVG_BLOCK_SECONDS = 13.2
HOUR_IN_SECONDS = 60 * 60
DAY_IN_HOURS = 24
YEAR_IN_DAYS = 365
HOUR_IN_BLOCKS = HOUR_IN_SECONDS / AVG_BLOCK_SECONDS
DAY_IN_BLOCKS = HOUR_IN_BLOCKS * DAY_IN_HOURS


PARAMS = {
    "eth-mainnet": {
        # farmer position (wei)
        "PRINCIPAL": 1000 * 10 ** 18,
        # harvest schedule, half days to mirror how hard work is done in production
        "NUM_CYCLES": 10,
        "WAIT_HOURS": 12,
        "AVG_BLOCK_SECONDS": AVG_BLOCK_SECONDS,
        # nexus fixed point scale
        "FACILITY_SCALE": 10 ** 18,
        # paired capital seeded into the nexus by its owner ($10M, 6 decimals)
        "SEED_AMOUNT": 10_000_000 * 10 ** 6,
        # native balance handed to the farmer on top of the principal
        "FARMER_GAS_BUFFER": 10 * 10 ** 18,
    },
    "local": {
        "PRINCIPAL": 1000 * 10 ** 18,
        "NUM_CYCLES": 10,
        "WAIT_HOURS": 12,
        "AVG_BLOCK_SECONDS": AVG_BLOCK_SECONDS,
        "FACILITY_SCALE": 10 ** 18,
        "SEED_AMOUNT": 10_000_000 * 10 ** 6,
        "FARMER_GAS_BUFFER": 10 * 10 ** 18,
    },
}


TOKENS = {
    "eth-mainnet": {
        "WETH": "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2",
        "USDC": "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48",
    },
    "local": {
        "WETH": "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2",
        "USDC": "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48",
    },
}


WHALES = {
    "eth-mainnet": {
        # binance 7
        "USDC": "0xBE0eB53F46cd790Cd13851d5EFf43D12404d33E8",
    },
    "local": {
        "USDC": "0xBE0eB53F46cd790Cd13851d5EFf43D12404d33E8",
    },
}


INTEGRATION_ADDYS = {
    "eth-mainnet": {
        "NEXUS_SUSHI_WETH": "0x98A1551bC63c5b8613B1A9467c3F7adc370aFAA1",
        # harvest.finance deployer
        "GOVERNANCE": "0xf00dD244228F51547f0563e60bCa65a30FBF5f7f",
        # vault, strategy and controller are not deployed by this repo, pass them in
        "CONTROLLER": "",
        "VAULT": "",
        "STRATEGY": "",
    },
    # anvil on 127.0.0.1:8545 started with `--fork-url` pointing at mainnet
    "local": {
        "NEXUS_SUSHI_WETH": "0x98A1551bC63c5b8613B1A9467c3F7adc370aFAA1",
        "GOVERNANCE": "0xf00dD244228F51547f0563e60bCa65a30FBF5f7f",
        "CONTROLLER": "",
        "VAULT": "",
        "STRATEGY": "",
    },
}


FORK_BLOCKS = {
    # None = latest block of the rpc
    "eth-mainnet": None,
    "local": None,
}
