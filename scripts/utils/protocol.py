"""
Thin adapters over the external contracts the verification talks to.

Each adapter wraps a titanoboa contract handle (`boa.load_abi(...).at(...)`,
or any object exposing the same methods) and names the calls after what the
verification needs from them.
"""

import os

import boa

INTERFACES_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", "..", "interfaces")

# far future deadline accepted by the nexus liquidity calls
DEADLINE = 100000000000


def load_interface(name, address):
    # only the functions the verification calls are in the abi files
    abi_file = os.path.normpath(os.path.join(INTERFACES_DIR, f"{name}.json"))
    return boa.load_abi(abi_file, name=name).at(address)


def _addr(value):
    return value.address if hasattr(value, "address") else value


class NexusFacility:
    """Liquidity Nexus: pairs deposited ETH with owner supplied USDC and mints LP."""

    def __init__(self, contract):
        self.contract = contract

    @property
    def address(self):
        return self.contract.address

    def owner(self):
        return self.contract.owner()

    def available_capacity(self):
        # how much ETH can still be paired with the USDC held by the nexus
        return self.contract.availableSpaceToDepositETH()

    def deposit(self, amount, recipient):
        """Adds `amount` wei as liquidity, returns the LP units minted to `recipient`."""
        before = self.balance_of(recipient)
        self.contract.addLiquidityETH(_addr(recipient), DEADLINE, value=amount, sender=_addr(recipient))
        return self.balance_of(recipient) - before

    def withdraw_all(self, recipient):
        self.contract.removeAllLiquidityETH(_addr(recipient), DEADLINE, sender=_addr(recipient))

    def price_per_share(self):
        return self.contract.pricePerFullShare()

    def set_governance(self, identity, sender):
        self.contract.setGovernance(_addr(identity), sender=_addr(sender))

    def deposit_capital(self, amount, sender):
        self.contract.depositCapital(amount, sender=_addr(sender))

    def balance_of(self, identity):
        return self.contract.balanceOf(_addr(identity))

    def approve(self, spender, amount, owner):
        self.contract.approve(_addr(spender), amount, sender=_addr(owner))


class HarvestVault:
    def __init__(self, contract):
        self.contract = contract

    @property
    def address(self):
        return self.contract.address

    def deposit(self, amount, sender):
        before = self.balance_of(sender)
        self.contract.deposit(amount, sender=_addr(sender))
        return self.balance_of(sender) - before

    def withdraw(self, shares, sender):
        self.contract.withdraw(shares, sender=_addr(sender))

    def balance_of(self, identity):
        return self.contract.balanceOf(_addr(identity))

    def price_per_full_share(self):
        return self.contract.getPricePerFullShare()


class Controller:
    def __init__(self, contract):
        self.contract = contract

    def trigger_harvest(self, vault, sender):
        self.contract.doHardWork(_addr(vault), sender=_addr(sender))


class Strategy:
    def __init__(self, contract):
        self.contract = contract

    @property
    def address(self):
        return self.contract.address

    def withdraw_all_to_vault(self, sender):
        self.contract.withdrawAllToVault(sender=_addr(sender))


class Token:
    def __init__(self, contract):
        self.contract = contract

    def transfer(self, recipient, amount, sender):
        self.contract.transfer(_addr(recipient), amount, sender=_addr(sender))

    def approve(self, spender, amount, sender):
        self.contract.approve(_addr(spender), amount, sender=_addr(sender))

    def balance_of(self, identity):
        return self.contract.balanceOf(_addr(identity))


def load_protocol(args):
    """Returns the adapters for every contract named in `args` (a `VerifyArgs`)."""
    return {
        "facility": NexusFacility(load_interface("NexusLPSushi", args.address("NEXUS_SUSHI_WETH"))),
        "vault": HarvestVault(load_interface("Vault", args.address("VAULT"))),
        "controller": Controller(load_interface("Controller", args.address("CONTROLLER"))),
        "strategy": Strategy(load_interface("Strategy", args.address("STRATEGY"))),
        "paired_token": Token(load_interface("ERC20", args.address("USDC"))),
    }
