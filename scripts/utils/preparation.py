from scripts.utils import log
from scripts.utils.yield_math import fmt


def prepare_facility(chain, facility, paired_token, strategy, whale, seed_amount):
    """
    Gets a forked facility ready to take the farmer's ETH:
    hands facility governance to the strategy and has the owner deposit
    `seed_amount` of the paired asset, taken from `whale`, as capital.
    """
    owner = facility.owner()
    log.h2("Preparing facility")

    with chain.impersonating(owner, whale):
        facility.set_governance(strategy, sender=owner)
        log.h3(f"Facility governance handed to strategy {strategy.address}")

        paired_token.transfer(owner, seed_amount, sender=whale)
        paired_token.approve(facility, seed_amount, sender=owner)
        facility.deposit_capital(seed_amount, sender=owner)
        log.h3(f"Owner deposited {seed_amount} units of paired capital")

    return owner


def fund_farmer(chain, farmer, principal, buffer=0):
    """Simulated funding source, the farmer starts with principal plus a buffer."""
    amount = principal + buffer
    chain.set_native_balance(farmer, amount)
    log.h3(f"Farmer {farmer} funded with {fmt(amount)} ETH")
    return amount
