import os

import boa
import click
import dotenv
from eth_utils import to_wei

from scripts.utils import log
from scripts.utils import json_file
from scripts.utils.errors import ConfigError, VerificationError
from scripts.utils.harness import BoaChain
from scripts.utils.preparation import prepare_facility, fund_farmer
from scripts.utils.protocol import load_protocol
from scripts.utils.verification import YieldVerification
from scripts.utils.verify_args import VerifyArgs

dotenv.load_dotenv()


YIELD_HISTORY_DIR = "./yield_history"


CLICK_PROMPTS = {
    "chain": {
        "prompt": "Chain name",
        "default": "eth-mainnet",
        "help": "Chain to fork for the verification (eth-mainnet, local). Defaults to `eth-mainnet`.",
        "type": click.Choice(["eth-mainnet", "local"], case_sensitive=False),
    },
    "rpc": {
        "prompt": "What is the desired rpc?",
        "default": "",
        "help": "RPC url to fork from. Defaults to alchemy for the chain, or a local node for `local`.",
    },
    "block": {
        "prompt": "Fork block number",
        "default": 0,
        "help": "Block to fork at. 0 uses the blueprint block, or the latest one if none is set.",
    },
    "vault": {
        "prompt": "What is the vault address?",
        "default": "",
        "help": "Vault wrapping the facility LP. Defaults to the blueprint value.",
    },
    "strategy": {
        "prompt": "What is the strategy address?",
        "default": "",
        "help": "Strategy of the vault, receives facility governance. Defaults to the blueprint value.",
    },
    "controller": {
        "prompt": "What is the controller address?",
        "default": "",
        "help": "Controller that triggers hard work. Defaults to the blueprint value.",
    },
    "principal": {
        "prompt": "Principal (ETH)",
        "default": 1000,
        "help": "ETH the farmer deposits, fractions allowed. Defaults to `1000`.",
        "type": click.FloatRange(min=0, min_open=True),
    },
    "cycles": {
        "prompt": "Number of harvest cycles",
        "default": 10,
        "help": "How many wait + harvest rounds to run. Defaults to `10`.",
    },
    "wait_hours": {
        "prompt": "Hours between harvests",
        "default": 12,
        "help": "Simulated hours waited before every harvest. Defaults to `12`.",
    },
}


def rpc_url(chain, rpc):
    if rpc:
        return rpc
    if chain == "local":
        return "http://127.0.0.1:8545"
    return f"https://{chain}.g.alchemy.com/v2/{os.environ.get('WEB3_ALCHEMY_API_KEY')}"


def param_prompt(ctx, param, value):
    param_config = CLICK_PROMPTS.get(param.name)
    if param_config is None:
        return value

    default_val = param_config.get("default")
    if value != default_val or ctx.params.get("silent"):
        return value

    return click.prompt(
        f"{param_config['prompt']} --{param.name.replace('_', '-')}",
        default=default_val,
        type=param_config.get("type"),
    )


def report_filename(chain, block, name=None, output=YIELD_HISTORY_DIR):
    return os.path.join(output, chain, f"{name or block or 'latest'}-report.json")


def run_verification(args: VerifyArgs, env):
    chain = BoaChain(env)
    protocol = load_protocol(args)

    if args.farmer is None:
        args.farmer = env.generate_address("farmer")

    prepare_facility(
        chain,
        protocol["facility"],
        protocol["paired_token"],
        protocol["strategy"],
        whale=args.whale("USDC"),
        seed_amount=args.seed_amount,
    )
    fund_farmer(chain, args.farmer, args.principal, args.farmer_gas_buffer)

    verification = YieldVerification.from_args(
        args,
        chain,
        protocol["facility"],
        protocol["vault"],
        protocol["controller"],
        strategy=protocol["strategy"],
    )
    return verification.run()


@click.command()
@click.option("--silent", is_flag=True, default=False, help="Run command without prompts.")
@click.option(
    "--chain", "-c",
    default=CLICK_PROMPTS["chain"]["default"],
    help=CLICK_PROMPTS["chain"]["help"],
    type=CLICK_PROMPTS["chain"]["type"],
    callback=param_prompt,
)
@click.option(
    "--rpc",
    default=CLICK_PROMPTS["rpc"]["default"],
    help=CLICK_PROMPTS["rpc"]["help"],
    callback=param_prompt,
)
@click.option(
    "--block", "-b",
    default=CLICK_PROMPTS["block"]["default"],
    help=CLICK_PROMPTS["block"]["help"],
    type=int,
    callback=param_prompt,
)
@click.option(
    "--vault",
    default=CLICK_PROMPTS["vault"]["default"],
    help=CLICK_PROMPTS["vault"]["help"],
    callback=param_prompt,
)
@click.option(
    "--strategy",
    default=CLICK_PROMPTS["strategy"]["default"],
    help=CLICK_PROMPTS["strategy"]["help"],
    callback=param_prompt,
)
@click.option(
    "--controller",
    default=CLICK_PROMPTS["controller"]["default"],
    help=CLICK_PROMPTS["controller"]["help"],
    callback=param_prompt,
)
@click.option(
    "--principal", "-p",
    default=CLICK_PROMPTS["principal"]["default"],
    help=CLICK_PROMPTS["principal"]["help"],
    type=CLICK_PROMPTS["principal"]["type"],
    callback=param_prompt,
)
@click.option(
    "--cycles", "-n",
    default=CLICK_PROMPTS["cycles"]["default"],
    help=CLICK_PROMPTS["cycles"]["help"],
    type=int,
    callback=param_prompt,
)
@click.option(
    "--wait-hours", "-w",
    default=CLICK_PROMPTS["wait_hours"]["default"],
    help=CLICK_PROMPTS["wait_hours"]["help"],
    type=int,
    callback=param_prompt,
)
@click.option("--farmer", default="", help="Farmer address. Defaults to a generated address.")
@click.option("--output", "-o", default=YIELD_HISTORY_DIR, help="Directory the reports are saved to.")
def cli(silent, chain, rpc, block, vault, strategy, controller, principal, cycles, wait_hours, farmer, output):
    """
    Verifies that a farmer earns by providing ETH to the Liquidity Nexus and
    parking the LP in a harvest vault.

    The chain is forked, the nexus is seeded with USDC from a whale and its
    governance handed to the strategy. The farmer then deposits, the
    controller does hard work every `--wait-hours` for `--cycles` rounds and
    the farmer exits. Share price and share count invariants are checked on
    the way and the realised yield (profit, daily yield, APR, APY) is
    printed and saved as JSON under `<output>/<chain>/`.
    """
    try:
        args = VerifyArgs(
            chain,
            farmer=farmer or None,
            params={
                "PRINCIPAL": to_wei(principal, "ether"),
                "NUM_CYCLES": cycles,
                "WAIT_HOURS": wait_hours,
            },
            addys={"VAULT": vault, "STRATEGY": strategy, "CONTROLLER": controller},
            rpc=rpc_url(chain, rpc),
            block=block or None,
        )
    except ConfigError as exception:
        raise click.ClickException(str(exception)) from exception

    log.h1("Yield Verification")
    log.info(f"Forking chain `{args.chain}`.")
    log.info(f"Verification arguments: {args}")
    log.info("")

    fork_kwargs = {"block_identifier": args.block} if args.block else {}
    with boa.fork(args.rpc, **fork_kwargs) as env:
        block_number = env.evm.patch.block_number
        log.info(f"Forked at block {block_number}.")
        try:
            report = run_verification(args, env)
        except (ConfigError, VerificationError) as exception:
            log.error(str(exception))
            raise click.ClickException(str(exception)) from exception

    content = {
        "chain": args.chain,
        "block": block_number,
        "farmer": str(args.farmer),
        "report": report.to_dict(),
    }
    filename = json_file.save(report_filename(args.chain, block_number, output=output), content)
    json_file.save(report_filename(args.chain, block_number, "current", output=output), content)
    log.info(f"Report saved to {filename}")

    log.info("Done.")
    log.info("")


if __name__ == "__main__":
    cli()
