from colorama import Fore, Style

RULE_WIDTH = 73
LABEL_WIDTH = 22


def _paint(color, msg):
    return f"{color}{msg}{Style.RESET_ALL}"


def h1(msg):
    print("\n\n" + _paint(Fore.CYAN, "-" * RULE_WIDTH))
    print(_paint(Fore.CYAN, msg) + "\n")


def h2(msg):
    # one per verification stage
    print("\n" + _paint(Fore.LIGHTBLUE_EX, f"▸ {msg}") + "\n")


def h3(msg):
    print("\t" + _paint(Fore.GREEN, msg))


def metric(label, value, unit=""):
    suffix = f" {unit}" if unit else ""
    print("\t" + _paint(Fore.YELLOW, f"{label:<{LABEL_WIDTH}}") + f"{value}{suffix}")


def error(msg):
    print(_paint(Fore.RED, msg))


def info(msg):
    print(msg)
