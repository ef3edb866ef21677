import sys
from typing import Any, Mapping

from ape.utils import ZERO_ADDRESS


def _ask(question: str) -> None:
    """Aborts the run when the operator answers 'n'."""
    answer = input(f"{question} Y/N? ")
    if answer.lower().strip() == "n":
        print("Aborting deployment!")
        sys.exit(-1)


def _continue() -> None:
    """Asks the user to continue."""
    _ask("Continue")


def _confirm_deployment(contract_name: str, named_args: Mapping[str, Any]) -> None:
    """Shows the constructor arguments of a single contract and asks to deploy it."""
    if not named_args:
        print(f"\n(i) No constructor parameters for {contract_name}")
        _ask(f"Deploy {contract_name}")
        return

    print(f"\nConstructor parameters for {contract_name}")
    for name, value in named_args.items():
        print(f"\t{name}={value}")
    _ask(f"Deploy {contract_name}")
    if ZERO_ADDRESS in named_args.values():
        _ask("Zero Address detected for deployment parameter; Continue?")
