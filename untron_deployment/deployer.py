import typing
from collections import OrderedDict
from typing import Any, List

from ape.api import AccountAPI, ReceiptAPI
from ape.contracts.base import ContractContainer, ContractInstance, ContractTransactionHandler
from eth_typing import ChecksumAddress
from ethpm_types.abi import ABIType, MethodABI
from web3.auto import w3

from untron_deployment.confirm import _confirm_deployment, _continue
from untron_deployment.exceptions import InvalidArguments


def _validate_method_args(
    method_abis: List[MethodABI], args: typing.Sequence[Any]
) -> typing.Dict[str, Any]:
    """Validates the transaction arguments against the function ABI."""
    if len(method_abis) == 0:
        raise InvalidArguments("No method abis provided for validation of args")

    abis_matching_args_length = [abi for abi in method_abis if len(abi.inputs) == len(args)]
    for abi in abis_matching_args_length:
        named_args = OrderedDict()
        for arg, abi_input in zip(args, abi.inputs):
            if not w3.is_encodable(abi_input.type, arg):
                break
            named_args[abi_input.name] = arg
        else:
            return named_args
    raise InvalidArguments(
        f"Could not find ABI for '{method_abis[0].name}' with {len(args)} arg(s) and given type(s)"
    )


def _validate_constructor_args(
    contract_name: str, abi_inputs: List[ABIType], args: typing.Sequence[Any]
) -> OrderedDict:
    """Validates positional constructor arguments against the constructor ABI."""
    if len(args) != len(abi_inputs):
        raise InvalidArguments(
            f"Constructor parameters length mismatch - "
            f"{contract_name} ABI requires {len(abi_inputs)}, Got {len(args)}."
        )

    named_args = OrderedDict()
    for position, (abi_input, value) in enumerate(zip(abi_inputs, args)):
        if not w3.is_encodable(abi_input.type, value):
            raise InvalidArguments(
                f"{contract_name} constructor param '{abi_input.name}' at position {position} "
                f"has a value '{value}' whose type does not match expected ABI type "
                f"'{abi_input.type}'"
            )
        named_args[abi_input.name or f"arg{position}"] = value
    return named_args


class Transactor:
    """
    Represents an ape account plus validated/annotated transaction execution.

    Every call blocks until ape returns the receipt, so transactions from
    the deployer are never in flight concurrently.
    """

    def __init__(self, account: AccountAPI, autosign: bool = False):
        self._account = account
        if autosign:
            print("WARNING: Autosign is enabled. Transactions will be signed automatically.")
        self._autosign = autosign

    @property
    def address(self) -> ChecksumAddress:
        return self._account.address

    def transact(self, method: ContractTransactionHandler, *args) -> ReceiptAPI:
        named_args = _validate_method_args(method_abis=method.abis, args=args)
        base_message = (
            f"\nTransacting {method.contract.contract_type.name}"
            f"[{method.contract.address[:10]}].{method.abis[0].name}"
        )
        if named_args:
            pretty_args = "\n\t".join(f"{k}={v}" for k, v in named_args.items())
            message = f"{base_message} with arguments:\n\t{pretty_args}"
        else:
            message = f"{base_message} with no arguments"
        print(message)
        if not self._autosign:
            _continue()

        return method(*args, sender=self._account)


class Deployer(Transactor):
    """
    Represents an ape account plus validated/annotated contract creation.
    """

    def deploy(self, container: ContractContainer, *args) -> ContractInstance:
        contract_name = container.contract_type.name
        named_args = _validate_constructor_args(
            contract_name=contract_name,
            abi_inputs=container.constructor.abi.inputs,
            args=args,
        )
        if not self._autosign:
            _confirm_deployment(contract_name, named_args)

        instance = self._account.deploy(container, *args)
        print(f"Deployed {contract_name} at {instance.address}")
        return instance

    def deploy_proxy(
        self,
        proxy_container: ContractContainer,
        implementation_container: ContractContainer,
        implementation: ContractInstance,
        initializer: str,
        *initializer_args,
    ) -> ContractInstance:
        """
        Deploys a proxy for an already deployed implementation. The proxy
        constructor calls the initializer, so the proxy never exists uninitialized.
        """
        target_name = implementation_container.contract_type.name
        proxy_name = proxy_container.contract_type.name

        initializer_handler = getattr(implementation, initializer)
        _validate_method_args(method_abis=initializer_handler.abis, args=initializer_args)
        init_data = initializer_handler.encode_input(*initializer_args)

        print(f"\nDeploying {proxy_name} contract to proxy {target_name}.")
        proxy_contract = self.deploy(proxy_container, implementation.address, init_data)
        print(
            f"\nWrapping {target_name} into {proxy_name} "
            f"(as type {target_name}) at {proxy_contract.address}."
        )
        return implementation_container.at(proxy_contract.address)
