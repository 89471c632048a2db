import typing
from collections import OrderedDict
from typing import Any, List

from ape.api import AccountAPI, ReceiptAPI
from ape.cli.choices import select_account
from ape.contracts.base import ContractContainer, ContractInstance, ContractTransactionHandler
from ape.exceptions import ContractLogicError, ProviderError, TransactionError
from eth_abi import is_encodable
from eth_utils import encode_hex

from crocops.addresses import NOT_DEPLOYED
from crocops.confirm import Confirm, _confirm_resolution, _continue, auto_confirm, prompt_confirmation
from crocops.exceptions import ConfigurationError, ContractRevertError, NetworkError
from crocops.salts import predict_create2_address


def _validate_method_args(method_abis: List[Any], args: typing.Sequence[Any]) -> typing.Dict[str, Any]:
    """Validates the transaction arguments against the function ABI."""
    if len(method_abis) == 0:
        raise ValueError("No method abis provided for validation of args")

    abis_matching_args_length = [abi for abi in method_abis if len(abi.inputs) == len(args)]
    for abi in abis_matching_args_length:
        named_args = OrderedDict()
        for position, (arg, abi_input) in enumerate(zip(args, abi.inputs)):
            if not is_encodable(abi_input.type, arg):
                break
            named_args[abi_input.name or f"arg{position}"] = arg
        else:
            return named_args
    raise ValueError(
        f"Could not find ABI for '{method_abis[0].name}' with {len(args)} arg(s) and given type(s)"
    )


def _constructor_params(container: ContractContainer, args: typing.Sequence[Any]) -> OrderedDict:
    """Names and validates constructor arguments against the constructor ABI."""
    contract_name = container.contract_type.name
    abi_inputs = container.constructor.abi.inputs
    if len(args) != len(abi_inputs):
        raise ConfigurationError(
            f"Constructor parameters length mismatch - "
            f"{contract_name} ABI requires {len(abi_inputs)}, Got {len(args)}."
        )

    resolved_params = OrderedDict()
    for position, (abi_input, value) in enumerate(zip(abi_inputs, args)):
        if not is_encodable(abi_input.type, value):
            raise ConfigurationError(
                f"Constructor param name '{abi_input.name}' at position {position} has a value "
                f"'{value}' whose type does not match expected ABI type '{abi_input.type}'"
            )
        resolved_params[abi_input.name or f"arg{position}"] = value
    return resolved_params


def _submit(description: str, send: typing.Callable[[], Any]) -> Any:
    """Sends a transaction and maps ape failures onto the crocops error taxonomy."""
    try:
        return send()
    except ContractLogicError as e:
        raise ContractRevertError(f"{description} reverted: {e.revert_message}", e.revert_message)
    except (TransactionError, ProviderError) as e:
        raise NetworkError(f"{description} failed: {e}")


class Transactor:
    """
    Represents an ape account plus validated/annotated transaction execution.
    """

    def __init__(
        self,
        account: typing.Optional[AccountAPI] = None,
        autosign: bool = False,
        confirm: typing.Optional[Confirm] = None,
    ):
        if account is None:
            self._account = select_account()
        else:
            self._account = account
        if autosign:
            print("WARNING: Autosign is enabled. Transactions will be signed automatically.")
            self._account.set_autosign(True)
            confirm = auto_confirm
        self._autosign = autosign
        self._confirm = confirm or prompt_confirmation

    def get_account(self) -> AccountAPI:
        """Returns the transactor account."""
        return self._account

    @property
    def address(self) -> str:
        return self._account.address

    def transact(self, method: ContractTransactionHandler, *args, value: int = 0) -> ReceiptAPI:
        named_args = _validate_method_args(method_abis=method.abis, args=args)
        contract_name = method.contract.contract_type.name
        base_message = (
            f"\nTransacting {contract_name}"
            f"[{method.contract.address[:10]}].{method.abis[0].name}"
        )
        if named_args:
            pretty_args = "\n\t".join(f"{k}={v}" for k, v in named_args.items())
            message = f"{base_message} with arguments:\n\t{pretty_args}"
        else:
            message = f"{base_message} with no arguments"
        if value:
            message = f"{message}\n\tvalue={value} wei"
        print(message)
        _continue(self._confirm)

        kwargs = {"sender": self._account}
        if value:
            kwargs["value"] = value
        return _submit(
            f"{contract_name}.{method.abis[0].name}",
            lambda: method(*args, **kwargs),
        )


class Deployer(Transactor):
    """
    Represents an ape account plus idempotent, annotated contract deployment.
    """

    def __init__(
        self,
        account: typing.Optional[AccountAPI] = None,
        autosign: bool = False,
        confirm: typing.Optional[Confirm] = None,
        publish: bool = False,
    ):
        super().__init__(account=account, autosign=autosign, confirm=confirm)
        self.publish = publish
        self.deployments = list()

    def ensure_deployed(
        self, container: ContractContainer, existing_address: str, *args
    ) -> ContractInstance:
        """
        Attaches to the contract at ``existing_address`` if the registry has
        one, otherwise deploys it with exactly one transaction.
        """
        contract_name = container.contract_type.name
        if existing_address != NOT_DEPLOYED:
            print(f"(i) {contract_name} already deployed at {existing_address}; skipping.")
            return container.at(existing_address)

        resolved_params = _constructor_params(container, args)
        _confirm_resolution(resolved_params, contract_name, self._confirm)
        instance = _submit(
            f"{contract_name} deployment",
            lambda: self._account.deploy(container, *args, publish=self.publish),
        )
        print(f"(i) {contract_name} deployed at {instance.address}")
        self.deployments.append(instance)
        return instance

    def salted_deploy(
        self, croc_deployer: ContractInstance, container: ContractContainer, salt: bytes
    ) -> ContractInstance:
        """Deploys a contract through CrocDeployer with CREATE2 and a known salt."""
        contract_name = container.contract_type.name
        init_code = bytes(container.contract_type.get_deployment_bytecode() or b"")
        if not init_code:
            raise ConfigurationError(f"No deployment bytecode for {contract_name}")

        expected_address = predict_create2_address(croc_deployer.address, salt, init_code)
        print(f"Using CREATE2 salt {encode_hex(salt)}")
        print(f"{contract_name} will be deployed at {expected_address}")

        self.transact(croc_deployer.deploy, init_code, int.from_bytes(salt, "big"))
        instance = container.at(expected_address)
        self.deployments.append(instance)
        return instance
