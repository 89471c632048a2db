import pytest
from ape.exceptions import ContractLogicError
from ape.utils import ZERO_ADDRESS

from crocops.confirm import auto_confirm
from crocops.exceptions import ConfigurationError, ContractRevertError
from crocops.params import Deployer, Transactor, _validate_method_args

from tests.conftest import address


def test_ensure_deployed_attaches_to_existing(deployer, fake_project, ledger):
    existing = address("existing-policy")
    instance = deployer.ensure_deployed(fake_project("CrocPolicy"), existing, address("dex"))
    assert instance.address == existing
    assert ledger == []
    assert deployer.deployments == []


def test_ensure_deployed_deploys_exactly_once(deployer, fake_project, ledger):
    dex = address("dex")
    instance = deployer.ensure_deployed(fake_project("CrocPolicy"), "", dex)
    assert ledger == [("deploy", "CrocPolicy", (dex,))]
    assert deployer.deployments == [instance]


def test_constructor_args_are_validated(deployer, fake_project, ledger):
    with pytest.raises(ConfigurationError, match="length mismatch"):
        deployer.ensure_deployed(fake_project("CrocPolicy"), "")
    with pytest.raises(ConfigurationError, match="dex"):
        deployer.ensure_deployed(fake_project("CrocPolicy"), "", "not-an-address")
    assert ledger == []


def test_declined_confirmation_aborts(fake_account, fake_project, ledger):
    prompts = list()

    def decline(prompt):
        prompts.append(prompt)
        return False

    deployer = Deployer(account=fake_account, confirm=decline)
    with pytest.raises(SystemExit):
        deployer.ensure_deployed(fake_project("ColdPath"), "")
    assert prompts == ["Deploy ColdPath"]
    assert ledger == []


def test_autosign_skips_prompts(fake_account, fake_project, ledger):
    deployer = Deployer(account=fake_account, autosign=True, confirm=lambda prompt: False)
    deployer.ensure_deployed(fake_project("ColdPath"), "")
    assert fake_account.autosign is True
    assert len(ledger) == 1


def test_transact(fake_account, fake_project, ledger):
    transactor = Transactor(account=fake_account, confirm=auto_confirm)
    policy = fake_project("CrocPolicy").at(address("policy"))
    transactor.transact(
        policy.transferGovernance, address("ops"), address("treasury"), address("emergency")
    )
    assert ledger == [
        (
            "transact",
            "CrocPolicy",
            "transferGovernance",
            (address("ops"), address("treasury"), address("emergency")),
        )
    ]


def test_transact_rejects_mismatched_args(fake_account, fake_project, ledger):
    transactor = Transactor(account=fake_account, confirm=auto_confirm)
    policy = fake_project("CrocPolicy").at(address("policy"))
    with pytest.raises(ValueError):
        transactor.transact(policy.transferGovernance, address("ops"))
    assert ledger == []


def test_reverts_are_reported(fake_account, fake_project, monkeypatch):
    transactor = Transactor(account=fake_account, confirm=auto_confirm)
    policy = fake_project("CrocPolicy").at(address("policy"))

    def revert(*args, **kwargs):
        raise ContractLogicError("Sudo")

    monkeypatch.setattr(type(policy.transferGovernance), "__call__", revert)
    with pytest.raises(ContractRevertError) as error:
        transactor.transact(
            policy.transferGovernance, address("ops"), address("treasury"), address("emergency")
        )
    assert error.value.revert_reason == "Sudo"
    assert error.value.exit_code == 1


def test_validate_method_args_names_arguments(fake_project):
    policy = fake_project("CrocPolicy").at(address("policy"))
    named = _validate_method_args(
        policy.treasuryResolution.abis, [address("dex"), 0, b"\x01", True]
    )
    assert list(named) == ["minion", "proxyPath", "cmd", "sudo"]


def test_zero_address_constructor_param_asks_again(fake_account, fake_project, ledger):
    prompts = list()

    def accept(prompt):
        prompts.append(prompt)
        return True

    deployer = Deployer(account=fake_account, confirm=accept)
    deployer.ensure_deployed(fake_project("CrocQuery"), "", ZERO_ADDRESS)
    assert prompts == ["Deploy CrocQuery", "Zero Address detected for deployment parameter; Continue?"]
    assert ledger == [("deploy", "CrocQuery", (ZERO_ADDRESS,))]


def test_transact_forwards_value(fake_account, fake_project, ledger):
    transactor = Transactor(account=fake_account, confirm=auto_confirm)
    dex = fake_project("CrocSwapDex").at(address("dex"))
    receipt = transactor.transact(dex.userCmd, 3, b"\x01", value=10**13)
    assert receipt.value == 10**13
    assert receipt.sender is fake_account
    assert ledger == [("transact", "CrocSwapDex", "userCmd", (3, b"\x01"))]
