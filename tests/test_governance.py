import pytest

from crocops.abi import (
    POLICY_EMERGENCY_HALT,
    POLICY_OPS_RESOLUTION,
    POLICY_TREASURY_RESOLUTION,
    TIMELOCK_UPDATE_DELAY,
)
from crocops.addresses import CrocAddrs
from crocops.commands import ProtocolCmd, hot_path_cmd, install_proxy_cmd, safe_mode_cmd
from crocops.constants import BOOT_PROXY_IDX, COLD_PROXY_IDX, LP_PROXY_IDX, SAFE_MODE_PROXY_PATH
from crocops.exceptions import ConfigurationError, PolicyViolation
from crocops.governance import (
    ResolutionType,
    emergency_halt_resolution,
    ops_resolution,
    timelock_delay_resolution,
    treasury_resolution,
)
from crocops.timelock import decode_execute_calldata, decode_schedule_calldata

from tests.conftest import ONE_DAY


def test_treasury_resolution(deployed_addrs):
    cmd = ProtocolCmd(
        callpath=BOOT_PROXY_IDX, payload=install_proxy_cmd(deployed_addrs.warm, LP_PROXY_IDX), sudo=True
    )
    resolution = treasury_resolution(deployed_addrs, cmd, 30, "Install Warm path sidecar")

    assert resolution.resolution_type is ResolutionType.TREASURY
    assert resolution.multisig_origin == deployed_addrs.govern.multisig_treasury
    assert resolution.timelock_call.timelock_addr == deployed_addrs.govern.timelock_treasury
    assert resolution.policy_contract == deployed_addrs.policy
    assert resolution.dex_contract == deployed_addrs.dex
    assert resolution.description == "Install Warm path sidecar"

    target, value, data, _, _ = decode_execute_calldata(resolution.timelock_call.exec_calldata)
    assert target == deployed_addrs.policy
    assert value == 0
    assert POLICY_TREASURY_RESOLUTION.decode_input(data) == (
        deployed_addrs.dex,
        BOOT_PROXY_IDX,
        cmd.payload,
        True,
    )


def test_ops_resolution(deployed_addrs):
    cmd = ProtocolCmd(callpath=COLD_PROXY_IDX, payload=hot_path_cmd(True))
    resolution = ops_resolution(deployed_addrs, cmd, ONE_DAY)

    assert resolution.resolution_type is ResolutionType.OPS
    assert resolution.multisig_origin == deployed_addrs.govern.multisig_ops
    assert resolution.timelock_call.timelock_addr == deployed_addrs.govern.timelock_ops

    *_, data, _, _, delay = decode_schedule_calldata(resolution.timelock_call.schedule_calldata)
    assert delay == ONE_DAY
    assert POLICY_OPS_RESOLUTION.decode_input(data) == (deployed_addrs.dex, COLD_PROXY_IDX, cmd.payload)


def test_sudo_commands_need_the_treasury(deployed_addrs):
    cmd = ProtocolCmd(callpath=SAFE_MODE_PROXY_PATH, payload=safe_mode_cmd(False), sudo=True)
    with pytest.raises(PolicyViolation):
        ops_resolution(deployed_addrs, cmd, 30)


def test_emergency_halt_resolution(deployed_addrs):
    resolution = emergency_halt_resolution(deployed_addrs, "exploit in progress", 0)

    assert resolution.protocol_cmd is None
    assert resolution.multisig_origin == deployed_addrs.govern.multisig_treasury
    target, _, data, _, _ = decode_execute_calldata(resolution.timelock_call.exec_calldata)
    assert target == deployed_addrs.policy
    assert POLICY_EMERGENCY_HALT.decode_input(data) == (deployed_addrs.dex, "exploit in progress")


def test_timelock_delay_resolution_targets_the_timelock(deployed_addrs):
    resolution = timelock_delay_resolution(
        deployed_addrs, ResolutionType.OPS, new_delay=604800, current_delay=30
    )
    timelock = deployed_addrs.govern.timelock_ops

    target, _, data, _, _, delay = decode_schedule_calldata(resolution.timelock_call.schedule_calldata)
    assert target == timelock
    assert resolution.timelock_call.timelock_addr == timelock
    assert delay == 30
    assert TIMELOCK_UPDATE_DELAY.decode_input(data) == (604800,)
    assert "from 30 to 604800 seconds" in resolution.description


def test_timelock_delay_over_seven_days_fails_first(deployed_addrs):
    # fails on the delay before the missing governance addresses are noticed
    with pytest.raises(PolicyViolation):
        timelock_delay_resolution(CrocAddrs(), ResolutionType.TREASURY, new_delay=604801, current_delay=30)
    with pytest.raises(PolicyViolation):
        timelock_delay_resolution(
            deployed_addrs, ResolutionType.TREASURY, new_delay=604801, current_delay=30
        )


def test_missing_governance_addresses(deployed_addrs):
    addrs = deployed_addrs.update(govern=deployed_addrs.govern.update(timelock_treasury=""))
    cmd = ProtocolCmd(callpath=SAFE_MODE_PROXY_PATH, payload=safe_mode_cmd(False), sudo=True)
    with pytest.raises(ConfigurationError, match="timelock_treasury"):
        treasury_resolution(addrs, cmd, 30)


def test_missing_policy(deployed_addrs):
    addrs = deployed_addrs.update(policy="")
    cmd = ProtocolCmd(callpath=COLD_PROXY_IDX, payload=hot_path_cmd(True))
    with pytest.raises(ConfigurationError, match="policy"):
        ops_resolution(addrs, cmd, 30)
