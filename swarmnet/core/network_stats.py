"""Network Stats — dashboard counters and the conservation audit.

Invariants:
    - Pure aggregation over records the shell has loaded; no IO
    - Audit compares registry totals with per-device sums and never mutates
"""

from dataclasses import dataclass

from swarmnet.core.domain_types import TaskStatus
from swarmnet.core.records import Device, GlobalRegistry, Task


@dataclass(frozen=True)
class NetworkStats:
    total_devices: int
    active_devices: int
    tasks_by_status: dict[str, int]
    total_compute_time: int
    total_staked: int
    total_rewards_distributed: int

    @property
    def load_percentage(self) -> int:
        """Share of registered devices that are active, rounded to a whole percent."""
        if self.total_devices == 0:
            return 0
        return round(self.active_devices / self.total_devices * 100)


@dataclass(frozen=True)
class ConservationAudit:
    registry_total_staked: int
    device_staked_sum: int
    registry_total_rewards: int
    device_rewards_sum: int
    outstanding_referral_rewards: int

    @property
    def staking_balanced(self) -> bool:
        return self.registry_total_staked == self.device_staked_sum

    @property
    def rewards_balanced(self) -> bool:
        return self.registry_total_rewards == self.device_rewards_sum


def compute_network_stats(
    registry: GlobalRegistry | None, devices: list[Device], tasks: list[Task],
) -> NetworkStats:
    by_status = {s.value: 0 for s in TaskStatus}
    compute_time = 0
    for task in tasks:
        by_status[task.status.value] += 1
        if task.result is not None:
            compute_time += task.result.compute_time
    return NetworkStats(
        total_devices=len(devices),
        active_devices=sum(1 for d in devices if d.is_active),
        tasks_by_status=by_status,
        total_compute_time=compute_time,
        total_staked=registry.total_staked if registry else 0,
        total_rewards_distributed=(
            registry.total_rewards_distributed if registry else 0
        ),
    )


def audit_conservation(
    registry: GlobalRegistry, devices: list[Device],
) -> ConservationAudit:
    return ConservationAudit(
        registry_total_staked=registry.total_staked,
        device_staked_sum=sum(d.staked_amount for d in devices),
        registry_total_rewards=registry.total_rewards_distributed,
        device_rewards_sum=sum(d.total_rewards for d in devices),
        outstanding_referral_rewards=sum(d.referral_rewards for d in devices),
    )
