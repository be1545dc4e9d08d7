"""Network Routes — dashboard stats and conservation audit (read-only)."""

from fastapi import APIRouter, Depends

from swarmnet.api.dependencies import network_handlers
from swarmnet.services.handle_network import NetworkHandlers

router = APIRouter(prefix="/api/v1/network", tags=["network"])


@router.get("/stats")
async def network_stats(handlers: NetworkHandlers = Depends(network_handlers)):
    stats = await handlers.stats()
    return {
        "total_devices": stats.total_devices,
        "active_devices": stats.active_devices,
        "load_percentage": stats.load_percentage,
        "tasks_by_status": stats.tasks_by_status,
        "completed_tasks": stats.tasks_by_status["completed"],
        "total_compute_time": stats.total_compute_time,
        "total_staked": stats.total_staked,
        "total_rewards_distributed": stats.total_rewards_distributed,
    }


@router.get("/audit")
async def conservation_audit(handlers: NetworkHandlers = Depends(network_handlers)):
    audit = await handlers.audit()
    return {
        "staking": {
            "registry_total": audit.registry_total_staked,
            "device_sum": audit.device_staked_sum,
            "balanced": audit.staking_balanced,
        },
        "rewards": {
            "registry_total": audit.registry_total_rewards,
            "device_sum": audit.device_rewards_sum,
            "balanced": audit.rewards_balanced,
        },
        "outstanding_referral_rewards": audit.outstanding_referral_rewards,
    }
