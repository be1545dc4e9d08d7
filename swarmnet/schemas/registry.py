"""Registry Schemas — bootstrap request and registry view."""

from pydantic import BaseModel, Field

from swarmnet.core.records import GlobalRegistry


class RegistryInitialize(BaseModel):
    """Bootstrap request. Decimals default to the configured token_decimals."""
    token_decimals: int | None = Field(None, ge=0, le=255)


class RegistryResponse(BaseModel):
    admin_identity: str
    token_reference: str
    reward_pool_reference: str
    stake_pool_reference: str
    total_staked: int
    total_rewards_distributed: int

    @classmethod
    def from_record(cls, registry: GlobalRegistry) -> "RegistryResponse":
        return cls(
            admin_identity=registry.admin_identity,
            token_reference=registry.token_reference,
            reward_pool_reference=registry.reward_pool_reference,
            stake_pool_reference=registry.stake_pool_reference,
            total_staked=registry.total_staked,
            total_rewards_distributed=registry.total_rewards_distributed,
        )
