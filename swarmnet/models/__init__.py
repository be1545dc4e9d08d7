"""ORM Models — SQLAlchemy declarative models for every persisted record.

Invariants:
    - All models inherit from Base (db/base.py)
    - Every mutable row carries a version column used for optimistic locking

Design Decisions:
    - One file per record kind for locality
    - All models imported here so Base.metadata is complete before create_all / autogenerate
"""

from swarmnet.models.registry import Registry  # noqa: F401
from swarmnet.models.device import Device  # noqa: F401
from swarmnet.models.task import Task  # noqa: F401
from swarmnet.models.token_account import TokenMint, TokenAccount  # noqa: F401
