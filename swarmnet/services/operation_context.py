"""Operation Context — stamps operation name and acting identity onto raised errors.

Invariants:
    - Every SwarmNetError leaving a tagged handler method carries context.operation
      and context.identity (the method's first argument)
    - Context already set at the raise site is never overwritten
    - The error itself propagates unchanged
"""

import functools

from swarmnet.core.domain_types import Operation
from swarmnet.core.errors import SwarmNetError


def tag_operation(operation: Operation):
    """Decorate an async handler method whose first argument is the acting identity."""
    def decorate(method):
        @functools.wraps(method)
        async def wrapper(self, identity, *args, **kwargs):
            try:
                return await method(self, identity, *args, **kwargs)
            except SwarmNetError as exc:
                if exc.context.operation is None:
                    exc.context.operation = operation.value
                if exc.context.identity is None:
                    exc.context.identity = identity
                raise
        return wrapper
    return decorate
