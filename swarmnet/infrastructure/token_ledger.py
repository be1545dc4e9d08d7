"""SQL Token Ledger — TokenLedger protocol backed by the token_mints/token_accounts tables.

Invariants:
    - transfer() moves exactly `amount`: source debited, destination credited, or nothing
    - The transfer authority must hold the source account (UnauthorizedError)
    - Source and destination share a mint (TokenAccountMismatchError)
    - Balances never go negative (InsufficientFundsError) and never exceed u64
    - mint_to() is restricted to the mint authority

Design Decisions:
    - Stand-in for the external ledger service: same session as the record store,
      so token movements and record writes commit or roll back together
    - Addresses are random uuid4 hex strings: allocation schemes are out of scope
"""

import logging
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from swarmnet.core.checked_math import checked_add
from swarmnet.core.domain_types import AccountAddress, Identity
from swarmnet.core.errors import (
    InsufficientFundsError, ResourceNotFoundError, TokenAccountMismatchError,
    UnauthorizedError,
)
from swarmnet.core.records import TokenAccount, TokenTransfer
from swarmnet.models.token_account import (
    TokenAccount as TokenAccountModel, TokenMint as TokenMintModel,
)

logger = logging.getLogger(__name__)


def _new_address() -> AccountAddress:
    return AccountAddress(uuid.uuid4().hex)


def _account_record(row: TokenAccountModel) -> TokenAccount:
    return TokenAccount(
        address=AccountAddress(row.address),
        owner=Identity(row.owner),
        mint=AccountAddress(row.mint),
        balance=row.balance,
    )


class SqlTokenLedger:
    """Token mints, accounts and transfers in the operation's own transaction."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_mint(self, decimals: int, authority: Identity) -> AccountAddress:
        address = _new_address()
        self.db.add(TokenMintModel(
            address=address, decimals=decimals, authority=authority, supply=0,
        ))
        await self.db.flush()
        return address

    async def open_account(
        self, mint: AccountAddress, owner: Identity,
    ) -> AccountAddress:
        if await self.db.get(TokenMintModel, mint) is None:
            raise ResourceNotFoundError("TokenMint", mint)
        address = _new_address()
        self.db.add(TokenAccountModel(
            address=address, mint=mint, owner=owner, balance=0,
        ))
        await self.db.flush()
        return address

    async def get_account(self, address: AccountAddress) -> TokenAccount | None:
        row = await self.db.get(TokenAccountModel, address)
        return _account_record(row) if row else None

    async def transfer(self, transfer: TokenTransfer) -> None:
        source = await self.db.get(TokenAccountModel, transfer.source)
        if source is None:
            raise ResourceNotFoundError("TokenAccount", transfer.source)
        destination = await self.db.get(TokenAccountModel, transfer.destination)
        if destination is None:
            raise ResourceNotFoundError("TokenAccount", transfer.destination)
        if source.owner != transfer.authority:
            raise UnauthorizedError(
                f"'{transfer.authority}' may not debit token account '{source.address}'",
            )
        if source.mint != destination.mint:
            raise TokenAccountMismatchError(destination.address, "mint differs from source")
        if source.balance < transfer.amount:
            raise InsufficientFundsError(source.address, source.balance, transfer.amount)
        if source.address == destination.address:
            return
        credited = checked_add(destination.balance, transfer.amount)
        source.balance = source.balance - transfer.amount
        destination.balance = credited
        logger.debug(
            f"Transferred {transfer.amount} {source.address} -> {destination.address}",
        )

    async def mint_to(
        self, mint: AccountAddress, destination: AccountAddress,
        amount: int, authority: Identity,
    ) -> None:
        mint_row = await self.db.get(TokenMintModel, mint)
        if mint_row is None:
            raise ResourceNotFoundError("TokenMint", mint)
        if mint_row.authority != authority:
            raise UnauthorizedError(f"'{authority}' is not the mint authority")
        account = await self.db.get(TokenAccountModel, destination)
        if account is None:
            raise ResourceNotFoundError("TokenAccount", destination)
        if account.mint != mint:
            raise TokenAccountMismatchError(destination, "wrong mint")
        mint_row.supply = checked_add(mint_row.supply, amount)
        account.balance = checked_add(account.balance, amount)
