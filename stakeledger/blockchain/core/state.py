# MIT License
# Copyright (c) 2025 Hashborn

import logging
from typing import Dict, Iterable, List, Set
from ...protocol.types.account import Account
from ...protocol.types.common import EventKind, TransactionError, U64_MAX
from ...protocol.types.tx import Transaction, Transfer
from .chain import Blockchain

logger = logging.getLogger(__name__)

class AccountState:
    """
    Working ledger for one batch: address -> Account, in first-touch order.

    Accounts are copied in from the chain on first use and mutated here only,
    so the chain's sealed blocks stay untouched. Whatever ends up in the map
    is the delta of the next block.
    """

    def __init__(self, chain: Blockchain, accounts: Dict[str, Account] = None):
        self.chain = chain
        self._accounts: Dict[str, Account] = accounts if accounts is not None else {}
        # Addresses that existed in the chain when the batch was snapshotted
        self._existing: Set[str] = set(self._accounts)

    def __len__(self) -> int:
        return len(self._accounts)

    def snapshot(self, addresses: Iterable[str]) -> None:
        """Copies the resolved state of every known address into the ledger."""
        for address in addresses:
            if address in self._accounts:
                continue
            resolved = self.chain.get_account_by_address(address)
            if resolved is not None:
                self._accounts[address] = resolved.model_copy()
                self._existing.add(address)

    def exists(self, address: str) -> bool:
        return address in self._existing

    def set_account(self, account: Account) -> None:
        self._accounts[account.address] = account

    def accounts(self) -> List[Account]:
        return list(self._accounts.values())

    def apply_transaction(self, tx: Transaction) -> None:
        """
        Applies one transaction in place. Raises TransactionError on failure,
        leaving the ledger unchanged.
        """
        address = tx.address

        if not self.exists(address):
            if tx.event == EventKind.ADD_ACCOUNT:
                self.set_account(Account.new(address, tokens=self.chain.config.initial_tokens))
                return
            raise TransactionError(f"'{address}' not found in chain")

        account = self._accounts[address]
        event = tx.event

        if isinstance(event, Transfer):
            self._transfer(account, event)
        elif event == EventKind.UNSTAKE:
            if not account.can_unstake():
                raise TransactionError(f"'{address}' cannot unstake")
            account.staked -= 1
        elif event == EventKind.STAKE:
            if not account.can_stake():
                raise TransactionError(f"'{address}' cannot stake")
            account.staked += 1
        else:
            # Punish, Reward, or AddAccount on an existing address
            raise TransactionError(f"'{address}' transacted with an invalid event")

    def _transfer(self, sender: Account, transfer: Transfer) -> None:
        if transfer.to == sender.address:
            raise TransactionError(f"'{sender.address}' cannot transfer to itself")
        if not sender.can_transfer(transfer.amount):
            raise TransactionError(f"'{sender.address}' cannot transfer {transfer.amount} tokens")

        recipient = self._accounts.get(transfer.to)
        if recipient is None:
            resolved = self.chain.get_account_by_address(transfer.to)
            if resolved is None:
                raise TransactionError(f"Recipient '{transfer.to}' not found in chain")
            recipient = resolved.model_copy()
        if recipient.tokens + transfer.amount > U64_MAX:
            raise TransactionError(f"'{transfer.to}' cannot receive {transfer.amount} tokens")

        # staked <= tokens is not re-checked for the sender
        recipient.tokens += transfer.amount
        sender.tokens -= transfer.amount
        self.set_account(recipient)
