"""Operation builder bound to an optional default source account."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from stellar_sdk import xdr

from . import accounts, offers, payments, soroban
from .asset import Asset
from .offers import PriceLike
from .operation import Operation, resolve_source


@dataclass(frozen=True)
class OperationBuilder:
    """Builds operations whose source is ``source`` (or the transaction's, if None).

    The builder is immutable; use ``with_source`` to get one for another account.
    """

    source: Optional[str] = None

    def __post_init__(self) -> None:
        resolve_source(self.source)

    def with_source(self, source: Optional[str]) -> "OperationBuilder":
        return OperationBuilder(source)

    def payment(self, destination: str, asset: Asset, amount: int) -> Operation:
        return payments.payment(destination, asset, amount, source=self.source)

    def path_payment_strict_send(
        self,
        send_asset: Asset,
        send_amount: int,
        destination: str,
        dest_asset: Asset,
        dest_min: int,
        path: Sequence[Asset],
    ) -> Operation:
        return payments.path_payment_strict_send(
            send_asset, send_amount, destination, dest_asset, dest_min, path, source=self.source
        )

    def path_payment_strict_receive(
        self,
        send_asset: Asset,
        send_max: int,
        destination: str,
        dest_asset: Asset,
        dest_amount: int,
        path: Sequence[Asset],
    ) -> Operation:
        return payments.path_payment_strict_receive(
            send_asset, send_max, destination, dest_asset, dest_amount, path, source=self.source
        )

    def create_account(self, destination: str, starting_balance: int) -> Operation:
        return accounts.create_account(destination, starting_balance, source=self.source)

    def account_merge(self, destination: str) -> Operation:
        return accounts.account_merge(destination, source=self.source)

    def bump_sequence(self, bump_to: int) -> Operation:
        return accounts.bump_sequence(bump_to, source=self.source)

    def manage_sell_offer(
        self, selling: Asset, buying: Asset, amount: int, price: PriceLike, offer_id: int = 0
    ) -> Operation:
        return offers.manage_sell_offer(selling, buying, amount, price, offer_id, source=self.source)

    def manage_buy_offer(
        self, selling: Asset, buying: Asset, buy_amount: int, price: PriceLike, offer_id: int = 0
    ) -> Operation:
        return offers.manage_buy_offer(selling, buying, buy_amount, price, offer_id, source=self.source)

    def create_passive_sell_offer(
        self, selling: Asset, buying: Asset, amount: int, price: PriceLike
    ) -> Operation:
        return offers.create_passive_sell_offer(selling, buying, amount, price, source=self.source)

    def invoke_host_function(
        self,
        host_function: xdr.HostFunction,
        auth: Sequence[xdr.SorobanAuthorizationEntry] = (),
    ) -> Operation:
        return soroban.invoke_host_function(host_function, auth, source=self.source)

    def invoke_contract_function(
        self,
        contract_id: str,
        function_name: str,
        parameters: Sequence[xdr.SCVal] = (),
        auth: Sequence[xdr.SorobanAuthorizationEntry] = (),
    ) -> Operation:
        return soroban.invoke_contract_function(
            contract_id, function_name, parameters, auth, source=self.source
        )
