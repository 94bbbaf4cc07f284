"""
NanoCamo - Camo Notifications
===============================
Notifica di un pagamento Camo (v1).

Il mittente invia un importo minimo a `notification_account` (K_spend del
destinatario) impostando come representative del blocco
`representative_payload` (R = r·G). Il destinatario legge R dal blocco e
ricostruisce il segreto condiviso.

NB: notification_account è pubblicamente collegato all'address camo_.
"""

from dataclasses import dataclass
from typing import Any, Union

from nano_camo.domain.keypairs import Account
from nano_camo.domain.points import PublicPoint
from nano_camo.errors import format_validation_error


AccountLike = Union[Account, PublicPoint, str, bytes]


def _to_account(value: AccountLike, field: str) -> Account:
    if isinstance(value, Account):
        return value
    if isinstance(value, PublicPoint):
        return Account(value)
    if isinstance(value, str):
        return Account.from_string(value)
    if isinstance(value, (bytes, bytearray)):
        return Account.from_bytes(value)
    raise format_validation_error(field, type(value).__name__, "account, point, nano_ string or 32 bytes")


@dataclass(frozen=True)
class Notification:
    """
    Notifica Camo v1.

    Attributes:
        notification_account: Destinatario della notifica (K_spend)
        representative_payload: Representative del blocco (R)
    """
    notification_account: Account
    representative_payload: Account

    @classmethod
    def create(cls, notification_account: AccountLike, representative_payload: AccountLike) -> "Notification":
        return cls(
            notification_account=_to_account(notification_account, "notification_account"),
            representative_payload=_to_account(representative_payload, "representative_payload"),
        )

    @classmethod
    def from_block(cls, block: Any) -> "Notification":
        """
        Estrae la notifica da un blocco.

        Il blocco è un oggetto del layer transazioni con attributi
        `account` e `representative` (o un dict con le stesse chiavi).
        """
        if isinstance(block, dict):
            account, representative = block["account"], block["representative"]
        else:
            account, representative = block.account, block.representative
        return cls.create(account, representative)

    @property
    def ephemeral_point(self) -> PublicPoint:
        """R"""
        return self.representative_payload.point

    def is_addressed_to(self, spend_key: PublicPoint) -> bool:
        return self.notification_account.point == spend_key


__all__ = [
    "Notification",
]
