"""
NanoCamo - Stealth Payments
=============================
Protocollo di pagamento stealth Camo v1 (mittente e destinatario).

Security Level: CRITICAL
Last Updated: 2026-10-19
Version: 1.0.0

Mittente (chiave a, frontier H(B), destinatario (K_spend, K_view)):

    r        = H_s(a || H(B) || K_spend)
    R        = r·G
    Q        = r·K_view
    k_shared = H_si(Q, 0)
    K_masked = K_spend + k_shared·G

Destinatario (k_spend, k_view, R letto dalla notifica):

    Q        = k_view·R
    k_shared = H_si(Q, 0)
    k_masked = k_spend + k_shared
    K_masked = k_masked·G

r·K_view = r·k_view·G = k_view·R: i due lati ottengono lo stesso Q.
Entrambi i ruoli passano da `derive_shared_scalar()`.

Tutte le funzioni sono pure: nessuno stato condiviso, nessun retry.
Notifiche duplicate producono lo stesso risultato.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple, Union

from nano_camo.camo.address import CamoAddress
from nano_camo.camo.notification import Notification
from nano_camo.camo.version import CamoVersion, CamoVersions
from nano_camo.config import get_settings
from nano_camo.constants import (
    BLOCK_HASH_SIZE,
    SHARED_SECRET_INDEX,
)
from nano_camo.domain.hashes import blake2b_scalar, h_si
from nano_camo.domain.keypairs import Account, Key
from nano_camo.domain.points import PublicPoint
from nano_camo.domain.secret_scalar import SecretBytes, SecretScalar
from nano_camo.errors import CryptoError, InvalidAmountError
from nano_camo.logging_setup import PerformanceLogger, get_logger
from nano_camo.wallet.hd_wallet import CamoKeys, CamoViewKeys


logger = get_logger("stealth")


# ============================================================================
# SHARED CORE
# ============================================================================

def compute_ecdh_secret(private: SecretScalar, public: PublicPoint) -> SecretBytes:
    """
    Q = private·public, come punto compresso (32 bytes).

    Raises:
        InvalidPointError: `public` non valido
        CryptoError: Risultato all'infinito
    """
    return SecretBytes(bytes(private * public))


def derive_shared_scalar(shared_secret: SecretBytes) -> SecretScalar:
    """k_shared = H_si(Q, 0). Unico punto di derivazione per entrambi i ruoli."""
    return h_si(shared_secret, SHARED_SECRET_INDEX)


def masked_point(spend_key: PublicPoint, shared_secret: SecretBytes) -> PublicPoint:
    """K_masked = K_spend + k_shared·G"""
    with derive_shared_scalar(shared_secret) as k_shared:
        return spend_key + k_shared.multiply_base()


def masked_scalar(spend: SecretScalar, shared_secret: SecretBytes) -> SecretScalar:
    """k_masked = k_spend + k_shared"""
    with derive_shared_scalar(shared_secret) as k_shared:
        return spend + k_shared


def ephemeral_scalar(
    sender: Union[Key, SecretScalar],
    frontier: bytes,
    spend_key: PublicPoint
) -> SecretScalar:
    """
    r = H_s(a || H(B) || K_spend).

    Riproducibile solo da chi conosce `a`.

    Args:
        sender: Chiave privata del mittente
        frontier: Hash del blocco frontier del mittente (32 bytes)
        spend_key: K_spend del destinatario
    """
    if len(frontier) != BLOCK_HASH_SIZE:
        raise CryptoError(
            f"Frontier hash must be {BLOCK_HASH_SIZE} bytes, got {len(frontier)}",
            code="INVALID_FRONTIER_LENGTH",
            details={"expected": BLOCK_HASH_SIZE, "got": len(frontier)}
        )
    scalar = sender.as_scalar() if isinstance(sender, Key) else sender
    return blake2b_scalar(scalar.expose_secret() + bytes(frontier) + bytes(spend_key))


# ============================================================================
# SENDER
# ============================================================================

@dataclass(frozen=True)
class PaymentPlan:
    """
    Istruzioni per il layer transazioni (fuori da questo core).

    1. Inviare `notify_amount_raw` a `notification_account`, con
       representative = `representative_payload`.
    2. Inviare `masked_amount_raw` a `masked_account`.
    """
    version: CamoVersion
    notification_account: Account
    representative_payload: Account
    masked_account: Account
    notify_amount_raw: int
    masked_amount_raw: int

    @property
    def total_raw(self) -> int:
        return self.notify_amount_raw + self.masked_amount_raw


class SenderPayment:
    """
    Contesto di pagamento lato mittente.

    Attributes:
        version: Versione negoziata
        ephemeral_point: R
        masked_point: K_masked
        notification: Notifica da pubblicare
    """

    __slots__ = ("version", "ephemeral_point", "masked_point", "notification", "_shared_secret")

    def __init__(
        self,
        version: CamoVersion,
        notification: Notification,
        masked_point: PublicPoint,
        shared_secret: SecretBytes
    ):
        self.version = version
        self.notification = notification
        self.ephemeral_point = notification.ephemeral_point
        self.masked_point = masked_point
        self._shared_secret = shared_secret

    @property
    def shared_secret(self) -> SecretBytes:
        return self._shared_secret

    @property
    def masked_account(self) -> Account:
        return Account(self.masked_point)

    def plan(self, amount_raw: int, notify_amount_raw: Optional[int] = None) -> PaymentPlan:
        """
        Suddivide l'importo tra notifica e pagamento mascherato.

        Args:
            amount_raw: Importo totale n (raw)
            notify_amount_raw: Importo notifica (default da config)

        Raises:
            InvalidAmountError: n <= 0, notifica <= 0 o notifica > n
        """
        if notify_amount_raw is None:
            notify_amount_raw = get_settings().notification_amount_raw

        if amount_raw <= 0 or notify_amount_raw <= 0:
            raise InvalidAmountError(
                "Payment amounts must be positive",
                code="INVALID_AMOUNT",
                details={"amount_raw": amount_raw, "notify_amount_raw": notify_amount_raw}
            )
        if notify_amount_raw > amount_raw:
            raise InvalidAmountError(
                "Notification amount exceeds payment amount",
                code="NOTIFY_AMOUNT_TOO_HIGH",
                details={"amount_raw": amount_raw, "notify_amount_raw": notify_amount_raw}
            )

        return PaymentPlan(
            version=self.version,
            notification_account=self.notification.notification_account,
            representative_payload=self.notification.representative_payload,
            masked_account=self.masked_account,
            notify_amount_raw=notify_amount_raw,
            masked_amount_raw=amount_raw - notify_amount_raw,
        )

    def wipe(self) -> None:
        self._shared_secret.wipe()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.wipe()
        return False

    def __repr__(self) -> str:
        return f"SenderPayment(v{int(self.version)}, masked={self.masked_point.short()}...)"


def sender_ecdh(
    recipient: CamoAddress,
    sender: Union[Key, SecretScalar],
    frontier: bytes,
    local_versions: Optional[CamoVersions] = None
) -> SenderPayment:
    """
    Calcola il pagamento stealth verso `recipient`.

    Args:
        recipient: Address camo_ del destinatario
        sender: Chiave privata del mittente (a)
        frontier: Hash del frontier del mittente (32 bytes)
        local_versions: Versioni supportate localmente (default da config)

    Returns:
        SenderPayment: R, K_masked, notifica, segreto condiviso

    Raises:
        NoCompatibleVersionError: Nessuna versione comune: NON inviare
    """
    if local_versions is None:
        local_versions = get_settings().local_versions()

    version = recipient.versions.negotiate(local_versions & CamoVersions.supported())

    with ephemeral_scalar(sender, frontier, recipient.spend_key) as r:
        ephemeral = r.multiply_base()
        shared_secret = compute_ecdh_secret(r, recipient.view_key)

    notification = Notification(
        notification_account=recipient.signer_account(),
        representative_payload=Account(ephemeral),
    )

    payment = SenderPayment(
        version=version,
        notification=notification,
        masked_point=masked_point(recipient.spend_key, shared_secret),
        shared_secret=shared_secret,
    )

    logger.info(
        "Stealth payment prepared",
        extra_data={
            "version": int(version),
            "notification_account": str(notification.notification_account)[:16],
            "masked_key": payment.masked_point.short()
        }
    )

    return payment


class StealthSender:
    """
    Mittente: chiave privata + versioni locali.

    Examples:
        >>> sender = StealthSender(Key.from_seed(seed, 0))
        >>> payment = sender.prepare_payment(address, frontier)
        >>> plan = payment.plan(amount_raw=10**30)
    """

    def __init__(self, key: Key, local_versions: Optional[CamoVersions] = None):
        self.key = key
        self.local_versions = local_versions

    def prepare_payment(self, recipient: Union[CamoAddress, str], frontier: bytes) -> SenderPayment:
        if isinstance(recipient, str):
            recipient = CamoAddress.from_str(recipient)
        return sender_ecdh(recipient, self.key, frontier, self.local_versions)


# ============================================================================
# RECEIVER
# ============================================================================

class ReceivedPayment:
    """
    Pagamento riconosciuto lato destinatario.

    `masked_key` è None per scanning view-only.
    """

    __slots__ = ("notification", "masked_point", "masked_key")

    def __init__(
        self,
        notification: Notification,
        masked_point: PublicPoint,
        masked_key: Optional[Key] = None
    ):
        self.notification = notification
        self.masked_point = masked_point
        self.masked_key = masked_key

    @property
    def masked_account(self) -> Account:
        return Account(self.masked_point)

    @property
    def can_spend(self) -> bool:
        return self.masked_key is not None

    def wipe(self) -> None:
        if self.masked_key is not None:
            self.masked_key.wipe()

    def __repr__(self) -> str:
        return f"ReceivedPayment(masked={self.masked_point.short()}..., spendable={self.can_spend})"


def receiver_ecdh(keys: Union[CamoKeys, CamoViewKeys], notification: Notification) -> SecretBytes:
    """Q = k_view·R"""
    return compute_ecdh_secret(keys.view_scalar, notification.ephemeral_point)


def receive_payment(keys: Union[CamoKeys, CamoViewKeys], notification: Notification) -> ReceivedPayment:
    """
    Ricostruisce il pagamento mascherato da una notifica.

    Con CamoKeys restituisce anche k_masked; con CamoViewKeys solo K_masked.
    """
    with receiver_ecdh(keys, notification) as shared_secret:
        if isinstance(keys, CamoKeys):
            key = Key(masked_scalar(keys.spend_scalar, shared_secret))
            return ReceivedPayment(notification, key.as_scalar().multiply_base(), key)
        return ReceivedPayment(notification, masked_point(keys.spend_key, shared_secret))


class StealthReceiver:
    """
    Destinatario: riconosce notifiche e ricava le chiavi mascherate.

    Examples:
        >>> receiver = StealthReceiver(wallet.derive_keys(5))
        >>> for payment in receiver.scan(notifications):
        ...     print(payment.masked_account)
    """

    def __init__(self, keys: Union[CamoKeys, CamoViewKeys]):
        self.keys = keys

    @property
    def view_only(self) -> bool:
        return not isinstance(self.keys, CamoKeys)

    def is_for_me(self, notification: Notification) -> bool:
        return notification.is_addressed_to(self.keys.spend_key)

    def receive(self, notification: Notification) -> ReceivedPayment:
        return receive_payment(self.keys, notification)

    def scan(self, notifications: Iterable[Notification]) -> List[ReceivedPayment]:
        """
        Filtra le notifiche destinate a K_spend e calcola i pagamenti.

        Notifiche con R non valido sono scartate (loggate), non fatali.

        Args:
            notifications: Notifiche osservate dal layer transazioni

        Returns:
            List[ReceivedPayment]: Pagamenti riconosciuti, in ordine
        """
        found: List[ReceivedPayment] = []
        seen: set = set()
        skipped = 0

        with PerformanceLogger(logger, "scan_notifications"):
            for notification in notifications:
                if not self.is_for_me(notification):
                    skipped += 1
                    continue
                if notification.ephemeral_point in seen:
                    continue
                try:
                    payment = self.receive(notification)
                except CryptoError as e:
                    logger.warning(
                        "Discarding notification with unusable payload",
                        extra_data={"code": e.code, "payload": notification.ephemeral_point.short()}
                    )
                    continue
                seen.add(notification.ephemeral_point)
                found.append(payment)

        logger.info(
            f"Scanning complete: found {len(found)} payments",
            extra_data={"found": len(found), "skipped": skipped, "view_only": self.view_only}
        )

        return found


def scan_wallet_indices(
    wallet,
    notifications: Iterable[Notification],
    max_index: Optional[int] = None,
    versions: Optional[CamoVersions] = None
) -> List[Tuple[int, ReceivedPayment]]:
    """
    Scansione su più indici del wallet (0..max_index inclusi).

    Args:
        wallet: CamoWallet
        notifications: Notifiche osservate
        max_index: Ultimo indice (default: config.scan_max_index)
        versions: Versioni degli address (default da config)

    Returns:
        List[Tuple[int, ReceivedPayment]]: (indice, pagamento)
    """
    notifications = list(notifications)
    if max_index is None:
        max_index = wallet.config.scan_max_index

    targets = {n.notification_account.point for n in notifications}
    results: List[Tuple[int, ReceivedPayment]] = []

    for index in range(max_index + 1):
        view_keys = wallet.derive_view_keys(index, versions)
        with view_keys:
            if view_keys.spend_key not in targets:
                continue
        with wallet.derive_keys(index, versions) as keys:
            for payment in StealthReceiver(keys).scan(notifications):
                results.append((index, payment))

    return results


__all__ = [
    "compute_ecdh_secret",
    "derive_shared_scalar",
    "masked_point",
    "masked_scalar",
    "ephemeral_scalar",
    "PaymentPlan",
    "SenderPayment",
    "sender_ecdh",
    "StealthSender",
    "ReceivedPayment",
    "receiver_ecdh",
    "receive_payment",
    "StealthReceiver",
    "scan_wallet_indices",
]
