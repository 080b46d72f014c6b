"""
Graph Edge Types.

Defines the typed, directed relationships of the FraudGraph store. The
property set of an edge is part of its identity: merging an edge with the
same endpoints, kind and properties never creates a duplicate.
"""

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, ClassVar

from fraudgraph.graph.schema import TRANSACTION, USER, canonical_json


class EdgeKind(str, Enum):
    """Relationship types stored in the graph."""

    SHARES_EMAIL = "SHARES_EMAIL"
    SHARES_PHONE = "SHARES_PHONE"
    SHARES_ADDRESS = "SHARES_ADDRESS"
    SHARES_PAYMENT_METHOD = "SHARES_PAYMENT_METHOD"
    SENT_MONEY = "SENT_MONEY"
    RECEIVED_BY = "RECEIVED_BY"
    TRANSFERRED_TO = "TRANSFERRED_TO"
    SHARES_IP = "SHARES_IP"
    SHARES_DEVICE = "SHARES_DEVICE"
    SHARES_LOCATION = "SHARES_LOCATION"


USER_ATTRIBUTE_KINDS = (
    EdgeKind.SHARES_EMAIL,
    EdgeKind.SHARES_PHONE,
    EdgeKind.SHARES_ADDRESS,
    EdgeKind.SHARES_PAYMENT_METHOD,
)
TRANSACTION_ATTRIBUTE_KINDS = (
    EdgeKind.SHARES_IP,
    EdgeKind.SHARES_DEVICE,
    EdgeKind.SHARES_LOCATION,
)


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


@dataclass
class Edge:
    """Base edge: endpoints plus the kind-specific properties declared by subclasses."""
    kind: ClassVar[EdgeKind]
    from_label: ClassVar[str] = USER
    to_label: ClassVar[str] = USER

    from_id: str = ""
    to_id: str = ""

    def properties(self) -> dict[str, Any]:
        """Property map stored on the relationship (camelCase keys)."""
        return {
            _camel(f.name): getattr(self, f.name)
            for f in fields(self)
            if f.name not in ("from_id", "to_id")
        }

    def merge_key(self) -> tuple:
        """Identity used for idempotent merge."""
        return (
            self.from_label,
            self.from_id,
            self.to_label,
            self.to_id,
            self.kind.value,
            canonical_json(self.properties()),
        )


# User -> User, inferred from identical attributes

@dataclass
class SharesEmailEdge(Edge):
    kind: ClassVar[EdgeKind] = EdgeKind.SHARES_EMAIL
    email: str = ""


@dataclass
class SharesPhoneEdge(Edge):
    kind: ClassVar[EdgeKind] = EdgeKind.SHARES_PHONE
    phone: str = ""


@dataclass
class SharesAddressEdge(Edge):
    """Carries the canonical address text."""
    kind: ClassVar[EdgeKind] = EdgeKind.SHARES_ADDRESS
    address: str = ""


@dataclass
class SharesPaymentMethodEdge(Edge):
    """Carries the canonical text of the one payment method both users hold."""
    kind: ClassVar[EdgeKind] = EdgeKind.SHARES_PAYMENT_METHOD
    payment_method: str = ""


# Money flow

@dataclass
class SentMoneyEdge(Edge):
    """User (sender) -> Transaction."""
    kind: ClassVar[EdgeKind] = EdgeKind.SENT_MONEY
    to_label: ClassVar[str] = TRANSACTION
    amount: float = 0.0
    currency: str = "USD"


@dataclass
class ReceivedByEdge(Edge):
    """Transaction -> User (receiver)."""
    kind: ClassVar[EdgeKind] = EdgeKind.RECEIVED_BY
    from_label: ClassVar[str] = TRANSACTION
    amount: float = 0.0
    currency: str = "USD"


@dataclass
class TransferredToEdge(Edge):
    """
    Sender -> receiver shortcut for one transaction.

    transaction_id is part of the merge key, so two transfers between the
    same pair of users stay two edges.
    """
    kind: ClassVar[EdgeKind] = EdgeKind.TRANSFERRED_TO
    transaction_id: str = ""
    amount: float = 0.0
    currency: str = "USD"
    timestamp: str = ""


# Transaction -> Transaction, inferred from identical metadata

@dataclass
class SharesIpEdge(Edge):
    kind: ClassVar[EdgeKind] = EdgeKind.SHARES_IP
    from_label: ClassVar[str] = TRANSACTION
    to_label: ClassVar[str] = TRANSACTION
    ip_address: str = ""


@dataclass
class SharesDeviceEdge(Edge):
    kind: ClassVar[EdgeKind] = EdgeKind.SHARES_DEVICE
    from_label: ClassVar[str] = TRANSACTION
    to_label: ClassVar[str] = TRANSACTION
    device_id: str = ""


@dataclass
class SharesLocationEdge(Edge):
    kind: ClassVar[EdgeKind] = EdgeKind.SHARES_LOCATION
    from_label: ClassVar[str] = TRANSACTION
    to_label: ClassVar[str] = TRANSACTION
    location: str = ""
