"""
Graph Node Types.

Defines the User and Transaction nodes of the FraudGraph store and the
structured values (address, payment method, location) they carry.

Structured values are compared on their canonical serialization: JSON with
sorted keys and compact separators. Two addresses are the same address only
when every field is byte-for-byte equal, regardless of the order the fields
were supplied in.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, ClassVar, Optional
from uuid import uuid4

from fraudgraph.errors import ValidationError

USER = "User"
TRANSACTION = "Transaction"
NODE_LABELS = (USER, TRANSACTION)

DEFAULT_CURRENCY = "USD"
DEFAULT_STATUS = "completed"


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()


def canonical_json(value: Any) -> str:
    """Deterministic JSON text used for storage and equality of structured values."""
    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


@dataclass(frozen=True, eq=False)
class StructuredValue:
    """
    A structured attribute value with a canonical text form.

    Equality is equality of canonical text.
    """
    data: dict = field(default_factory=dict)

    @classmethod
    def parse(cls, value: Any) -> Optional["StructuredValue"]:
        """
        Build a value from a mapping or its serialized text.

        Returns None for absent or empty input.

        Raises:
            ValidationError: if the value is not an object
        """
        if value is None or value == "":
            return None
        if isinstance(value, StructuredValue):
            value = value.data
        elif isinstance(value, str):
            try:
                value = json.loads(value)
            except json.JSONDecodeError as e:
                raise ValidationError(f"{cls.__name__} is not valid JSON") from e
        if not isinstance(value, dict):
            raise ValidationError(f"{cls.__name__} must be an object")
        if not value:
            return None
        return cls(dict(value))

    def canonical(self) -> str:
        """Canonical serialized form."""
        return canonical_json(self.data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StructuredValue):
            return NotImplemented
        return type(self) is type(other) and self.canonical() == other.canonical()

    def __hash__(self) -> int:
        return hash(self.canonical())


class Address(StructuredValue):
    """Postal address: street, city, country."""

    pass


class PaymentMethod(StructuredValue):
    """Payment instrument: type, last 4 digits, and provider or bank."""

    pass


class Location(StructuredValue):
    """Where a transaction was made."""

    pass


def _optional_str(data: dict, key: str) -> Optional[str]:
    value = data.get(key)
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{key} must be a string", field=key)
    return value


def _timestamp(value: Any, key: str) -> Optional[str]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, str):
        return value
    raise ValidationError(f"{key} must be an ISO-8601 string", field=key)


def parse_amount(value: Any, key: str = "amount", allow_zero: bool = False) -> float:
    """
    Parse a monetary amount.

    Args:
        allow_zero: accept 0 as well, for range bounds

    Raises:
        ValidationError: if the amount is missing, not numeric, or not positive
            (negative when allow_zero is set)
    """
    if value is None or value == "" or isinstance(value, bool):
        raise ValidationError("Amount is required", field=key)
    try:
        amount = Decimal(str(value))
    except InvalidOperation as e:
        raise ValidationError(f"{key} must be a number", field=key) from e
    if not amount.is_finite() or amount < 0 or (amount == 0 and not allow_zero):
        qualifier = "non-negative" if allow_zero else "positive"
        raise ValidationError(f"{key} must be a {qualifier} number", field=key)
    return float(amount)


@dataclass
class User:
    """
    User (account-holder) node.

    Identifying attributes (email, phone, address, payment methods) drive
    SHARES_* link inference.
    """
    LABEL: ClassVar[str] = USER

    id: str = field(default_factory=lambda: str(uuid4()))
    name: str = ""
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[Address] = None
    payment_methods: list[PaymentMethod] = field(default_factory=list)

    # Metadata
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_payload(cls, data: dict) -> "User":
        """
        Build a user from a wire payload (camelCase keys).

        Raises:
            ValidationError: if the name is missing or an attribute is malformed
        """
        name = data.get("name")
        if not name or not isinstance(name, str):
            raise ValidationError("Name is required", field="name")

        raw_methods = data.get("paymentMethods") or []
        if not isinstance(raw_methods, list):
            raise ValidationError("paymentMethods must be a list", field="paymentMethods")
        methods = [m for m in (PaymentMethod.parse(v) for v in raw_methods) if m is not None]

        return cls(
            id=_optional_str(data, "id") or str(uuid4()),
            name=name,
            email=_optional_str(data, "email"),
            phone=_optional_str(data, "phone"),
            address=Address.parse(data.get("address")),
            payment_methods=methods,
            created_at=_timestamp(data.get("createdAt"), "createdAt"),
        )

    def to_properties(self) -> dict:
        """Stored property map. Absent attributes are omitted."""
        props: dict[str, Any] = {"id": self.id, "name": self.name}
        if self.email:
            props["email"] = self.email
        if self.phone:
            props["phone"] = self.phone
        if self.address:
            props["address"] = self.address.canonical()
        if self.payment_methods:
            props["paymentMethods"] = [m.canonical() for m in self.payment_methods]
        if self.created_at:
            props["createdAt"] = self.created_at
        if self.updated_at:
            props["updatedAt"] = self.updated_at
        return props


@dataclass
class Transaction:
    """
    Transaction (money transfer) node.

    sender_id/receiver_id are write inputs used to derive the SENT_MONEY,
    RECEIVED_BY and TRANSFERRED_TO edges; they are not stored on the node.
    """
    LABEL: ClassVar[str] = TRANSACTION

    id: str = field(default_factory=lambda: str(uuid4()))
    amount: float = 0.0
    currency: str = DEFAULT_CURRENCY
    timestamp: str = field(default_factory=utc_now_iso)
    status: str = DEFAULT_STATUS
    ip_address: Optional[str] = None
    device_id: Optional[str] = None
    location: Optional[Location] = None
    description: Optional[str] = None

    sender_id: Optional[str] = None
    receiver_id: Optional[str] = None

    # Metadata
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_payload(cls, data: dict) -> "Transaction":
        """
        Build a transaction from a wire payload (camelCase keys).

        Raises:
            ValidationError: if the amount is missing or not positive, or
                neither sender nor receiver is given
        """
        amount = parse_amount(data.get("amount"))
        sender_id = _optional_str(data, "fromUserId")
        receiver_id = _optional_str(data, "toUserId")
        if not sender_id and not receiver_id:
            raise ValidationError(
                "At least one user (sender or receiver) is required",
                field="fromUserId",
            )

        return cls(
            id=_optional_str(data, "id") or str(uuid4()),
            amount=amount,
            currency=_optional_str(data, "currency") or DEFAULT_CURRENCY,
            timestamp=_timestamp(data.get("timestamp"), "timestamp") or utc_now_iso(),
            status=_optional_str(data, "status") or DEFAULT_STATUS,
            ip_address=_optional_str(data, "ipAddress"),
            device_id=_optional_str(data, "deviceId"),
            location=Location.parse(data.get("location")),
            description=_optional_str(data, "description"),
            sender_id=sender_id,
            receiver_id=receiver_id,
            created_at=_timestamp(data.get("createdAt"), "createdAt"),
        )

    def to_properties(self) -> dict:
        """Stored property map. Absent attributes are omitted."""
        props: dict[str, Any] = {
            "id": self.id,
            "amount": self.amount,
            "currency": self.currency,
            "timestamp": self.timestamp,
            "status": self.status,
        }
        if self.ip_address:
            props["ipAddress"] = self.ip_address
        if self.device_id:
            props["deviceId"] = self.device_id
        if self.location:
            props["location"] = self.location.canonical()
        if self.description:
            props["description"] = self.description
        if self.created_at:
            props["createdAt"] = self.created_at
        if self.updated_at:
            props["updatedAt"] = self.updated_at
        return props


def _loads(value: Any) -> Any:
    if isinstance(value, str):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            return value
    return value


def decode_properties(props: Optional[dict]) -> Optional[dict]:
    """Turn a stored property map back into its wire shape."""
    if props is None:
        return None
    decoded = dict(props)
    for key in ("address", "location"):
        if key in decoded:
            decoded[key] = _loads(decoded[key])
    if "paymentMethods" in decoded:
        methods = decoded["paymentMethods"]
        if isinstance(methods, str):
            methods = _loads(methods)
        if isinstance(methods, list):
            decoded["paymentMethods"] = [_loads(m) for m in methods]
    return decoded


def parse_positive_int(value: Any, key: str, default: int) -> int:
    """
    Parse an optional positive integer parameter.

    Raises:
        ValidationError: if the value is not a positive integer
    """
    if value is None or value == "":
        return default
    message = f"{key} must be a positive integer"
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValidationError(message, field=key)
    try:
        number = int(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(message, field=key) from e
    if number < 1:
        raise ValidationError(message, field=key)
    return number
