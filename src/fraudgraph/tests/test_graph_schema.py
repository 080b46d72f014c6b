"""
Tests for graph node types and value parsing.
"""

import pytest

from fraudgraph.errors import ValidationError
from fraudgraph.graph.schema import (
    Address,
    Location,
    PaymentMethod,
    Transaction,
    User,
    canonical_json,
    decode_properties,
    parse_amount,
    parse_positive_int,
)


class TestStructuredValues:
    """Tests for canonical structured values."""

    def test_canonical_ignores_key_order(self):
        """Same fields in a different order serialize identically."""
        a = Address.parse({"street": "1 Main", "city": "Oslo", "country": "NO"})
        b = Address.parse({"country": "NO", "street": "1 Main", "city": "Oslo"})

        assert a.canonical() == b.canonical()
        assert a == b

    def test_canonical_is_compact_sorted_json(self):
        """Canonical form has sorted keys and no whitespace."""
        method = PaymentMethod.parse({"type": "card", "last4": "1234"})
        assert method.canonical() == '{"last4":"1234","type":"card"}'

    def test_different_values_not_equal(self):
        """A single differing field breaks equality."""
        a = Address.parse({"street": "1 Main", "city": "Oslo"})
        b = Address.parse({"street": "1 Main", "city": "Bergen"})
        assert a != b

    def test_parse_from_serialized_text(self):
        """Stored canonical text parses back to the same value."""
        original = Location.parse({"lat": 59.3, "lon": 18.1})
        assert Location.parse(original.canonical()) == original

    def test_empty_values_are_absent(self):
        """None, empty string and empty object mean no value."""
        assert Address.parse(None) is None
        assert Address.parse("") is None
        assert Address.parse({}) is None

    def test_non_object_rejected(self):
        """Lists and scalars are not structured values."""
        with pytest.raises(ValidationError):
            Address.parse(["street"])
        with pytest.raises(ValidationError):
            Address.parse("not json")

    def test_different_kinds_not_equal(self):
        """An address never equals a location with the same fields."""
        data = {"city": "Oslo"}
        assert Address.parse(data) != Location.parse(data)


class TestUser:
    """Tests for the User node."""

    def test_from_payload(self, sample_user_payload):
        """Payload fields map onto the user."""
        user = User.from_payload(sample_user_payload)

        assert user.id == "u-alpha"
        assert user.name == "Alpha User"
        assert user.email == "alpha@example.com"
        assert user.address.data["city"] == "Springfield"
        assert len(user.payment_methods) == 1

    def test_name_required(self):
        """A user without a name is rejected."""
        with pytest.raises(ValidationError) as exc_info:
            User.from_payload({"email": "x@example.com"})
        assert exc_info.value.field == "name"

    def test_id_generated_when_missing(self):
        """Missing ids are generated and unique."""
        a = User.from_payload({"name": "A"})
        b = User.from_payload({"name": "B"})
        assert a.id and b.id
        assert a.id != b.id

    def test_payment_methods_must_be_list(self):
        with pytest.raises(ValidationError):
            User.from_payload({"name": "A", "paymentMethods": {"type": "card"}})

    def test_to_properties_omits_absent(self):
        """Absent attributes are not stored."""
        props = User(id="u1", name="Only Name").to_properties()
        assert props == {"id": "u1", "name": "Only Name"}

    def test_to_properties_serializes_structured_values(self, sample_user_payload):
        """Address is canonical text, payment methods a list of canonical text."""
        props = User.from_payload(sample_user_payload).to_properties()

        assert props["address"] == canonical_json(sample_user_payload["address"])
        assert props["paymentMethods"] == [
            canonical_json(sample_user_payload["paymentMethods"][0])
        ]


class TestTransaction:
    """Tests for the Transaction node."""

    def test_defaults(self):
        """Currency, status and timestamp are defaulted."""
        tx = Transaction.from_payload({"amount": 10, "fromUserId": "u1"})

        assert tx.currency == "USD"
        assert tx.status == "completed"
        assert tx.timestamp
        assert tx.amount == 10.0

    @pytest.mark.parametrize("amount", [None, 0, -5, "abc", True, float("nan")])
    def test_invalid_amount_rejected(self, amount):
        """Amount must be a positive number."""
        with pytest.raises(ValidationError):
            Transaction.from_payload({"amount": amount, "fromUserId": "u1"})

    def test_numeric_string_amount_accepted(self):
        tx = Transaction.from_payload({"amount": "12.50", "toUserId": "u2"})
        assert tx.amount == 12.5

    def test_requires_a_user(self):
        """At least one of sender and receiver is required."""
        with pytest.raises(ValidationError):
            Transaction.from_payload({"amount": 10})

    def test_users_not_stored_on_node(self):
        """Sender and receiver become edges, not properties."""
        tx = Transaction.from_payload({
            "id": "tx1",
            "amount": 10,
            "fromUserId": "u1",
            "toUserId": "u2",
            "ipAddress": "10.0.0.1",
        })
        props = tx.to_properties()

        assert "fromUserId" not in props
        assert "toUserId" not in props
        assert props["ipAddress"] == "10.0.0.1"
        assert tx.sender_id == "u1"
        assert tx.receiver_id == "u2"


class TestParsing:
    """Tests for scalar parameter parsing."""

    def test_parse_amount(self):
        assert parse_amount(5) == 5.0
        assert parse_amount("7.25") == 7.25

    def test_parse_amount_bound_allows_zero(self):
        assert parse_amount(0, "minAmount", allow_zero=True) == 0.0
        with pytest.raises(ValidationError):
            parse_amount(0, "amount")
        with pytest.raises(ValidationError) as exc_info:
            parse_amount(-1, "minAmount", allow_zero=True)
        assert exc_info.value.field == "minAmount"

    def test_parse_positive_int(self):
        assert parse_positive_int(None, "maxDepth", 5) == 5
        assert parse_positive_int("3", "maxDepth", 5) == 3
        assert parse_positive_int(4.0, "maxDepth", 5) == 4

    @pytest.mark.parametrize("value", [0, -1, "abc", 2.5, False])
    def test_parse_positive_int_rejects(self, value):
        with pytest.raises(ValidationError) as exc_info:
            parse_positive_int(value, "maxDepth", 5)
        assert exc_info.value.field == "maxDepth"


class TestDecodeProperties:
    """Tests for turning stored properties back into wire shape."""

    def test_decodes_structured_fields(self, sample_user_payload):
        props = User.from_payload(sample_user_payload).to_properties()
        decoded = decode_properties(props)

        assert decoded["address"] == sample_user_payload["address"]
        assert decoded["paymentMethods"] == sample_user_payload["paymentMethods"]

    def test_leaves_scalars_alone(self):
        assert decode_properties({"id": "u1", "name": "{not json"}) == {
            "id": "u1",
            "name": "{not json",
        }

    def test_none(self):
        assert decode_properties(None) is None
