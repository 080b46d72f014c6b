"""
Sample users and transactions.

Seven users, several of whom share a phone, an address or a payment
method, and ten transfers, several of which share an IP address and
device.
"""

SAMPLE_USERS = [
    {
        "id": "user1",
        "name": "John Doe",
        "email": "john@example.com",
        "phone": "+1234567890",
        "address": {"street": "123 Main St", "city": "New York", "country": "USA"},
        "paymentMethods": [{"type": "credit_card", "last4": "1234", "provider": "visa"}],
    },
    {
        "id": "user2",
        "name": "Jane Smith",
        "email": "jane@example.com",
        "phone": "+1987654321",
        "address": {"street": "456 Elm St", "city": "Los Angeles", "country": "USA"},
        "paymentMethods": [{"type": "credit_card", "last4": "5678", "provider": "mastercard"}],
    },
    {
        "id": "user3",
        "name": "Bob Johnson",
        "email": "bob@example.com",
        "phone": "+1122334455",
        "address": {"street": "789 Oak St", "city": "Chicago", "country": "USA"},
        "paymentMethods": [{"type": "credit_card", "last4": "9012", "provider": "amex"}],
    },
    {
        "id": "user4",
        "name": "Alice Brown",
        "email": "alice@example.com",
        "phone": "+1567890123",
        "address": {"street": "321 Pine St", "city": "San Francisco", "country": "USA"},
        "paymentMethods": [
            {"type": "credit_card", "last4": "3456", "provider": "visa"},
            {"type": "bank_account", "last4": "7890", "bank": "Chase"},
        ],
    },
    {
        "id": "user5",
        "name": "Charlie Davis",
        "email": "charlie@example.com",
        "phone": "+1234567890",  # same phone as user1
        "address": {"street": "654 Cedar St", "city": "Boston", "country": "USA"},
        "paymentMethods": [{"type": "credit_card", "last4": "7890", "provider": "discover"}],
    },
    {
        "id": "user6",
        "name": "Eva Wilson",
        "email": "eva@example.com",
        "phone": "+1654987321",
        "address": {"street": "123 Main St", "city": "New York", "country": "USA"},  # user1
        "paymentMethods": [{"type": "credit_card", "last4": "1234", "provider": "visa"}],  # user1
    },
    {
        "id": "user7",
        "name": "David Miller",
        "email": "david@example.com",
        "phone": "+1098765432",
        "address": {"street": "987 Market St", "city": "Seattle", "country": "USA"},
        "paymentMethods": [{"type": "bank_account", "last4": "7890", "bank": "Chase"}],  # user4
    },
]


def _transfer(tx_id, amount, day, sender, receiver, ip, device):
    return {
        "id": tx_id,
        "amount": amount,
        "currency": "USD",
        "timestamp": f"2023-01-{day:02d}T12:00:00Z",
        "status": "completed",
        "fromUserId": sender,
        "toUserId": receiver,
        "ipAddress": ip,
        "deviceId": device,
    }


SAMPLE_TRANSACTIONS = [
    _transfer("tx1", 100.0, 1, "user1", "user2", "192.168.1.1", "device123"),
    _transfer("tx2", 50.0, 2, "user2", "user3", "192.168.1.2", "device456"),
    _transfer("tx3", 200.0, 3, "user3", "user4", "192.168.1.3", "device789"),
    _transfer("tx4", 75.0, 4, "user1", "user5", "192.168.1.1", "device123"),
    _transfer("tx5", 125.0, 5, "user2", "user6", "192.168.1.4", "device456"),
    _transfer("tx6", 300.0, 6, "user6", "user7", "192.168.1.5", "device101"),
    _transfer("tx7", 150.0, 7, "user4", "user1", "192.168.1.6", "device202"),
    _transfer("tx8", 80.0, 8, "user7", "user3", "192.168.1.7", "device303"),
    _transfer("tx9", 500.0, 9, "user5", "user6", "192.168.1.1", "device123"),
    _transfer("tx10", 1000.0, 10, "user3", "user2", "192.168.1.3", "device789"),
]
