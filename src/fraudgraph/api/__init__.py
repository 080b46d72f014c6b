"""
FraudGraph HTTP API.
"""
