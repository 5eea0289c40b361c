"""
Cryptographic primitives used to hash and recover transactions.
"""
