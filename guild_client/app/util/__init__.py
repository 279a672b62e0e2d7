"""
Utilities: wire enums, bitfields, value resolvers and the cache collection.
"""
