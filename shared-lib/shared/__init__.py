"""
Shared building blocks for the library services.

Error taxonomy, logging setup, the declarative base, identity schemas,
the authorization gateway and the cross-service call client.
"""
