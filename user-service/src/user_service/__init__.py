"""User Service: identity authority, user administration and favourite books."""
