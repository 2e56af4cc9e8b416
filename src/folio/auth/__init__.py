"""Authentication and authorization.

One authentication path: username/password → server-side session whose
opaque handle travels in an HTTP-only cookie. The session resolves to a
principal (or to Anonymous, represented as None) for authorization checks.
"""
