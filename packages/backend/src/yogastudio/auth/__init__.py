"""Authentication and authorization.

Users log in with email/password and receive a signed JWT. Every request
passes through the authentication gate, which binds a Principal when a
valid bearer token is presented and silently does nothing otherwise.
Protected routes then require a bound Principal; a missing one is
answered by the 401 entry point.
"""
