"""Yoga Studio — class-booking backend.

Users register and log in with JWT bearer tokens, browse sessions led by
teachers, and join or leave those sessions.
"""

__version__ = "0.1.0"
