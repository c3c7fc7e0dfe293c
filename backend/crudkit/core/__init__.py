"""Core Layer — pure REST dispatch rules, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from rest/, api/, infrastructure/, or db/
    - Verb validation and exception classification are pure and deterministic
"""
