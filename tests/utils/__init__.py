"""Test helpers.

Focused modules:
- fakes.py: in-memory stand-ins for the client socket and both upstream services
"""
