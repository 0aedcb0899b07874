"""Test suite for authcore.

Test structure follows the test pyramid:
- unit/: Unit tests - domain and application logic with mocked ports
- integration/: Integration tests - real adapters (aiosqlite, fakeredis,
  PyJWT, bcrypt, structlog) and the wired SessionFacade
"""
