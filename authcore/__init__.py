"""authcore: credential and session lifecycle manager.

Issues access/refresh token pairs, rotates refresh tokens single-use with
reuse detection, revokes sessions, throttles failed logins and keeps an
append-only security audit trail.

Usage:
    from authcore.core.container import build_session_facade, get_database

    async with get_database().get_session() as session:
        facade = build_session_facade(session)
        result = await facade.login(request, metadata)
"""

__version__ = "0.1.0"
