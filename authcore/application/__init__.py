"""Application layer: commands, handlers, services and DTOs.

Imports only from core and domain; infrastructure arrives by injection.
"""
