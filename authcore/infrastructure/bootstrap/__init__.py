"""User bootstrap hook adapters."""

from authcore.infrastructure.bootstrap.noop_bootstrap import NoOpUserBootstrap

__all__ = ["NoOpUserBootstrap"]
