"""HTTP interface of the signing service."""

from .app import create_app

__all__ = ["create_app"]
