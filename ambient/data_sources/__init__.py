"""Provider clients and data source factories for the ambient display."""

from .base import AmbientDataSource, CallableAmbientDataSource, ProviderError, UntrustedUrlError
from .factory import build_data_source

__all__ = [
    "build_data_source",
    "AmbientDataSource",
    "CallableAmbientDataSource",
    "ProviderError",
    "UntrustedUrlError",
]
