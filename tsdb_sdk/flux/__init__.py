"""
Flux query client: synchronous and streaming access to query results.
"""

from .cancellable import Cancellable
from .client import FluxClient
from .domain import FluxColumn, FluxRecord, FluxTable
from .options import FluxConnectionOptions, default_dialect

__all__ = [
    'Cancellable',
    'FluxClient',
    'FluxColumn',
    'FluxConnectionOptions',
    'FluxRecord',
    'FluxTable',
    'default_dialect',
]
