"""Status field classification."""

from .value_decoder import ValueDecoder, ReferenceLookup

__all__ = [
    'ValueDecoder',
    'ReferenceLookup',
]
