"""
Hrana SDK Protocol Module.

Implements the JSON encoding of Hrana pipeline requests and the decoding of
pipeline responses into typed values.
"""

from .decoder import coerce_cell, decode
from .encoder import PipelineRequest, encode_arguments, encode_statement, encode_value

__all__ = [
    # Encoding
    "PipelineRequest",
    "encode_arguments",
    "encode_statement",
    "encode_value",
    # Decoding
    "coerce_cell",
    "decode",
]
