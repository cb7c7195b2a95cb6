"""
Persistent byte storage for serialized models.

Provides:
- ByteStore: Named-file store with read/append/clear/length
"""

from onnx_gen_lite.storage.byte_store import ByteStore

__all__ = ["ByteStore"]
