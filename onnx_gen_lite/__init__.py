"""
onnx_gen_lite: Autoregressive token generation over a serialized ONNX decoder.

This package provides:
- A model registry that compiles ONNX bytes once per process
- A greedy decode loop threading the past key/values cache between steps
- Validated construction of input id, attention mask and cache tensors
- A file-backed byte store for chunked model uploads
- setup_model / model_inference operations for a host transport layer
"""

__version__ = "0.1.0"
__author__ = "onnx-gen-lite contributors"

__all__ = []
