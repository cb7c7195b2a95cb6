"""
Example demonstrating model upload, setup and generation.

This example uploads a serialized ONNX decoder to the byte store in chunks,
sets it up and runs greedy generation from a few seed token ids.

Usage:
    python examples/generate_example.py path/to/decoder.onnx
"""

import logging
import sys

from onnx_gen_lite.core.service import InferenceService
from onnx_gen_lite.models.config import DecoderConfig

CHUNK_SIZE = 1024 * 1024

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

if len(sys.argv) != 2:
    print(__doc__)
    sys.exit(1)

model_path = sys.argv[1]
service = InferenceService(config=DecoderConfig(storage_dir="./model_store"))

# Upload in chunks
print(f"Uploading {model_path}...")
service.clear_model_bytes()
with open(model_path, "rb") as f:
    while True:
        chunk = f.read(CHUNK_SIZE)
        if not chunk:
            break
        service.append_model_bytes(chunk)
print(f"  Stored {service.model_bytes_length()} bytes")

# Compile
print("\nSetting up model...")
result = service.setup_model()
if not result.ok:
    print(f"  {result.error}")
    sys.exit(1)

# Generate
seed = [464, 3139, 286, 4881, 318]
print(f"\nGenerating from seed {seed}...")
result = service.model_inference(16, seed)
if result.ok:
    print(f"  Generated ids: {result.value}")
else:
    print(f"  {result.error}")
