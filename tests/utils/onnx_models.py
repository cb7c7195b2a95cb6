"""
Tiny ONNX decoder graphs for tests.

The graphs follow the decoder input/output contract without any weights:

    inputs:  input_ids [1, seq] int64,
             attention_mask [1, total] int8,
             past_key_values [layers, 1, heads, past, head_dim] float32
    outputs: next_token [1, 1] int64 = max(input_ids),
             present_key_values = concat(past_key_values, zeros, axis=3),
             attention_mask_out = attention_mask

so the "next token" is the largest id fed on that step and the cache grows
by one position per step, like a real decoder's would.
"""

import numpy as np
import onnx
from onnx import TensorProto, helper, numpy_helper


def build_decoder_model(
    num_layers: int = 2,
    num_heads: int = 2,
    head_dim: int = 4,
    opset: int = 13,
) -> onnx.ModelProto:
    """Build the max-token decoder graph."""
    input_ids = helper.make_tensor_value_info(
        "input_ids", TensorProto.INT64, [1, "seq"]
    )
    attention_mask = helper.make_tensor_value_info(
        "attention_mask", TensorProto.INT8, [1, "total"]
    )
    past = helper.make_tensor_value_info(
        "past_key_values",
        TensorProto.FLOAT,
        [num_layers, 1, num_heads, "past", head_dim],
    )

    next_token = helper.make_tensor_value_info(
        "next_token", TensorProto.INT64, [1, 1]
    )
    present = helper.make_tensor_value_info(
        "present_key_values",
        TensorProto.FLOAT,
        [num_layers, 1, num_heads, "present", head_dim],
    )
    mask_out = helper.make_tensor_value_info(
        "attention_mask_out", TensorProto.INT8, [1, "total"]
    )

    step_zeros = numpy_helper.from_array(
        np.zeros((num_layers, 1, num_heads, 1, head_dim), dtype=np.float32),
        name="step_zeros",
    )

    nodes = [
        helper.make_node(
            "ReduceMax", ["input_ids"], ["next_token"], axes=[1], keepdims=1
        ),
        helper.make_node(
            "Concat", ["past_key_values", "step_zeros"], ["present_key_values"], axis=3
        ),
        helper.make_node("Identity", ["attention_mask"], ["attention_mask_out"]),
    ]

    graph = helper.make_graph(
        nodes,
        "max_token_decoder",
        [input_ids, attention_mask, past],
        [next_token, present, mask_out],
        initializer=[step_zeros],
    )
    model = helper.make_model(
        graph,
        producer_name="onnx-gen-lite-tests",
        opset_imports=[helper.make_opsetid("", opset)],
    )
    model.ir_version = 8
    return model


def build_decoder_model_bytes(**kwargs) -> bytes:
    """Serialized form of build_decoder_model."""
    return build_decoder_model(**kwargs).SerializeToString()


def build_invalid_graph_bytes() -> bytes:
    """A well-formed ModelProto whose graph uses an unknown operator."""
    x = helper.make_tensor_value_info("x", TensorProto.FLOAT, [1])
    y = helper.make_tensor_value_info("y", TensorProto.FLOAT, [1])
    graph = helper.make_graph(
        [helper.make_node("DefinitelyNotAnOperator", ["x"], ["y"])],
        "invalid_graph",
        [x],
        [y],
    )
    model = helper.make_model(
        graph, opset_imports=[helper.make_opsetid("", 13)]
    )
    model.ir_version = 8
    return model.SerializeToString()
