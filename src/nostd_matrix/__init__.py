"""no_std build matrix: classify workspace crates, generate core/alloc plans, check/build them."""

from nostd_matrix.classify import classify_packages
from nostd_matrix.driver import ACTIONS, execute
from nostd_matrix.errors import (
    EmptyPlanError,
    MetadataError,
    NoStdMatrixError,
    ToolchainInvocationError,
    TransportDecodeError,
    UsageError,
)
from nostd_matrix.features import feature_extras, has_alloc
from nostd_matrix.plan import build_plan, generate_plan
from nostd_matrix.transport import decode_plan, encode_plan

__all__ = [
    "ACTIONS",
    "EmptyPlanError",
    "MetadataError",
    "NoStdMatrixError",
    "ToolchainInvocationError",
    "TransportDecodeError",
    "UsageError",
    "build_plan",
    "classify_packages",
    "decode_plan",
    "encode_plan",
    "execute",
    "feature_extras",
    "generate_plan",
    "has_alloc",
]
