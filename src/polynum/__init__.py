"""polynum public API."""

from .arithmetic import create_unary_plus, to_bignumber, to_number, unary_plus
from .collection import deep_map, is_collection
from .config import (
    Config,
    NumberRepresentation,
    config_override,
    configure,
    get_config,
    get_preferred_representation,
    reset_config,
)
from .errors import (
    ConfigError,
    NoMatchingSignatureError,
    NumericConversionError,
    PolynumError,
    SignatureError,
    SkipZerosViolation,
    UnsupportedTypeError,
)
from .typed import TypedFunction, refer_to_self, typed
from .units import Unit
from .values import MATRIX_LIKE, TypeTag, ValueInfo, is_matrix_like, resolve_tag, value_info

__all__ = [
    "unary_plus",
    "create_unary_plus",
    "to_number",
    "to_bignumber",
    "deep_map",
    "is_collection",
    "typed",
    "refer_to_self",
    "TypedFunction",
    "resolve_tag",
    "value_info",
    "is_matrix_like",
    "TypeTag",
    "MATRIX_LIKE",
    "ValueInfo",
    "Unit",
    "Config",
    "NumberRepresentation",
    "get_config",
    "get_preferred_representation",
    "configure",
    "reset_config",
    "config_override",
    "PolynumError",
    "UnsupportedTypeError",
    "NoMatchingSignatureError",
    "SignatureError",
    "ConfigError",
    "NumericConversionError",
    "SkipZerosViolation",
]
