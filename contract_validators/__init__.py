"""
contract_validators – Composable validators and schema inference for JSON-like documents.
"""
from .errors import SchemaError, UnresolvedReferenceError, ValidationError
from .document import extract_invalid_node, load_document
from .options import SchemaOptions
from .loader import load_options
from .inference import build_schema
from .compiler import compile_schema
from .specs import FieldSpec, Schema, TypeSchema
from .validator import Validator

__all__ = [
    "SchemaError",
    "UnresolvedReferenceError",
    "ValidationError",
    "extract_invalid_node",
    "load_document",
    "SchemaOptions",
    "load_options",
    "build_schema",
    "compile_schema",
    "FieldSpec",
    "Schema",
    "TypeSchema",
    "Validator",
]
