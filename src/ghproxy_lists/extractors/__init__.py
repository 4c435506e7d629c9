from .base import BaseExtractor, ExtractContext, ExtractResult, NEWLINE_TOKEN, ProxyRecord
from .array_literal import ArrayLiteralExtractor, extract_array, normalize_description, normalize_field

__all__ = [
    "BaseExtractor",
    "ExtractContext",
    "ExtractResult",
    "NEWLINE_TOKEN",
    "ProxyRecord",
    "ArrayLiteralExtractor",
    "extract_array",
    "normalize_description",
    "normalize_field",
]
