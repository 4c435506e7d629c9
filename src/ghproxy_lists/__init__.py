from .extractors import ProxyRecord, extract_array

__all__ = ["ProxyRecord", "extract_array"]
