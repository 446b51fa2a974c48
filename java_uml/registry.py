from typing import Optional

from .converter import JavaToUmletConverter

_converter: Optional[JavaToUmletConverter] = None


def get_converter() -> JavaToUmletConverter:
    """Process-wide converter, created on first use."""
    global _converter
    if _converter is None:
        _converter = JavaToUmletConverter()
    return _converter


def reset_converter() -> None:
    global _converter
    _converter = None


def convert_java_to_umlet(code: str) -> str:
    result = get_converter().convert(code)
    return result["uml_text"] if result["success"] else f"Error: {result['error']}"


def generate_relationship_text(code: str) -> str:
    result = get_converter().convert(code)
    return result["relationship_text"] if result["success"] else f"Error: {result['error']}"
