"""Definition translation: source document to AWS Data Pipeline objects."""

from .field_encoder import FieldEncoder
from .translator import DefinitionTranslator

__all__ = ["FieldEncoder", "DefinitionTranslator"]
