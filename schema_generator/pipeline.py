from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from .builder import generate_schema_from_data
from .fields import Schema
from .ref_config import apply_ref_config
from .serializer import serialize_schema


def build_schema_output(corpus: Any, ref_config: Optional[Dict[str, str]] = None) -> Tuple[Schema, str]:
    """Infer, optionally patch Ref targets, and serialize in one call.

    Returns the final schema along with its text so callers can inspect what
    is still unresolved without parsing the output back.
    """
    schema = generate_schema_from_data(corpus)
    if ref_config:
        schema = apply_ref_config(schema, ref_config)
    return schema, serialize_schema(schema)
