from __future__ import annotations

import json
import os
from typing import Any


def _read_text(source) -> str:
    if hasattr(source, 'read'):
        if hasattr(source, 'seek'):
            source.seek(0)
        content = source.read()
    elif isinstance(source, (bytes, bytearray)):
        content = bytes(source)
    else:
        path = source.name if hasattr(source, 'name') else source
        with open(path, 'rb') as f:
            content = f.read()

    if isinstance(content, bytes):
        # utf-8-sig drops the BOM some editors prepend to exported JSON
        content = content.decode('utf-8-sig')
    return content


def read_json_content(source) -> Any:
    """Parse JSON from an uploaded file object, a file path or raw bytes.

    Raises ValueError when nothing was uploaded, the upload is empty, or the
    content is not JSON (json.JSONDecodeError is a ValueError); OSError when
    the file can't be read.
    """
    if source is None:
        raise ValueError("No file uploaded.")

    text = _read_text(source)
    if not text.strip():
        raise ValueError("Uploaded file is empty.")
    try:
        return json.loads(text)
    except RecursionError as e:
        raise ValueError("JSON document is nested too deeply.") from e


def validate_corpus(corpus: Any) -> None:
    """Raise ValueError unless `corpus` maps group names to lists of objects."""
    if not isinstance(corpus, dict):
        raise ValueError("Input must be a JSON object mapping group names to arrays of records.")
    for group_name, samples in corpus.items():
        if not isinstance(samples, list):
            raise ValueError(f"Group '{group_name}' must be an array of records.")
        for idx, sample in enumerate(samples):
            if not isinstance(sample, dict):
                raise ValueError(f"Record {idx} of group '{group_name}' is not a JSON object.")


def read_corpus(source) -> Any:
    """Read a sample corpus and check its shape before any inference runs."""
    corpus = read_json_content(source)
    validate_corpus(corpus)
    return corpus


def uploaded_file_name(file_obj) -> str:
    if file_obj is None:
        return ''
    path = file_obj.name if hasattr(file_obj, 'name') else str(file_obj)
    return os.path.basename(path)


def schema_file_name(upload_name: str) -> str:
    """Download name for a generated schema: 'posts.json' -> 'posts_schema.json'."""
    base = os.path.basename(upload_name or '')
    if not base:
        return 'schema.json'
    stem, ext = os.path.splitext(base)
    if ext.lower() != '.json':
        stem = base
    return f"{stem}_schema.json"
