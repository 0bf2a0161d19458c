from __future__ import annotations

import os
import tempfile
from typing import Dict, Optional

import gradio as gr
from loguru import logger

from .io_utils import read_corpus, schema_file_name, uploaded_file_name
from .pipeline import build_schema_output
from .ref_config import iter_unresolved_refs, load_ref_config


def describe_upload(file_obj) -> str:
    name = uploaded_file_name(file_obj)
    path = file_obj.name if hasattr(file_obj, 'name') else file_obj
    try:
        size_kb = os.path.getsize(path) / 1024
    except (OSError, TypeError):
        return f"Selected: {name}"
    return f"Selected: {name} ({size_kb:.2f} KB)"


def is_json_upload(file_obj) -> bool:
    return uploaded_file_name(file_obj).lower().endswith('.json')


def handle_corpus_upload(file_obj):
    """Validate the picked sample file; returns (file info, process button update)."""
    if file_obj is None:
        return "No file selected", gr.update(interactive=False)
    if not is_json_upload(file_obj):
        return "Please select a valid JSON file", gr.update(interactive=False)
    return describe_upload(file_obj), gr.update(interactive=True)


def handle_ref_config_upload(file_obj):
    """Load the optional ref-config; returns (ref map or None, file info, status)."""
    if file_obj is None:
        return None, "No ref-config file selected", ""
    if not is_json_upload(file_obj):
        return None, "No ref-config file selected", "Please select a valid JSON file for ref-config"

    try:
        ref_map = load_ref_config(file_obj)
    except OSError as e:
        logger.warning(f"Failed to read ref-config: {e}")
        return None, "No ref-config file selected", "Error reading ref-config file"
    except ValueError as e:
        logger.warning(f"Rejected ref-config: {e}")
        return None, "No ref-config file selected", f"Error loading ref-config: {str(e)}"

    logger.info(f"Loaded ref-config with {len(ref_map)} entries")
    return ref_map, describe_upload(file_obj), "Ref-config loaded successfully!"


def write_schema_file(schema_text: str, upload_name: str) -> str:
    path = os.path.join(tempfile.gettempdir(), schema_file_name(upload_name))
    with open(path, 'w', encoding='utf-8') as f:
        f.write(schema_text)
    return path


def process_schema_handler(file_obj, ref_config: Optional[Dict[str, str]] = None):
    """Run the full pipeline on an uploaded sample file.

    Returns (schema text, download path, status). On any failure the text is
    empty and no file is offered, so a partial schema is never shown.
    """
    if file_obj is None:
        return "", None, "Please select a file first"

    try:
        schema, schema_text = build_schema_output(read_corpus(file_obj), ref_config)
    except OSError as e:
        logger.error(f"Failed to read sample file: {e}")
        return "", None, "Error reading file"
    except ValueError as e:
        logger.error(f"Failed to generate schema: {e}")
        return "", None, f"Error processing file: {str(e)}"
    except RecursionError:
        logger.error("Failed to generate schema: sample data is nested too deeply")
        return "", None, "Error processing file: sample data is nested too deeply."

    try:
        path = write_schema_file(schema_text, uploaded_file_name(file_obj))
    except OSError as e:
        logger.error(f"Failed to write schema file: {e}")
        return schema_text, None, f"Schema generated, but the download file could not be written: {str(e)}"

    unresolved = list(dict.fromkeys(iter_unresolved_refs(schema)))
    logger.info(
        f"Generated schema for {len(schema.groups)} groups, {len(unresolved)} unresolved refs"
    )

    status = "Schema generated successfully!"
    if ref_config:
        status += " Ref-config applied."
    if unresolved:
        status += f" {len(unresolved)} reference(s) need a manual target: {', '.join(unresolved)}"
    return schema_text, path, status
