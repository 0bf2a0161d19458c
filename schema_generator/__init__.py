"""Core logic for the Schema Generator.

The Gradio UI lives in `app.py`. This package contains pure functions that:
- classify sample values into field types
- merge nested object shapes into a flat, name-composed object namespace
- guess reference targets from field names
- apply a ref-config to fill unresolved reference targets
- serialize the schema to sorted, deterministic JSON text
"""
