from __future__ import annotations

import json
from typing import Dict, List

from .fields import FieldConfig, Schema

INDENT = '  '


def _quote(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


def write_field_config_inline(field_config: FieldConfig) -> str:
    """Render one field config on a single line, members in wire order."""
    parts = [
        f"{_quote(key)}: {json.dumps(value, ensure_ascii=False)}"
        for key, value in field_config.to_dict().items()
    ]
    return "{ " + ", ".join(parts) + " }"


def _write_fields(lines: List[str], fields: Dict[str, FieldConfig], depth: int) -> None:
    names = sorted(fields)
    for idx, field_name in enumerate(names):
        comma = ',' if idx < len(names) - 1 else ''
        lines.append(f"{INDENT * depth}{_quote(field_name)}: {write_field_config_inline(fields[field_name])}{comma}")


def serialize_schema(schema: Schema) -> str:
    """Render the schema as sorted, indented JSON text.

    Groups, fields and objects are always emitted in lexicographic order, so
    the same schema always produces the same text. Separators between groups,
    and between a group's fields and objects, sit on their own line.
    """
    lines: List[str] = ['{']
    lines.append(f"{INDENT}\"namespace\": {_quote(schema.namespace)},")
    lines.append(f"{INDENT}\"typePrefix\": {_quote(schema.type_prefix)},")
    lines.append(f"{INDENT}\"groups\": {{")

    group_names = sorted(schema.groups)
    for group_idx, group_name in enumerate(group_names):
        group = schema.groups[group_name]
        if group_idx > 0:
            lines.append(',')
        lines.append(f"{INDENT * 2}{_quote(group_name)}: {{")
        lines.append(f"{INDENT * 3}\"fields\": {{")
        _write_fields(lines, group.fields, 4)
        lines.append(f"{INDENT * 3}}}")

        if group.objects:
            lines.append(',')
            lines.append(f"{INDENT * 3}\"objects\": {{")
            for obj_idx, obj_name in enumerate(sorted(group.objects)):
                if obj_idx > 0:
                    lines.append(',')
                lines.append(f"{INDENT * 4}{_quote(obj_name)}: {{")
                lines.append(f"{INDENT * 5}\"fields\": {{")
                _write_fields(lines, group.objects[obj_name].fields, 6)
                lines.append(f"{INDENT * 5}}}")
                lines.append(f"{INDENT * 4}}}")
            lines.append(f"{INDENT * 3}}}")

        lines.append(f"{INDENT * 2}}}")

    if group_names:
        lines.append('')
    lines.append(f"{INDENT}}}")
    lines.append('}')
    return '\n'.join(lines)
