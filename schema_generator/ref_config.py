from __future__ import annotations

from copy import deepcopy
from typing import Any, Dict, Iterable, Optional

from loguru import logger

from .fields import TYPE_REF, FieldConfig, Schema
from .io_utils import read_json_content
from .names import MANUAL_FILL_PLACEHOLDER


def parse_ref_config(data: Any) -> Dict[str, str]:
    """Turn a `{"refs": [{"from": "group.field", "to": "target"}, ...]}` document
    into a `from -> to` mapping. Later entries override earlier ones."""
    if not isinstance(data, dict) or not isinstance(data.get('refs'), list):
        raise ValueError('Ref-config must contain "refs" array')

    ref_map: Dict[str, str] = {}
    for idx, ref in enumerate(data['refs']):
        if not isinstance(ref, dict):
            raise ValueError(f"Ref-config entry {idx} must be an object.")
        source, target = ref.get('from'), ref.get('to')
        if not isinstance(source, str) or not isinstance(target, str):
            raise ValueError(f'Ref-config entry {idx} needs string "from" and "to" values.')
        ref_map[source] = target
    return ref_map


def load_ref_config(file_obj) -> Dict[str, str]:
    """Read and validate a ref-config from an uploaded file or file path."""
    return parse_ref_config(read_json_content(file_obj))


def _fill_refs(group_name: str, fields: Dict[str, FieldConfig], ref_map: Dict[str, str]) -> int:
    filled = 0
    for field_name, field_config in fields.items():
        if field_config.type != TYPE_REF or field_config.ref_to != MANUAL_FILL_PLACEHOLDER:
            continue
        target = ref_map.get(f"{group_name}.{field_name}")
        if target:
            field_config.ref_to = target
            filled += 1
    return filled


def apply_ref_config(schema: Schema, ref_config: Optional[Dict[str, str]]) -> Schema:
    """Return a copy of `schema` with unresolved Ref targets filled from `ref_config`.

    Keys are `<group>.<field>`, also for fields of nested objects, so one entry
    covers every unresolved field of that name within the group. Fields that
    already point at a group are left alone.
    """
    if not ref_config:
        return schema

    result = deepcopy(schema)
    filled = 0
    for group_name, group in result.groups.items():
        filled += _fill_refs(group_name, group.fields, ref_config)
        for obj in group.objects.values():
            filled += _fill_refs(group_name, obj.fields, ref_config)

    logger.debug(f"Ref-config filled {filled} reference targets")
    return result


def iter_unresolved_refs(schema: Schema) -> Iterable[str]:
    """Yield `<group>.<field>` for every Ref field still waiting for a target."""
    for group_name in sorted(schema.groups):
        group = schema.groups[group_name]
        field_maps = [group.fields] + [group.objects[name].fields for name in sorted(group.objects)]
        for fields in field_maps:
            for field_name in sorted(fields):
                field_config = fields[field_name]
                if field_config.type == TYPE_REF and field_config.ref_to == MANUAL_FILL_PLACEHOLDER:
                    yield f"{group_name}.{field_name}"
