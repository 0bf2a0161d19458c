from __future__ import annotations

from typing import Any, Collection, List, Optional

from .fields import TYPE_OBJECT, ObjectConfig, detect_field_config
from .names import build_object_name


def merge_object_configs(existing: ObjectConfig, new: ObjectConfig) -> ObjectConfig:
    """Union the fields of two object configs.

    Fields already present in `existing` are never replaced; only names
    that are new in `new` are added. Neither input is modified.
    """
    merged = ObjectConfig(fields=dict(existing.fields))
    for field_name, field_config in new.fields.items():
        if field_name not in merged.fields:
            merged.fields[field_name] = field_config
    return merged


def analyze_object_structure(
    obj_field_name: str,
    obj: dict,
    parent_path: str,
    group_names: Collection[str],
) -> ObjectConfig:
    """Classify the direct fields of one nested object sample.

    Object-typed fields get the composite name of their own nested object,
    built from this object's full name plus the field name.
    """
    obj_config = ObjectConfig()
    for field_name, value in obj.items():
        if value is None:
            continue
        result = detect_field_config(field_name, value, group_names)
        if not result.valid:
            continue
        detected = result.config
        if detected.type == TYPE_OBJECT:
            nested_parent = build_object_name(parent_path, obj_field_name)
            detected.obj_name = build_object_name(nested_parent, field_name)
        obj_config.fields[field_name] = detected
    return obj_config


def analyze_object_structure_from_array(
    field_name: str,
    values: List[Any],
    parent_path: str,
    group_names: Collection[str],
) -> ObjectConfig:
    accumulated = ObjectConfig()
    for item in values:
        if not isinstance(item, dict):
            continue
        structure = analyze_object_structure(field_name, item, parent_path, group_names)
        accumulated = merge_object_configs(accumulated, structure)
    return accumulated


def detect_object_config(
    field_name: str,
    value: Any,
    parent_path: str,
    group_names: Collection[str],
) -> Optional[ObjectConfig]:
    """Return the object structure of `value`, or None if it is not object-shaped.

    A list counts as object-shaped when its first element is an object.
    """
    if isinstance(value, list):
        if not value or not isinstance(value[0], dict):
            return None
        return analyze_object_structure_from_array(field_name, value, parent_path, group_names)
    if isinstance(value, dict):
        return analyze_object_structure(field_name, value, parent_path, group_names)
    return None


def iter_child_items(value: Any):
    """Yield (field name, value) pairs of an object, or of every object in a list."""
    if isinstance(value, dict):
        yield from value.items()
    elif isinstance(value, list):
        for item in value:
            if isinstance(item, dict):
                yield from item.items()
