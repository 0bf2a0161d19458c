from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Collection, Dict, List, Optional, Tuple

from .names import MANUAL_FILL_PLACEHOLDER, is_ref_field
from .refs import resolve_ref_target

TYPE_STRING = 'String'
TYPE_BOOLEAN = 'Boolean'
TYPE_OBJECT = 'Object'
TYPE_REF = 'Ref'

ID_FIELD = 'id'
SLUG_FIELD = 'slug'
NAME_FIELD = 'name'


# --- Schema Data Model ---


@dataclass
class FieldConfig:
    """Inferred description of one field."""

    type: str = TYPE_STRING
    array: bool = False
    filter: bool = False
    required: bool = False
    obj_name: Optional[str] = None  # set iff type is Object
    ref_to: Optional[str] = None  # set iff type is Ref

    def mark_key(self) -> None:
        """Flag the field as a required filter key (id, slug, name)."""
        self.required = True
        self.filter = True

    def to_dict(self) -> Dict[str, Any]:
        """Wire representation; absent or false members are omitted."""
        out: Dict[str, Any] = {'type': self.type}
        if self.array:
            out['array'] = True
        if self.filter:
            out['filter'] = True
        if self.required:
            out['required'] = True
        if self.obj_name:
            out['objName'] = self.obj_name
        if self.ref_to:
            out['refTo'] = self.ref_to
        return out


@dataclass
class ObjectConfig:
    fields: Dict[str, FieldConfig] = field(default_factory=dict)


@dataclass
class GroupConfig:
    fields: Dict[str, FieldConfig] = field(default_factory=dict)
    objects: Dict[str, ObjectConfig] = field(default_factory=dict)


@dataclass
class Schema:
    namespace: str = MANUAL_FILL_PLACEHOLDER
    type_prefix: str = MANUAL_FILL_PLACEHOLDER
    groups: Dict[str, GroupConfig] = field(default_factory=dict)


@dataclass
class DetectionResult:
    config: FieldConfig
    valid: bool


# --- Type Detection ---


def detect_array_type(values: List[Any]) -> Tuple[str, bool]:
    """Classify a list by its first element only."""
    if not values:
        return TYPE_STRING, False

    first = values[0]
    if isinstance(first, bool):
        return TYPE_BOOLEAN, True
    if isinstance(first, str):
        return TYPE_STRING, True
    if isinstance(first, dict):
        return TYPE_OBJECT, True
    # None, numbers and nested lists carry no usable type
    return TYPE_STRING, False


def detect_field_config(field_name: str, value: Any, group_names: Collection[str]) -> DetectionResult:
    """Infer the configuration of one field from a single sample value.

    Numbers and nulls are not recognized and come back invalid, as do empty
    lists and lists whose first element has no usable type. Fields ending in
    'Ref' become Ref fields pointing at one of `group_names` when a target
    can be guessed.
    """
    config = FieldConfig()
    if field_name == ID_FIELD:
        config.mark_key()

    if isinstance(value, bool):
        config.type = TYPE_BOOLEAN
    elif isinstance(value, str):
        config.type = TYPE_STRING
    elif isinstance(value, list):
        config.array = True
        array_type, valid = detect_array_type(value)
        if not valid:
            return DetectionResult(config, False)
        config.type = array_type
        if array_type == TYPE_OBJECT:
            config.obj_name = field_name
    elif isinstance(value, dict):
        config.type = TYPE_OBJECT
        config.obj_name = field_name
    else:
        return DetectionResult(config, False)

    if is_ref_field(field_name):
        config.type = TYPE_REF
        config.obj_name = None
        config.ref_to = resolve_ref_target(field_name, config.array, group_names)

    return DetectionResult(config, True)
