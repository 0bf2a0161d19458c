"""Schema assembly from grouped sample records.

Type inference is best-effort and order-sensitive: the first sample holding a
usable value for a top-level field decides that field for good, while nested
object shapes are merged across every sample that contains them.
"""
from __future__ import annotations

from typing import Any, Collection, Dict, List, Mapping, Optional

from loguru import logger

from .fields import (
    NAME_FIELD,
    SLUG_FIELD,
    FieldConfig,
    GroupConfig,
    ObjectConfig,
    Schema,
    detect_field_config,
)
from .io_utils import validate_corpus
from .names import build_object_name
from .objects import detect_object_config, iter_child_items, merge_object_configs


class GroupConfigBuilder:
    """Accumulates the field and object configs of one group, sample by sample."""

    def __init__(self, group_name: str, group_names: Collection[str]) -> None:
        self.group_name = group_name
        self.group_names = group_names
        self.fields: Dict[str, FieldConfig] = {}
        self.objects: Dict[str, ObjectConfig] = {}

    def add_sample(self, record: Mapping[str, Any]) -> None:
        for field_name, value in record.items():
            if value is None:
                continue
            self.detect_group_field(field_name, value)
            self.detect_group_objects(field_name, value, '')

    def detect_group_field(self, field_name: str, value: Any) -> None:
        if field_name in self.fields:
            return
        result = detect_field_config(field_name, value, self.group_names)
        if not result.valid:
            return
        if field_name == SLUG_FIELD:
            result.config.mark_key()
        self.fields[field_name] = result.config

    def detect_group_objects(self, field_name: str, value: Any, parent_path: str) -> None:
        """Register the object shape of `value` and recurse into its children."""
        if value is None:
            return
        obj_config = detect_object_config(field_name, value, parent_path, self.group_names)
        if obj_config is None or not obj_config.fields:
            return

        full_name = build_object_name(parent_path, field_name)
        existing = self.objects.get(full_name)
        if existing is None:
            self.objects[full_name] = obj_config
        else:
            self.objects[full_name] = merge_object_configs(existing, obj_config)

        for child_name, child_value in iter_child_items(value):
            self.detect_group_objects(child_name, child_value, full_name)

    def build(self) -> Optional[GroupConfig]:
        """Finish the group; None when no field could be inferred."""
        if not self.fields:
            return None
        if NAME_FIELD in self.fields and SLUG_FIELD in self.fields:
            self.fields[NAME_FIELD].mark_key()
        return GroupConfig(fields=self.fields, objects=self.objects)


def build_group_config(
    group_name: str,
    samples: List[Mapping[str, Any]],
    group_names: Collection[str],
) -> Optional[GroupConfig]:
    if not samples:
        return None
    builder = GroupConfigBuilder(group_name, group_names)
    for sample in samples:
        builder.add_sample(sample)
    return builder.build()


def generate_schema_from_data(corpus: Mapping[str, List[Mapping[str, Any]]]) -> Schema:
    """Infer a schema for every group of the sample corpus."""
    validate_corpus(corpus)

    group_names = set(corpus)
    schema = Schema()
    for group_name, samples in corpus.items():
        group_config = build_group_config(group_name, samples, group_names)
        if group_config is None:
            logger.debug(f"Skipping group '{group_name}': no fields inferred from {len(samples)} records")
            continue
        logger.debug(
            f"Inferred group '{group_name}': {len(group_config.fields)} fields, "
            f"{len(group_config.objects)} objects"
        )
        schema.groups[group_name] = group_config
    return schema
