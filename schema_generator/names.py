from __future__ import annotations

from typing import Optional

REF_SUFFIX = 'Ref'
MANUAL_FILL_PLACEHOLDER = '@@@ TO BE FILLED MANUALLY @@@'


def capitalize(segment: str) -> str:
    """Upper-case the first character only; the rest of the segment is kept as-is."""
    if not segment:
        return segment
    return segment[:1].upper() + segment[1:]


def build_object_name(parent_path: Optional[str], field_name: str) -> str:
    """Compose the flat object name for `field_name` nested under `parent_path`.

    - At the group root (empty parent) the field name is used unchanged.
    - Below it, the field name is capitalized and appended: 'author' + 'address'
      becomes 'authorAddress', and one level further 'authorAddressGeo'.
    """
    if not parent_path:
        return field_name
    return parent_path + capitalize(field_name)


def is_ref_field(field_name: str) -> bool:
    return field_name.endswith(REF_SUFFIX)


def strip_ref_suffix(field_name: str) -> str:
    if not is_ref_field(field_name):
        return field_name
    return field_name[:-len(REF_SUFFIX)]
