"""Reference target guessing for fields named `<target>Ref`.

Groups are conventionally plural ('authors', 'tags'). A single-valued
reference names one record ('authorRef'), so its singular stem is pluralized
before looking it up; an array reference ('tagsRef') is expected to already
use the collection name.
"""
from __future__ import annotations

from typing import Collection

import inflect

from .names import MANUAL_FILL_PLACEHOLDER, strip_ref_suffix

_inflect = inflect.engine()


def is_singular(word: str) -> bool:
    """Whether `word` names one thing.

    singular_noun() strips a trailing 's' from singular nouns too ('address'
    -> 'addres'), so a word only counts as plural when its singular form
    pluralizes back to it and inflect has no real plural for the word itself
    ('authors' -> 'authorss', but 'address' -> 'addresses').
    """
    singular = _inflect.singular_noun(word)
    if not singular or pluralize(singular) != word:
        return True
    return pluralize(word) != word + 's'


def pluralize(word: str) -> str:
    return _inflect.plural_noun(word)


def guess_ref_group(field_name: str, array: bool) -> str:
    candidate = strip_ref_suffix(field_name)
    if not candidate:
        return candidate
    if not array and is_singular(candidate):
        candidate = pluralize(candidate)
    return candidate


def resolve_ref_target(field_name: str, array: bool, group_names: Collection[str]) -> str:
    """Return the group a Ref field points at, or the manual-fill placeholder."""
    candidate = guess_ref_group(field_name, array)
    if candidate and candidate in group_names:
        return candidate
    return MANUAL_FILL_PLACEHOLDER
