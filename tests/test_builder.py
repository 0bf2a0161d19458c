"""Tests for schema_generator.builder -- group folding and schema assembly."""

import pytest

from schema_generator.builder import GroupConfigBuilder, build_group_config, generate_schema_from_data
from schema_generator.fields import TYPE_BOOLEAN, TYPE_OBJECT, TYPE_REF, TYPE_STRING
from schema_generator.names import MANUAL_FILL_PLACEHOLDER


def _group(samples, name="posts", extra_groups=()):
    return build_group_config(name, samples, {name, *extra_groups})


class TestFirstWriterWins:
    def test_first_sample_decides_type(self):
        group = _group([{"a": "x"}, {"a": True}])
        assert group.fields["a"].type == TYPE_STRING

    def test_later_sample_fills_missing_field(self):
        group = _group([{"tags": [], "views": 3}, {"tags": ["news"]}])
        assert group.fields["tags"].type == TYPE_STRING
        assert group.fields["tags"].array is True
        assert "views" not in group.fields

    def test_null_does_not_claim_field(self):
        group = _group([{"a": None}, {"a": True}])
        assert group.fields["a"].type == TYPE_BOOLEAN


class TestObjectMerging:
    def test_union_across_samples(self):
        group = _group([{"obj": {"p": "x"}}, {"obj": {"q": True}}])
        fields = group.objects["obj"].fields
        assert fields["p"].type == TYPE_STRING
        assert fields["q"].type == TYPE_BOOLEAN

    def test_objects_merge_even_when_field_already_recorded(self):
        group = _group([{"obj": {"p": "x"}}, {"obj": [{"q": "y"}]}])
        assert group.fields["obj"].array is False
        assert set(group.objects["obj"].fields) == {"p", "q"}

    def test_nested_objects_registered_flat(self):
        group = _group([{"meta": {"seo": {"title": "x", "og": {"image": "i"}}}}])
        assert set(group.objects) == {"meta", "metaSeo", "metaSeoOg"}
        assert group.objects["meta"].fields["seo"].obj_name == "metaSeo"
        assert group.objects["metaSeo"].fields["og"].obj_name == "metaSeoOg"
        assert group.fields["meta"].obj_name == "meta"

    def test_array_of_objects_recurses_into_every_element(self):
        group = _group([{"comments": [{"body": "a"}, {"author": {"name": "n"}}]}])
        assert set(group.objects["comments"].fields) == {"body", "author"}
        assert group.objects["comments"].fields["author"].obj_name == "commentsAuthor"
        assert "name" in group.objects["commentsAuthor"].fields

    def test_object_without_usable_fields_is_not_registered(self):
        group = _group([{"title": "x", "stats": {"views": 1, "likes": None}}])
        assert group.fields["stats"].type == TYPE_OBJECT
        assert group.objects == {}

    def test_ref_object_is_still_registered(self):
        group = _group([{"authorRef": {"id": "u1"}}], extra_groups=["authors"])
        assert group.fields["authorRef"].type == TYPE_REF
        assert group.fields["authorRef"].obj_name is None
        assert "authorRef" in group.objects


class TestKeyFlags:
    def test_slug_and_name(self):
        group = _group([{"slug": "a", "name": "A", "title": "t"}])
        for key in ("slug", "name"):
            assert group.fields[key].required is True
            assert group.fields[key].filter is True
        assert group.fields["title"].required is False

    def test_name_without_slug(self):
        group = _group([{"name": "A"}])
        assert group.fields["name"].required is False
        assert group.fields["name"].filter is False

    def test_slug_in_later_sample_still_flags_name(self):
        group = _group([{"name": "A"}, {"slug": "a"}])
        assert group.fields["name"].required is True

    def test_nested_slug_not_flagged(self):
        group = _group([{"meta": {"slug": "a", "id": "m1"}}])
        assert group.objects["meta"].fields["slug"].required is False
        assert group.objects["meta"].fields["id"].required is True


class TestGroupBuilder:
    def test_no_fields_builds_nothing(self):
        builder = GroupConfigBuilder("stats", {"stats"})
        builder.add_sample({"count": 4, "ratio": 0.5})
        assert builder.build() is None

    def test_empty_samples(self):
        assert build_group_config("posts", [], {"posts"}) is None


class TestGenerateSchema:
    def test_placeholders_and_groups(self):
        schema = generate_schema_from_data({
            "posts": [{"id": "p1", "authorRef": "u1"}],
            "authors": [{"id": "u1"}],
            "drafts": [],
            "metrics": [{"count": 1}],
        })
        assert schema.namespace == MANUAL_FILL_PLACEHOLDER
        assert schema.type_prefix == MANUAL_FILL_PLACEHOLDER
        assert set(schema.groups) == {"posts", "authors"}
        assert schema.groups["posts"].fields["authorRef"].ref_to == "authors"

    def test_empty_group_still_counts_as_ref_target(self):
        schema = generate_schema_from_data({"posts": [{"authorRef": "u1"}], "authors": []})
        assert schema.groups["posts"].fields["authorRef"].ref_to == "authors"

    def test_unresolved_ref(self):
        schema = generate_schema_from_data({"posts": [{"authorRef": "u1"}]})
        assert schema.groups["posts"].fields["authorRef"].ref_to == MANUAL_FILL_PLACEHOLDER

    def test_input_is_not_mutated(self):
        corpus = {"posts": [{"meta": {"a": "b"}, "n": 1}]}
        generate_schema_from_data(corpus)
        assert corpus == {"posts": [{"meta": {"a": "b"}, "n": 1}]}

    @pytest.mark.parametrize(
        "corpus",
        [
            [{"id": "x"}],
            {"posts": {"id": "x"}},
            {"posts": ["x"]},
        ],
    )
    def test_malformed_corpus(self, corpus):
        with pytest.raises(ValueError):
            generate_schema_from_data(corpus)
