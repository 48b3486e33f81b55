"""Tests for mediaflow.runtime.tag_patch."""

import pytest

from mediaflow.runtime.tag_patch import apply_tag_patch, parse_tag_patch


class TestParseTagPatch:
    """Tests for splitting patch expressions."""

    def test_splits_on_commas_and_whitespace(self):
        assert parse_tag_patch("archive,-draft  engage ,\tpublish") == [
            "archive",
            "-draft",
            "engage",
            "publish",
        ]

    @pytest.mark.parametrize("expression", [None, "", " , ,"])
    def test_empty_expressions_yield_no_tokens(self, expression):
        assert parse_tag_patch(expression) == []

    def test_keeps_token_order(self):
        assert parse_tag_patch("-a,a") == ["-a", "a"]


class TestApplyTagPatch:
    """Tests for apply_tag_patch."""

    @pytest.mark.parametrize("tags", [set(), {"engage"}, {"archive", "engage"}])
    def test_addition_is_union(self, tags):
        assert apply_tag_patch(tags, ["archive"]) == tags | {"archive"}

    def test_removal_drops_tag(self):
        assert apply_tag_patch({"draft", "engage"}, ["-draft"]) == {"engage"}

    def test_removal_of_absent_tag_is_noop(self):
        assert apply_tag_patch({"engage"}, ["-draft"]) == {"engage"}

    def test_all_leading_minus_characters_are_stripped(self):
        assert apply_tag_patch({"draft", "engage"}, ["---draft"]) == {"engage"}

    def test_only_minus_characters_removes_nothing(self):
        assert apply_tag_patch({"draft"}, ["--"]) == {"draft"}

    def test_inner_minus_is_part_of_the_tag(self):
        assert apply_tag_patch(set(), ["multi-part"]) == {"multi-part"}

    def test_is_left_fold(self):
        tags = {"draft"}
        p1, p2 = "archive", "-archive"
        assert apply_tag_patch(tags, [p1, p2]) == apply_tag_patch(
            apply_tag_patch(tags, [p1]), [p2]
        )
        assert apply_tag_patch(tags, [p1, p2]) == {"draft"}
        assert apply_tag_patch(tags, [p2, p1]) == {"draft", "archive"}

    def test_does_not_modify_input(self):
        tags = {"draft"}
        apply_tag_patch(tags, ["-draft", "archive"])
        assert tags == {"draft"}

    def test_duplicates_collapse(self):
        assert apply_tag_patch(["a"], ["a", "a"]) == {"a"}
