"""Unit tests for the resources module."""
import pytest
from hypothesis import given
from hypothesis import strategies as st

from codeask.exceptions import EmptyResourceSetError
from codeask.resources import (
    StaticResourceRegistry,
    merge_resources,
    parse_query,
    resolve_resources,
)

mention_text = st.lists(
    st.one_of(
        st.text(alphabet="abcé _-@.?\n", max_size=6),
        st.from_regex(r"@[A-Za-z0-9_]{1,8}", fullmatch=True),
    ),
    max_size=8,
).map("".join)


class TestParseQuery:
    """Tests for @mention extraction."""

    def test_extracts_mentions_in_order(self):
        """Test that mentions are collected in order of appearance."""
        parsed = parse_query("@svelte how do @react and @svelte differ?")

        assert parsed.resources == ["svelte", "react", "svelte"]
        assert parsed.query == "how do  and  differ?"

    def test_no_mentions(self):
        """Test that text without mentions is only trimmed."""
        parsed = parse_query("  what is a store?  ")

        assert parsed.resources == []
        assert parsed.query == "what is a store?"

    def test_bare_at_sign_is_not_a_mention(self):
        """Test that '@' without word characters is kept."""
        parsed = parse_query("email me @ home")

        assert parsed.resources == []
        assert parsed.query == "email me @ home"

    def test_mention_stops_at_non_word_character(self):
        """Test that a mention ends at the first non-word character."""
        parsed = parse_query("@next.js routing")

        assert parsed.resources == ["next"]
        assert parsed.query == ".js routing"

    def test_mentions_are_ascii_word_characters(self):
        """Test that a mention ends at the first non-ASCII letter."""
        parsed = parse_query("@café menu")

        assert parsed.resources == ["caf"]
        assert parsed.query == "é menu"

    @given(mention_text)
    def test_every_mention_is_removed(self, raw: str):
        """Property test: the returned query has no mentions left."""
        parsed = parse_query(raw)

        assert parse_query(parsed.query).resources == []

    @given(st.lists(st.from_regex(r"[A-Za-z0-9_]{1,8}", fullmatch=True), max_size=5))
    def test_mentions_round_trip(self, names: list[str]):
        """Property test: joined mentions are recovered in order."""
        raw = " ".join(f"@{name}" for name in names) + " question"

        parsed = parse_query(raw)

        assert parsed.resources == names
        assert parsed.query == "question"


class TestMergeResources:
    """Tests for merging explicit and mentioned resources."""

    def test_merge_deduplicates(self):
        """Test merging with overlap and a single alias."""
        merged = merge_resources(["a", "b"], ["b", "c"], "d")

        assert merged == ["a", "b", "c", "d"]

    def test_single_already_present(self):
        """Test that the single alias is not duplicated."""
        assert merge_resources(["a"], [], "a") == ["a"]

    def test_empty(self):
        """Test that nothing in gives nothing out."""
        assert merge_resources([], []) == []

    @given(
        st.lists(st.sampled_from("abcdef")),
        st.lists(st.sampled_from("abcdef")),
        st.one_of(st.none(), st.sampled_from("abcdef")),
    )
    def test_merge_is_set_union(self, explicit, mentioned, single):
        """Property test: result is the union of inputs without duplicates."""
        merged = merge_resources(explicit, mentioned, single)

        expected = set(explicit) | set(mentioned) | ({single} if single else set())
        assert set(merged) == expected
        assert len(merged) == len(expected)


class TestResolveResources:
    """Tests for registry fallback."""

    @pytest.mark.asyncio
    async def test_named_resources_are_kept(self):
        """Test that named resources skip the registry."""
        registry = StaticResourceRegistry(["libA", "libB"])

        assert await resolve_resources(registry, ["libC"]) == ["libC"]

    @pytest.mark.asyncio
    async def test_falls_back_to_all_resources(self):
        """Test that no names resolves to every registry resource."""
        registry = StaticResourceRegistry(["libA", "libB"])

        assert await resolve_resources(registry, []) == ["libA", "libB"]

    @pytest.mark.asyncio
    async def test_empty_registry_raises(self):
        """Test that no names and no registry resources is fatal."""
        registry = StaticResourceRegistry([])

        with pytest.raises(EmptyResourceSetError, match="No resources configured"):
            await resolve_resources(registry, [])
