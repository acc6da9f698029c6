"""
Tests for the activation matcher.

Covers case-insensitive trigger matching, substring containment inside
code, explicit slash invocation, ordering of multiple matches, and
purity of the match operation.
"""

import pytest

from hookguide.guidance import (
    ActivationMatcher,
    GuidanceEntry,
    MatcherConfig,
    match_entries,
)


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def hooks_entry():
    """Entry shaped like the bundled Uniswap V4 hooks guidance."""
    return GuidanceEntry(
        id="uniswap-v4-hooks",
        triggers=["Uniswap", "beforeSwap", "afterSwap", "v4 hook", "PoolManager"],
        body="# Uniswap V4 hook security",
    )


@pytest.fixture
def command_only_entry():
    """Entry whose triggers do not overlap its own id."""
    return GuidanceEntry(id="audit-notes", triggers=["reentrancy guard"])


@pytest.fixture
def matcher():
    return ActivationMatcher()


# ============================================================================
# Trigger matching
# ============================================================================


class TestTriggerMatching:
    """Tests for keyword triggers."""

    @pytest.mark.parametrize("context", [
        "UNISWAP",
        "Uniswap",
        "uniswap",
        "How do I deploy on uNiSwAp?",
    ])
    def test_case_insensitive(self, matcher, hooks_entry, context):
        matches = matcher.match(context, [hooks_entry])
        assert len(matches) == 1
        assert matches[0].entry is hooks_entry
        assert matches[0].matched_triggers == ("Uniswap",)

    def test_substring_inside_code(self, matcher, hooks_entry):
        source = "function beforeSwap(address sender, PoolKey calldata key) external"
        matches = matcher.match(source, [hooks_entry])
        assert matches
        assert "beforeSwap" in matches[0].matched_triggers

    def test_substring_inside_larger_identifier(self, matcher, hooks_entry):
        matches = matcher.match("IPoolManagerExtended public manager;", [hooks_entry])
        assert matches[0].matched_triggers == ("PoolManager",)

    def test_multi_word_trigger(self, matcher, hooks_entry):
        matches = matcher.match("I am writing a V4 HOOK for fees", [hooks_entry])
        assert matches[0].matched_triggers == ("v4 hook",)

    def test_all_matched_triggers_reported_in_declaration_order(self, matcher, hooks_entry):
        matches = matcher.match("afterSwap then beforeSwap on uniswap", [hooks_entry])
        assert matches[0].matched_triggers == ("Uniswap", "beforeSwap", "afterSwap")

    def test_no_trigger_no_activation(self, matcher, hooks_entry):
        assert matcher.match("What's the weather today?", [hooks_entry]) == []

    @pytest.mark.parametrize("context", ["", None])
    def test_empty_context(self, matcher, hooks_entry, context):
        assert matcher.match(context, [hooks_entry]) == []

    def test_trigger_match_is_not_command(self, matcher, hooks_entry):
        matches = matcher.match("Create a basic afterSwap hook", [hooks_entry])
        assert matches[0].matched_triggers == ("afterSwap",)
        assert matches[0].via_command is False


# ============================================================================
# Explicit invocation
# ============================================================================


class TestExplicitInvocation:
    """Tests for slash-style command tokens."""

    def test_command_alone_activates(self, matcher, command_only_entry):
        matches = matcher.match("/audit-notes", [command_only_entry])
        assert len(matches) == 1
        assert matches[0].via_command is True
        assert matches[0].matched_triggers == ()

    @pytest.mark.parametrize("context", [
        "   /audit-notes",
        "/audit-notes   ",
        "\t/audit-notes\n",
        "please\n/audit-notes now",
        "/audit-notes review this",
    ])
    def test_surrounding_whitespace_ignored(self, matcher, command_only_entry, context):
        matches = matcher.match(context, [command_only_entry])
        assert matches and matches[0].via_command

    def test_command_followed_by_punctuation(self, matcher, command_only_entry):
        matches = matcher.match("run /audit-notes.", [command_only_entry])
        assert matches and matches[0].via_command

    def test_path_segment_is_not_command(self, matcher, command_only_entry):
        assert matcher.match("see docs/audit-notes for details", [command_only_entry]) == []

    def test_command_must_equal_id(self, matcher, command_only_entry):
        assert matcher.match("/audit-notes-extra", [command_only_entry]) == []
        assert matcher.match("/audit", [command_only_entry]) == []

    def test_command_and_triggers_together(self, matcher, hooks_entry):
        matches = matcher.match("/uniswap-v4-hooks review this", [hooks_entry])
        assert matches[0].via_command is True
        assert matches[0].matched_triggers == ("Uniswap",)

    def test_extract_commands(self, matcher):
        commands = matcher.extract_commands("  /one and /two-three but not a/b")
        assert commands == {"one", "two-three"}

    def test_extract_commands_empty(self, matcher):
        assert matcher.extract_commands("") == set()
        assert matcher.extract_commands(None) == set()

    def test_custom_prefix(self, command_only_entry):
        matcher = ActivationMatcher(MatcherConfig(command_prefix="!"))
        assert matcher.command_prefix == "!"
        assert matcher.match("!audit-notes", [command_only_entry])[0].via_command
        assert matcher.match("/audit-notes", [command_only_entry]) == []
        assert matcher.command_for(command_only_entry) == "!audit-notes"

    @pytest.mark.parametrize("prefix", ["", " ", "/ "])
    def test_invalid_prefix(self, prefix):
        with pytest.raises(ValueError, match="command_prefix"):
            MatcherConfig(command_prefix=prefix)


# ============================================================================
# Multiple entries and purity
# ============================================================================


class TestMatchBehavior:
    """Tests for additive results and pure matching."""

    def test_all_matching_entries_activate_in_input_order(self, matcher):
        first = GuidanceEntry(id="first", triggers=["swap"])
        second = GuidanceEntry(id="second", triggers=["hook"])
        third = GuidanceEntry(id="third", triggers=["oracle"])
        matches = matcher.match("a swap hook", [first, second, third])
        assert [m.entry.id for m in matches] == ["first", "second"]

    def test_idempotent(self, matcher, hooks_entry, command_only_entry):
        context = "/audit-notes check my beforeSwap"
        first = matcher.match(context, [hooks_entry, command_only_entry])
        second = matcher.match(context, [hooks_entry, command_only_entry])
        assert first == second

    def test_does_not_mutate_inputs(self, matcher, hooks_entry):
        context = "Uniswap beforeSwap"
        triggers = hooks_entry.triggers
        matcher.match(context, [hooks_entry])
        assert context == "Uniswap beforeSwap"
        assert hooks_entry.triggers is triggers

    def test_accepts_generator(self, matcher, hooks_entry):
        matches = matcher.match("uniswap", (e for e in [hooks_entry]))
        assert len(matches) == 1

    def test_match_entry_returns_none(self, matcher, hooks_entry):
        assert matcher.match_entry("nothing relevant", hooks_entry) is None

    def test_match_entries_helper(self, hooks_entry):
        matches = match_entries("Create a basic afterSwap hook", [hooks_entry])
        assert [m.entry.id for m in matches] == ["uniswap-v4-hooks"]
