"""
Tests for the guidance shipped with hookguide.

Runs the activation scenarios against the real uniswap-v4-hooks entry
so a trigger list edit that breaks activation shows up here.
"""

import pytest

from hookguide.guidance import (
    ActivationMatcher,
    builtin_guidance_dir,
    compose_context,
    load_guidance_file,
    load_registry,
    retrieve,
)


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture(scope="module")
def entry():
    return load_guidance_file(builtin_guidance_dir() / "uniswap-v4-hooks" / "SKILL.md")


@pytest.fixture(scope="module")
def registry():
    return load_registry()


@pytest.fixture
def matcher():
    return ActivationMatcher()


# ============================================================================
# Document content
# ============================================================================


class TestBundledDocument:
    """Tests for the metadata and body of the bundled guidance."""

    def test_metadata(self, entry):
        assert entry.id == "uniswap-v4-hooks"
        assert entry.command == "/uniswap-v4-hooks"
        assert entry.version == "1.0.0"
        assert "Uniswap V4" in entry.description

    def test_triggers_cover_callbacks(self, entry):
        for name in ["beforeSwap", "afterSwap", "beforeAddLiquidity", "afterRemoveLiquidity"]:
            assert name in entry.triggers

    @pytest.mark.parametrize("heading", [
        "Threat model checklist",
        "Permission flags",
        "Vulnerability patterns",
        "Risk scoring",
    ])
    def test_body_sections(self, entry, heading):
        assert heading in entry.body

    def test_body_has_solidity_examples(self, entry):
        assert "```solidity" in entry.body

    def test_only_entry_installed(self, registry):
        assert registry.list_ids() == ["uniswap-v4-hooks"]


# ============================================================================
# Activation scenarios
# ============================================================================


class TestBundledActivation:
    """Activation behavior of the bundled guidance."""

    def test_afterswap_request_activates(self, entry, matcher):
        matches = matcher.match("Create a basic afterSwap hook", [entry])
        assert len(matches) == 1
        assert "afterSwap" in matches[0].matched_triggers

    @pytest.mark.parametrize("context", [
        "What's the weather today?",
        "Write a Python function that sorts a list",
        "Deploy an ERC20 token to mainnet",
    ])
    def test_unrelated_context_does_not_activate(self, entry, matcher, context):
        assert matcher.match(context, [entry]) == []

    def test_explicit_invocation_activates(self, entry, matcher):
        matches = matcher.match("/uniswap-v4-hooks review this", [entry])
        assert matches[0].via_command is True

    @pytest.mark.parametrize("context", ["UNISWAP", "Uniswap", "uniswap"])
    def test_case_variants(self, entry, matcher, context):
        assert matcher.match(context, [entry])

    @pytest.mark.parametrize("trigger", [
        "beforeSwap",
        "PoolManager",
        "v4 hook",
        "getHookPermissions",
        "hook permissions",
    ])
    def test_each_trigger_activates(self, entry, matcher, trigger):
        assert matcher.match(f"please look at {trigger.upper()} here", [entry])

    def test_solidity_source_activates(self, entry, matcher):
        source = (
            "contract FeeHook {\n"
            "    function beforeSwap(address, PoolKey calldata key) external {}\n"
            "}\n"
        )
        matches = matcher.match(source, [entry])
        assert "beforeSwap" in matches[0].matched_triggers
        assert "PoolKey" in matches[0].matched_triggers


# ============================================================================
# Retrieval
# ============================================================================


class TestRetrieval:
    """Tests for composing activated guidance into a context block."""

    def test_retrieve_includes_marker_and_body(self, registry):
        text = retrieve("Review my beforeSwapReturnDelta hook", registry)
        assert text.startswith("<!-- guidance: uniswap-v4-hooks -->")
        assert "# Uniswap V4 Hook Security" in text

    def test_retrieve_nothing(self, registry):
        assert retrieve("What's the weather today?", registry) == ""

    def test_compose_empty(self):
        assert compose_context([]) == ""

    def test_compose_multiple_in_order(self, entry):
        from hookguide.guidance import ActivationMatch, GuidanceEntry

        other = GuidanceEntry(id="other", triggers=["x"], body="Other body\n")
        text = compose_context([
            ActivationMatch(entry=other, matched_triggers=("x",)),
            ActivationMatch(entry=entry, via_command=True),
        ])
        assert text.index("<!-- guidance: other -->") < text.index("<!-- guidance: uniswap-v4-hooks -->")
        assert "Other body" in text
