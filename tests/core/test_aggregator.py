"""Tests for candidate aggregation."""

from conftest import StubProvider, make_state

from fzmerge.core.aggregator import CandidateAggregator, is_no_prefix
from fzmerge.core.config import FuzzyConfig
from fzmerge.core.context import HistoryStore
from fzmerge.domain.types import ProviderKind


def refresh(providers, text, config=None, history=None, order=None):
    aggregator = CandidateAggregator(config or FuzzyConfig(history_providers=[]), history or HistoryStore())
    return aggregator.refresh(order or list(providers), providers, make_state(text))


class TestRefresh:
    """Tests for CandidateAggregator.refresh()."""

    def test_fetches_with_first_character_and_filters_fuzzily(self):
        provider = StubProvider(["foobar", "fxoxo", "fab", "format"])
        cycle = refresh({"words": provider}, "foo")

        assert provider.fetch_args() == ["f"]
        assert cycle.match_string == "foo"
        assert cycle.candidates_by_provider["words"] == ["foobar", "fxoxo"]

    def test_dedupes_within_provider(self):
        cycle = refresh({"words": StubProvider(["ab", "ab", "axb"])}, "ab")
        assert cycle.candidates_by_provider["words"] == ["ab", "axb"]

    def test_merged_has_no_cross_provider_duplicates(self):
        providers = {
            "first": StubProvider(["apple", "apricot"]),
            "second": StubProvider(["apricot", "avocado", "apple"]),
        }
        cycle = refresh(providers, "a")
        assert cycle.merged == ["apple", "apricot", "avocado"]
        assert len(cycle.merged) == len(set(cycle.merged))

    def test_failing_provider_is_isolated(self):
        providers = {
            "broken": StubProvider(["abc"], fail_on=("candidates",)),
            "words": StubProvider(["abc", "abd"]),
        }
        cycle = refresh(providers, "ab")
        assert cycle.candidates_by_provider["broken"] == []
        assert cycle.candidates_by_provider["words"] == ["abc", "abd"]
        assert cycle.attribution.lookup("abc") == "words"

    def test_malformed_payload_discarded(self):
        providers = {
            "string": StubProvider("abc"),
            "mixed": StubProvider(["abc", 3]),
            "mapping": StubProvider({"abc": 1}),
            "words": StubProvider(["abc"]),
        }
        cycle = refresh(providers, "ab")
        assert cycle.candidates_by_provider["string"] == []
        assert cycle.candidates_by_provider["mixed"] == []
        assert cycle.candidates_by_provider["mapping"] == []
        assert cycle.candidates_by_provider["words"] == ["abc"]

    def test_unregistered_provider_contributes_nothing(self):
        cycle = refresh({"words": StubProvider(["abc"])}, "ab", order=["ghost", "words"])
        assert cycle.candidates_by_provider["ghost"] == []
        assert cycle.merged == ["abc"]

    def test_passthrough_provider_skips_filter(self):
        config = FuzzyConfig(history_providers=[], passthrough_providers=["raw"])
        providers = {"raw": StubProvider(["zzz", "abc"]), "words": StubProvider(["zzz", "abc"])}
        cycle = refresh(providers, "ab", config=config)
        assert cycle.candidates_by_provider["raw"] == ["zzz", "abc"]
        assert cycle.candidates_by_provider["words"] == ["abc"]

    def test_filter_uses_insert_prefix(self):
        provider = StubProvider(["src/fzmerge/", "src/tests/", "README.md"], prefix="src/fz", kind=ProviderKind.PATH)
        cycle = refresh({"files": provider}, "open src/fz")
        assert provider.fetch_args() == ["src/fz"]
        assert cycle.candidates_by_provider["files"] == ["src/fzmerge/"]


    def test_provider_without_prefix_is_not_queried(self):
        silent = StubProvider(["zebra"], prefix=None)
        cycle = refresh({"silent": silent, "words": StubProvider(["read"])}, "rea")
        assert silent.fetch_args() == []
        assert cycle.candidates_by_provider["silent"] == []
        assert cycle.merged == ["read"]


class TestNoPrefixMode:
    """Trigger-symbol completion without identifier text."""

    def test_detection(self):
        triggers = [".", "->"]
        assert is_no_prefix(make_state("obj."), "", triggers)
        assert is_no_prefix(make_state("ptr->"), "", triggers)
        assert not is_no_prefix(make_state("obj.me"), "me", triggers)
        assert not is_no_prefix(make_state("obj "), "", triggers)

    def test_skips_filtering(self):
        provider = StubProvider(["zeta", "alpha", "method"])
        cycle = refresh({"members": provider}, "obj.")
        assert cycle.no_prefix is True
        assert cycle.candidates_by_provider["members"] == ["zeta", "alpha", "method"]
        assert provider.fetch_args() == [""]


class TestHistory:
    """History blending for history-tracked providers."""

    def test_blends_and_stores(self):
        history = HistoryStore({"snippets": ["x", "y"]})
        config = FuzzyConfig(history_providers=["snippets"], passthrough_providers=["snippets"])
        cycle = refresh({"snippets": StubProvider(["y", "z"])}, "q", config=config, history=history)

        assert cycle.candidates_by_provider["snippets"] == ["x", "y", "z"]
        assert history.get("snippets") == ["x", "y", "z"]

    def test_untracked_provider_leaves_history_alone(self):
        history = HistoryStore()
        config = FuzzyConfig(history_providers=["snippets"])
        refresh({"words": StubProvider(["abc"])}, "ab", config=config, history=history)
        assert "words" not in history
        assert len(history) == 0

    def test_history_survives_failed_fetch(self):
        history = HistoryStore({"snippets": ["for", "while"]})
        config = FuzzyConfig(history_providers=["snippets"])
        provider = StubProvider(fail_on=("candidates",), kind=ProviderKind.HISTORY)
        cycle = refresh({"snippets": provider}, "fo", config=config, history=history)
        assert cycle.candidates_by_provider["snippets"] == ["for", "while"]
