"""Core completion pipeline.

Registry -> prefix resolution -> aggregation -> attribution -> sorting,
wrapped by ``FuzzySession`` which the host registers as one provider.
"""

from fzmerge.core.aggregator import CandidateAggregator, is_no_prefix
from fzmerge.core.attribution import AttributionIndex
from fzmerge.core.cache import MemoryCache
from fzmerge.core.config import FuzzyConfig, load_config
from fzmerge.core.context import CycleContext, HistoryStore
from fzmerge.core.matcher import compile_pattern, fuzzy_match, match, match_positions
from fzmerge.core.prefix import CAPABILITIES, PrefixOverrides, PrefixResolver
from fzmerge.core.registry import BackendRegistry, normalize
from fzmerge.core.scoring import flex_score, get_scorer, rapidfuzz_score, register_scorer
from fzmerge.core.session import FuzzySession
from fzmerge.core.sorting import SortEngine, promote_prefix

__all__ = [
    "AttributionIndex",
    "BackendRegistry",
    "CAPABILITIES",
    "CandidateAggregator",
    "CycleContext",
    "FuzzyConfig",
    "FuzzySession",
    "HistoryStore",
    "MemoryCache",
    "PrefixOverrides",
    "PrefixResolver",
    "SortEngine",
    "compile_pattern",
    "flex_score",
    "fuzzy_match",
    "get_scorer",
    "is_no_prefix",
    "load_config",
    "match",
    "match_positions",
    "normalize",
    "promote_prefix",
    "rapidfuzz_score",
    "register_scorer",
]
