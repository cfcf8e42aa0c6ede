"""Vision package: pure image ops, matching strategies and patterns.

Submodules:
- preprocess: stateless image preprocessing utilities
- matcher: multi-scale, multi-variant template matching
- pattern: Match, Pattern contract, PatternEngine, TemplatePattern
"""
from .preprocess import MODES, to_gray, edges, gradient, variants, resize_tpl
from .matcher import best_match_multi, match_methods, all_matches
from .pattern import Match, Pattern, MatchingEngine, PatternEngine, TemplatePattern

__all__ = [
    "MODES",
    "to_gray",
    "edges",
    "gradient",
    "variants",
    "resize_tpl",
    "best_match_multi",
    "match_methods",
    "all_matches",
    "Match",
    "Pattern",
    "MatchingEngine",
    "PatternEngine",
    "TemplatePattern",
]
