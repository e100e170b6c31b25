from setcounter.analysis.aggregator import SetAggregator, aggregate_sets
from setcounter.analysis.exclusivity import ExclusivityClassifier, classify_exclusives
from setcounter.analysis.ranker import rank_sets, top_sets

__all__ = [
    "ExclusivityClassifier",
    "SetAggregator",
    "aggregate_sets",
    "classify_exclusives",
    "rank_sets",
    "top_sets",
]
