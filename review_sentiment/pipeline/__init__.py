"""Text preprocessing, sentiment scoring and aggregation."""

from review_sentiment.pipeline.aggregator import (
    analyze_reviews,
    get_rating_stats,
    get_stats,
    sentiments_of,
)
from review_sentiment.pipeline.sentiment import (
    Lexicon,
    SentimentAnalyzer,
    analyze,
    analyze_batch,
    default_analyzer,
)
from review_sentiment.pipeline.text_processor import (
    PreprocessOptions,
    clean_text,
    get_stats as get_text_stats,
    preprocess,
    remove_stopwords,
    tokenize,
)

__all__ = [
    "Lexicon",
    "PreprocessOptions",
    "SentimentAnalyzer",
    "analyze",
    "analyze_batch",
    "analyze_reviews",
    "clean_text",
    "default_analyzer",
    "get_rating_stats",
    "get_stats",
    "get_text_stats",
    "preprocess",
    "remove_stopwords",
    "sentiments_of",
    "tokenize",
]
