"""
Text featurization for the subject and message columns.

Each text column is turned into a fixed-length numeric vector made of:

- hashed word uni/bi-gram term frequencies
- hashed character tri-gram term frequencies

both L2-normalized, then the subject and message vectors are concatenated
into a single sparse feature matrix. Hashing needs no vocabulary, so a
column that is empty (or too short for any n-gram) in every record just
yields all-zero features. Settings come from the "preprocessing" section
of config/data.yaml.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence, Tuple

from sklearn.compose import ColumnTransformer
from sklearn.feature_extraction.text import HashingVectorizer
from sklearn.pipeline import FeatureUnion

from spam_filter.data.datasets import TEXT_COLUMNS
from spam_filter.features.preprocessing import build_text_normalizer


WORD_TOKEN_PATTERN = r"(?u)\b\w+\b"
DEFAULT_N_FEATURES = 2 ** 16


def _as_range(value: Any, default: Tuple[int, int]) -> Tuple[int, int]:
    if value is None:
        return default
    low, high = value
    return int(low), int(high)


def build_text_featurizer(
    preprocessing_cfg: Optional[Dict[str, Any]] = None,
) -> FeatureUnion:
    """
    Construct a featurizer for one text column.

    Parameters
    ----------
    preprocessing_cfg : Optional[Dict[str, Any]]
        The "preprocessing" section of the data config. Recognized keys:
        word_ngram_range, char_ngram_range, n_features, lowercase,
        strip_accents, strip_whitespace.

    Returns
    -------
    FeatureUnion
        Word and character n-gram hashing vectorizers side by side; the
        output width is twice ``n_features``.
    """
    cfg = preprocessing_cfg or {}
    normalizer = build_text_normalizer(cfg)
    n_features = int(cfg.get("n_features", DEFAULT_N_FEATURES))

    # The custom preprocessor replaces sklearn's own lowercasing and
    # accent stripping, so those are switched off here.
    words = HashingVectorizer(
        analyzer="word",
        preprocessor=normalizer,
        token_pattern=WORD_TOKEN_PATTERN,
        lowercase=False,
        ngram_range=_as_range(cfg.get("word_ngram_range"), (1, 2)),
        n_features=n_features,
        alternate_sign=False,
        norm="l2",
    )
    chars = HashingVectorizer(
        analyzer="char",
        preprocessor=normalizer,
        lowercase=False,
        ngram_range=_as_range(cfg.get("char_ngram_range"), (3, 3)),
        n_features=n_features,
        alternate_sign=False,
        norm="l2",
    )
    return FeatureUnion([("words", words), ("chars", chars)])


def build_feature_concatenator(
    preprocessing_cfg: Optional[Dict[str, Any]] = None,
    text_columns: Sequence[str] = TEXT_COLUMNS,
) -> ColumnTransformer:
    """
    Featurize every text column separately and concatenate the results.

    The output column order follows ``text_columns`` (message first, then
    subject). All other DataFrame columns are dropped.
    """
    transformers = [
        (column, build_text_featurizer(preprocessing_cfg), column)
        for column in text_columns
    ]
    return ColumnTransformer(
        transformers=transformers,
        remainder="drop",
        sparse_threshold=1.0,
    )
