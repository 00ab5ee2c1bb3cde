"""
Tests for text normalization and featurization.

These tests validate that:

- the normalizer lowercases, strips accents and collapses whitespace
- the normalizer survives pickling (the fitted pipeline is dumped with joblib)
- each text column becomes a non-negative, L2-normalized hashed vector
- subject and message vectors are concatenated at a fixed width
- columns with no usable text still featurize instead of failing
"""

from __future__ import annotations

import pickle

import numpy as np
import pandas as pd

from spam_filter.features.preprocessing import (
    build_text_normalizer,
    normalize_text,
)
from spam_filter.features.text_featurizer import (
    build_feature_concatenator,
    build_text_featurizer,
)


SMALL_CFG = {"n_features": 1024}


def test_normalize_text_lowercases_and_collapses_whitespace():
    """
    Mixed case and runs of whitespace collapse to single lowercase spaces.
    """
    assert normalize_text("  Hello   WORLD \n again ") == "hello world again"


def test_normalize_text_strips_accents():
    """
    Diacritics are removed so accented and plain spellings hash the same.
    """
    assert normalize_text("Café Déjà vu") == "cafe deja vu"


def test_normalize_text_keeps_punctuation_and_numbers():
    """
    Punctuation and digits are kept as signal for the character n-grams.
    """
    assert normalize_text("Win $100 now!") == "win $100 now!"


def test_normalize_text_handles_missing_values():
    """
    Missing cells normalize to the empty string.
    """
    assert normalize_text(None) == ""
    assert normalize_text(float("nan")) == ""


def test_normalizer_respects_config_flags():
    """
    Lowercasing and accent stripping can be switched off from config.
    """
    normalizer = build_text_normalizer({"lowercase": False, "strip_accents": False})
    assert normalizer("Café  Bar") == "Café Bar"


def test_normalizer_is_picklable():
    """
    The bound normalizer must pickle so fitted pipelines can be saved.
    """
    normalizer = build_text_normalizer({})
    restored = pickle.loads(pickle.dumps(normalizer))
    assert restored("ABC") == "abc"


def test_text_featurizer_produces_nonnegative_unit_rows():
    """
    Word and char parts are each L2-normalized and never negative.
    """
    featurizer = build_text_featurizer(SMALL_CFG)
    X = featurizer.fit_transform(["free money now", "meeting notes attached"])

    assert X.shape == (2, 2 * SMALL_CFG["n_features"])
    assert X.min() >= 0.0
    # words and chars are each L2-normalized, so every row has squared norm 2
    row_norms = np.asarray(X.multiply(X).sum(axis=1)).ravel()
    assert np.allclose(row_norms, 2.0)


def test_feature_concatenator_stacks_message_and_subject():
    """
    The concatenated vector holds the message block followed by the subject block.
    """
    df = pd.DataFrame(
        {
            "id": ["1", "2"],
            "subject": ["Free prize", "Meeting"],
            "message": ["claim your prize", "see you at ten"],
        }
    )
    concatenator = build_feature_concatenator(SMALL_CFG)
    X = concatenator.fit_transform(df)

    block = 2 * SMALL_CFG["n_features"]
    assert X.shape == (2, 2 * block)
    # each block carries two unit-norm parts
    message_norms = np.asarray(X[:, :block].multiply(X[:, :block]).sum(axis=1)).ravel()
    subject_norms = np.asarray(X[:, block:].multiply(X[:, block:]).sum(axis=1)).ravel()
    assert np.allclose(message_norms, 2.0)
    assert np.allclose(subject_norms, 2.0)


def test_feature_concatenator_handles_columns_without_ngrams():
    """
    Empty, very short or punctuation-only subjects yield zero features
    rather than an empty-vocabulary error.
    """
    df = pd.DataFrame(
        {
            "subject": ["", "ok", "!!", ""],
            "message": ["free cash now", "see you soon", "claim prize", "notes"],
        }
    )
    concatenator = build_feature_concatenator(SMALL_CFG)
    X = concatenator.fit_transform(df)

    block = 2 * SMALL_CFG["n_features"]
    assert X.shape == (4, 2 * block)
    assert X[[0, 3], block:].nnz == 0
    assert X[:, :block].nnz > 0
