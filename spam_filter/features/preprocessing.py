"""
Text normalization applied before featurization.

Email subjects and bodies go through a light cleaning step:

- lowercasing
- diacritic stripping (e.g. "café" -> "cafe")
- extra whitespace normalization

Punctuation and numbers are kept; the character n-gram featurizer uses
them as signal. Configuration is driven by the "preprocessing" section of
config/data.yaml.
"""

from __future__ import annotations

import re
import unicodedata
from functools import partial
from typing import Any, Callable, Dict, Optional

import pandas as pd


_WHITESPACE_RE = re.compile(r"\s+")


def _strip_diacritics(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def normalize_text(
    text: Any,
    lowercase: bool = True,
    strip_accents: bool = True,
    strip_whitespace: bool = True,
) -> str:
    """
    Apply basic normalization to a raw text string.

    Parameters
    ----------
    text : Any
        Raw input text. Non-string values (e.g. NaN from a sparse row)
        become the empty string.
    lowercase : bool
        Convert text to lowercase if True.
    strip_accents : bool
        Remove combining diacritical marks if True.
    strip_whitespace : bool
        Collapse runs of whitespace and strip leading/trailing spaces.

    Returns
    -------
    str
        Normalized text string.
    """
    if not isinstance(text, str):
        text = "" if pd.isna(text) else str(text)

    if lowercase:
        text = text.lower()

    if strip_accents:
        text = _strip_diacritics(text)

    if strip_whitespace:
        text = _WHITESPACE_RE.sub(" ", text).strip()

    return text


def build_text_normalizer(
    preprocessing_cfg: Optional[Dict[str, Any]] = None,
) -> Callable[[Any], str]:
    """
    Return a single-argument normalizer bound to the given settings.

    A ``functools.partial`` is used rather than a closure so the fitted
    pipeline stays picklable by joblib.
    """
    cfg = preprocessing_cfg or {}
    return partial(
        normalize_text,
        lowercase=bool(cfg.get("lowercase", True)),
        strip_accents=bool(cfg.get("strip_accents", True)),
        strip_whitespace=bool(cfg.get("strip_whitespace", True)),
    )
