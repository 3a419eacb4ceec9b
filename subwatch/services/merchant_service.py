"""Merchant key normalization and clustering."""

import re
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Set

from rapidfuzz import process
from rapidfuzz.distance import JaroWinkler

_WHITESPACE = re.compile(r"\s+")
_PUNCTUATION = re.compile(r"[^\w\s]")


@dataclass(frozen=True)
class LedgerEntry:
    """A single ledger row as seen by the detector."""
    description: Optional[str]
    amount: Decimal
    date: Optional[date]


@dataclass
class MerchantCluster:
    """All charges that normalized to the same merchant key, oldest first."""
    key: str
    charges: List[LedgerEntry] = field(default_factory=list)


def canonical_description(description: str) -> str:
    """Trim, collapse inner whitespace and lower-case a description."""
    return _WHITESPACE.sub(" ", description.strip()).lower()


def comparable_form(description: str) -> str:
    """Canonical description with punctuation turned into spaces, for similarity scoring."""
    return _WHITESPACE.sub(" ", _PUNCTUATION.sub(" ", canonical_description(description))).strip()


def normalize(description: str, known_keys: Set[str], threshold: float = 0.90) -> str:
    """
    Map a raw description to a merchant key.

    Reuses an existing key when it is an exact match or when its Jaro-Winkler
    similarity to the description is at least ``threshold``. Similarity is scored
    on the punctuation-free form, so "NETFLIX.COM" and "NETFLIX INC" compare as
    "netflix com" and "netflix inc". Otherwise the canonical description becomes
    a new key and is added to ``known_keys``.
    """
    candidate = canonical_description(description)
    if candidate in known_keys:
        return candidate

    if known_keys:
        # Sorted choices make ties resolve to the smallest key
        match = process.extractOne(
            candidate,
            sorted(known_keys),
            scorer=JaroWinkler.normalized_similarity,
            processor=comparable_form,
            score_cutoff=threshold,
        )
        if match is not None:
            return match[0]

    known_keys.add(candidate)
    return candidate


def cluster_charges(
    entries: Iterable[LedgerEntry],
    threshold: float = 0.90,
) -> List[MerchantCluster]:
    """
    Group charges by merchant key.

    Entries are visited chronologically, ties kept in input order, so the same
    ledger always yields the same keys. Clusters come back in the order their
    key was first seen.
    """
    ordered = sorted(enumerate(entries), key=lambda pair: (pair[1].date, pair[0]))

    known_keys: Set[str] = set()
    clusters: Dict[str, MerchantCluster] = {}
    for _, entry in ordered:
        key = normalize(entry.description, known_keys, threshold)
        cluster = clusters.get(key)
        if cluster is None:
            cluster = clusters[key] = MerchantCluster(key=key)
        cluster.charges.append(entry)

    return list(clusters.values())
