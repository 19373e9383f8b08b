"""
ICD-10 Repository - Diagnostic Code Catalog Access

This module provides lookup and search over the diagnostic code catalog used
when registering a patient. The catalog is read-only: entries are loaded once
and never mutated.

Architecture:
    ICD10Repository (Protocol)
    ├── InMemoryICD10Repository   → Wraps an injected list of codes
    └── FileBasedICD10Repository  → Loads {code, short, long} records from JSON

Operations:
    search_codes(term)  → ordered suggestions (code matches first, then label
                          matches), capped at a small fixed size
    lookup(candidate)   → single best match for user-typed input such as
                          "M54.5 Kreuzschmerz": code of the first token first,
                          then exact short/long label

Usage:
    from physio_documentation.repository import FileBasedICD10Repository

    repo = FileBasedICD10Repository("path/to/icd10_catalog.json")
    repo.search_codes("M54")
    repo.lookup("M54.5 Kreuzschmerz")
"""

import json
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Protocol, runtime_checkable

from loguru import logger

from physio_documentation.core.constants import ICD10_SEARCH_LIMIT
from physio_documentation.core.exceptions import DatasetLoadError
from physio_documentation.core.models import ICD10Code


# =============================================================================
# STAGE 1: REPOSITORY PROTOCOL (INTERFACE)
# =============================================================================


@runtime_checkable
class ICD10Repository(Protocol):
    """
    Protocol defining the interface for diagnostic code catalogs.

    Required Methods:
        get_code(code_id)     → Get single code by exact ID
        search_codes(term)    → Substring search for autocomplete
        lookup(candidate)     → Resolve user input to one entry
    """

    def get_code(self, code_id: str) -> Optional[ICD10Code]:
        ...

    def search_codes(self, term: str, max_results: int = ICD10_SEARCH_LIMIT) -> List[ICD10Code]:
        ...

    def lookup(self, candidate: str) -> Optional[ICD10Code]:
        ...

    @property
    def total_codes(self) -> int:
        ...


# =============================================================================
# STAGE 2: IN-MEMORY REPOSITORY
# =============================================================================


class InMemoryICD10Repository:
    """
    ICD-10 repository over an injected, ordered list of codes.

    What it does:
        Keeps the catalog order for search results and indexes codes by
        upper-cased code for O(1) lookup.

    Example:
        >>> repo = InMemoryICD10Repository([ICD10Code("M54.5", "Kreuzschmerz")])
        >>> [c.code for c in repo.search_codes("m54")]
        ['M54.5']
    """

    def __init__(self, codes: Iterable[ICD10Code]):
        self._codes: List[ICD10Code] = []
        self._codes_by_id: Dict[str, ICD10Code] = {}
        for code in codes:
            key = code.code.upper()
            # Duplicate codes keep the first catalog entry.
            if not key or key in self._codes_by_id:
                continue
            self._codes_by_id[key] = code
            self._codes.append(code)

    # =========================================================================
    # STAGE 3: CODE RETRIEVAL
    # =========================================================================

    def get_code(self, code_id: str) -> Optional[ICD10Code]:
        """Exact, case-insensitive code lookup."""
        return self._codes_by_id.get((code_id or "").strip().upper())

    # =========================================================================
    # STAGE 4: SEARCH
    # =========================================================================

    def search_codes(self, term: str, max_results: int = ICD10_SEARCH_LIMIT) -> List[ICD10Code]:
        """
        Case-insensitive substring search over code, short and long label.

        Algorithm:
            1. Normalize term (trim, lowercase); empty term → no results
            2. Collect code matches, then label-only matches, each in catalog order
            3. Cap at max_results

        Returns:
            List of matching codes (empty list when nothing matches)
        """
        needle = (term or "").strip().lower()
        if not needle:
            return []

        code_matches = []
        label_matches = []
        for code in self._codes:
            if needle in code.code.lower():
                code_matches.append(code)
            elif code.matches(needle):
                label_matches.append(code)

        return (code_matches + label_matches)[:max_results]

    def lookup(self, candidate: str) -> Optional[ICD10Code]:
        """
        Resolve user-typed input to a single catalog entry.

        Match priority:
            1. First whitespace-separated token equals a code (case-insensitive)
            2. Whole input equals a short or long label (case-insensitive)
        """
        trimmed = (candidate or "").strip()
        if not trimmed:
            return None

        match = self.get_code(trimmed.split()[0])
        if match is not None:
            return match

        lowered = trimmed.lower()
        for code in self._codes:
            if code.short_label.lower() == lowered or code.long_label.lower() == lowered:
                return code
        return None

    # =========================================================================
    # STAGE 5: PROPERTIES
    # =========================================================================

    @property
    def total_codes(self) -> int:
        return len(self._codes)


# =============================================================================
# STAGE 6: FILE-BASED REPOSITORY
# =============================================================================


class FileBasedICD10Repository(InMemoryICD10Repository):
    """
    ICD-10 repository backed by a local JSON file of {code, short, long} records.

    Raw file contents are cached per absolute path so that several
    workspaces in one process share a single parse.
    """

    # Class-level cache to avoid re-reading the same catalog file
    _dataset_cache: Dict[str, list] = {}

    def __init__(self, dataset_path: str):
        """
        Raises:
            DatasetLoadError: If file cannot be loaded
        """
        self._dataset_path = Path(dataset_path)

        if not self._dataset_path.exists():
            raise DatasetLoadError(str(self._dataset_path), "File not found")

        super().__init__(ICD10Code.from_dict(record) for record in self._load_records())

        logger.info(
            f"FileBasedICD10Repository initialized | "
            f"Codes: {self.total_codes:,} | Source: {self._dataset_path.name}"
        )

    def _load_records(self) -> list:
        cache_key = str(self._dataset_path.absolute())

        if cache_key in self._dataset_cache:
            logger.debug(f"Using cached ICD-10 catalog: {cache_key}")
            return self._dataset_cache[cache_key]

        logger.info(f"Loading ICD-10 catalog from: {self._dataset_path}")
        try:
            with open(self._dataset_path, "r", encoding="utf-8") as f:
                raw_data = json.load(f)
        except json.JSONDecodeError as e:
            raise DatasetLoadError(str(self._dataset_path), f"Invalid JSON: {e}")
        except PermissionError:
            raise DatasetLoadError(str(self._dataset_path), "Permission denied")
        except OSError as e:
            raise DatasetLoadError(str(self._dataset_path), str(e))

        if not isinstance(raw_data, list):
            raise DatasetLoadError(str(self._dataset_path), "Expected a list of code records")

        self._dataset_cache[cache_key] = raw_data
        return raw_data


# =============================================================================
# STAGE 7: DIAGNOSIS ENTRY RESOLUTION
# =============================================================================


def resolve_diagnosis_entry(repository: ICD10Repository, entry: str) -> Optional[ICD10Code]:
    """
    Resolve a registration diagnosis entry to a code attachment.

    Uses the catalog match when there is one; otherwise the first
    whitespace-separated token of the raw input becomes the code with empty
    labels. Returns None for empty input.
    """
    trimmed = (entry or "").strip()
    if not trimmed:
        return None

    match = repository.lookup(trimmed)
    if match is not None:
        return match

    raw_code = trimmed.split()[0]
    logger.warning(f"ICD-10 entry not in catalog, keeping raw code | code={raw_code}")
    return ICD10Code(code=raw_code)
