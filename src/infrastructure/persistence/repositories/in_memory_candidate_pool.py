"""
In-Memory Candidate Pool

Implements CandidatePoolProtocol over a fixed list of artist snapshots.
Serves inline candidate records (HTTP API and Celery task) and the
configured pool file at CANDIDATE_POOL_PATH (shared by both).

Responsibility:
    - Parse raw candidate records (malformed ones skipped and counted)
    - Load the configured pool from a JSON file
    - Filter by activity, radius and style
    - Deterministic order (candidate_id) and offset/limit pagination
"""

import json
import logging
import os
from typing import Any, Iterable, Mapping, Optional, Sequence

from src.domain.matching.entities import ArtistCandidate
from src.domain.matching.repositories import CandidatePoolCriteria
from src.domain.shared.exceptions import InvalidCandidateError

logger = logging.getLogger(__name__)

CANDIDATE_POOL_PATH_ENV = "CANDIDATE_POOL_PATH"


class InMemoryCandidatePool:
    """
    Candidate pool held in memory.

    Examples:
        >>> pool = InMemoryCandidatePool.from_records(records)
        >>> pool.rejected_records
        0
        >>> candidates = await pool.get_candidate_pool(CandidatePoolCriteria(limit=20))
    """

    def __init__(self, candidates: Iterable[ArtistCandidate] = ()) -> None:
        self._candidates: dict[str, ArtistCandidate] = {}
        self.rejected_records = 0
        for candidate in candidates:
            self.add(candidate)

    @classmethod
    def from_records(cls, records: Sequence[Mapping[str, Any]]) -> "InMemoryCandidatePool":
        """
        Build a pool from JSON-like records.

        Malformed records are skipped with a warning and counted in
        `rejected_records`; one bad profile never fails the whole pool.

        Raises:
            InvalidCandidateError: If two well-formed records share a candidate_id
        """
        pool = cls()
        for index, record in enumerate(records):
            try:
                candidate = ArtistCandidate.from_dict(record)
            except InvalidCandidateError as e:
                pool.rejected_records += 1
                logger.warning(f"Skipping malformed candidate record #{index}: {e}")
                continue
            pool.add(candidate)
        if pool.rejected_records:
            logger.info(
                f"Candidate pool loaded: {len(pool)} accepted, "
                f"{pool.rejected_records} rejected"
            )
        return pool

    @classmethod
    def from_json_file(cls, path: str) -> "InMemoryCandidatePool":
        """
        Build a pool from a JSON file holding a list of candidate records.

        Raises:
            OSError: If the file cannot be read
            json.JSONDecodeError: If the file is not valid JSON
            InvalidCandidateError: If the file is not a list, or two records
                share a candidate_id
        """
        with open(path, encoding="utf-8") as f:
            records = json.load(f)
        if not isinstance(records, list):
            raise InvalidCandidateError(
                f"Candidate pool file {path} must hold a JSON list of records"
            )
        pool = cls.from_records(records)
        logger.info(f"Loaded candidate pool from {path}: {len(pool)} candidates")
        return pool

    def add(self, candidate: ArtistCandidate) -> None:
        """
        Raises:
            InvalidCandidateError: If the candidate_id is already in the pool
        """
        if candidate.candidate_id in self._candidates:
            raise InvalidCandidateError(
                f"Duplicate candidate '{candidate.candidate_id}'",
                field_name="candidate_id",
                candidate_id=candidate.candidate_id,
            )
        self._candidates[candidate.candidate_id] = candidate

    def __len__(self) -> int:
        return len(self._candidates)

    async def get_candidate_pool(
        self, criteria: CandidatePoolCriteria
    ) -> list[ArtistCandidate]:
        """Candidates matching `criteria`, ordered by candidate_id."""
        selected = [
            candidate
            for _, candidate in sorted(self._candidates.items())
            if self._matches(candidate, criteria)
        ]
        end = None if criteria.limit is None else criteria.offset + criteria.limit
        page = selected[criteria.offset:end]
        logger.debug(
            f"Candidate pool query: {len(selected)} matched, {len(page)} returned"
        )
        return page

    @staticmethod
    def _matches(candidate: ArtistCandidate, criteria: CandidatePoolCriteria) -> bool:
        if criteria.active_only and not candidate.is_active:
            return False
        if criteria.radius_km is not None:
            # Artists without a location cannot be placed inside a radius
            if candidate.location is None:
                return False
            if criteria.near.distance_km(candidate.location) > criteria.radius_km:
                return False
        if criteria.styles and not any(
            candidate.style_share(style) > 0 for style in criteria.styles
        ):
            return False
        return True


def candidate_pool_from_env(
    environ: Optional[Mapping[str, str]] = None,
) -> Optional[InMemoryCandidatePool]:
    """Pool from the file at CANDIDATE_POOL_PATH, or None when it is unset."""
    env = os.environ if environ is None else environ
    path = env.get(CANDIDATE_POOL_PATH_ENV)
    if not path:
        return None
    return InMemoryCandidatePool.from_json_file(path)
