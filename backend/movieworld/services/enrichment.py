import asyncio
from collections.abc import Sequence
from logging import getLogger
from time import perf_counter
from typing import Protocol

from movieworld.core.enums import ContentKind
from movieworld.models.records import CanonicalRecord, EnrichmentRecord, MergedRecord
from movieworld.services.merge import merge
from movieworld.services.request_tokens import RequestTokenTracker

logger = getLogger(__name__)

DEFAULT_CONCURRENCY = 5


class EnrichmentSource(Protocol):
    async def lookup_by_id(self, imdb_id: str) -> EnrichmentRecord | None: ...

    async def lookup_by_title(
        self,
        title: str,
        year: int | str | None = None,
        kind: ContentKind | None = None,
    ) -> EnrichmentRecord | None: ...


class EnrichmentEngine:
    """Runs catalog records through the enrichment source in fixed-size batches."""

    def __init__(
        self,
        source: EnrichmentSource,
        tokens: RequestTokenTracker | None = None,
    ) -> None:
        self.source = source
        self.tokens = tokens or RequestTokenTracker()

    async def lookup(self, record: CanonicalRecord) -> EnrichmentRecord | None:
        """Find enrichment for one record, preferring its IMDb id when it has one."""
        if record.imdb_id:
            found = await self.source.lookup_by_id(record.imdb_id)
            if found is not None:
                return found
        return await self.source.lookup_by_title(record.title, record.year, record.kind)

    async def _safe_lookup(self, record: CanonicalRecord) -> EnrichmentRecord | None:
        try:
            return await self.lookup(record)
        except Exception:
            logger.warning(
                "Failed to enhance %s %s (%r); keeping catalog data",
                record.kind.value,
                record.id,
                record.title,
                exc_info=True,
            )
            return None

    async def enrich(
        self,
        records: Sequence[CanonicalRecord],
        concurrency: int = DEFAULT_CONCURRENCY,
    ) -> list[MergedRecord]:
        """
        Enrich `records` and return merged records in input order.

        Records are processed in consecutive batches of `concurrency`. All
        lookups in a batch run concurrently and the whole batch settles before
        the next one starts. A failed or empty lookup leaves that record with
        its catalog data only.
        """
        if concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        if not records:
            return []

        start = perf_counter()
        found: list[EnrichmentRecord | None] = [None] * len(records)
        for batch_start in range(0, len(records), concurrency):
            batch = records[batch_start : batch_start + concurrency]
            batch_results = await asyncio.gather(
                *(self._safe_lookup(record) for record in batch)
            )
            for offset, enrichment in enumerate(batch_results):
                found[batch_start + offset] = enrichment

        merged = [merge(record, enrichment) for record, enrichment in zip(records, found)]
        logger.debug(
            "Enriched %d/%d records in %.2f seconds",
            sum(1 for enrichment in found if enrichment is not None),
            len(records),
            perf_counter() - start,
        )
        return merged

    async def enrich_tagged(
        self,
        records: Sequence[CanonicalRecord],
        channel: str = "default",
        concurrency: int = DEFAULT_CONCURRENCY,
        token: int | None = None,
    ) -> tuple[int, list[MergedRecord]]:
        """
        `enrich` tagged with a request token.

        Pass `token` when it was issued earlier, e.g. before the catalog page
        itself was fetched; otherwise one is issued before any lookup starts.
        """
        if token is None:
            token = self.tokens.issue(channel)
        merged = await self.enrich(records, concurrency=concurrency)
        if not self.tokens.is_latest(channel, token):
            logger.debug("Enrichment request %d on %r was superseded", token, channel)
        return token, merged
