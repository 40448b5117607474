"""Field-level combination of a catalog record with its optional enrichment."""

from dataclasses import fields, replace
from typing import Any

from movieworld.models.records import CanonicalRecord, EnrichmentRecord, MergedRecord


def _primary_fields(primary: CanonicalRecord) -> dict[str, Any]:
    return {field.name: getattr(primary, field.name) for field in fields(CanonicalRecord)}


def _longer_plot(primary_plot: str, enrichment_plot: str | None) -> str:
    if enrichment_plot and len(enrichment_plot) > len(primary_plot):
        return enrichment_plot
    return primary_plot


def merge(primary: CanonicalRecord, enrichment: EnrichmentRecord | None) -> MergedRecord:
    """
    Combine one primary record with zero or one enrichment record.

    Each field follows its own rule:
        rating: enrichment IMDb rating, else the primary rating.
        plot: the strictly longer of the two, ties keep the primary plot.
        cast: primary cast, else enrichment actors.
        director, runtime: enrichment first, primary as fallback.
        writer, box office, awards, rated, language, country and the
        Rotten Tomatoes / Metacritic scores: enrichment only.

    Without enrichment the primary fields are returned unchanged.
    """
    base = _primary_fields(primary)
    if enrichment is None:
        return MergedRecord(**base, primary_rating=primary.rating, enriched=False)

    base.update(
        rating=(
            enrichment.imdb_rating
            if enrichment.imdb_rating is not None
            else primary.rating
        ),
        plot=_longer_plot(primary.plot, enrichment.plot),
        cast=primary.cast if primary.cast else tuple(enrichment.actors),
        director=enrichment.director or primary.director,
        runtime_minutes=enrichment.runtime_minutes or primary.runtime_minutes,
        imdb_id=primary.imdb_id or enrichment.imdb_id,
    )
    return MergedRecord(
        **base,
        primary_rating=primary.rating,
        imdb_rating=enrichment.imdb_rating,
        rotten_tomatoes=enrichment.ratings.get("rotten_tomatoes"),
        metacritic=enrichment.ratings.get("metacritic"),
        rated=enrichment.rated,
        awards=enrichment.awards,
        writer=enrichment.writer,
        box_office=enrichment.box_office,
        language=enrichment.language,
        country=enrichment.country,
        enriched=True,
    )


def merge_detailed(
    primary: CanonicalRecord, enrichment: EnrichmentRecord | None
) -> MergedRecord:
    """`merge` plus the fields only a detail view shows."""
    merged = merge(primary, enrichment)
    production = ", ".join(primary.production_companies) or None
    if enrichment is None:
        return replace(
            merged,
            production=production,
            total_seasons=primary.number_of_seasons,
        )
    return replace(
        merged,
        metascore=enrichment.metascore,
        imdb_votes=enrichment.imdb_votes,
        dvd=enrichment.dvd,
        website=enrichment.website,
        production=enrichment.production or production,
        total_seasons=enrichment.total_seasons or primary.number_of_seasons,
    )
