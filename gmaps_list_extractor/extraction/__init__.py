"""
Extraction module for collecting shared lists.

- enrichment.py: Places API enrichment of extracted records
- collector.py: Main orchestration (page load, completeness, decoding, enrichment)
"""

from .enrichment import EnrichmentPipeline, EnrichmentStats, build_query, enrich_places, merge_details
from .collector import collect_list, load_rendered_markup
