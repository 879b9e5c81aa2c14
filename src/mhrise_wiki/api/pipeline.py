"""
Batch Pipeline for Game8 Monster Pages

Fetches and extracts many pages with a bounded thread pool.

Key Features:
- Bounded concurrency (max_workers) to respect the site's rate limits
- Per-page failure isolation: a failed page becomes a failure row
- Statistics aggregation from worker results (no shared state)
- Failure tracking with CSV export, records exported as JSON

Usage:
    pipeline = MonsterPipeline()
    batch = pipeline.run(pages=[('344983', 'Rathalos')], max_workers=3)
    pipeline.save_records(batch.records)
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union
import json
import logging

import pandas as pd

from mhrise_wiki.api.assembler import try_extract
from mhrise_wiki.config import AppConfig, VocabularyConfig, get_app_config, get_config
from mhrise_wiki.exceptions import FetchError
from mhrise_wiki.models.monster import MonsterRecord
from mhrise_wiki.models.result import ExtractionResult
from mhrise_wiki.services.wiki_client import WikiClient

logger = logging.getLogger(__name__)

PageRef = Union[str, int, Tuple[Union[str, int], Optional[str]]]


@dataclass
class BatchResult:
    """Outcome of a batch run."""
    records: List[MonsterRecord] = field(default_factory=list)
    failures: List[Dict[str, Any]] = field(default_factory=list)
    stats: Dict[str, int] = field(default_factory=dict)


def _extract_page_worker(
    client: WikiClient,
    page_id: str,
    name: Optional[str],
    config: VocabularyConfig
) -> ExtractionResult:
    """
    Worker function for fetching and extracting a single page.

    Never raises: fetch errors, extraction errors and unexpected errors are
    all returned as failed ExtractionResults.
    """
    try:
        page_html = client.get_page(page_id)
    except FetchError as e:
        return ExtractionResult(
            page_id=page_id,
            error_kind=e.kind,
            error=str(e),
            name=name
        )

    try:
        return try_extract(page_id, page_html, name=name, config=config)
    except Exception as e:
        logger.error(
            f"Worker failed to process page {page_id} ({name or 'unknown'}): {e}",
            exc_info=True
        )
        return ExtractionResult(
            page_id=page_id,
            error_kind=type(e).__name__,
            error=str(e),
            name=name
        )


class MonsterPipeline:
    """
    Fetch → extract → collect workflow over many monster pages.

    Design:
    - The extraction core is pure, so threads share nothing but the client
    - Results are aggregated in the calling thread only

    Example:
        pipeline = MonsterPipeline()
        pages = pipeline.discover(index_page_id=336421)
        batch = pipeline.run(pages)
        print(batch.stats)
    """

    def __init__(
        self,
        client: Optional[WikiClient] = None,
        app_config: Optional[AppConfig] = None,
        config: Optional[VocabularyConfig] = None
    ):
        """
        Initialize pipeline.

        Args:
            client: Wiki client (defaults to WikiClient(app_config))
            app_config: Fetch/output settings (defaults to environment config)
            config: Vocabulary configuration (defaults to config/vocabulary.yaml)
        """
        self._app_config = app_config or get_app_config()
        self._config = config or get_config()
        self._client = client or WikiClient(self._app_config)

    def discover(self, index_page_id) -> List[Tuple[str, str]]:
        """List (page_id, name) pairs linked from an index page."""
        return self._client.list_monster_pages(index_page_id)

    def extract_page(self, page_id, name: Optional[str] = None) -> ExtractionResult:
        """Fetch and extract a single page."""
        return _extract_page_worker(self._client, str(page_id), name, self._config)

    def run(
        self,
        pages: Sequence[PageRef],
        max_workers: Optional[int] = None
    ) -> BatchResult:
        """
        Fetch and extract pages concurrently.

        Args:
            pages: Page ids, or (page_id, name) pairs
            max_workers: Concurrent fetches (default: app config max_workers)

        Returns:
            BatchResult with records in input order, failure rows and stats:
            {
                'pages': int,      # Pages attempted
                'records': int,    # Records extracted
                'failed': int,     # Extraction failures
                'not_fetched': int # Pages that could not be fetched
            }
        """
        max_workers = max_workers or self._app_config.max_workers
        page_refs = self._normalize_pages(pages)
        total = len(page_refs)

        logger.info(f"Starting batch: {total} pages, {max_workers} workers")

        batch = BatchResult(stats=self._init_statistics())
        if total == 0:
            return batch

        results: Dict[int, ExtractionResult] = {}
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            future_to_index = {
                executor.submit(
                    _extract_page_worker, self._client, page_id, name, self._config
                ): index
                for index, (page_id, name) in enumerate(page_refs)
            }

            processed = 0
            for future in as_completed(future_to_index):
                result = future.result()
                results[future_to_index[future]] = result

                processed += 1
                if not result.success:
                    logger.warning(
                        f"Page {result.page_id} ({result.name or 'unknown'}) failed: "
                        f"{result.error_kind}: {result.error}"
                    )
                if processed % 10 == 0 or processed == total:
                    logger.info(f"Progress: {processed}/{total}")

        for index in range(total):
            self._collect(batch, results[index])

        logger.info(
            f"Batch complete: {batch.stats['records']} records, "
            f"{batch.stats['failed']} failures, {batch.stats['not_fetched']} not fetched"
        )
        return batch

    def save_records(
        self,
        records: List[MonsterRecord],
        path: Optional[Union[str, Path]] = None
    ) -> Path:
        """
        Write records as a JSON array (camelCase keys).

        Returns:
            Path of the written file
        """
        path = Path(path) if path else Path(self._app_config.output_dir) / 'monsters.json'
        path.parent.mkdir(parents=True, exist_ok=True)

        payload = [
            record.model_dump(mode='json', by_alias=True, exclude_none=True)
            for record in records
        ]
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)

        logger.info(f"Saved {len(records)} record(s) to {path}")
        return path

    def save_failures_csv(
        self,
        failures: List[Dict[str, Any]],
        base_dir: Optional[str] = None
    ) -> Optional[Path]:
        """
        Save failed pages (page_id, name, error_type, error) to CSV.

        Args:
            failures: Failure rows from BatchResult
            base_dir: Base directory (default: app config output_dir)

        Returns:
            Path of the CSV, or None when there is nothing to save
        """
        if not failures:
            return None

        failures_dir = Path(base_dir or self._app_config.output_dir) / "failures"
        failures_dir.mkdir(parents=True, exist_ok=True)

        df = pd.DataFrame(failures, columns=['page_id', 'name', 'error_type', 'error'])
        csv_path = failures_dir / "failures.csv"
        df.to_csv(csv_path, index=False, encoding='utf-8')

        logger.info(f"Saved {len(failures)} failure(s) to {csv_path}")
        return csv_path

    def _collect(self, batch: BatchResult, result: ExtractionResult) -> None:
        batch.stats['pages'] += 1

        if result.success:
            batch.records.append(result.record)
            batch.stats['records'] += 1
            return

        batch.failures.append(result.failure())
        if result.error_kind == FetchError.kind:
            batch.stats['not_fetched'] += 1
        else:
            batch.stats['failed'] += 1

    def _normalize_pages(self, pages: Sequence[PageRef]) -> List[Tuple[str, Optional[str]]]:
        """
        Normalize page references to (page_id, name) pairs.

        Example:
            344983 → ('344983', None)
            ('344983', 'Rathalos') → ('344983', 'Rathalos')
        """
        normalized = []
        for page in pages:
            if isinstance(page, (tuple, list)):
                page_id, name = page[0], (page[1] if len(page) > 1 else None)
            else:
                page_id, name = page, None
            normalized.append((str(page_id), name))
        return normalized

    def _init_statistics(self) -> Dict[str, int]:
        """
        Initialize statistics dictionary.

        Returns:
            Statistics dict with counters set to zero
        """
        return {
            'pages': 0,
            'records': 0,
            'failed': 0,
            'not_fetched': 0
        }
