"""
Batch Monster Collection Script

Discovers monster pages from the Game8 monster list, extracts every
monster record, and saves records plus a failure report.

Output:
    data/monsters.json              # Extracted records (camelCase keys)
    data/failures/failures.csv      # page_id, name, error_type, error

Pages are listed in monster_pages.txt (one "page_id<TAB>name" per line)
when the file exists; otherwise they are discovered from the index page.
"""

from pathlib import Path
from datetime import datetime
import logging

from mhrise_wiki.api import MonsterPipeline
from mhrise_wiki.config import get_app_config
from mhrise_wiki.types import AttackTypes, StatusEffects

# Game8 "Monster List" page
INDEX_PAGE_ID = 336421
PAGES_FILE = Path("monster_pages.txt")

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)

print("=" * 80)
print("BATCH COLLECTION: Monster Hunter Rise monsters (Game8)")
print("=" * 80)

# === Step 1: Load Configuration ===
print("\n[Step 1] Loading configuration...")
config = get_app_config()
print(f"  ✓ Config loaded")
print(f"    - Page URL: {config.base_url}")
print(f"    - Workers: {config.max_workers}")
print(f"    - Output: {config.output_dir}")
print(f"    - Attack types: {AttackTypes.list_available()}")
print(f"    - Status effects: {StatusEffects.list_available()}")

# === Step 2: Initialize Pipeline ===
print("\n[Step 2] Initializing MonsterPipeline...")
pipeline = MonsterPipeline(app_config=config)
print(f"  ✓ MonsterPipeline ready")

# === Step 3: Load Page List ===
print("\n[Step 3] Loading monster pages...")
if PAGES_FILE.exists():
    with open(PAGES_FILE, "r", encoding="utf-8") as f:
        pages = [tuple(line.split("\t", 1)) for line in f.read().splitlines() if line.strip()]
    print(f"  ✓ Loaded {len(pages)} pages from {PAGES_FILE}")
else:
    pages = pipeline.discover(INDEX_PAGE_ID)
    print(f"  ✓ Discovered {len(pages)} pages from index page {INDEX_PAGE_ID}")

# === Step 4: Execute Batch Extraction ===
print("\n[Step 4] Starting batch extraction...")
print("  Processing will continue even if individual pages fail.")
print()

start_time = datetime.now()
batch = pipeline.run(pages)
elapsed = (datetime.now() - start_time).total_seconds()

# === Step 5: Save Results ===
records_path = pipeline.save_records(batch.records)
failures_path = pipeline.save_failures_csv(batch.failures)

# === Step 6: Display Results ===
print("\n" + "=" * 80)
print("BATCH COLLECTION COMPLETE")
print("=" * 80)
print()
print(f"⏱️  Total Time: {elapsed:.1f} seconds ({elapsed/60:.1f} minutes)")
print()
print("📊 Statistics:")
print(f"    ✓ Pages attempted: {batch.stats['pages']}")
print(f"    ✓ Records extracted: {batch.stats['records']}")
print(f"    ✗ Failed: {batch.stats['failed']}")
print(f"    ✗ Not fetched: {batch.stats['not_fetched']}")
print()
for failure in batch.failures:
    print(f"    - {failure['page_id']} ({failure['name']}): {failure['error_type']}")
print()
print(f"💾 Records: {records_path}")
if failures_path:
    print(f"📄 Failures: {failures_path}")
print()
print("=" * 80)
