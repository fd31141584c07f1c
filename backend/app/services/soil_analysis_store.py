"""
Soil Analysis Store
===================

Keeps every soil analysis a user has run.

PERSISTENCE:
-----------
Analyses are saved to a JSON file (soil_analysis_db.json) so they survive
restarts!
- Save an analysis = written to file
- Restart server = analyses are loaded back automatically

File layout (one list per user):

    {
        "alice": [ {"farmName": "North Field", "interpretation": {...}, ...} ],
        "bob":   [ ... ]
    }
"""

import json
import logging
import os
import shutil
import threading
from pathlib import Path
from typing import Union

from pydantic import ValidationError

from app.models import SensorReadingsWithInterpretation

logger = logging.getLogger(__name__)


class SoilAnalysisStore:
    """
    File-backed store of soil analyses, grouped by username.
    """

    def __init__(self, db_file: Union[str, Path]):
        self.db_file = Path(db_file)
        self._analyses: dict[str, list[SensorReadingsWithInterpretation]] = {}
        self._lock = threading.Lock()
        self._load_from_file()

    def _load_from_file(self):
        """Load analyses from the JSON file."""
        if not self.db_file.exists():
            logger.info(f"No existing database found at {self.db_file}")
            return

        try:
            with open(self.db_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error(f"Error parsing soil analysis database JSON: {e}")
            backup_path = self.db_file.with_suffix('.json.backup')
            try:
                shutil.copy2(self.db_file, backup_path)
                logger.warning(f"Corrupted database backed up to {backup_path}")
            except OSError as backup_err:
                logger.error(f"Failed to backup corrupted database: {backup_err}")
            return
        except OSError as e:
            logger.error(f"Error reading soil analysis database: {e}", exc_info=True)
            return

        if not isinstance(data, dict):
            logger.error(f"Soil analysis database has unexpected layout, ignoring {self.db_file}")
            return

        for username, records in data.items():
            loaded = []
            for record in records if isinstance(records, list) else []:
                try:
                    loaded.append(SensorReadingsWithInterpretation.model_validate(record))
                except ValidationError as e:
                    logger.error(f"Error loading analysis for {username}: {e}, skipping")
            self._analyses[username] = loaded

        total = sum(len(records) for records in self._analyses.values())
        logger.info(f"Loaded {total} soil analyses from database")

    def _save_to_file(self, analyses: dict[str, list[SensorReadingsWithInterpretation]]):
        """Save analyses to the JSON file (atomic write)."""
        data = {
            username: [record.model_dump(by_alias=True) for record in records]
            for username, records in analyses.items()
        }

        self.db_file.parent.mkdir(parents=True, exist_ok=True)
        temp_file = self.db_file.with_suffix('.json.tmp')
        try:
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(temp_file, self.db_file)
        finally:
            if temp_file.exists():
                temp_file.unlink()

    def save(self, record: SensorReadingsWithInterpretation, username: str) -> SensorReadingsWithInterpretation:
        """
        Store one analysis for a user.

        The record's username is always set to the owner we were given.
        Nothing changes in memory unless the file write succeeded.
        """
        stored = record.model_copy(update={"username": username})
        with self._lock:
            updated = dict(self._analyses)
            updated[username] = [*self._analyses.get(username, []), stored]
            self._save_to_file(updated)
            self._analyses = updated
        logger.info(f"Saved soil analysis for {username} ({stored.farm_name})")
        return stored

    def get_all(self, username: str) -> list[SensorReadingsWithInterpretation]:
        """Every analysis for a user, newest first."""
        with self._lock:
            records = list(self._analyses.get(username, []))
        return sorted(records, key=lambda record: record.submitted_at, reverse=True)

    def get_by_farm(self, username: str, farm_name: str) -> list[SensorReadingsWithInterpretation]:
        """A user's analyses for one farm (exact name), newest first."""
        return [record for record in self.get_all(username) if record.farm_name == farm_name]
