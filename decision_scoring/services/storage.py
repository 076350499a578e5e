"""JSON file persistence for decision records."""

import json
import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Dict, List, Optional

from ..core.decision import Decision
from ..errors import DecisionNotFound, DecisionScoringError, StorageError

logger = logging.getLogger(__name__)

_SAFE_ID = re.compile(r'^[A-Za-z0-9_\-]+$')


class DecisionStore:
    """Stores each decision as ``<directory>/<id>.json``.

    Cached results and lifecycle state are written with the record, so a
    reloaded scored decision can be displayed without rescoring.
    """

    def __init__(self, config: Optional[Dict] = None):
        """Initialize decision store.

        Args:
            config: Storage configuration (``directory``)
        """
        self.config = config or {}
        self.directory = Path(self.config.get('directory', 'decisions'))

    def _path(self, decision_id: str) -> Path:
        return self.directory / f"{decision_id}.json"

    @staticmethod
    def is_valid_id(decision_id: str) -> bool:
        return bool(decision_id) and bool(_SAFE_ID.match(decision_id))

    def save(self, decision: Decision) -> Path:
        """Write a decision to disk, replacing any previous version.

        Args:
            decision: Decision to store

        Returns:
            Path of the written file

        Raises:
            StorageError: If the id is unusable or the file cannot be written
        """
        if not self.is_valid_id(decision.id):
            raise StorageError(f"Invalid decision id: {decision.id!r}")

        path = self._path(decision.id)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.directory, suffix='.tmp')
            try:
                with os.fdopen(fd, 'w', encoding='utf-8') as f:
                    json.dump(decision.to_dict(), f, indent=2)
                os.replace(tmp_path, path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.remove(tmp_path)
                raise
        except OSError as e:
            logger.error(f"Failed to save decision '{decision.id}': {e}")
            raise StorageError(f"Failed to save decision {decision.id}: {e}") from e

        logger.info(f"Saved decision '{decision.id}' to {path}")
        return path

    def load(self, decision_id: str) -> Optional[Decision]:
        """Load a decision by id.

        Returns:
            The decision, or ``None`` when no decision has this id

        Raises:
            StorageError: If the stored file cannot be read or parsed
        """
        if not self.is_valid_id(decision_id):
            return None

        path = self._path(decision_id)
        if not path.exists():
            return None

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            return Decision.from_dict(data)
        except (OSError, ValueError, KeyError, DecisionScoringError) as e:
            logger.error(f"Failed to load decision '{decision_id}': {e}")
            raise StorageError(f"Failed to load decision {decision_id}: {e}") from e

    def get(self, decision_id: str) -> Decision:
        """Load a decision by id.

        Raises:
            DecisionNotFound: If no decision has this id
        """
        decision = self.load(decision_id)
        if decision is None:
            raise DecisionNotFound(decision_id)
        return decision

    def list_decisions(self) -> List[Decision]:
        """All stored decisions, most recently updated first."""
        if not self.directory.exists():
            return []

        decisions = []
        for path in sorted(self.directory.glob('*.json')):
            try:
                decision = self.load(path.stem)
            except StorageError:
                logger.warning(f"Skipping unreadable decision file {path}")
                continue
            if decision is not None:
                decisions.append(decision)

        decisions.sort(key=lambda d: d.updated_at, reverse=True)
        return decisions

    def delete(self, decision_id: str) -> bool:
        """Delete a stored decision.

        Returns:
            True if a decision was deleted, False if none existed
        """
        if not self.is_valid_id(decision_id):
            return False

        path = self._path(decision_id)
        if not path.exists():
            return False

        try:
            path.unlink()
        except OSError as e:
            logger.error(f"Failed to delete decision '{decision_id}': {e}")
            raise StorageError(f"Failed to delete decision {decision_id}: {e}") from e

        logger.info(f"Deleted decision '{decision_id}'")
        return True
