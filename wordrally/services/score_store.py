"""
Score Storage

Durable key-value slots for the best score and the highscore table.
Absence on load is never an error: it simply means "no prior score".
"""

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional

from pymongo.mongo_client import MongoClient
from pymongo.server_api import ServerApi

from ..config.game_settings import HIGHSCORE_CAPACITY
from ..models.game import HighscoreEntry, ScoreRecord

HIGHSCORE_SLOT = "highscore"
HIGHSCORE_TABLE_SLOT = "highscore_table"


class ScoreStore(ABC):
    """Interface every score store must implement."""

    @abstractmethod
    def _read(self, slot: str):
        """Return the raw JSON-compatible value of *slot*, or None."""
        ...

    @abstractmethod
    def _write(self, slot: str, value) -> None:
        ...

    def load_highscore(self) -> Optional[ScoreRecord]:
        data = self._read(HIGHSCORE_SLOT)
        return ScoreRecord.from_dict(data) if data else None

    def save_highscore(self, record: ScoreRecord) -> None:
        self._write(HIGHSCORE_SLOT, record.to_dict())

    def load_highscore_table(self) -> List[HighscoreEntry]:
        data = self._read(HIGHSCORE_TABLE_SLOT) or []
        return [HighscoreEntry.from_dict(item) for item in data][:HIGHSCORE_CAPACITY]

    def save_highscore_table(self, entries: List[HighscoreEntry]) -> None:
        self._write(HIGHSCORE_TABLE_SLOT, [entry.to_dict() for entry in entries[:HIGHSCORE_CAPACITY]])


class InMemoryScoreStore(ScoreStore):
    """Process-local store, used for tests and throwaway servers."""

    def __init__(self):
        self.slots: Dict[str, object] = {}

    def _read(self, slot: str):
        return self.slots.get(slot)

    def _write(self, slot: str, value) -> None:
        self.slots[slot] = value


class JsonFileScoreStore(ScoreStore):
    """All slots in a single JSON document, rewritten on every save."""

    def __init__(self, path):
        self.path = Path(path)

    def _load_document(self) -> Dict:
        if not self.path.exists():
            return {}
        with open(self.path, 'r', encoding='utf-8') as f:
            document = json.load(f)
        return document if isinstance(document, dict) else {}

    def _read(self, slot: str):
        return self._load_document().get(slot)

    def _write(self, slot: str, value) -> None:
        document = self._load_document()
        document[slot] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump(document, f, ensure_ascii=False, indent=2)


class MongoScoreStore(ScoreStore):
    """One MongoDB document per slot, keyed by slot name."""

    def __init__(self, collection):
        self.collection = collection

    @classmethod
    def from_uri(cls, mongo_uri: str, db_name: str = "wordrally") -> "MongoScoreStore":
        """
        Connects to MongoDB and returns a store on the ``scores`` collection.
        
        Raises:
            pymongo.errors.PyMongoError: If the server cannot be reached
        """
        client = MongoClient(mongo_uri, server_api=ServerApi('1'))
        client.admin.command('ping')
        return cls(client[db_name].scores)

    def _read(self, slot: str):
        document = self.collection.find_one({"_id": slot})
        return document.get("value") if document else None

    def _write(self, slot: str, value) -> None:
        self.collection.replace_one({"_id": slot}, {"_id": slot, "value": value}, upsert=True)


def create_score_store(config) -> ScoreStore:
    """
    Builds the score store selected by ``SCORE_STORE``.
    
    Args:
        config: Configuration class or mapping with SCORE_STORE, SCORE_FILE,
            MONGO_URI and MONGO_DB_NAME
    """
    get = config.get if isinstance(config, dict) else lambda key, default=None: getattr(config, key, default)
    kind = (get('SCORE_STORE') or 'memory').lower()
    
    if kind == 'memory':
        return InMemoryScoreStore()
    if kind == 'json':
        return JsonFileScoreStore(get('SCORE_FILE', 'data/highscores.json'))
    if kind == 'mongo':
        mongo_uri = get('MONGO_URI')
        if not mongo_uri:
            raise ValueError("MONGO_URI must be set when SCORE_STORE is 'mongo'")
        return MongoScoreStore.from_uri(mongo_uri, get('MONGO_DB_NAME', 'wordrally'))
    raise ValueError(f"Unknown SCORE_STORE '{kind}', expected 'memory', 'json' or 'mongo'")
