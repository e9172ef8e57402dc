"""Pytest configuration and fixtures."""

import itertools
from typing import Any, Optional
from unittest import mock

import pytest


# ============================================
# HTTP fakes
# ============================================

def make_response(
    status_code: int = 200,
    json_body: Any = None,
    reason: str = "",
) -> mock.Mock:
    """Build a stand-in for ``requests.Response``."""
    response = mock.Mock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.reason = reason or ("OK" if status_code < 400 else "Error")
    response.content = b"{}"
    if json_body is None:
        response.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        response.json.return_value = json_body
    return response


class FakeClock:
    """Controllable time source returning epoch seconds."""
    
    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start
    
    def __call__(self) -> float:
        return self.now
    
    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def session():
    """Mock requests session; configure ``post``/``request`` return values per test."""
    return mock.Mock()


@pytest.fixture
def token_response():
    """Successful client_credentials token response."""
    return make_response(200, {
        "access_token": "token-1",
        "token_type": "Bearer",
        "expires_in": 86400,
        "scope": "basic",
    })


# ============================================
# Firestore fake
# ============================================

class FakeSnapshot:
    def __init__(self, reference: "FakeDocumentReference", data: Optional[dict]):
        self.reference = reference
        self.id = reference.id
        self._data = data
    
    @property
    def exists(self) -> bool:
        return self._data is not None
    
    def to_dict(self) -> Optional[dict]:
        return dict(self._data) if self._data is not None else None


class FakeDocumentReference:
    def __init__(self, db: "FakeFirestore", collection: str, doc_id: str):
        self._db = db
        self.collection = collection
        self.id = doc_id
    
    def get(self) -> FakeSnapshot:
        return FakeSnapshot(self, self._db.data.get(self.collection, {}).get(self.id))
    
    def set(self, data: dict, merge: bool = False) -> None:
        docs = self._db.data.setdefault(self.collection, {})
        if merge and self.id in docs:
            docs[self.id] = {**docs[self.id], **data}
        else:
            docs[self.id] = dict(data)
    
    def update(self, data: dict) -> None:
        docs = self._db.data.setdefault(self.collection, {})
        if self.id not in docs:
            raise KeyError(f"No document to update: {self.collection}/{self.id}")
        docs[self.id] = {**docs[self.id], **data}
    
    def delete(self) -> None:
        self._db.data.get(self.collection, {}).pop(self.id, None)


class FakeAggregateResult:
    def __init__(self, value: int):
        self.value = value


class FakeQuery:
    def __init__(self, db: "FakeFirestore", collection: str, filters=None, limit_to=None):
        self._db = db
        self._collection = collection
        self._filters = list(filters or [])
        self._limit = limit_to
    
    def where(self, field_path: str, op: str, value: Any) -> "FakeQuery":
        assert op == "==", "fake only supports equality filters"
        return FakeQuery(self._db, self._collection, self._filters + [(field_path, value)], self._limit)
    
    def limit(self, count: int) -> "FakeQuery":
        return FakeQuery(self._db, self._collection, self._filters, count)
    
    def stream(self):
        docs = self._db.data.get(self._collection, {})
        matched = [
            FakeSnapshot(FakeDocumentReference(self._db, self._collection, doc_id), data)
            for doc_id, data in docs.items()
            if all(data.get(f) == v for f, v in self._filters)
        ]
        if self._limit is not None:
            matched = matched[:self._limit]
        return iter(matched)
    
    def count(self):
        total = len(list(self.stream()))
        aggregation = mock.Mock()
        aggregation.get.return_value = [[FakeAggregateResult(total)]]
        return aggregation


class FakeCollection(FakeQuery):
    def __init__(self, db: "FakeFirestore", name: str):
        super().__init__(db, name)
        self.name = name
    
    def document(self, doc_id: Optional[str] = None) -> FakeDocumentReference:
        return FakeDocumentReference(self._db, self.name, doc_id or self._db.new_id())
    
    def add(self, data: dict):
        ref = self.document()
        ref.set(data)
        return None, ref


class FakeBatch:
    def __init__(self, db: "FakeFirestore"):
        self._db = db
        self.operations: list[tuple] = []
    
    def set(self, ref: FakeDocumentReference, data: dict, merge: bool = False) -> None:
        self.operations.append(("set", ref, data, merge))
    
    def delete(self, ref: FakeDocumentReference) -> None:
        self.operations.append(("delete", ref, None, False))
    
    def commit(self) -> None:
        self._db.commit_attempts += 1
        if self._db.fail_on_commit == self._db.commit_attempts:
            raise RuntimeError("commit failed")
        self._db.batch_sizes.append(len(self.operations))
        for op, ref, data, merge in self.operations:
            if op == "set":
                ref.set(data, merge=merge)
            else:
                ref.delete()


class FakeFirestore:
    """In-memory stand-in for ``google.cloud.firestore.Client``."""
    
    def __init__(self):
        self.data: dict[str, dict[str, dict]] = {}
        self.batch_sizes: list[int] = []
        self.commit_attempts = 0
        self.fail_on_commit: Optional[int] = None
        self._ids = itertools.count(1)
    
    def new_id(self) -> str:
        return f"auto{next(self._ids):04d}"
    
    def collection(self, name: str) -> FakeCollection:
        return FakeCollection(self, name)
    
    def batch(self) -> FakeBatch:
        return FakeBatch(self)
    
    def docs(self, collection: str) -> dict[str, dict]:
        return self.data.get(collection, {})


@pytest.fixture
def fake_db():
    return FakeFirestore()


# ============================================
# Sample data
# ============================================

@pytest.fixture
def catalog_exercises():
    """ExerciseDB-style catalog entries."""
    return [
        {
            "id": "0001",
            "name": "3/4 sit-up",
            "bodyPart": "waist",
            "equipment": "body weight",
            "target": "abs",
            "gifUrl": "https://cdn.example.com/0001.gif",
        },
        {
            "id": "0025",
            "name": "Barbell Bench Press",
            "bodyPart": "chest",
            "equipment": "barbell",
            "target": "pectorals",
        },
        {
            "id": "band 12",
            "name": "Band Pull Apart",
            "bodyPart": "shoulders",
            "equipment": "band",
            "target": "rear delts",
        },
    ]


@pytest.fixture
def ingredient():
    return {
        "id": "ing_chicken_breast",
        "name": "Pechuga de Pollo",
        "category": "Proteínas",
        "macros": {"kcal": 113, "protein": 23, "carbs": 0, "fat": 2.5},
        "micros": {"iron": 1.0, "calcium": 12},
        "unit": "100g",
    }
