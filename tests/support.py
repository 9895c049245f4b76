"""Test doubles: mocked transports, a recording scheduler and a small in-memory Firestore."""
import copy
from datetime import datetime, timezone

import httpx
from google.cloud.firestore_v1 import SERVER_TIMESTAMP

from storefront.client.api import StorefrontAPI


def mock_api(handler):
    """StorefrontAPI over an httpx.MockTransport; `handler(request) -> httpx.Response`."""
    return StorefrontAPI(httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://testserver"))


class RequestLog:
    """MockTransport handler that records requests and answers with a fixed response (or raises)."""

    def __init__(self, status_code=200, json=None, exc=None):
        self.requests = []
        self.status_code = status_code
        self.json = {"success": True} if json is None else json
        self.exc = exc

    def __call__(self, request):
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc("Connection refused", request=request)
        return httpx.Response(self.status_code, json=self.json)


class FakeScheduler:
    def __init__(self):
        self.jobs = []
        self.running = False

    def add_job(self, func, trigger, **kwargs):
        self.jobs.append((func, trigger, kwargs))

    def run_all(self):
        for func, _, kwargs in self.jobs:
            func(*kwargs.get("args", ()))

    def start(self):
        self.running = True

    def shutdown(self, wait=True):
        self.running = False


CUSTOMER = {
    "customerName": "Asha Patel",
    "email": "asha@example.com",
    "phone": "9876543210",
    "address": "12 MG Road",
    "city": "Pune",
    "pincode": "411001",
}


class _Snapshot:
    def __init__(self, data):
        self.exists = data is not None
        self._data = data

    def to_dict(self):
        return copy.deepcopy(self._data)


class _DocumentRef:
    def __init__(self, collection, doc_id):
        self._col = collection
        self.id = doc_id

    def get(self):
        self._col.db.check()
        return _Snapshot(self._col.docs.get(self.id))

    def set(self, data):
        self._col.docs[self.id] = _resolve(data)

    def update(self, patch):
        if self.id not in self._col.docs:
            raise KeyError(self.id)
        self._col.docs[self.id].update(_resolve(patch))

    def delete(self):
        self._col.docs.pop(self.id, None)


def _resolve(data):
    out = copy.deepcopy({k: v for k, v in data.items() if v is not SERVER_TIMESTAMP})
    out.update({k: datetime.now(timezone.utc) for k, v in data.items() if v is SERVER_TIMESTAMP})
    return out


class _Query:
    def __init__(self, collection, filters=(), order=None, limit=None):
        self._col = collection
        self._filters = list(filters)
        self._order = order
        self._limit = limit

    def where(self, filter):
        return _Query(self._col, self._filters + [filter], self._order, self._limit)

    def order_by(self, field, direction="ASCENDING"):
        return _Query(self._col, self._filters, (field, direction), self._limit)

    def limit(self, n):
        return _Query(self._col, self._filters, self._order, n)

    def stream(self):
        self._col.db.check()
        docs = [d for d in self._col.docs.values()
                if all(d.get(f.field_path) == f.value for f in self._filters)]
        if self._order:
            field, direction = self._order
            docs.sort(key=lambda d: d[field], reverse=direction == "DESCENDING")
        if self._limit is not None:
            docs = docs[:self._limit]
        return [_Snapshot(d) for d in docs]


class _Collection(_Query):
    def __init__(self, db):
        self.db = db
        self.docs = {}
        super().__init__(self)

    def document(self, doc_id):
        return _DocumentRef(self, doc_id)


class _Batch:
    def __init__(self):
        self._ops = []

    def set(self, ref, data):
        self._ops.append((ref, data))

    def commit(self):
        for ref, data in self._ops:
            ref.set(data)


class FakeFirestore:
    """The slice of the Firestore client API the store uses."""

    def __init__(self):
        self.collections = {}
        self.fail_with = None

    def check(self):
        """Reads raise `fail_with` once it is set, the way an unreachable Firestore does."""
        if self.fail_with is not None:
            raise self.fail_with

    def collection(self, name):
        if name not in self.collections:
            self.collections[name] = _Collection(self)
        return self.collections[name]

    def batch(self):
        return _Batch()
