"""
Read-through resource stores mirroring the API on the client side.

A store keeps an in-memory cache of the resources it has seen. Reads are
served from the cache until ``invalidate()`` (or ``force=True``); writes go
to the API first and update the cache with the server's answer.
"""
import logging
from collections import OrderedDict
from typing import Any, Dict, List, Optional

from envirops.exceptions import NetworkError, ValidationError
from envirops.forms import validate_payload

logger = logging.getLogger(__name__)


class ResourceStore:
    """Cache-and-mutate wrapper around one API resource."""

    resource: str = ''
    form_class = None

    def __init__(self, transport):
        self.transport = transport
        self._cache: 'OrderedDict[int, Dict[str, Any]]' = OrderedDict()
        self.loaded = False
        self.is_loading = False
        self.error: Optional[str] = None

    @property
    def base_path(self) -> str:
        return f"/api/{self.resource}"

    @property
    def items(self) -> List[Dict[str, Any]]:
        """Cached resources in API order."""
        return list(self._cache.values())

    def _call(self, method: str, path: str, payload: Any = None, params: Optional[Dict[str, Any]] = None) -> Any:
        self.is_loading = True
        self.error = None
        try:
            return self.transport.request(method, path, json=payload, params=params)
        except NetworkError as e:
            self.error = e.message
            logger.warning(f"[STORE] {self.resource}: {method} {path} failed ({e.message})")
            raise
        finally:
            self.is_loading = False

    def _validate(self, payload: Dict[str, Any], partial: bool = False) -> None:
        if self.form_class is None:
            return
        try:
            validate_payload(self.form_class, payload, partial=partial)
        except ValidationError as e:
            self.error = e.message
            raise

    def _prepare(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Hook to complete a payload before sending it."""
        return payload

    def fetch_all(self, force: bool = False, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """All resources; served from the cache once loaded unless ``force``."""
        if self.loaded and not force and not params:
            return self.items
        data = self._call('GET', self.base_path, params=params)
        if params:
            return data
        self._cache = OrderedDict((entry['id'], entry) for entry in data)
        self.loaded = True
        return self.items

    def get(self, resource_id: int, force: bool = False) -> Dict[str, Any]:
        if not force and resource_id in self._cache:
            return self._cache[resource_id]
        data = self._call('GET', f"{self.base_path}/{resource_id}")
        self._cache[resource_id] = data
        return data

    def create(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        self._validate(payload)
        data = self._call('POST', self.base_path, self._prepare(dict(payload)))
        self._cache[data['id']] = data
        self._cache.move_to_end(data['id'], last=False)
        return data

    def update(self, resource_id: int, payload: Dict[str, Any]) -> Dict[str, Any]:
        self._validate(payload, partial=True)
        data = self._call('PUT', f"{self.base_path}/{resource_id}", self._prepare(dict(payload)))
        self._cache[resource_id] = data
        return data

    def delete(self, resource_id: int) -> bool:
        self._call('DELETE', f"{self.base_path}/{resource_id}")
        self._cache.pop(resource_id, None)
        return True

    def invalidate(self) -> None:
        """Forget every cached resource; the next read hits the API."""
        self._cache.clear()
        self.loaded = False
        self.error = None
