"""File-backed document client.

Stores each document as ``<base_dir>/<container>/<id>.json``. Used for
local development, maintenance scripts and tests in place of the
application's document database.
"""

import re
from pathlib import Path
from typing import Any

from ..exceptions import StorageIOError
from ..id_utils import normalize_id
from ..logging_utils import get_access_logger
from .file_ops import list_json_files, read_json, write_json_atomic

logger = get_access_logger("local")

# Document ids become file names
_SAFE_ID = re.compile(r"^[A-Za-z0-9_.-]+$")


class LocalDocumentClient:
    """Document client over a directory of JSON files."""

    def __init__(self, base_dir: Path):
        """Initialize the client.

        Args:
            base_dir: Root directory; one subdirectory per container
        """
        self.base_dir = Path(base_dir)

    def _item_path(self, container_name: str, item_id: str) -> Path:
        if not _SAFE_ID.match(item_id) or item_id.startswith("."):
            raise StorageIOError("resolve_path", f"{container_name}/{item_id}")
        return self.base_dir / container_name / f"{item_id}.json"

    async def read_item(self, container_name: str, item_id: str) -> dict[str, Any] | None:
        return await read_json(self._item_path(container_name, item_id))

    async def list_items(self, container_name: str) -> list[dict[str, Any]]:
        items = []
        for path in await list_json_files(self.base_dir / container_name):
            doc = await read_json(path)
            if doc is not None:
                items.append(doc)
        return items

    async def upsert_item(self, container_name: str, item: dict[str, Any]) -> dict[str, Any]:
        item_id = normalize_id(item.get("_id"))
        if item_id is None:
            raise StorageIOError("upsert_item", container_name)
        path = self._item_path(container_name, item_id)
        await write_json_atomic(path, item)
        logger.debug("Wrote %s/%s", container_name, item_id)
        return item
