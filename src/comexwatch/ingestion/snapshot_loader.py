import json
from pathlib import Path

from comexwatch.domain.records import Snapshot
from comexwatch.utils.logging import get_logger

logger = get_logger(__name__)


def load_snapshot_file(path: Path) -> Snapshot:
    """
    Load a JSON snapshot ``{"imports": [...], "invoices": [...], "tasks": [...], "users": [...]}``.

    Keys may use the store's camelCase names. Missing collections are empty.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the document is not a JSON object
        pydantic.ValidationError: If a record is invalid
    """
    if not path.exists():
        raise FileNotFoundError(f"Snapshot file not found: {path}")
    payload = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ValueError(f"Snapshot must be a JSON object: {path}")

    snapshot = Snapshot.model_validate(payload)
    logger.debug(
        f"Loaded snapshot {path}: {len(snapshot.imports)} imports, "
        f"{len(snapshot.invoices)} invoices, {len(snapshot.tasks)} tasks, {len(snapshot.users)} users"
    )
    return snapshot
