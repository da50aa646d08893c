from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path

from splitbill.codec import BillInputError, dump_draft, parse_draft
from splitbill.logging import get_logger
from splitbill.services.draft import BillDraft, default_draft


def load_draft(path: Path) -> BillDraft:
    """Load the saved draft, falling back to a fresh one if it is missing or broken."""
    log = get_logger(__name__)
    if not path.exists():
        return default_draft()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise BillInputError("Draft document must be an object")
        return parse_draft(data)
    except (OSError, ValueError) as exc:
        log.warning("draft.load_failed", path=str(path), error=str(exc))
        return default_draft()


def save_draft(path: Path, draft: BillDraft) -> None:
    """Write the draft next to ``path`` first, then swap it in with ``os.replace``."""
    log = get_logger(__name__)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = json.dumps(dump_draft(draft), ensure_ascii=False, indent=2)

    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(payload)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise

    log.info("draft.saved", path=str(path), dishes=len(draft.dishes), diners=len(draft.diners))
