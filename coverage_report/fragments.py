import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def fragment_files(directory):
    directory = Path(directory)
    if not directory.is_dir():
        return []
    return sorted(directory.glob("*.json"))


def load_fragments(directory):
    """Yield ``(file name, parsed JSON)`` for every fragment in ``directory``.

    A fragment that cannot be read or parsed is logged and skipped so one
    bad file does not abort the whole report.
    """
    for path in fragment_files(directory):
        try:
            with path.open(encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Could not parse %s: %s", path.name, e)
            continue
        yield path.name, data
