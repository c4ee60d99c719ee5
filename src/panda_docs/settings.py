"""Project settings: name, description, readme and global endpoint defaults."""

import logging
from pathlib import Path

from panda_docs.errors import DocumentNotFoundError, DocumentParseError
from panda_docs.parser.base import ProjectSettings
from panda_docs.parser.detect import SETTINGS_FILE
from panda_docs.parser.repair import to_text
from panda_docs.parser.source import DocumentSource

logger = logging.getLogger(__name__)

DEFAULT_PROJECT_NAME = "Panda api docs"
README_FILE = "README.md"


def load_settings(root: Path | str = ".") -> ProjectSettings:
    """Load ``_settings.json`` and ``README.md`` from the project root.

    Missing or unparsable files fall back to defaults with a warning.
    """
    source = DocumentSource(root)

    try:
        read_me = source.read_text(README_FILE)
    except DocumentNotFoundError:
        read_me = DEFAULT_PROJECT_NAME

    try:
        data = source.load(SETTINGS_FILE)
    except DocumentNotFoundError:
        logger.warning("No '%s' file", SETTINGS_FILE)
        data = {}
    except DocumentParseError as e:
        logger.warning("%s", e)
        data = {}

    if not isinstance(data, dict):
        logger.warning("'%s' is not an object, ignoring it", SETTINGS_FILE)
        data = {}

    return ProjectSettings(
        read_me=read_me,
        project_name=to_text(data.get("project_name", DEFAULT_PROJECT_NAME)),
        project_desc=to_text(data.get("project_desc", "")),
        global_value=data.get("global"),
    )
