from __future__ import annotations
import os


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


# Report field types with no construction/injection evidence as associations
REPORT_FIELD_ASSOCIATIONS = _env_flag("JAVA_UML_FIELD_ASSOCIATIONS", False)

LOG_LEVEL = os.getenv("JAVA_UML_LOG_LEVEL", "INFO").upper()

# UMLet layout (3 classes per row)
UMLET_VERSION = "14.3.0"
DEFAULT_SPACING = 50
DEFAULT_BASE_X = 100
DEFAULT_BASE_Y = 100
UMLET_COLUMNS = 3
UMLET_CLASS_WIDTH = 200
UMLET_ROW_HEIGHT = 100

NO_PACKAGE_PLACEHOLDER = "none"
