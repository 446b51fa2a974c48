import os
import sys

import pytest

CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.dirname(CURRENT_DIR)
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from java_uml.converter import JavaToUmletConverter  # noqa: E402


@pytest.fixture
def converter():
    return JavaToUmletConverter(report_field_associations=False)
