import os
from pathlib import Path
import tempfile
import pytest


@pytest.fixture(scope="session", autouse=True)
def isolate_project_config():
    """Run the test session from an empty temporary directory.

    The configuration loader reads ``.changeloggy.json`` from the current
    directory by default. Running from a scratch directory keeps a config
    file in the checkout from leaking defaults into the tests. The
    directory is removed when the session ends.
    """
    previous = Path.cwd()
    with tempfile.TemporaryDirectory(prefix="changeloggy_tests_") as scratch:
        os.chdir(scratch)
        try:
            yield Path(scratch)
        finally:
            os.chdir(previous)
