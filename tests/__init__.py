import unittest
import tempfile
import shutil

import ecgdsa
import ecgdsa.logging
from ecgdsa.logging import Logger


ecgdsa.logging._configure_stderr_logging(verbosity="*")


class KeyCodecTestCase(unittest.TestCase, Logger):
    """Base class for our unit tests."""

    # maxDiff = None  # for debugging

    def __init__(self, *args, **kwargs):
        Logger.__init__(self)
        unittest.TestCase.__init__(self, *args, **kwargs)

    def setUp(self):
        super().setUp()
        self.ecgdsa_path = tempfile.mkdtemp(prefix="ecgdsa-unittest-base-")

    def tearDown(self):
        shutil.rmtree(self.ecgdsa_path)
        super().tearDown()
