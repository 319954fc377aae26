#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import os
import tempfile
import unittest
from hashlib import sha256
from pchip.hostio import Loader
from pchip.ram import RomLoadError


class TestLoader(unittest.TestCase):
    def setUp(self):
        self.loader = Loader()

    def test_loader_load_file_present(self):
        # Test the loader works, and verify the system font is okay
        font = self.loader.load_system_font("8")
        self.assertEqual(80, len(font))
        self.assertEqual(
            "7badf921f6c9315be982d08307b796c0e8f6841141afb475aa2ee5a5e074cdec",
            sha256(font).hexdigest()
        )

    def test_loader_load_binary(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            filename = os.path.join(tmp_dir, "test.ch8")

            with open(filename, "wb") as f:
                f.write(b"\x00\xE0\x12\x00")

            self.assertEqual(b"\x00\xE0\x12\x00", self.loader.load_binary(filename))

    def test_loader_load_file_missing(self):
        self.assertRaises(RomLoadError, self.loader.load_binary, "NoFile.ch8")

    def test_loader_load_directory(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            self.assertRaises(RomLoadError, self.loader.load_binary, tmp_dir)
