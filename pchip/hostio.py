#!/usr/bin/env python3

"""
Host I/O Functionality

Handles loading ROM binaries and the base system font for later writing into
RAM.  ROMs are raw binaries with no header, so whatever is in the file is the
program.

Any failure to read a ROM is reported as a RomLoadError, so the caller only has
one thing to catch at startup.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from os import path
from .ram import RomLoadError


class Loader:
    def load_binary(self, filename):
        try:
            with open(filename, "rb") as f:
                return f.read()
        except OSError as err:
            raise RomLoadError("Unable to read '{}': {}".format(filename, err.strerror or err)) from None

    def load_system_font(self, filename="8"):
        return self.load_binary(path.join(path.abspath(path.dirname(__file__)), "systemfonts", filename))
