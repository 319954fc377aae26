#!/usr/bin/env python3

"""
Main Startup Module

Simply call main(args) to start the emulator, replacing args with a dictionary
of options.  This can be done via the Terminal or GUI.

All options must be supplied.  Defaults can be specified with a 'None'.

Returns the process exit status: 0 when the window is closed normally, 1 if
the ROM can't be loaded, the renderer can't start, or emulation hits a fatal
error.  Errors are printed to stderr.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import sys
from .constants import APP_INTRO, APP_COPYRIGHT, MEM_SIZE, STACK_SIZE, DEFAULT_QUIRKS
from .cpu import CPU, CPUError
from .debugger import Debugger
from .framebuffer import Framebuffer
from .host import Host
from .hostio import Loader
from .keypad import Keypad
from .ram import RAM, RAMError, RomLoadError
from .stack import Stack, StackError


class StartupError(Exception):
    pass


def _select_plugins(opt_renderer):
    # flake8: noqa: F401
    # pylint: disable=unused-import, import-outside-toplevel, raise-missing-from
    if opt_renderer in (None, "pygame"):
        try:
            import pygame
        except ImportError:
            raise StartupError("PyGame does not appear to be installed.  Use '-r null' to run without a display.")

        from .inputs.i_pygame import Inputs
        from .renderers.r_pygame import Renderer
    elif opt_renderer == "null":
        from .inputs.i_null import Inputs
        from .renderers.r_null import Renderer
    else:
        raise StartupError("Unknown renderer '{}'.".format(opt_renderer))

    return Inputs, Renderer


def create_cpu(rom, debugger=None, **quirk_settings):
    # Build a complete machine with the font and a ROM loaded, ready to run from 0x200
    loader = Loader()
    ram = RAM()
    ram.resize(MEM_SIZE)
    ram.load_font(loader.load_system_font())
    ram.load_program(rom)

    quirks = dict(DEFAULT_QUIRKS)
    quirks.update(quirk_settings)

    return CPU(ram, Stack(STACK_SIZE), Framebuffer(), Keypad(), debugger or Debugger(), **quirks)


def main(args):
    print("".join((APP_INTRO, APP_COPYRIGHT)))

    try:
        Inputs, Renderer = _select_plugins(args["renderer"])
        rom = Loader().load_binary(args["filename"])
        debugger = Debugger()
        debugger.set_live(args["debug"])
        cpu = create_cpu(rom, debugger)
    except (StartupError, RomLoadError) as err:
        print("Unable to start: {}".format(err), file=sys.stderr)
        return 1

    renderer = Renderer(scale=args["scale"])
    inputs = Inputs(cpu.keypad, renderer)
    host = Host(cpu, renderer, inputs, clock_speed=args["clock_speed"])

    try:
        host.run()
    except (CPUError, StackError, RAMError) as err:
        print(
            "Emulation halted.\n\n{}Debug info:\n{}\n\n{}".format(
                APP_INTRO, debugger.debug(cpu, "???", verbose=True), err
            ),
            file=sys.stderr
        )
        return 1
    except KeyboardInterrupt:
        pass
    finally:
        # The CPU has quit, so shut down the rendering framework.  __del__ cannot be relied upon when using PyPy
        inputs.shutdown()
        renderer.shutdown()

    return 0
