"""Game Boy Advance emulator core: memory map, CPU decoding and execution, colour and key formats."""

__version__ = "0.0.1"