"""Message keys and headers, COBS framing, message definitions, LED helpers and console command parsing for the workbook board."""

__version__ = "0.1.0"
__all__ = ["accumulator", "commands", "header", "icd", "keys", "leds"]