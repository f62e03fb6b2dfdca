"""Git objects, deltas, pkt-line framing, capabilities, config, logs and storage interfaces."""

__version__ = "0.1.0"