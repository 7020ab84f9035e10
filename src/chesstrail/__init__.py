"""chesstrail — FEN/PGN decoding into a reversible, replayable move log."""

__version__ = "0.1.0"
