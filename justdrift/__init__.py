"""justdrift: just-intonation interval sequences that drift in tuning."""

__version__ = "0.1.0"
