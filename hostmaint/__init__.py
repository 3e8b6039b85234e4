"""hostmaint - sequenced package updates, housekeeping and reboot check for a single host."""

__version__ = "1.0.0"
