"""Generate C headers, assembly, IP-XACT and simulator sources from register descriptions."""

__version__ = "0.1.0"