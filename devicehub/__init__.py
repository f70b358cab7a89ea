"""Device Hub gateway.

Presents LIRC, Roku, and Home Assistant devices as one device directory
with a common state/action interface.
"""

__version__ = "0.1.0"
