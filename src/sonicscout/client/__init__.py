"""Sonic client wiring.

Example::

    from sonicscout.client import open_channels

    channels = await open_channels(settings.sonic)
"""

from sonicscout.client.connection import SonicChannels, open_channels

__all__ = ["SonicChannels", "open_channels"]
