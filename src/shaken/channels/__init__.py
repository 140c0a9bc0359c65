from shaken.channels.base import BaseChannel
from shaken.channels.console import ConsoleChannel, ConsoleConfig
from shaken.channels.manager import ChannelManager

__all__ = ["BaseChannel", "ChannelManager", "ConsoleChannel", "ConsoleConfig"]
