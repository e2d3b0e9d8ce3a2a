"""Bot behaviour layered on top of the IRC session (channel triggers)."""

from .triggers import DEFAULT_TRIGGERS, ChannelTriggers, TriggerReply

__all__ = ["ChannelTriggers", "DEFAULT_TRIGGERS", "TriggerReply"]
