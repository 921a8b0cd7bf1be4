"""Core services: catalog, vote tallies, ranking, live channels."""
from moodpoll.core.catalog import Catalog, SongNotFound
from moodpoll.core.channels import ChannelManager
from moodpoll.core.votes import VoteAggregator, VoteValidationError

__all__ = ["Catalog", "ChannelManager", "SongNotFound", "VoteAggregator", "VoteValidationError"]
