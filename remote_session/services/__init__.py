"""Services for remote sessions."""

from remote_session.services.collector import OutputCollector
from remote_session.services.session import RemoteSession

__all__ = [
    "OutputCollector",
    "RemoteSession",
]
