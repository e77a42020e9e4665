"""Relay message contract and client session."""

from .protocol import ProtocolError, decode_message, encode_message
from .session import ClientSession, SessionStatus

__all__ = [
    "ProtocolError",
    "decode_message",
    "encode_message",
    "ClientSession",
    "SessionStatus",
]
