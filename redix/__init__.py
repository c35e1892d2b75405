"""
Redix - A Simple Redis Client

A small Redis client built around a RESP codec and a command dispatcher,
covering the set command family:
SADD, SREM, SMEMBERS, SISMEMBER, SMISMEMBER, SCARD, SPOP, SRANDMEMBER,
SMOVE, SDIFF/SINTER/SUNION (and their STORE forms), SSCAN and SINTERCARD.
"""

from redix.client import Client
from redix.config import Config
from redix.errors import (
    CommandError,
    ConnectionError,
    EncodingError,
    ProtocolError,
    RedixError,
    TimeoutError,
    WrongTypeError,
)
from redix.pipeline import Pipeline
from redix.set_proxy import RedisSet

__version__ = "1.0.0"
__all__ = [
    'Client',
    'CommandError',
    'Config',
    'ConnectionError',
    'EncodingError',
    'Pipeline',
    'ProtocolError',
    'RedisSet',
    'RedixError',
    'TimeoutError',
    'WrongTypeError',
]
