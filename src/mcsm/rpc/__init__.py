"""RPC package.

JSON-RPC 2.0 client, the abstract connection contract and its WebSocket implementation.
"""

from mcsm.rpc.connection import DISCOVERY_METHOD, Connection, translate_error
from mcsm.rpc.framework import JSONRPCClient, RemoteCallError
from mcsm.rpc.types import CallFailure, CallResponse, CallSuccess, Params, RequestId, Transport
from mcsm.rpc.websocket import WebSocketConnection, WebSocketTransport

__all__ = [
    "DISCOVERY_METHOD",
    "CallFailure",
    "CallResponse",
    "CallSuccess",
    "Connection",
    "JSONRPCClient",
    "Params",
    "RemoteCallError",
    "RequestId",
    "Transport",
    "WebSocketConnection",
    "WebSocketTransport",
    "translate_error",
]
