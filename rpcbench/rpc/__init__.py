"""RPC and subscription collaborators."""

from .http import HttpRpcTransport
from .jsonrpc import JsonRpcError
from .websocket import WebSocketSubscriber, WebSocketSubscription
from .base import RpcTransport, TransferSigner, SubscriptionHandle, SignatureSubscriber

__all__ = [
    "HttpRpcTransport",
    "JsonRpcError",
    "RpcTransport",
    "SignatureSubscriber",
    "SubscriptionHandle",
    "TransferSigner",
    "WebSocketSubscriber",
    "WebSocketSubscription",
]
