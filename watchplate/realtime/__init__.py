# -*- coding: utf-8 -*-
"""
Realtime module
"""

from .websocket import RealtimeManager, offer_latest, state_message, websocket_endpoint

__all__ = [
    'RealtimeManager',
    'offer_latest',
    'state_message',
    'websocket_endpoint',
]
