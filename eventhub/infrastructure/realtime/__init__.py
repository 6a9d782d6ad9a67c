# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .socketio_notifier import NullNotifier, SocketIONotifier, socketio

__all__ = ["NullNotifier", "SocketIONotifier", "socketio"]
