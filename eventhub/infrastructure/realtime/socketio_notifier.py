# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Socket.IO broadcast of event state changes."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from flask_socketio import SocketIO

from eventhub.application.interfaces import EventNotifier, NotificationKind
from eventhub.shared.logging import logger

socketio = SocketIO()


@socketio.on("connect")
def _on_connect(auth=None) -> None:
    logger.info("realtime: client connected")


@socketio.on("disconnect")
def _on_disconnect(*_args) -> None:
    logger.info("realtime: client disconnected")


class SocketIONotifier(EventNotifier):
    """Emits every notification to all clients of the default namespace."""

    def __init__(self, server: SocketIO, *, background: bool = True) -> None:
        self._server = server
        self._background = background

    def publish(self, kind: NotificationKind, payload: Mapping[str, Any]) -> None:
        data = dict(payload)
        if self._background:
            self._server.start_background_task(self._deliver, kind, data)
        else:
            self._deliver(kind, data)

    def _deliver(self, kind: NotificationKind, data: dict[str, Any]) -> None:
        try:
            self._server.emit(kind.value, data, namespace="/")
            logger.debug(f"realtime: emitted {kind.value} id={data.get('id')}")
        except Exception:
            logger.exception(f"realtime: failed to emit {kind.value} id={data.get('id')}")


class NullNotifier(EventNotifier):
    def publish(self, kind: NotificationKind, payload: Mapping[str, Any]) -> None:
        logger.debug(f"realtime: dropped {kind.value} (no transport)")


__all__ = ["NullNotifier", "SocketIONotifier", "socketio"]
