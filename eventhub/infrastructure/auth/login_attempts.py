# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import time
from collections import defaultdict, deque
from dataclasses import dataclass
from threading import Lock
from typing import ClassVar

from eventhub.shared.logging import logger


@dataclass
class LoginAttempt:
    timestamp: float
    success: bool
    ip_address: str | None = None


class LoginAttemptsTracker:
    """Per-login failure counter with temporary lockout, kept in process memory."""

    MAX_ATTEMPTS: ClassVar[int] = 5
    LOCKOUT_DURATION: ClassVar[float] = 15 * 60  # 15 minutes in seconds
    ATTEMPT_WINDOW: ClassVar[float] = 60 * 60  # 1 hour in seconds

    def __init__(self) -> None:
        self._attempts: dict[str, deque[LoginAttempt]] = defaultdict(
            lambda: deque(maxlen=self.MAX_ATTEMPTS * 2)
        )
        self._lock = Lock()
        self._lockouts: dict[str, float] = {}  # login -> unlock_time

    def record_attempt(self, login: str, success: bool, ip_address: str | None = None) -> None:
        with self._lock:
            if success:
                self._attempts.pop(login, None)
                if self._lockouts.pop(login, None) is not None:
                    logger.info(f"login_attempts: cleared lockout for login={login}")
                return

            self._attempts[login].append(
                LoginAttempt(timestamp=time.time(), success=False, ip_address=ip_address)
            )
            self._check_and_lock(login)

    def is_locked(self, login: str) -> bool:
        with self._lock:
            unlock_time = self._lockouts.get(login)
            if unlock_time is None:
                return False

            if time.time() >= unlock_time:
                del self._lockouts[login]
                logger.info(f"login_attempts: lockout expired for login={login}")
                return False

            return True

    def get_lockout_remaining(self, login: str) -> float:
        with self._lock:
            if login not in self._lockouts:
                return 0.0
            return max(0.0, self._lockouts[login] - time.time())

    def _check_and_lock(self, login: str) -> None:
        now = time.time()
        cutoff = now - self.ATTEMPT_WINDOW

        failed_attempts = [
            attempt
            for attempt in self._attempts[login]
            if not attempt.success and attempt.timestamp > cutoff
        ]

        if len(failed_attempts) >= self.MAX_ATTEMPTS:
            self._lockouts[login] = now + self.LOCKOUT_DURATION

            ips = {attempt.ip_address for attempt in failed_attempts if attempt.ip_address}
            logger.warning(
                f"login_attempts: LOGIN LOCKED login={login} "
                f"failed_attempts={len(failed_attempts)} "
                f"lockout_duration={self.LOCKOUT_DURATION}s "
                f"ip_addresses={sorted(ips) if ips else 'unknown'}"
            )


__all__ = ["LoginAttempt", "LoginAttemptsTracker"]
