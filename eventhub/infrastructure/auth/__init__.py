# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .guard import auth_required, current_claims, current_user_id, install_session_tokens

__all__ = ["auth_required", "current_claims", "current_user_id", "install_session_tokens"]
