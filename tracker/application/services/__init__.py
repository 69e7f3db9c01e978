# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .password_hashing import WerkzeugPasswordHasher
from .token_issuer import JwtTokenIssuer

__all__ = ["JwtTokenIssuer", "WerkzeugPasswordHasher"]
