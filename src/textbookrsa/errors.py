"""Error types raised across textbookrsa.

Input problems derive from ``ValueError`` and failed or impossible generation from ``RuntimeError``, so callers that
already catch the builtins keep working. All of them share ``RSAError`` for callers that want a single net.
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0


class RSAError(Exception):
    """Base class for all textbookrsa errors."""


class InvalidModulus(RSAError, ValueError):
    """A modulus below 1 was supplied, or a lcm/modulus was requested for two zeroes."""


class MessageOutOfRange(RSAError, ValueError):
    """A message or ciphertext representative lies outside of [0, mod-1]."""


class DegenerateKeyPair(RSAError, RuntimeError):
    """The chosen parameters cannot produce a usable key pair."""


class SearchExhausted(RSAError, RuntimeError):
    """A randomised search hit its iteration cap without finding a result.

    Attributes:
        tries: The number of attempts made before giving up.
    """

    def __init__(self, message: str, tries: int) -> None:
        super().__init__(message)
        self.tries = tries
