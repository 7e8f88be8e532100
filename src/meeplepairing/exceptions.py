"""Exceptions for use in Meeple Pairing"""

# Meeple Pairing
# Copyright (C) 2025  Meeple Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.


# ========== Base Application Exception ==========


class MeeplePairingException(Exception):
    """Base exception for all Meeple Pairing errors.

    Engine errors derive from it, so callers such as the command line can
    report any of them with one handler.
    """

    pass


# ========== Pairing Exceptions ==========


class PairingException(MeeplePairingException):
    """Base exception for errors raised while grouping players into matches."""

    pass


class NotEnoughPlayersException(PairingException):
    """Raised when too few players are registered to generate a round."""

    pass


# ========== Tournament Exceptions ==========


class TournamentException(MeeplePairingException):
    """Base exception for tournament lifecycle errors."""

    pass


class TournamentStateException(TournamentException):
    """Raised when the tournament status does not allow the requested action."""

    pass


class RoundLimitReachedException(TournamentStateException):
    """Raised when every allowed round has already been generated."""

    pass


class RoundIncompleteException(TournamentStateException):
    """Raised when the previous round still has pending matches."""

    pass


# ========== Result Exceptions ==========


class ResultException(MeeplePairingException):
    """Base exception for errors while entering match results."""

    pass


class InvalidResultException(ResultException):
    """Raised when submitted results do not match the match roster."""

    pass


# ========== Store Exceptions ==========


class StoreException(MeeplePairingException):
    """Base exception for storage errors."""

    pass


class EntityNotFoundException(StoreException):
    """Raised when a requested record does not exist."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(MeeplePairingException):
    """Base exception for tournament settings errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised for an unknown tiebreak or bye mode, or an unsupported match size."""

    pass
