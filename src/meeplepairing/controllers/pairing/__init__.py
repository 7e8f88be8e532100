"""Pairing algorithms."""

from meeplepairing.controllers.pairing.bye_selection import select_bye_player
from meeplepairing.controllers.pairing.swiss import SwissPairingEngine

__all__ = ["SwissPairingEngine", "select_bye_player"]
