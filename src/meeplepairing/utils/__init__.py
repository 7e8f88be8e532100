"""Shared helpers: logging setup, id generation and timestamps."""

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

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional, Union

from dateutil.parser import isoparse

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
ROOT_LOGGER_NAME = "meeplepairing"


def setup_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """Return a module logger, attaching a console handler on first use.

    Args:
        name: Logger name, normally ``__name__``
        level: Level applied when the handler is first attached

    Returns:
        The configured logger
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        root.setLevel(level)
    return logging.getLogger(name)


def set_log_level(level: int) -> None:
    """Change the level of every Meeple Pairing logger."""
    logging.getLogger(ROOT_LOGGER_NAME).setLevel(level)


def generate_id(prefix: str) -> str:
    """Generate a unique id such as ``player_3f9c2a1b04de``."""
    return f"{prefix.lower()}_{uuid.uuid4().hex[:12]}"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    """Serialize a timestamp to ISO-8601, passing ``None`` through."""
    return value.isoformat() if value is not None else None


def parse_timestamp(value: Optional[Union[str, datetime]]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp written by :func:`format_timestamp`.

    Raises:
        ValueError: If the string is not ISO-8601
    """
    if value is None or isinstance(value, datetime):
        return value
    return isoparse(value)
