"""Cached server lists."""

from mcsm.lists.allowlist import AllowList
from mcsm.lists.bans import BanList, IPBanList
from mcsm.lists.base import CachedList
from mcsm.lists.operators import OperatorList

__all__ = ["AllowList", "BanList", "CachedList", "IPBanList", "OperatorList"]
