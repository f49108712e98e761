"""
Feed wire shape: each event is a JSON array triple `[id, created_at, data]`.

The frontend destructures the triple positionally, so the order is part of
the contract.
"""

from typing import Tuple

FeedEntry = Tuple[int, str, str]
