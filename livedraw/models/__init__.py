from .participant import Participant
from .entry import Entry
from .prize import Prize, PrizeStatus

__all__ = [
    "Participant",
    "Entry",
    "Prize",
    "PrizeStatus",
]
