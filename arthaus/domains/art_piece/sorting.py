"""Filtered, sorted views over a gallery's art pieces.

Everything here is a pure function of the gallery passed in. Views are new
lists; the gallery's stored insertion order is never touched.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Optional

from arthaus.domains.art_piece.models import ArtPiece, ArtPieceType


class SortOption(str, enum.Enum):
    DATE_NEW_TO_OLD = "dateNewToOld"
    DATE_OLD_TO_NEW = "dateOldToNew"
    PRICE_HIGH_TO_LOW = "priceHighToLow"
    PRICE_LOW_TO_HIGH = "priceLowToHigh"

    @property
    def label(self) -> str:
        return _LABELS[self]


DEFAULT_SORT_OPTION = SortOption.DATE_NEW_TO_OLD

_LABELS = {
    SortOption.DATE_NEW_TO_OLD: "Newest acquisition",
    SortOption.DATE_OLD_TO_NEW: "Oldest acquisition",
    SortOption.PRICE_HIGH_TO_LOW: "Highest price",
    SortOption.PRICE_LOW_TO_HIGH: "Lowest price",
}


def _acquired(piece: ArtPiece) -> date:
    # Undated pieces count as acquired at the earliest possible date
    return piece.date_acquired or date.min


def _price(piece: ArtPiece) -> float:
    return piece.price


# option -> (sort key, descending)
_ORDERINGS: dict[SortOption, tuple[Callable[[ArtPiece], Any], bool]] = {
    SortOption.DATE_NEW_TO_OLD: (_acquired, True),
    SortOption.DATE_OLD_TO_NEW: (_acquired, False),
    SortOption.PRICE_HIGH_TO_LOW: (_price, True),
    SortOption.PRICE_LOW_TO_HIGH: (_price, False),
}


def sort_pieces(pieces: list[ArtPiece], sort_option: SortOption) -> list[ArtPiece]:
    """Return `pieces` ordered by `sort_option`; ties keep their incoming order."""
    key, descending = _ORDERINGS[SortOption(sort_option)]
    # sorted() stays stable with reverse=True
    return sorted(pieces, key=key, reverse=descending)


def view_pieces(gallery: Any, piece_type: ArtPieceType, sort_option: SortOption) -> list[ArtPiece]:
    """Filter a gallery's pieces to one type and sort them.

    Args:
        gallery: Object exposing `art_pieces` in insertion order.
        piece_type: Bucket to keep (`collection` or `tracking`).
        sort_option: Ordering to apply.

    Returns:
        A new list of pieces.
    """
    piece_type = ArtPieceType(piece_type)
    matching = [piece for piece in gallery.art_pieces if piece.type == piece_type]
    return sort_pieces(matching, sort_option)


@dataclass
class ViewPosition:
    """Where a piece sits in the view of its same-type siblings."""

    piece_id: int
    index: int
    total: int
    previous_id: Optional[int] = None
    next_id: Optional[int] = None


def locate_in_view(piece: ArtPiece, sort_option: SortOption) -> ViewPosition:
    """Find `piece` among its siblings (same gallery, same type) under `sort_option`."""
    siblings = view_pieces(piece.gallery, piece.type, sort_option)
    index = next(i for i, sibling in enumerate(siblings) if sibling.id == piece.id)
    return ViewPosition(
        piece_id=piece.id,
        index=index,
        total=len(siblings),
        previous_id=siblings[index - 1].id if index > 0 else None,
        next_id=siblings[index + 1].id if index + 1 < len(siblings) else None,
    )
