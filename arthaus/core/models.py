# Import all models here so Base.metadata knows every table
from arthaus.domains.art_piece.models import ArtPiece, ArtPieceType
from arthaus.domains.gallery.models import Gallery

__all__ = ["ArtPiece", "ArtPieceType", "Gallery"]
