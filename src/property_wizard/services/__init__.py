"""Application services — payload assembly and disclosure text."""

from property_wizard.services.disclosure import generate
from property_wizard.services.payload_builder import build

__all__ = ["build", "generate"]
