"""Model module - Data model and row contract."""

from roadtable_core.model.model import Model
from roadtable_core.model.row import Row

__all__ = ["Model", "Row"]
