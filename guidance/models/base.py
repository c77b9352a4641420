# Re-export the main Base class from db.py so guidance models share one metadata
from db import Base

__all__ = ["Base"]
