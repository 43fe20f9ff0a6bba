"""IME word-list conversion pipeline with a SCEL cell-dictionary decoder."""

from .models import Code, CodeKind, Record, ScelInfo

__all__ = ["Code", "CodeKind", "Record", "ScelInfo"]
