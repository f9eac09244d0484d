from __future__ import annotations

from .corpus import generate_corpus_files, generate_marked_up_texts

__all__ = ["generate_corpus_files", "generate_marked_up_texts"]
