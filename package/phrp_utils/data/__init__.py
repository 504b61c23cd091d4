from .result import AminoAcidModInfo, SearchResult

__all__ = [
    "AminoAcidModInfo",
    "SearchResult",
]
