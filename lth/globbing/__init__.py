from .builder import GlobbingUrlBuilder, normalize_path_base
from .fs import split_patterns

__all__ = ["GlobbingUrlBuilder", "normalize_path_base", "split_patterns"]
